"""
Unit tests for subscription handlers.
"""
import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import MalformedInputError, SubscriberNotFoundError
from core.domain.value_objects import SubscriptionStatus
from subscriptions.application.commands.activate_subscription import (
    ActivateSubscriptionCommand,
)
from subscriptions.application.commands.cancel_subscription import CancelSubscriptionCommand
from subscriptions.application.handlers.subscription_handlers import (
    ActivateSubscriptionHandler,
    CancelSubscriptionHandler,
)
from subscriptions.domain.subscriber import SubscriberAccount


@pytest.fixture
def account(subscriber_repository):
    return async_to_sync(subscriber_repository.save)(
        SubscriberAccount.create(email="owner@example.com", company_type="kabushiki")
    )


@pytest.mark.asyncio
class TestActivateSubscriptionHandler:
    """Tests for ActivateSubscriptionHandler."""

    async def test_activate(self, subscriber_repository, notifier, account):
        handler = ActivateSubscriptionHandler(subscriber_repository, notifier)

        updated = await handler.handle(
            ActivateSubscriptionCommand(email="Owner@Example.com", subscription_id="I-SUB1")
        )

        assert updated.is_subscribed
        assert updated.subscription_id == "I-SUB1"
        assert updated.company_type == "kabushiki"
        _, to_email, context = notifier.sent[0]
        assert to_email == "owner@example.com"
        assert "dashboard_url" in context

    async def test_redelivery_sends_one_welcome(self, subscriber_repository, notifier, account):
        handler = ActivateSubscriptionHandler(subscriber_repository, notifier)
        command = ActivateSubscriptionCommand(email="owner@example.com", subscription_id="I-SUB1")

        await handler.handle(command)
        await handler.handle(command)

        assert len(notifier.sent) == 1

    async def test_welcome_failure_keeps_activation(
        self, subscriber_repository, failing_notifier, account
    ):
        handler = ActivateSubscriptionHandler(subscriber_repository, failing_notifier)

        updated = await handler.handle(
            ActivateSubscriptionCommand(email="owner@example.com", subscription_id="I-SUB1")
        )

        assert updated.is_subscribed

    async def test_unknown_email(self, subscriber_repository):
        handler = ActivateSubscriptionHandler(subscriber_repository)

        with pytest.raises(SubscriberNotFoundError):
            await handler.handle(
                ActivateSubscriptionCommand(email="nobody@example.com", subscription_id="I-SUB1")
            )

    async def test_missing_fields(self, subscriber_repository):
        handler = ActivateSubscriptionHandler(subscriber_repository)

        with pytest.raises(MalformedInputError):
            await handler.handle(ActivateSubscriptionCommand(email=None, subscription_id="I-SUB1"))


@pytest.mark.asyncio
class TestCancelSubscriptionHandler:
    """Tests for CancelSubscriptionHandler."""

    async def test_cancel(self, subscriber_repository, account):
        await subscriber_repository.save(account.activate("I-SUB1"))
        handler = CancelSubscriptionHandler(subscriber_repository)

        updated = await handler.handle(CancelSubscriptionCommand(subscription_id="I-SUB1"))

        assert updated.subscription_status == SubscriptionStatus.CANCELED
        assert not updated.is_subscribed

    async def test_unknown_subscription(self, subscriber_repository, account):
        handler = CancelSubscriptionHandler(subscriber_repository)

        with pytest.raises(SubscriberNotFoundError):
            await handler.handle(CancelSubscriptionCommand(subscription_id="I-OTHER"))
