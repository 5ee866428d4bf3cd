"""
Django implementation of SubscriberRepository port.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import Email, SubscriptionStatus
from core.infrastructure.database import translate_database_errors
from subscriptions.domain.subscriber import SubscriberAccount
from subscriptions.infrastructure.models import SubscriberAccount as SubscriberAccountModel
from subscriptions.ports.subscriber_repository import SubscriberRepository


class DjangoSubscriberRepository(SubscriberRepository):
    """Django ORM implementation of SubscriberRepository."""

    def _to_domain(self, model: SubscriberAccountModel) -> SubscriberAccount:
        """
        Convert Django model to domain entity.

        Args:
            model: Django SubscriberAccount model

        Returns:
            SubscriberAccount domain entity
        """
        return SubscriberAccount(
            id=model.id,
            email=Email(model.email),
            subscription_status=SubscriptionStatus(model.subscription_status),
            subscription_id=model.subscription_id,
            company_type=model.company_type,
            industry=model.industry,
            employee_count=model.employee_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, account: SubscriberAccount) -> SubscriberAccount:
        """
        Save a subscriber account.

        Args:
            account: SubscriberAccount to save

        Returns:
            Saved account
        """
        with translate_database_errors("subscribers.save"):
            model, _ = SubscriberAccountModel.objects.update_or_create(
                id=account.id,
                defaults={
                    "email": str(account.email),
                    "subscription_status": account.subscription_status.value,
                    "subscription_id": account.subscription_id,
                    "company_type": account.company_type,
                    "industry": account.industry,
                    "employee_count": account.employee_count,
                    "created_at": account.created_at,
                    "updated_at": account.updated_at,
                },
            )
        return self._to_domain(model)

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[SubscriberAccount]:
        with translate_database_errors("subscribers.find_by_email"):
            model = SubscriberAccountModel.objects.filter(email__iexact=email).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_subscription_id(self, subscription_id: str) -> Optional[SubscriberAccount]:
        with translate_database_errors("subscribers.find_by_subscription_id"):
            model = SubscriberAccountModel.objects.filter(subscription_id=subscription_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_active(self) -> List[SubscriberAccount]:
        with translate_database_errors("subscribers.find_active"):
            models = list(
                SubscriberAccountModel.objects.filter(
                    subscription_status=SubscriptionStatus.ACTIVE.value
                )
            )
        return [self._to_domain(model) for model in models]
