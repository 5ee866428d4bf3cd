"""
In-memory implementation of SubscriberRepository port.
"""
import uuid
from typing import Dict, List, Optional

from subscriptions.domain.subscriber import SubscriberAccount
from subscriptions.ports.subscriber_repository import SubscriberRepository


class InMemorySubscriberRepository(SubscriberRepository):
    """Dictionary-backed SubscriberRepository."""

    def __init__(self):
        self._accounts: Dict[uuid.UUID, SubscriberAccount] = {}

    async def save(self, account: SubscriberAccount) -> SubscriberAccount:
        self._accounts[account.id] = account
        return account

    async def find_by_email(self, email: str) -> Optional[SubscriberAccount]:
        return next(
            (a for a in self._accounts.values() if str(a.email).lower() == email.lower()),
            None,
        )

    async def find_by_subscription_id(self, subscription_id: str) -> Optional[SubscriberAccount]:
        return next(
            (a for a in self._accounts.values() if a.subscription_id == subscription_id),
            None,
        )

    async def find_active(self) -> List[SubscriberAccount]:
        return [a for a in self._accounts.values() if a.is_subscribed]
