"""
Subscriber repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from subscriptions.domain.subscriber import SubscriberAccount


class SubscriberRepository(ABC):
    """Abstract repository for SubscriberAccount entities."""

    @abstractmethod
    async def save(self, account: SubscriberAccount) -> SubscriberAccount:
        """
        Save a subscriber account.

        Args:
            account: SubscriberAccount to save

        Returns:
            Saved account
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[SubscriberAccount]:
        """
        Find an account by email address.

        Args:
            email: Account email

        Returns:
            SubscriberAccount or None if not found
        """
        pass

    @abstractmethod
    async def find_by_subscription_id(
        self, subscription_id: str
    ) -> Optional[SubscriberAccount]:
        """
        Find an account by billing subscription id.

        Args:
            subscription_id: Payment provider subscription id

        Returns:
            SubscriberAccount or None if not found
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[SubscriberAccount]:
        """
        Find all accounts with an active subscription.

        Returns:
            List of SubscriberAccount
        """
        pass
