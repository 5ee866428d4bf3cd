"""
Reminder repository ports (interfaces).
"""
from abc import ABC, abstractmethod
from typing import List

from reminders.domain.deadline_notification import DeadlineNotification
from reminders.domain.regulation import Regulation


class RegulationRepository(ABC):
    """Abstract repository for Regulation master data."""

    @abstractmethod
    async def find_all(self) -> List[Regulation]:
        """
        Find every regulation.

        Returns:
            List of Regulation
        """
        pass


class DeadlineNotificationRepository(ABC):
    """Abstract repository for the reminder log."""

    @abstractmethod
    async def record_if_absent(self, notification: DeadlineNotification) -> bool:
        """
        Record a notification unless one with the same id exists.

        Args:
            notification: DeadlineNotification to record

        Returns:
            True if this call recorded it
        """
        pass
