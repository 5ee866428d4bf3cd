"""
In-memory implementations of the reminder repository ports.
"""
from typing import Dict, Iterable, List, Optional

from reminders.domain.deadline_notification import DeadlineNotification
from reminders.domain.regulation import Regulation
from reminders.ports.reminder_repository import (
    DeadlineNotificationRepository,
    RegulationRepository,
)


class InMemoryRegulationRepository(RegulationRepository):
    """List-backed RegulationRepository."""

    def __init__(self, regulations: Optional[Iterable[Regulation]] = None):
        self._regulations: List[Regulation] = list(regulations or [])

    def add(self, regulation: Regulation) -> None:
        self._regulations.append(regulation)

    async def find_all(self) -> List[Regulation]:
        return list(self._regulations)


class InMemoryDeadlineNotificationRepository(DeadlineNotificationRepository):
    """Dictionary-backed DeadlineNotificationRepository."""

    def __init__(self):
        self.notifications: Dict[str, DeadlineNotification] = {}

    async def record_if_absent(self, notification: DeadlineNotification) -> bool:
        if notification.id in self.notifications:
            return False
        self.notifications[notification.id] = notification
        return True
