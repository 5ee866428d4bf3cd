"""
DeadlineNotification domain entity.

One notification exists per (account, regulation, deadline, offset).
Its id is derived from those four values so a reminder can only be
recorded once.
"""
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional


def build_notification_id(
    account_id: uuid.UUID, regulation_id: uuid.UUID, deadline: date, days_left: int
) -> str:
    return f"{account_id}_{regulation_id}_{deadline.isoformat()}_{days_left}days"


@dataclass(frozen=True)
class DeadlineNotification:
    """Record of a reminder that was sent."""

    id: str
    account_id: uuid.UUID
    regulation_id: uuid.UUID
    regulation_name: str
    notification_type: str
    deadline_date: date
    sent_at: datetime

    @classmethod
    def create(
        cls,
        account_id: uuid.UUID,
        regulation_id: uuid.UUID,
        regulation_name: str,
        deadline: date,
        days_left: int,
        sent_at: Optional[datetime] = None,
    ) -> "DeadlineNotification":
        return cls(
            id=build_notification_id(account_id, regulation_id, deadline, days_left),
            account_id=account_id,
            regulation_id=regulation_id,
            regulation_name=regulation_name,
            notification_type=f"{days_left}days",
            deadline_date=deadline,
            sent_at=sent_at or datetime.now(timezone.utc),
        )
