"""
SubscriberAccount domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, SubscriptionStatus


@dataclass(frozen=True)
class SubscriberAccount:
    """
    A registered account of the subscription service.

    company_type, industry and employee_count describe the company and
    decide which regulations apply to it.
    """

    id: uuid.UUID
    email: Email
    subscription_status: SubscriptionStatus
    created_at: datetime
    updated_at: datetime
    subscription_id: Optional[str] = None
    company_type: str = ""
    industry: str = ""
    employee_count: str = ""

    @classmethod
    def create(
        cls,
        email: str,
        company_type: str = "",
        industry: str = "",
        employee_count: str = "",
        account_id: Optional[uuid.UUID] = None,
    ) -> "SubscriberAccount":
        """Create a new account without a subscription."""
        now = datetime.now(timezone.utc)
        return cls(
            id=account_id or uuid.uuid4(),
            email=Email(email),
            subscription_status=SubscriptionStatus.NONE,
            created_at=now,
            updated_at=now,
            company_type=company_type,
            industry=industry,
            employee_count=employee_count,
        )

    @property
    def is_subscribed(self) -> bool:
        return self.subscription_status == SubscriptionStatus.ACTIVE

    def activate(self, subscription_id: str) -> "SubscriberAccount":
        """Return a copy with an active subscription."""
        return replace(
            self,
            subscription_status=SubscriptionStatus.ACTIVE,
            subscription_id=subscription_id,
            updated_at=datetime.now(timezone.utc),
        )

    def cancel(self) -> "SubscriberAccount":
        """Return a copy with a canceled subscription."""
        return replace(
            self,
            subscription_status=SubscriptionStatus.CANCELED,
            updated_at=datetime.now(timezone.utc),
        )
