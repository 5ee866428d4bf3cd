"""
Regulation domain entity and deadline rules.
"""
import calendar
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from subscriptions.domain.subscriber import SubscriberAccount

ANNUAL = "annual"
MONTHLY = "monthly"

REMINDER_OFFSETS = (30, 7, 1)


def _clamped_date(year: int, month: int, day: int) -> date:
    """Build a date, moving day 29-31 back to the last day of short months."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


@dataclass(frozen=True)
class Regulation:
    """
    A recurring regulatory filing deadline.

    Empty applicability lists mean the regulation applies to every
    company.
    """

    id: uuid.UUID
    name: str
    deadline_type: str
    deadline_day: int
    deadline_month: Optional[int] = None
    applicable_company_types: List[str] = field(default_factory=list)
    applicable_industries: List[str] = field(default_factory=list)
    applicable_employee_ranges: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate regulation."""
        if self.deadline_type not in (ANNUAL, MONTHLY):
            raise ValueError(f"Unknown deadline type: {self.deadline_type}")
        if not 1 <= self.deadline_day <= 31:
            raise ValueError("deadline_day must be between 1 and 31")
        if self.deadline_type == ANNUAL and not (
            self.deadline_month and 1 <= self.deadline_month <= 12
        ):
            raise ValueError("Annual regulations need a deadline_month between 1 and 12")

    def is_applicable(self, account: SubscriberAccount) -> bool:
        """
        Check whether the regulation applies to an account.

        Args:
            account: Subscriber account with its company profile

        Returns:
            True if every non-empty applicability list contains the account's value
        """
        rules = (
            (self.applicable_company_types, account.company_type),
            (self.applicable_industries, account.industry),
            (self.applicable_employee_ranges, account.employee_count),
        )
        return all(not allowed or value in allowed for allowed, value in rules)

    def calculate_deadline(self, today: date) -> date:
        """
        Next deadline on or after today.

        Annual deadlines fall on (deadline_month, deadline_day) of this
        year, or next year once passed. Monthly deadlines fall on
        deadline_day of this month, or next month once passed.
        """
        if self.deadline_type == ANNUAL:
            deadline = _clamped_date(today.year, self.deadline_month, self.deadline_day)
            if deadline < today:
                deadline = _clamped_date(today.year + 1, self.deadline_month, self.deadline_day)
            return deadline

        deadline = _clamped_date(today.year, today.month, self.deadline_day)
        if deadline < today:
            year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
            deadline = _clamped_date(year, month, self.deadline_day)
        return deadline
