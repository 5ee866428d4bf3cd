"""
SendDeadlineRemindersCommand.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class SendDeadlineRemindersCommand:
    """
    Command to send today's deadline reminders.

    Args:
        today: Reference date (defaults to the current local date)
    """

    today: Optional[date] = None
