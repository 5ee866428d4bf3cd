"""
IssueLicenseCommand.

Command to issue a new license key, either manually by an
administrator or from a verified payment event.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import LicenseSource


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    When transaction_id is set, issuance is idempotent per transaction.
    """

    user_email: str
    note: str = ""
    transaction_id: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    source: LicenseSource = LicenseSource.MANUAL
    notify: bool = False
