"""
RevokeLicenseCommand.

Administrative command to permanently disable activation of a license.
"""

from dataclasses import dataclass


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license."""

    license_key: str
