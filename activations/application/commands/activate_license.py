"""
ActivateLicenseCommand.

Command to activate a license on a client device.
"""

from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license for a device."""

    license_key: str
    device_id: str
