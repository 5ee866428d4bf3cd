"""
ResetDeviceCommand.

Administrative command to clear a license's device binding.
"""

from dataclasses import dataclass


@dataclass
class ResetDeviceCommand:
    """Command to reset the device lock of a license."""

    license_key: str
