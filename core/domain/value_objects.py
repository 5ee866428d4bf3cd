"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class DeviceId(ValueObject):
    """Client-reported device identifier."""

    value: str

    def __post_init__(self):
        """Validate device identifier."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Device identifier cannot be empty")
        if len(self.value) > 255:
            raise ValueError("Device identifier too long")

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    ISSUED = "issued"
    ACTIVE = "active"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class LicenseSource(Enum):
    """Where a license record came from."""

    MANUAL = "manual"
    PAYMENT_WEBHOOK = "payment_webhook"

    def __str__(self) -> str:
        return self.value


class ActivationReason(Enum):
    """Outcome of an activation attempt."""

    FIRST_ACTIVATION = "FirstActivation"
    ALREADY_BOUND = "AlreadyBound"
    UNKNOWN_KEY = "UnknownKey"
    REVOKED = "Revoked"
    DEVICE_MISMATCH = "DeviceMismatch"

    def __str__(self) -> str:
        return self.value

    @property
    def is_valid(self) -> bool:
        """Whether the outcome grants use of the product."""
        return self in (ActivationReason.FIRST_ACTIVATION, ActivationReason.ALREADY_BOUND)


class SubscriptionStatus(Enum):
    """Subscription status of a subscriber account."""

    NONE = "none"
    ACTIVE = "active"
    CANCELED = "canceled"

    def __str__(self) -> str:
        return self.value
