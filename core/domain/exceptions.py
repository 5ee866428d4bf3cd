"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class MalformedInputError(DomainException):
    """Raised when a request is missing required fields or cannot be parsed."""

    def __init__(self, message: str = "Malformed input"):
        super().__init__(message, code="MALFORMED_INPUT")


class UpstreamFailureError(DomainException):
    """Raised when the datastore, mail server or payment provider is unreachable."""

    def __init__(self, message: str = "Upstream service unavailable"):
        super().__init__(message, code="UPSTREAM_FAILURE")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class UnknownLicenseKeyError(LicenseException):
    """Raised when no license record matches a key."""

    def __init__(self, message: str = "Unknown license key"):
        super().__init__(message, code="UNKNOWN_KEY")


class LicenseRevokedError(LicenseException):
    """Raised when a revoked license is used."""

    def __init__(self, message: str = "License has been revoked"):
        super().__init__(message, code="REVOKED")


class DeviceMismatchError(LicenseException):
    """Raised when a license is already bound to another device."""

    def __init__(self, message: str = "License is bound to another device"):
        super().__init__(message, code="DEVICE_MISMATCH")


class DuplicateTransactionError(LicenseException):
    """Raised when a license already exists for a payment transaction."""

    def __init__(self, message: str = "License already issued for transaction"):
        super().__init__(message, code="CONFLICT")


class DuplicateLicenseKeyError(LicenseException):
    """Raised when a generated license key collides with an existing one."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE_KEY")


class PaymentException(DomainException):
    """Base exception for payment webhook errors."""

    pass


class SignatureVerificationError(PaymentException):
    """Raised when a payment webhook signature does not verify."""

    def __init__(self, message: str = "Signature verification failed"):
        super().__init__(message, code="INVALID_SIGNATURE")


class SubscriptionException(DomainException):
    """Base exception for subscription errors."""

    pass


class SubscriberNotFoundError(SubscriptionException):
    """Raised when a subscription event refers to an unknown account."""

    def __init__(self, message: str = "Subscriber not found"):
        super().__init__(message, code="SUBSCRIBER_NOT_FOUND")
