"""
PaymentEvent value object.

A parsed payment provider webhook body. Only the fields the service
acts on are extracted; everything else stays in the raw payload.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from core.domain.exceptions import MalformedInputError

PAYMENT_CAPTURE_COMPLETED = "PAYMENT.CAPTURE.COMPLETED"
PAYMENT_SALE_COMPLETED = "PAYMENT.SALE.COMPLETED"
SUBSCRIPTION_ACTIVATED = "BILLING.SUBSCRIPTION.ACTIVATED"
SUBSCRIPTION_CANCELLED = "BILLING.SUBSCRIPTION.CANCELLED"

PAYMENT_COMPLETED_EVENTS = frozenset({PAYMENT_CAPTURE_COMPLETED, PAYMENT_SALE_COMPLETED})

DEFAULT_CURRENCY = "JPY"


@dataclass(frozen=True)
class PaymentEvent:
    """Parsed webhook event."""

    event_type: str
    resource_id: Optional[str] = None
    payer_email: Optional[str] = None
    subscriber_email: Optional[str] = None
    amount: Optional[str] = None
    currency: str = DEFAULT_CURRENCY
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_payment_completed(self) -> bool:
        return self.event_type in PAYMENT_COMPLETED_EVENTS

    @classmethod
    def parse(cls, body: Union[bytes, str, Dict[str, Any]]) -> "PaymentEvent":
        """
        Parse a webhook body.

        Args:
            body: Raw request body or already decoded JSON object

        Returns:
            PaymentEvent

        Raises:
            MalformedInputError: If the body is not a JSON object with an event_type
        """
        if isinstance(body, (bytes, str)):
            try:
                data = json.loads(body)
            except (TypeError, ValueError) as e:
                raise MalformedInputError("Webhook body is not valid JSON") from e
        else:
            data = body

        if not isinstance(data, dict):
            raise MalformedInputError("Webhook body must be a JSON object")

        event_type = data.get("event_type")
        if not event_type or not isinstance(event_type, str):
            raise MalformedInputError("Webhook body has no event_type")

        resource = data.get("resource") or {}
        if not isinstance(resource, dict):
            raise MalformedInputError("Webhook resource must be an object")

        payer = _object_field(resource, "payer")
        subscriber = _object_field(resource, "subscriber")
        amount = _object_field(resource, "amount")

        value = amount.get("value") or amount.get("total")
        currency = amount.get("currency_code") or amount.get("currency") or DEFAULT_CURRENCY
        if not isinstance(currency, str):
            raise MalformedInputError("Webhook amount currency must be a string")

        resource_id = resource.get("id")
        return cls(
            event_type=event_type,
            resource_id=str(resource_id) if resource_id else None,
            payer_email=_email_field(payer, "payer"),
            subscriber_email=_email_field(subscriber, "subscriber"),
            amount=str(value) if value is not None else None,
            currency=currency,
            raw=data,
        )


def _object_field(resource: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = resource.get(name) or {}
    if not isinstance(value, dict):
        raise MalformedInputError(f"Webhook resource {name} must be an object")
    return value


def _email_field(section: Dict[str, Any], name: str) -> Optional[str]:
    email = section.get("email_address")
    if email is not None and not isinstance(email, str):
        raise MalformedInputError(f"Webhook {name} email_address must be a string")
    return email
