"""
CancelSubscriptionCommand.
"""
from dataclasses import dataclass


@dataclass
class CancelSubscriptionCommand:
    """Command to cancel the subscription with the given provider id."""

    subscription_id: str
