"""
ActivateSubscriptionCommand.
"""
from dataclasses import dataclass


@dataclass
class ActivateSubscriptionCommand:
    """
    Command to mark a subscriber's subscription active.

    Args:
        email: Subscriber email taken from the billing event
        subscription_id: Payment provider subscription id
    """

    email: str
    subscription_id: str
