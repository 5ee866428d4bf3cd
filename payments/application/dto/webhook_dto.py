"""
Webhook result DTO.
"""
from dataclasses import dataclass

PROCESSED = "processed"
DUPLICATE = "duplicate"
IGNORED = "ignored"


@dataclass
class WebhookResultDTO:
    """Outcome of a processed webhook delivery."""

    status: str
    message: str
