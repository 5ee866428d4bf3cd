"""
Activation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import ActivationReason


@dataclass
class ActivationResultDTO:
    """DTO for an activation outcome."""

    valid: bool
    reason: ActivationReason
    message: str
    license_id: Optional[uuid.UUID] = None
