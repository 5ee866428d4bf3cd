"""
Signature verifier port (interface).
"""
from abc import ABC, abstractmethod
from typing import Mapping


class SignatureVerifier(ABC):
    """Checks that a webhook delivery really comes from the payment provider."""

    @abstractmethod
    async def verify(self, payload: bytes, headers: Mapping[str, str]) -> bool:
        """
        Verify a webhook delivery.

        Args:
            payload: Raw request body
            headers: Request headers

        Returns:
            True if the provider vouches for the delivery

        Raises:
            UpstreamFailureError: If the provider cannot be reached
        """
        pass
