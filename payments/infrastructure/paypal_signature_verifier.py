"""
PayPal webhook signature verification.

Verification is delegated to PayPal's verify-webhook-signature API
rather than checking the certificate chain locally.
"""
import json
import logging
from typing import Mapping, Optional

import requests
from asgiref.sync import sync_to_async
from django.conf import settings

from core.domain.exceptions import UpstreamFailureError
from payments.ports.signature_verifier import SignatureVerifier

logger = logging.getLogger(__name__)

TRANSMISSION_HEADERS = {
    "transmission_id": "PAYPAL-TRANSMISSION-ID",
    "transmission_time": "PAYPAL-TRANSMISSION-TIME",
    "cert_url": "PAYPAL-CERT-URL",
    "auth_algo": "PAYPAL-AUTH-ALGO",
    "transmission_sig": "PAYPAL-TRANSMISSION-SIG",
}


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Header lookup tolerant of the casing proxies hand us."""
    for candidate in (name, name.lower(), name.title()):
        value = headers.get(candidate)
        if value:
            return value
    return None


class PayPalSignatureVerifier(SignatureVerifier):
    """Verifies deliveries with PayPal's /v1/notifications/verify-webhook-signature."""

    def __init__(
        self,
        api_base: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        webhook_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_base = (api_base or settings.PAYPAL_API_BASE).rstrip("/")
        self.client_id = client_id if client_id is not None else settings.PAYPAL_CLIENT_ID
        self.client_secret = (
            client_secret if client_secret is not None else settings.PAYPAL_CLIENT_SECRET
        )
        self.webhook_id = webhook_id if webhook_id is not None else settings.PAYPAL_WEBHOOK_ID
        self.timeout = timeout or settings.PAYPAL_TIMEOUT_SECONDS

    async def verify(self, payload: bytes, headers: Mapping[str, str]) -> bool:
        return await sync_to_async(self._verify)(payload, headers)

    def _verify(self, payload: bytes, headers: Mapping[str, str]) -> bool:
        transmission = {
            field_name: _get_header(headers, header)
            for field_name, header in TRANSMISSION_HEADERS.items()
        }
        missing = [name for name, value in transmission.items() if not value]
        if missing or not self.webhook_id:
            logger.warning(
                "Webhook rejected, missing signature data: %s",
                ", ".join(missing) or "webhook id",
            )
            return False

        try:
            webhook_event = json.loads(payload)
        except (TypeError, ValueError):
            logger.warning("Webhook rejected, body is not valid JSON")
            return False

        body = dict(transmission, webhook_id=self.webhook_id, webhook_event=webhook_event)

        try:
            token = self._get_access_token()
            response = requests.post(
                f"{self.api_base}/v1/notifications/verify-webhook-signature",
                json=body,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            verification_status = response.json().get("verification_status")
        except (requests.exceptions.RequestException, KeyError, ValueError) as e:
            logger.error("PayPal signature verification call failed: %s", e)
            raise UpstreamFailureError("Could not reach PayPal to verify signature") from e

        if verification_status != "SUCCESS":
            logger.warning(
                "PayPal rejected webhook %s: %s",
                transmission["transmission_id"],
                verification_status,
            )
            return False
        return True

    def _get_access_token(self) -> str:
        """Fetch an OAuth token with the client credentials grant."""
        response = requests.post(
            f"{self.api_base}/v1/oauth2/token",
            data={"grant_type": "client_credentials"},
            auth=(self.client_id, self.client_secret),
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()["access_token"]


class SkipSignatureVerifier(SignatureVerifier):
    """Accepts every delivery. Only for local development and tests."""

    async def verify(self, payload: bytes, headers: Mapping[str, str]) -> bool:
        logger.warning("Webhook signature verification is disabled")
        return True


def get_signature_verifier() -> SignatureVerifier:
    """Build the verifier selected by settings."""
    if settings.PAYPAL_SKIP_SIGNATURE_VERIFICATION:
        return SkipSignatureVerifier()
    return PayPalSignatureVerifier()
