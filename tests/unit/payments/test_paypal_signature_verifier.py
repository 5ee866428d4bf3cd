"""
Unit tests for PayPal signature verification.
"""
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from core.domain.exceptions import UpstreamFailureError
from payments.infrastructure.paypal_signature_verifier import (
    PayPalSignatureVerifier,
    SkipSignatureVerifier,
    get_signature_verifier,
)

HEADERS = {
    "Paypal-Transmission-Id": "tx-1",
    "Paypal-Transmission-Time": "2026-07-01T00:00:00Z",
    "Paypal-Cert-Url": "https://api.paypal.com/cert.pem",
    "Paypal-Auth-Algo": "SHA256withRSA",
    "Paypal-Transmission-Sig": "c2lnbmF0dXJl",
}

PAYLOAD = json.dumps({"event_type": "PAYMENT.CAPTURE.COMPLETED"}).encode()


def fake_response(data):
    response = MagicMock()
    response.json.return_value = data
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def verifier():
    return PayPalSignatureVerifier(
        api_base="https://api-m.sandbox.paypal.com/",
        client_id="client",
        client_secret="secret",
        webhook_id="WH-1",
        timeout=5,
    )


@pytest.mark.asyncio
class TestPayPalSignatureVerifier:
    """Tests for PayPalSignatureVerifier."""

    async def test_success(self, verifier):
        with patch("payments.infrastructure.paypal_signature_verifier.requests.post") as post:
            post.side_effect = [
                fake_response({"access_token": "token"}),
                fake_response({"verification_status": "SUCCESS"}),
            ]

            assert await verifier.verify(PAYLOAD, HEADERS) is True

        verify_call = post.call_args_list[1]
        assert verify_call.args[0] == (
            "https://api-m.sandbox.paypal.com/v1/notifications/verify-webhook-signature"
        )
        body = verify_call.kwargs["json"]
        assert body["webhook_id"] == "WH-1"
        assert body["transmission_id"] == "tx-1"
        assert body["webhook_event"] == {"event_type": "PAYMENT.CAPTURE.COMPLETED"}
        assert verify_call.kwargs["headers"]["Authorization"] == "Bearer token"

    async def test_failure_status(self, verifier):
        with patch("payments.infrastructure.paypal_signature_verifier.requests.post") as post:
            post.side_effect = [
                fake_response({"access_token": "token"}),
                fake_response({"verification_status": "FAILURE"}),
            ]

            assert await verifier.verify(PAYLOAD, HEADERS) is False

    async def test_missing_headers(self, verifier):
        with patch("payments.infrastructure.paypal_signature_verifier.requests.post") as post:
            assert await verifier.verify(PAYLOAD, {"Paypal-Transmission-Id": "tx-1"}) is False

        post.assert_not_called()

    async def test_missing_webhook_id(self):
        verifier = PayPalSignatureVerifier(
            api_base="https://api-m.sandbox.paypal.com",
            client_id="client",
            client_secret="secret",
            webhook_id="",
        )

        assert await verifier.verify(PAYLOAD, HEADERS) is False

    async def test_network_failure(self, verifier):
        with patch(
            "payments.infrastructure.paypal_signature_verifier.requests.post",
            side_effect=requests.exceptions.ConnectionError("down"),
        ):
            with pytest.raises(UpstreamFailureError):
                await verifier.verify(PAYLOAD, HEADERS)


def test_get_signature_verifier(settings):
    settings.PAYPAL_SKIP_SIGNATURE_VERIFICATION = True
    assert isinstance(get_signature_verifier(), SkipSignatureVerifier)

    settings.PAYPAL_SKIP_SIGNATURE_VERIFICATION = False
    assert isinstance(get_signature_verifier(), PayPalSignatureVerifier)
