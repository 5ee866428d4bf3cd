"""
Client API views.

The desktop application calls this endpoint on start-up to check its
license key and bind it to the machine on first use.
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from api.v1.licenses.serializers import (
    VerifyLicenseRequestSerializer,
    VerifyLicenseResponseSerializer,
)
from core.domain.exceptions import MalformedInputError, UpstreamFailureError
from core.domain.value_objects import ActivationReason
from core.metrics import errors_total
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

REASON_STATUS_CODES = {
    ActivationReason.FIRST_ACTIVATION: status.HTTP_200_OK,
    ActivationReason.ALREADY_BOUND: status.HTTP_200_OK,
    ActivationReason.UNKNOWN_KEY: status.HTTP_400_BAD_REQUEST,
    ActivationReason.REVOKED: status.HTTP_403_FORBIDDEN,
    ActivationReason.DEVICE_MISMATCH: status.HTTP_403_FORBIDDEN,
}


class VerifyLicenseView(APIView):
    """View for verifying and binding a license key."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Check a license key for a device. The first device to present an "
            "unbound key is bound to it; any other device is rejected."
        ),
        tags=["Client API"],
        request=VerifyLicenseRequestSerializer,
        responses={
            200: VerifyLicenseResponseSerializer,
            400: VerifyLicenseResponseSerializer,
            403: VerifyLicenseResponseSerializer,
            500: VerifyLicenseResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license for a device."""
        return async_to_sync(self._handle_verify_license)(request)

    async def _handle_verify_license(self, request: Request) -> Response:
        """Async handler for verify license."""
        serializer = VerifyLicenseRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return self._response(False, "Invalid request", None, status.HTTP_400_BAD_REQUEST)

        handler = ActivateLicenseHandler(license_repository=_license_repo)
        command = ActivateLicenseCommand(
            license_key=serializer.validated_data["license_key"],
            device_id=serializer.validated_data["device_id"],
        )

        try:
            result = await handler.handle(command)
        except MalformedInputError:
            return self._response(
                False, "Missing licenseKey or deviceId", None, status.HTTP_400_BAD_REQUEST
            )
        except UpstreamFailureError:
            return self._response(
                False, "A server error occurred", None, status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        except Exception:
            errors_total.labels(error_type="verify_license", endpoint=request.path).inc()
            logger.exception("Unexpected error verifying license")
            return self._response(
                False, "A server error occurred", None, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return self._response(
            result.valid, result.message, result.reason.value, REASON_STATUS_CODES[result.reason]
        )

    @staticmethod
    def _response(valid, message, reason, status_code) -> Response:
        return Response({"valid": valid, "message": message, "reason": reason}, status=status_code)
