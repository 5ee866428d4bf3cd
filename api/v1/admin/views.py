"""
Administrator API views.

These endpoints require an X-API-Key header (checked by
APIKeyAuthenticationMiddleware) and are used to:
- Issue licenses by hand
- Reset a license's device binding
- Look up the licenses owned by an email address
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.serializers import (
    IssueLicenseRequestSerializer,
    IssueLicenseResponseSerializer,
    LicenseDTOSerializer,
    ResetDeviceRequestSerializer,
    ResetDeviceResponseSerializer,
)
from core.domain.exceptions import MalformedInputError
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.application.handlers.license_admin_handlers import ResetDeviceHandler
from licenses.application.handlers.list_licenses_by_email_handler import (
    ListLicensesByEmailHandler,
)
from licenses.application.queries.list_licenses_by_email import ListLicensesByEmailQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.infrastructure.email_notifier import get_notifier

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

API_KEY_PARAMETER = OpenApiParameter(
    name="X-API-Key",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Administrator API key",
)


def _validation_error(serializer) -> Response:
    return Response(
        {"error": {"code": "MALFORMED_INPUT", "message": serializer.errors}},
        status=status.HTTP_400_BAD_REQUEST,
    )


class LicenseListView(APIView):
    """View for listing licenses by owner email."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Return every license issued to an email address.",
        tags=["Admin API"],
        parameters=[
            API_KEY_PARAMETER,
            OpenApiParameter(
                name="email",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Owner email address",
            ),
        ],
        responses={
            200: LicenseDTOSerializer(many=True),
            400: OpenApiResponse(description="Missing email"),
            401: OpenApiResponse(description="Missing or invalid API key"),
        },
    )
    def get(self, request: Request) -> Response:
        """List licenses for an email."""
        return async_to_sync(self._handle_list_licenses)(request)

    async def _handle_list_licenses(self, request: Request) -> Response:
        email = (request.query_params.get("email") or "").strip()
        if not email:
            raise MalformedInputError("email query parameter is required")

        handler = ListLicensesByEmailHandler(license_repository=_license_repo)
        licenses = await handler.handle(ListLicensesByEmailQuery(user_email=email))
        return Response(
            LicenseDTOSerializer(licenses, many=True).data,
            status=status.HTTP_200_OK,
        )


class IssueLicenseView(APIView):
    """View for manual license issuance."""

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Create a new unbound license for an email address. Set notify to "
            "email the key to its owner."
        ),
        tags=["Admin API"],
        parameters=[API_KEY_PARAMETER],
        request=IssueLicenseRequestSerializer,
        responses={
            201: IssueLicenseResponseSerializer,
            400: OpenApiResponse(description="Bad Request"),
            401: OpenApiResponse(description="Missing or invalid API key"),
        },
    )
    def post(self, request: Request) -> Response:
        """Issue a license."""
        return async_to_sync(self._handle_issue_license)(request)

    async def _handle_issue_license(self, request: Request) -> Response:
        serializer = IssueLicenseRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        handler = IssueLicenseHandler(license_repository=_license_repo, notifier=get_notifier())
        result = await handler.handle(
            IssueLicenseCommand(
                user_email=serializer.validated_data["user_email"],
                note=serializer.validated_data["note"],
                notify=serializer.validated_data["notify"],
            )
        )
        return Response(
            {
                "license": LicenseDTOSerializer(result.license).data,
                "notified": result.notified,
            },
            status=status.HTTP_201_CREATED,
        )


class ResetDeviceView(APIView):
    """View for clearing a license's device binding."""

    @extend_schema(
        operation_id="reset_device",
        summary="Reset Device",
        description=(
            "Unbind a license from its device so it can be activated on another "
            "machine. The license returns to the issued state, also when revoked."
        ),
        tags=["Admin API"],
        parameters=[API_KEY_PARAMETER],
        request=ResetDeviceRequestSerializer,
        responses={
            200: ResetDeviceResponseSerializer,
            400: OpenApiResponse(description="Bad Request"),
            401: OpenApiResponse(description="Missing or invalid API key"),
            404: ResetDeviceResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Reset the device of a license."""
        return async_to_sync(self._handle_reset_device)(request)

    async def _handle_reset_device(self, request: Request) -> Response:
        serializer = ResetDeviceRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        handler = ResetDeviceHandler(license_repository=_license_repo)
        reset = await handler.handle(
            ResetDeviceCommand(license_key=serializer.validated_data["license_key"])
        )
        return Response(
            {"reset": reset},
            status=status.HTTP_200_OK if reset else status.HTTP_404_NOT_FOUND,
        )
