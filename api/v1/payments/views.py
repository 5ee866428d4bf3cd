"""
Payment webhook views.

PayPal posts payment and billing events here. Deliveries are
authenticated by their transmission signature, not by API key.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.infrastructure.email_notifier import get_notifier
from payments.application.handlers.payment_webhook_handler import PaymentWebhookHandler
from payments.infrastructure.paypal_signature_verifier import get_signature_verifier
from subscriptions.application.handlers.subscription_handlers import (
    ActivateSubscriptionHandler,
    CancelSubscriptionHandler,
)
from subscriptions.infrastructure.repositories.django_subscriber_repository import (
    DjangoSubscriberRepository,
)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_subscriber_repo = DjangoSubscriberRepository()


class WebhookResponseSerializer(serializers.Serializer):
    """Serializer for webhook acknowledgement."""

    status = serializers.CharField()
    message = serializers.CharField()


class PayPalWebhookView(APIView):
    """View receiving PayPal webhook deliveries."""

    @extend_schema(
        operation_id="paypal_webhook",
        summary="PayPal Webhook",
        description=(
            "Issue a license for a completed payment, or update a subscriber on "
            "subscription activation and cancellation. Redelivered payments are "
            "acknowledged without issuing a second license."
        ),
        tags=["Payments"],
        request=None,
        responses={
            200: WebhookResponseSerializer,
            400: OpenApiResponse(description="Malformed payload"),
            403: OpenApiResponse(description="Signature verification failed"),
            404: OpenApiResponse(description="Unknown subscriber"),
            500: OpenApiResponse(description="Internal error, PayPal will redeliver"),
        },
    )
    def post(self, request: Request) -> Response:
        """Process a PayPal webhook delivery."""
        return async_to_sync(self._handle_webhook)(request)

    async def _handle_webhook(self, request: Request) -> Response:
        """Async handler for the webhook."""
        notifier = get_notifier()
        handler = PaymentWebhookHandler(
            signature_verifier=get_signature_verifier(),
            issue_license_handler=IssueLicenseHandler(
                license_repository=_license_repo, notifier=notifier
            ),
            activate_subscription_handler=ActivateSubscriptionHandler(
                subscriber_repository=_subscriber_repo, notifier=notifier
            ),
            cancel_subscription_handler=CancelSubscriptionHandler(
                subscriber_repository=_subscriber_repo
            ),
        )
        result = await handler.handle(request.body, request.headers)
        return Response(
            {"status": result.status, "message": result.message},
            status=status.HTTP_200_OK,
        )
