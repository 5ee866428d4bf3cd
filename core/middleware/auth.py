"""
API key authentication middleware.

This middleware validates administrator API keys for the admin API.
The activation and payment webhook endpoints are public; the webhook
is authenticated by its payment provider signature instead.
"""

import logging
from typing import Optional

from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.infrastructure.models import ApiKey, hash_api_key

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


def _error(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for API key authentication.

    Requests under /api/v1/admin/ need a valid X-API-Key header
    (or a Bearer token); otherwise 401 Unauthorized is returned.
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None
        return self._authenticate_admin_api(request)

    def _authenticate_admin_api(self, request: HttpRequest) -> Optional[HttpResponse]:
        api_key = request.headers.get("X-API-Key") or request.headers.get(
            "Authorization", ""
        ).replace("Bearer ", "")

        if not api_key:
            return _error("MISSING_API_KEY", "Missing API key. Provide X-API-Key header.", 401)

        try:
            # pylint: disable=no-member
            api_key_obj = ApiKey.objects.filter(key_hash=hash_api_key(api_key)).first()
            if not api_key_obj:
                logger.warning("Invalid API key attempted: %s...", api_key[:8])
                return _error("INVALID_API_KEY", "Invalid API key", 401)

            if not api_key_obj.is_valid():
                logger.warning("Expired API key attempted: %s...", api_key[:8])
                return _error("INVALID_API_KEY", "API key expired", 401)

            api_key_obj.mark_used()
        except DatabaseError as e:
            logger.error("Error authenticating admin API: %s", e, exc_info=True)
            return _error("UPSTREAM_FAILURE", "Authentication unavailable", 500)

        request.api_key = api_key_obj  # type: ignore
        return None
