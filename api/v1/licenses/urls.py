"""
URL configuration for client license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path(
        "verify",
        views.VerifyLicenseView.as_view(),
        name="verify-license",
    ),
]
