"""
URL configuration for administrator API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "licenses",
        views.LicenseListView.as_view(),
        name="admin-list-licenses",
    ),
    path(
        "licenses/issue",
        views.IssueLicenseView.as_view(),
        name="admin-issue-license",
    ),
    path(
        "licenses/reset-device",
        views.ResetDeviceView.as_view(),
        name="admin-reset-device",
    ),
]
