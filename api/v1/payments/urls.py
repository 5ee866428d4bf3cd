"""
URL configuration for payment webhook endpoints.
"""

from django.urls import path

from api.v1.payments import views

urlpatterns = [
    path(
        "paypal/webhook",
        views.PayPalWebhookView.as_view(),
        name="paypal-webhook",
    ),
]
