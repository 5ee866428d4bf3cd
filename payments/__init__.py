"""
Payments module - PayPal webhook processing.

This module handles:
- Webhook signature verification against the payment provider
- Parsing payment and billing events
- Dispatching events to license issuance and subscription handlers
"""
