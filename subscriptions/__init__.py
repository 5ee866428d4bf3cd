"""
Subscriptions module - Subscriber accounts of the compliance service.

This module handles:
- SubscriberAccount entity
- Subscription activation and cancellation from billing webhooks
"""
