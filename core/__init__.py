"""
Shared kernel of the license service.

This module contains:
- Domain exceptions, value objects and the event bus
- Administrator API keys and their middleware
- Request logging, metrics and health endpoints
- Celery tasks for email and deadline reminders
"""
