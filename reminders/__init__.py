"""
Reminders module - Regulatory deadline reminders for subscribers.

This module handles:
- Regulation master data and deadline calculation
- Matching regulations to subscriber company profiles
- Sending each reminder once through the notification log
"""
