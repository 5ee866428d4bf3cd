"""
Event handlers for domain events.

These handlers process domain events in-process for side effects
such as the audit trail.
"""

import logging

from activations.domain.events import ActivationRejected, LicenseActivated
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import DeviceReset, LicenseIssued, LicenseRevoked

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

AUDITED_EVENTS = (
    LicenseIssued,
    LicenseActivated,
    ActivationRejected,
    DeviceReset,
    LicenseRevoked,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one structured record per license event to the `audit` logger.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={"event": event.to_dict()},
        )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    logger.info("Event handlers registered")
