"""
Django implementations of the reminder repository ports.
"""
from typing import List

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.infrastructure.database import translate_database_errors
from reminders.domain.deadline_notification import DeadlineNotification
from reminders.domain.regulation import Regulation
from reminders.infrastructure.models import DeadlineNotification as DeadlineNotificationModel
from reminders.infrastructure.models import Regulation as RegulationModel
from reminders.ports.reminder_repository import (
    DeadlineNotificationRepository,
    RegulationRepository,
)


class DjangoRegulationRepository(RegulationRepository):
    """Django ORM implementation of RegulationRepository."""

    def _to_domain(self, model: RegulationModel) -> Regulation:
        return Regulation(
            id=model.id,
            name=model.name,
            deadline_type=model.deadline_type,
            deadline_month=model.deadline_month,
            deadline_day=model.deadline_day,
            applicable_company_types=list(model.applicable_company_types or []),
            applicable_industries=list(model.applicable_industries or []),
            applicable_employee_ranges=list(model.applicable_employee_ranges or []),
        )

    @sync_to_async
    def find_all(self) -> List[Regulation]:
        with translate_database_errors("regulations.find_all"):
            models = list(RegulationModel.objects.all())
        return [self._to_domain(model) for model in models]


class DjangoDeadlineNotificationRepository(DeadlineNotificationRepository):
    """Django ORM implementation of DeadlineNotificationRepository."""

    @sync_to_async
    def record_if_absent(self, notification: DeadlineNotification) -> bool:
        """
        Insert the notification row.

        The primary key makes a second insert of the same reminder fail,
        which is reported as False.
        """
        with translate_database_errors("deadline_notifications.record"):
            try:
                with transaction.atomic():
                    DeadlineNotificationModel.objects.create(
                        id=notification.id,
                        account_id=notification.account_id,
                        regulation_id=notification.regulation_id,
                        regulation_name=notification.regulation_name,
                        notification_type=notification.notification_type,
                        deadline_date=notification.deadline_date,
                        sent_at=notification.sent_at,
                    )
            except IntegrityError:
                return False
        return True
