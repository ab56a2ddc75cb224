"""Notification dispatcher.

Dispatch is best-effort: delivery failures are recorded and logged, and
never propagate into the order lifecycle.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from django.conf import settings
from django.core.mail import send_mail

from notifications.domain import NotificationKind, NotificationStatus
from notifications.messages import compose
from notifications.models import EmailNotification

logger = logging.getLogger(__name__)


class NotificationDispatcher(ABC):
    @abstractmethod
    def send(
        self, kind: NotificationKind, recipient: str, template_data: Mapping[str, Any]
    ) -> NotificationStatus:
        ...


class EmailNotificationDispatcher(NotificationDispatcher):
    """Sends through Django's configured email backend and logs every attempt."""

    def send(
        self, kind: NotificationKind, recipient: str, template_data: Mapping[str, Any]
    ) -> NotificationStatus:
        subject, body = compose(kind, template_data)
        error = ""
        try:
            send_mail(
                subject=subject,
                message=body,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[recipient],
                fail_silently=False,
            )
            status = NotificationStatus.SENT
            logger.info("Sent %s email to %s", kind.value, recipient)
        except Exception as e:
            status = NotificationStatus.FAILED
            error = str(e)
            logger.exception("Failed to send %s email to %s", kind.value, recipient)

        EmailNotification.objects.create(
            kind=kind.value,
            recipient=recipient,
            subject=subject[:255],
            status=status.value,
            error=error,
            order_number=str(template_data.get("order_number", ""))[:32],
        )
        return status
