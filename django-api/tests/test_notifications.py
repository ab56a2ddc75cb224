"""Tests for email composition and the logging dispatcher.

Run with: pytest tests/test_notifications.py -v
"""

from unittest import mock

import pytest
from django.core import mail

from notifications.dispatcher import EmailNotificationDispatcher
from notifications.domain import NotificationKind, NotificationStatus
from notifications.messages import compose
from notifications.models import EmailNotification

DATA = {
    "email": "buyer@example.com",
    "user_name": "Ana",
    "order_number": "ORD-20250101-0001",
    "event_title": "Jazz Night",
    "quantity": 2,
    "invoice_number": "INV-20250101-0001",
    "total_amount": "300000.00",
    "payment_deadline": "2025-01-01T11:00:00+00:00",
    "payment_url": "https://checkout.example.com/inv_1",
}


class TestCompose:
    def test_created_email_links_to_payment(self):
        subject, body = compose(NotificationKind.ORDER_CREATED, DATA)
        assert subject == "Order ORD-20250101-0001 received"
        assert "Hi Ana," in body
        assert DATA["payment_url"] in body

    def test_paid_email_lists_tickets(self):
        data = {
            **DATA,
            "payment_method": "QRIS",
            "tickets": [
                {"ticket_number": "TKT-1", "seat_label": "A1-1"},
                {"ticket_number": "TKT-2", "seat_label": "A1-2"},
            ],
        }
        subject, body = compose(NotificationKind.ORDER_PAID, data)
        assert subject == "Your tickets for Jazz Night"
        assert "TKT-1 (seat A1-1)" in body
        assert "TKT-2 (seat A1-2)" in body
        assert "Payment method: QRIS" in body

    @pytest.mark.parametrize(
        "kind,word",
        [(NotificationKind.ORDER_CANCELLED, "cancelled"), (NotificationKind.ORDER_EXPIRED, "expired")],
    )
    def test_closing_emails(self, kind, word):
        subject, body = compose(kind, DATA)
        assert word in subject
        assert "ORD-20250101-0001" in body


@pytest.mark.django_db
class TestEmailNotificationDispatcher:
    def test_send_logs_success(self, settings):
        settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

        status = EmailNotificationDispatcher().send(
            NotificationKind.ORDER_CREATED, "buyer@example.com", DATA
        )

        assert status is NotificationStatus.SENT
        assert mail.outbox[0].to == ["buyer@example.com"]
        row = EmailNotification.objects.get()
        assert row.status == "sent"
        assert row.order_number == "ORD-20250101-0001"

    def test_delivery_failure_is_recorded_not_raised(self):
        with mock.patch(
            "notifications.dispatcher.send_mail", side_effect=ConnectionRefusedError("smtp down")
        ):
            status = EmailNotificationDispatcher().send(
                NotificationKind.ORDER_PAID, "buyer@example.com", DATA
            )

        assert status is NotificationStatus.FAILED
        row = EmailNotification.objects.get()
        assert row.status == "failed"
        assert "smtp down" in row.error
