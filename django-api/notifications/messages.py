"""Plain-text bodies for order lifecycle emails."""

from collections.abc import Mapping
from typing import Any

from notifications.domain import NotificationKind


def _greeting(data: Mapping[str, Any]) -> str:
    return f"Hi {data.get('user_name') or data.get('email') or 'there'},"


def _ticket_lines(data: Mapping[str, Any]) -> list[str]:
    lines = []
    for ticket in data.get("tickets") or ():
        seat = ticket.get("seat_label") or "-"
        lines.append(f"  - {ticket.get('ticket_number')} (seat {seat})")
    return lines


def compose(kind: NotificationKind, data: Mapping[str, Any]) -> tuple[str, str]:
    """Return (subject, body) for a notification kind."""
    order_number = data.get("order_number", "")
    event_title = data.get("event_title", "your event")

    if kind is NotificationKind.ORDER_CREATED:
        subject = f"Order {order_number} received"
        lines = [
            _greeting(data),
            "",
            f"We reserved {data.get('quantity')} ticket(s) for {event_title}.",
            f"Invoice: {data.get('invoice_number', '')}",
            f"Total: {data.get('total_amount')}",
            f"Please pay before {data.get('payment_deadline')}:",
            str(data.get("payment_url") or ""),
        ]
    elif kind is NotificationKind.ORDER_PAID:
        subject = f"Your tickets for {event_title}"
        lines = [
            _greeting(data),
            "",
            f"Payment for order {order_number} was received.",
            f"Payment method: {data.get('payment_method') or 'Unknown'}",
            "",
            "Your tickets:",
            *_ticket_lines(data),
        ]
    elif kind is NotificationKind.ORDER_CANCELLED:
        subject = f"Order {order_number} cancelled"
        lines = [
            _greeting(data),
            "",
            f"Your order {order_number} for {event_title} has been cancelled.",
        ]
    else:
        subject = f"Order {order_number} expired"
        lines = [
            _greeting(data),
            "",
            f"Your order {order_number} for {event_title} expired before payment was received.",
            "The reserved tickets have been released.",
        ]
    return subject, "\n".join(lines)
