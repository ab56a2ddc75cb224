"""Ticket numbers and seat labels."""

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_uppercase

SEATS_PER_ROW = 10
SEATS_PER_SECTION = 100


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_ticket_number(now_ms: int | None = None) -> str:
    """``TKT-<base36 millis>-<6 random base36 chars>``, uppercase.

    Uniqueness is enforced by the database column, not here.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"TKT-{to_base36(now_ms)}-{suffix}"


def seat_label(index: int) -> str:
    """0 -> A1-1, 9 -> A1-10, 10 -> A2-1, 100 -> B1-1."""
    if index < 0:
        raise ValueError("seat index must be non-negative")
    section = chr(ord("A") + index // SEATS_PER_SECTION)
    row = (index % SEATS_PER_SECTION) // SEATS_PER_ROW + 1
    seat = index % SEATS_PER_ROW + 1
    return f"{section}{row}-{seat}"


def qr_filename(ticket_number: str) -> str:
    return f"qr-{ticket_number}.png"


def pdf_filename(ticket_number: str) -> str:
    return f"ticket-{ticket_number}.pdf"
