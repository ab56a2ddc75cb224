"""Human-facing order and invoice numbers.

Four random digits per day are not unique on their own; the columns are
unique and OrderService retries on collision.
"""

import secrets
from datetime import datetime


def _dated_number(prefix: str, now: datetime) -> str:
    return f"{prefix}-{now:%Y%m%d}-{secrets.randbelow(10000):04d}"


def generate_order_number(now: datetime) -> str:
    return _dated_number("ORD", now)


def generate_invoice_number(now: datetime) -> str:
    return _dated_number("INV", now)
