"""Translation between the provider's vocabulary and ours.

Everything here is pure and total: malformed provider data degrades to
empty values instead of raising.
"""

import hmac
import logging
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from payments.domain.models import InvoiceRef, PaymentStatus

logger = logging.getLogger(__name__)

WEBHOOK_STATUS_MAP: dict[str, PaymentStatus] = {
    "PAID": PaymentStatus.PAID,
    "EXPIRED": PaymentStatus.EXPIRED,
    "PENDING": PaymentStatus.PENDING,
}


def _pick(raw: Mapping[str, Any], camel: str, snake: str) -> Any:
    value = raw.get(camel)
    if value is None:
        value = raw.get(snake)
    return value


def parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_amount(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")


def _text(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


def normalize_invoice(raw: Mapping[str, Any] | None) -> InvoiceRef:
    """Fold camelCase and snake_case invoice payloads into one InvoiceRef."""
    raw = raw or {}
    return InvoiceRef(
        id=str(raw.get("id") or ""),
        external_id=str(_pick(raw, "externalId", "external_id") or ""),
        status=str(raw.get("status") or ""),
        amount=parse_amount(raw.get("amount")),
        currency=_text(raw.get("currency")),
        invoice_url=_text(_pick(raw, "invoiceUrl", "invoice_url")),
        expiry_date=parse_timestamp(_pick(raw, "expiryDate", "expiry_date")),
        payment_method=_text(_pick(raw, "paymentMethod", "payment_method")),
        paid_at=parse_timestamp(_pick(raw, "paidAt", "paid_at")),
        payer_email=_text(_pick(raw, "payerEmail", "payer_email")),
        description=str(raw.get("description") or ""),
        created=parse_timestamp(raw.get("created")),
        updated=parse_timestamp(raw.get("updated")),
    )


def translate_webhook_status(status: str | None) -> PaymentStatus | None:
    """Map a provider status to PaymentStatus; None means "ignore"."""
    mapped = WEBHOOK_STATUS_MAP.get((status or "").upper())
    if mapped is None:
        logger.info("Ignoring unhandled provider status %r", status)
    return mapped


def is_valid_external_id(value: str | None) -> bool:
    """External ids we issue are order UUIDs; dashboard test pings are not."""
    if not value:
        return False
    try:
        UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


def callback_token_matches(expected: str | None, provided: str | None) -> bool:
    if not expected or not provided:
        return False
    return hmac.compare_digest(expected.encode(), provided.encode())
