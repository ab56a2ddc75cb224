"""Payment domain models.

A Payment mirrors one provider invoice. The provider vocabulary is
translated into PaymentStatus in payments.domain.translation.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    EXPIRED = "expired"
    FAILED = "failed"


class PaymentProvider(str, Enum):
    XENDIT = "xendit"


@dataclass(frozen=True)
class Payment:
    """Domain representation of a Payment, owned by exactly one Order."""

    id: UUID
    order_id: UUID
    provider: PaymentProvider
    reference_id: str
    amount: Decimal
    currency: str
    status: PaymentStatus
    payment_url: str
    expires_at: datetime | None
    paid_at: datetime | None = None
    payment_method: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class InvoiceRequest:
    """What we ask the provider to bill."""

    external_id: str
    amount: Decimal
    payer_email: str
    description: str
    currency: str
    invoice_duration_seconds: int
    success_redirect_url: str | None = None
    failure_redirect_url: str | None = None


@dataclass(frozen=True)
class InvoiceRef:
    """Canonical view of a provider invoice, whatever casing it arrived in."""

    id: str
    external_id: str
    status: str
    amount: Decimal
    currency: str | None
    invoice_url: str | None
    expiry_date: datetime | None
    payment_method: str | None = None
    paid_at: datetime | None = None
    payer_email: str | None = None
    description: str = ""
    created: datetime | None = None
    updated: datetime | None = None


@dataclass(frozen=True)
class WebhookNotification:
    """An invoice status callback from the provider."""

    id: str
    external_id: str
    status: str
    amount: Decimal
    created: datetime | None
    updated: datetime | None
    payment_method: str | None = None
    paid_at: datetime | None = None
    payer_email: str | None = None
    currency: str | None = None
