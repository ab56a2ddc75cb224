from payments.domain.models import (
    InvoiceRef,
    InvoiceRequest,
    Payment,
    PaymentProvider,
    PaymentStatus,
    WebhookNotification,
)

__all__ = [
    "InvoiceRef",
    "InvoiceRequest",
    "Payment",
    "PaymentProvider",
    "PaymentStatus",
    "WebhookNotification",
]
