"""Payment gateway interface.

Implementations return normalized InvoiceRef values and raise
PaymentGatewayError for every failure mode.
"""

from abc import ABC, abstractmethod

from payments.domain import InvoiceRef, InvoiceRequest


class PaymentGateway(ABC):
    """Invoice-based payment provider."""

    @abstractmethod
    def create_invoice(self, request: InvoiceRequest) -> InvoiceRef:
        ...

    @abstractmethod
    def get_invoice(self, invoice_id: str) -> InvoiceRef:
        ...

    @abstractmethod
    def expire_invoice(self, invoice_id: str) -> InvoiceRef:
        ...
