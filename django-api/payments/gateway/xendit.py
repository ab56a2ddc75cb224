"""Xendit invoice API client."""

import logging
from typing import Any

import requests
from django.conf import settings

from payments.domain import InvoiceRef, InvoiceRequest
from payments.domain.errors import PaymentGatewayError
from payments.domain.translation import normalize_invoice
from payments.gateway.interfaces import PaymentGateway

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.xendit.co"


class XenditGateway(PaymentGateway):
    """Talks to the Xendit invoice API with HTTP basic auth (secret key, no password)."""

    def __init__(
        self,
        secret_key: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (secret_key, "")
        self._session.headers.update({"Content-Type": "application/json"})

    @classmethod
    def from_settings(cls) -> "XenditGateway":
        return cls(
            secret_key=settings.XENDIT_SECRET_KEY,
            base_url=settings.XENDIT_API_URL,
            timeout=settings.XENDIT_TIMEOUT_SECONDS,
        )

    def create_invoice(self, request: InvoiceRequest) -> InvoiceRef:
        payload: dict[str, Any] = {
            "external_id": request.external_id,
            "amount": float(request.amount),
            "payer_email": request.payer_email,
            "description": request.description,
            "currency": request.currency,
            "invoice_duration": request.invoice_duration_seconds,
            "should_send_email": True,
        }
        if request.success_redirect_url:
            payload["success_redirect_url"] = request.success_redirect_url
        if request.failure_redirect_url:
            payload["failure_redirect_url"] = request.failure_redirect_url

        invoice = normalize_invoice(self._request("create_invoice", "POST", "/v2/invoices", payload))
        logger.info("Created invoice %s for external id %s", invoice.id, request.external_id)
        return invoice

    def get_invoice(self, invoice_id: str) -> InvoiceRef:
        return normalize_invoice(
            self._request("get_invoice", "GET", f"/v2/invoices/{invoice_id}")
        )

    def expire_invoice(self, invoice_id: str) -> InvoiceRef:
        invoice = normalize_invoice(
            self._request("expire_invoice", "POST", f"/invoices/{invoice_id}/expire!")
        )
        logger.info("Expired invoice %s", invoice_id)
        return invoice

    def _request(
        self, operation: str, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        try:
            response = self._session.request(
                method,
                f"{self._base_url}{path}",
                json=payload,
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            body = e.response.text if e.response is not None else ""
            logger.error("Xendit %s failed: %s %s", operation, e, body)
            raise PaymentGatewayError(operation, str(e)) from e
        except ValueError as e:
            logger.error("Xendit %s returned a non-JSON body", operation)
            raise PaymentGatewayError(operation, "invalid response body") from e
        if not isinstance(data, dict):
            raise PaymentGatewayError(operation, "unexpected response shape")
        return data
