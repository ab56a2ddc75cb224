from payments.handlers.views import PaymentWebhookView

__all__ = ["PaymentWebhookView"]
