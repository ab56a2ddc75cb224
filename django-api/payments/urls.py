from django.urls import path

from payments.handlers import PaymentWebhookView

urlpatterns = [
    path("payments/webhook", PaymentWebhookView.as_view(), name="payment-webhook"),
]
