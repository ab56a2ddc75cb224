"""Django ORM implementation of the PaymentStore."""

from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from payments.domain import Payment, PaymentProvider, PaymentStatus
from payments.domain.errors import PaymentAlreadyExistsError
from payments.models import Payment as PaymentModel
from payments.stores.interfaces import PaymentStore


def to_domain(row: PaymentModel) -> Payment:
    return Payment(
        id=row.id,
        order_id=row.order_id,
        provider=PaymentProvider(row.provider),
        reference_id=row.reference_id,
        amount=row.amount,
        currency=row.currency,
        status=PaymentStatus(row.status),
        payment_url=row.payment_url,
        expires_at=row.expires_at,
        paid_at=row.paid_at,
        payment_method=row.payment_method,
        created_at=row.created_at,
    )


class DjangoPaymentStore(PaymentStore):
    def get_for_order(self, order_id: UUID) -> Payment | None:
        row = PaymentModel.objects.filter(order_id=order_id).first()
        return to_domain(row) if row else None

    def create_payment(self, payment: Payment) -> Payment:
        try:
            with transaction.atomic():
                row = PaymentModel.objects.create(
                    id=payment.id,
                    order_id=payment.order_id,
                    provider=payment.provider.value,
                    reference_id=payment.reference_id,
                    amount=payment.amount,
                    currency=payment.currency,
                    status=payment.status.value,
                    payment_url=payment.payment_url,
                    expires_at=payment.expires_at,
                )
        except IntegrityError as e:
            raise PaymentAlreadyExistsError(str(payment.order_id)) from e
        return to_domain(row)

    def save_payment(self, payment: Payment) -> Payment:
        PaymentModel.objects.filter(pk=payment.id).update(
            status=payment.status.value,
            paid_at=payment.paid_at,
            payment_method=payment.payment_method,
            updated_at=timezone.now(),
        )
        return payment
