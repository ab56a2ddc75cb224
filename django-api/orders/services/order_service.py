"""Order service - the order/payment/ticket lifecycle orchestrator.

Services:
- Depend only on interfaces (stores, gateway, dispatcher)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Every status change goes through ``_apply``: the pure state machine picks
the next status and effects, a compare-and-set on the status column elects
a single writer, critical effects run inside that transaction and
best-effort effects run after it. Only the elected writer runs effects.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Callable

from django.utils import timezone

from common.actors import Actor
from common.errors import DomainError
from events.domain import EventStatus
from events.domain.errors import EventNotBookableError
from events.services import EventService, InventoryLedger
from notifications.dispatcher import NotificationDispatcher
from notifications.domain import NotificationKind, NotificationStatus
from orders.domain import (
    Buyer,
    Effect,
    Order,
    OrderCreated,
    OrderDetails,
    OrderId,
    OrderStatus,
    Trigger,
    transition,
)
from orders.domain.errors import (
    InvalidOrderIdError,
    InvalidOrderTransitionError,
    InvalidQuantityError,
    OrderAccessDeniedError,
    OrderNotFoundError,
    OrderNumberCollisionError,
)
from orders.domain.numbering import generate_invoice_number, generate_order_number
from orders.services.effects import EffectContext, EffectRunner
from orders.stores.interfaces import OrderStore
from payments.domain import (
    InvoiceRequest,
    Payment,
    PaymentProvider,
    PaymentStatus,
    WebhookNotification,
)
from payments.domain.errors import (
    InvalidWebhookTokenError,
    PaymentAlreadyExistsError,
    PaymentGatewayError,
)
from payments.domain.translation import (
    callback_token_matches,
    is_valid_external_id,
    translate_webhook_status,
)
from payments.gateway import PaymentGateway
from payments.stores.interfaces import PaymentStore
from tickets.services import TicketService

logger = logging.getLogger(__name__)

TRIGGER_BY_PAYMENT_STATUS = {
    PaymentStatus.PAID: Trigger.PAYMENT_PAID,
    PaymentStatus.EXPIRED: Trigger.PAYMENT_EXPIRED,
    PaymentStatus.PENDING: Trigger.PAYMENT_PENDING,
}


@dataclass(frozen=True)
class OrderConfig:
    payment_window: timedelta
    currency: str
    webhook_token: str
    frontend_url: str = ""
    max_number_attempts: int = 5


def parse_order_id(order_id: str) -> OrderId:
    try:
        return OrderId.from_string(str(order_id))
    except (TypeError, ValueError):
        raise InvalidOrderIdError()


class OrderService:
    """Service for the order lifecycle."""

    def __init__(
        self,
        orders: OrderStore,
        payments: PaymentStore,
        events: EventService,
        ledger: InventoryLedger,
        gateway: PaymentGateway,
        tickets: TicketService,
        notifier: NotificationDispatcher,
        config: OrderConfig,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._orders = orders
        self._payments = payments
        self._events = events
        self._ledger = ledger
        self._gateway = gateway
        self._tickets = tickets
        self._notifier = notifier
        self._config = config
        self._now = clock
        self._effects = EffectRunner(
            {
                Effect.RELEASE_INVENTORY: self._release_inventory,
                Effect.CANCEL_TICKETS: self._cancel_tickets,
                Effect.EXPIRE_INVOICE: self._expire_invoice,
                Effect.GENERATE_TICKETS: self._generate_tickets,
                Effect.SEND_PAID_EMAIL: self._send_paid_email,
                Effect.SEND_CANCELLED_EMAIL: self._send_cancelled_email,
                Effect.SEND_EXPIRED_EMAIL: self._send_expired_email,
            }
        )

    # Creation

    def create_order(self, actor: Actor, event_id: str, quantity: int) -> OrderCreated:
        """Reserve seats, persist the order and open its invoice.

        Anything failing after the reservation is compensated: the seats are
        released and the order row removed before the error propagates.

        Raises:
            InvalidQuantityError: quantity is not a positive integer.
            InvalidEventIdError, EventNotFoundError: bad event reference.
            EventNotBookableError: event not published or already started.
            QuotaExceededError: not enough seats left.
            PaymentGatewayError: the invoice could not be created.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityError()

        event = self._events.get_event(event_id)
        now = self._now()
        if not event.is_bookable(now):
            reason = (
                "Event has already started"
                if event.status is EventStatus.PUBLISHED
                else "Event is not available for booking"
            )
            raise EventNotBookableError(event_id, reason)

        logger.info(
            "Creating order for user=%s event=%s qty=%s", actor.user_id, event_id, quantity
        )
        self._ledger.reserve(event.id, quantity)
        try:
            order = self._insert_order(actor, event, quantity, now)
        except Exception:
            self._ledger.release(event.id, quantity)
            raise

        try:
            payment = self._open_payment(order)
        except Exception as e:
            logger.error("Failed to create payment for order %s: %s", order.order_number, e)
            self._rollback_creation(order)
            if isinstance(e, DomainError):
                raise
            raise PaymentGatewayError("create_invoice", str(e)) from e

        logger.info("Order created: %s (%s)", order.id, order.order_number)
        self._notify(
            NotificationKind.ORDER_CREATED,
            order,
            invoice_number=order.invoice_number,
            quantity=order.quantity,
            total_amount=str(order.total_amount),
            payment_deadline=order.payment_deadline.isoformat(),
            payment_url=payment.payment_url,
        )
        return OrderCreated(order=order, payment=payment)

    def create_payment(self, order_id: str, actor: Actor) -> Payment:
        """Open the invoice for a pending order that has none yet.

        Raises:
            OrderAccessDeniedError: The actor does not own the order.
            InvalidOrderTransitionError: The order is no longer pending.
            PaymentAlreadyExistsError: The order already has its payment.
        """
        order = self._load(order_id)
        if order.buyer.user_id != actor.user_id:
            raise OrderAccessDeniedError()
        if order.status is not OrderStatus.PENDING:
            raise InvalidOrderTransitionError(
                order.status.value,
                Trigger.PAYMENT_CREATED.value,
                message="Order cannot be paid in current status",
            )
        if self._payments.get_for_order(order.id.value) is not None:
            raise PaymentAlreadyExistsError(str(order.id))

        payment = self._open_payment(order)
        try:
            self._apply(order, Trigger.PAYMENT_CREATED)
        except InvalidOrderTransitionError:
            # The order closed while the invoice was being opened.
            self._expire_invoice_quietly(payment.reference_id)
            raise
        return payment

    # Reads

    def get_order(self, order_id: str, actor: Actor) -> OrderDetails:
        order = self._load(order_id)
        if not actor.can_access(order.buyer.user_id):
            raise OrderAccessDeniedError()
        return OrderDetails(
            order=order,
            payment=self._payments.get_for_order(order.id.value),
            tickets=tuple(self._tickets.tickets_for_order(order.id.value)),
        )

    def list_orders(self, actor: Actor, status: OrderStatus | None = None) -> list[Order]:
        user_id = None if actor.is_staff else actor.user_id
        return self._orders.list_orders(user_id, status)

    # Transitions

    def cancel_order(self, order_id: str, actor: Actor) -> Order:
        """Cancel an unpaid order on behalf of its buyer (or staff).

        Raises:
            OrderAccessDeniedError: The actor neither owns the order nor is staff.
            InvalidOrderTransitionError: The order is paid or already expired.
        """
        order = self._load(order_id)
        if not actor.can_access(order.buyer.user_id):
            raise OrderAccessDeniedError()
        return self._apply(order, Trigger.CANCEL)

    def expire_overdue_order(self, order: Order) -> Order:
        return self._apply(order, Trigger.DEADLINE_PASSED)

    def verify_callback_token(self, callback_token: str | None) -> None:
        if not callback_token_matches(self._config.webhook_token, callback_token):
            logger.error("Webhook received with invalid token")
            raise InvalidWebhookTokenError()

    def process_payment_notification(
        self, notification: WebhookNotification, callback_token: str | None
    ) -> Order | None:
        """Apply a provider callback. Returns None when the callback is ignored.

        Raises:
            InvalidWebhookTokenError: The token does not match, before any mutation.
        """
        self.verify_callback_token(callback_token)
        logger.info(
            "Processing webhook %s for %s with status %s",
            notification.id,
            notification.external_id,
            notification.status,
        )

        if not is_valid_external_id(notification.external_id):
            logger.warning(
                "Ignoring webhook %s: external_id %r is not an order id (test ping?)",
                notification.id,
                notification.external_id,
            )
            return None

        payment_status = translate_webhook_status(notification.status)
        if payment_status is None:
            logger.info(
                "Unhandled status %s for order %s", notification.status, notification.external_id
            )
            return None

        order = self._orders.get_order(OrderId.from_string(notification.external_id))
        if order is None:
            logger.warning("Webhook for unknown order %s", notification.external_id)
            return None

        try:
            return self._apply(
                order, TRIGGER_BY_PAYMENT_STATUS[payment_status], notification=notification
            )
        except InvalidOrderTransitionError as e:
            logger.warning(
                "Webhook %s for order %s ignored: %s",
                notification.id,
                order.order_number,
                e.message,
            )
            return order

    def resend_order_email(self, order_id: str, actor: Actor) -> NotificationStatus:
        order = self._load(order_id)
        if not actor.can_access(order.buyer.user_id):
            raise OrderAccessDeniedError()
        payment = self._payments.get_for_order(order.id.value)
        if order.status.is_open:
            return self._notifier.send(
                NotificationKind.ORDER_CREATED,
                order.buyer.email,
                self._email_data(
                    order,
                    invoice_number=order.invoice_number,
                    quantity=order.quantity,
                    total_amount=str(order.total_amount),
                    payment_deadline=order.payment_deadline.isoformat(),
                    payment_url=payment.payment_url if payment else "",
                ),
            )
        if order.status is OrderStatus.PAID:
            return self._notifier.send(
                NotificationKind.ORDER_PAID,
                order.buyer.email,
                self._paid_email_data(order, payment),
            )
        raise InvalidOrderTransitionError(
            order.status.value, "resend", message="Nothing to resend for this order"
        )

    # Internals

    def _load(self, order_id: str) -> Order:
        order = self._orders.get_order(parse_order_id(order_id))
        if order is None:
            raise OrderNotFoundError(str(order_id))
        return order

    def _insert_order(self, actor: Actor, event, quantity: int, now: datetime) -> Order:
        for attempt in range(1, self._config.max_number_attempts + 1):
            candidate = Order(
                id=OrderId(value=uuid.uuid4()),
                order_number=generate_order_number(now),
                invoice_number=generate_invoice_number(now),
                buyer=Buyer(user_id=actor.user_id, email=actor.email, name=actor.name),
                event_id=event.id,
                event_title=event.title,
                quantity=quantity,
                unit_price=event.price,
                total_amount=event.price * quantity,
                status=OrderStatus.PENDING,
                payment_deadline=now + self._config.payment_window,
            )
            try:
                return self._orders.create_order(candidate)
            except OrderNumberCollisionError:
                logger.warning("Order number collision (attempt %s)", attempt)
        raise OrderNumberCollisionError()

    def _open_payment(self, order: Order) -> Payment:
        frontend = self._config.frontend_url.rstrip("/")
        invoice = self._gateway.create_invoice(
            InvoiceRequest(
                external_id=str(order.id),
                amount=order.total_amount.amount,
                payer_email=order.buyer.email,
                description=f"Payment for Order {order.order_number} - {order.event_title}",
                currency=self._config.currency,
                invoice_duration_seconds=int(self._config.payment_window.total_seconds()),
                success_redirect_url=(
                    f"{frontend}/payment/success?orderId={order.id}" if frontend else None
                ),
                failure_redirect_url=(
                    f"{frontend}/payment/failed?orderId={order.id}" if frontend else None
                ),
            )
        )
        try:
            payment = self._payments.create_payment(
                Payment(
                    id=uuid.uuid4(),
                    order_id=order.id.value,
                    provider=PaymentProvider.XENDIT,
                    reference_id=invoice.id,
                    amount=order.total_amount.amount,
                    currency=invoice.currency or self._config.currency,
                    status=PaymentStatus.PENDING,
                    payment_url=invoice.invoice_url or "",
                    expires_at=invoice.expiry_date or order.payment_deadline,
                )
            )
        except Exception:
            self._expire_invoice_quietly(invoice.id)
            raise
        logger.info("Payment created: ref=%s order=%s", payment.reference_id, order.order_number)
        return payment

    def _rollback_creation(self, order: Order) -> None:
        with self._orders.atomic():
            self._orders.delete_order(order.id)
            self._ledger.release(order.event_id, order.quantity)
        logger.info("Rolled back order %s", order.order_number)

    def _apply(
        self,
        order: Order,
        trigger: Trigger,
        *,
        notification: WebhookNotification | None = None,
    ) -> Order:
        payment = self._payments.get_for_order(order.id.value)
        step = transition(
            order.status,
            trigger,
            payment_paid=payment is not None and payment.status is PaymentStatus.PAID,
        )

        if step.is_noop:
            if trigger is Trigger.PAYMENT_PENDING and order.status.is_open and payment:
                self._payments.save_payment(replace(payment, status=PaymentStatus.PENDING))
            logger.info(
                "Order %s already %s; %s is a no-op",
                order.order_number,
                order.status.value,
                trigger.value,
            )
            return order

        payment = self._payment_after(payment, trigger, notification)
        updated = replace(order, status=step.next_status)
        context = EffectContext(order=updated, payment=payment, trigger=trigger)

        with self._orders.atomic():
            won = self._orders.compare_and_set_status(order.id, order.status, step.next_status)
            if won:
                if payment is not None and trigger is not Trigger.CANCEL:
                    self._payments.save_payment(payment)
                self._effects.run(step.critical_effects, context)

        if not won:
            current = self._orders.get_order(order.id)
            if current is None:
                raise OrderNotFoundError(str(order.id))
            logger.info(
                "Order %s changed concurrently to %s; re-evaluating %s",
                order.order_number,
                current.status.value,
                trigger.value,
            )
            return self._apply(current, trigger, notification=notification)

        logger.info(
            "Order %s: %s -> %s (%s)",
            order.order_number,
            order.status.value,
            step.next_status.value,
            trigger.value,
        )
        self._effects.run(step.best_effort_effects, context)
        return updated

    def _payment_after(
        self,
        payment: Payment | None,
        trigger: Trigger,
        notification: WebhookNotification | None,
    ) -> Payment | None:
        if payment is None:
            return None
        if trigger is Trigger.PAYMENT_PAID:
            return replace(
                payment,
                status=PaymentStatus.PAID,
                paid_at=(notification.paid_at if notification else None) or self._now(),
                payment_method=(notification.payment_method if notification else None)
                or "Unknown",
            )
        if trigger in (Trigger.PAYMENT_EXPIRED, Trigger.DEADLINE_PASSED):
            return replace(payment, status=PaymentStatus.EXPIRED)
        return payment

    def _expire_invoice_quietly(self, invoice_id: str) -> None:
        try:
            self._gateway.expire_invoice(invoice_id)
        except Exception:
            logger.exception("Could not expire orphaned invoice %s", invoice_id)

    # Effect handlers

    def _release_inventory(self, context: EffectContext) -> None:
        self._ledger.release(context.order.event_id, context.order.quantity)

    def _cancel_tickets(self, context: EffectContext) -> None:
        self._tickets.cancel_for_order(
            context.order.id.value, f"Order {context.order.status.value}"
        )

    def _expire_invoice(self, context: EffectContext) -> None:
        if context.payment is not None and context.payment.status is not PaymentStatus.PAID:
            self._gateway.expire_invoice(context.payment.reference_id)

    def _generate_tickets(self, context: EffectContext) -> None:
        tickets = self._tickets.generate_for_order(context.order.id.value)
        logger.info("Generated %s tickets for order %s", len(tickets), context.order.order_number)

    def _send_paid_email(self, context: EffectContext) -> None:
        self._notifier.send(
            NotificationKind.ORDER_PAID,
            context.order.buyer.email,
            self._paid_email_data(context.order, context.payment),
        )

    def _send_cancelled_email(self, context: EffectContext) -> None:
        self._notify(NotificationKind.ORDER_CANCELLED, context.order)

    def _send_expired_email(self, context: EffectContext) -> None:
        self._notify(NotificationKind.ORDER_EXPIRED, context.order)

    def _notify(self, kind: NotificationKind, order: Order, **extra: Any) -> None:
        try:
            self._notifier.send(kind, order.buyer.email, self._email_data(order, **extra))
        except Exception:
            logger.exception("Failed to send %s email for order %s", kind.value, order.order_number)

    def _email_data(self, order: Order, **extra: Any) -> dict[str, Any]:
        return {
            "email": order.buyer.email,
            "user_name": order.buyer.name or order.buyer.email,
            "order_number": order.order_number,
            "event_title": order.event_title,
            **extra,
        }

    def _paid_email_data(self, order: Order, payment: Payment | None) -> dict[str, Any]:
        tickets = self._tickets.tickets_for_order(order.id.value)
        return self._email_data(
            order,
            invoice_number=order.invoice_number,
            quantity=order.quantity,
            total_amount=str(order.total_amount),
            paid_at=payment.paid_at.isoformat() if payment and payment.paid_at else "",
            payment_method=payment.payment_method if payment else None,
            tickets=[
                {
                    "ticket_number": t.ticket_number,
                    "seat_label": t.seat_label,
                    "pdf_file": t.pdf_file,
                }
                for t in tickets
            ],
        )
