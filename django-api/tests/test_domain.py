"""Unit tests for domain primitives.

These test invariants that must hold at construction time, plus the pure
order state machine and the provider payload translation.
Run with: pytest tests/test_domain.py -v
"""

import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from events.domain import Capacity, EventId, EventStatus, Money
from orders.domain import Effect, OrderStatus, Trigger, transition
from orders.domain.errors import InvalidOrderTransitionError
from orders.domain.numbering import generate_invoice_number, generate_order_number
from payments.domain import PaymentStatus
from payments.domain.translation import (
    callback_token_matches,
    is_valid_external_id,
    normalize_invoice,
    parse_timestamp,
    translate_webhook_status,
)
from tests.fakes import make_event
from tickets.domain.numbering import generate_ticket_number, seat_label, to_base36


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(amount=Decimal("10.50")).amount == Decimal("10.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money(amount=Decimal("0")).amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(amount=Decimal("-1"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(amount=Decimal("150000"))) == "150000.00"

    def test_money_multiplies_by_quantity(self):
        assert Money(amount=Decimal("12.25")) * 3 == Money(amount=Decimal("36.75"))


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)


class TestEventId:
    def test_from_string_round_trips(self):
        raw = str(uuid4())
        assert str(EventId.from_string(raw)) == raw

    def test_from_string_rejects_garbage(self):
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")


class TestEventBookable:
    def test_published_future_event_is_bookable(self):
        event = make_event()
        assert event.is_bookable(datetime.now(timezone.utc))

    def test_draft_event_is_not_bookable(self):
        event = make_event(status=EventStatus.DRAFT)
        assert not event.is_bookable(datetime.now(timezone.utc))

    def test_started_event_is_not_bookable(self):
        event = make_event(starts_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        assert not event.is_bookable(datetime.now(timezone.utc))


class TestOrderStateMachine:
    """Tests for the pure transition function."""

    def test_pending_to_paid_generates_tickets_then_emails(self):
        step = transition(OrderStatus.PENDING, Trigger.PAYMENT_PAID)
        assert step.next_status is OrderStatus.PAID
        assert step.effects == (Effect.GENERATE_TICKETS, Effect.SEND_PAID_EMAIL)
        assert step.critical_effects == ()

    def test_awaiting_payment_to_paid(self):
        step = transition(OrderStatus.AWAITING_PAYMENT, Trigger.PAYMENT_PAID)
        assert step.next_status is OrderStatus.PAID

    def test_payment_created_moves_pending_to_awaiting(self):
        step = transition(OrderStatus.PENDING, Trigger.PAYMENT_CREATED)
        assert step.next_status is OrderStatus.AWAITING_PAYMENT
        assert step.effects == ()

    def test_expiry_releases_inventory_critically(self):
        step = transition(OrderStatus.AWAITING_PAYMENT, Trigger.PAYMENT_EXPIRED)
        assert step.next_status is OrderStatus.EXPIRED
        assert step.critical_effects == (Effect.RELEASE_INVENTORY,)
        assert Effect.SEND_EXPIRED_EMAIL in step.best_effort_effects

    def test_cancel_releases_inventory_and_expires_invoice(self):
        step = transition(OrderStatus.PENDING, Trigger.CANCEL)
        assert step.next_status is OrderStatus.CANCELLED
        assert Effect.RELEASE_INVENTORY in step.critical_effects
        assert Effect.EXPIRE_INVOICE in step.best_effort_effects

    def test_deadline_only_applies_to_pending(self):
        assert transition(OrderStatus.PENDING, Trigger.DEADLINE_PASSED).next_status is (
            OrderStatus.EXPIRED
        )
        with pytest.raises(InvalidOrderTransitionError):
            transition(OrderStatus.AWAITING_PAYMENT, Trigger.DEADLINE_PASSED)

    @pytest.mark.parametrize(
        "status,trigger",
        [
            (OrderStatus.PAID, Trigger.PAYMENT_PAID),
            (OrderStatus.EXPIRED, Trigger.PAYMENT_EXPIRED),
            (OrderStatus.EXPIRED, Trigger.DEADLINE_PASSED),
            (OrderStatus.CANCELLED, Trigger.CANCEL),
            (OrderStatus.AWAITING_PAYMENT, Trigger.PAYMENT_CREATED),
        ],
    )
    def test_repeated_trigger_is_noop(self, status, trigger):
        """A trigger whose target is the current status has no effects."""
        step = transition(status, trigger)
        assert step.is_noop
        assert step.effects == ()

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_pending_callback_never_changes_status(self, status):
        assert transition(status, Trigger.PAYMENT_PENDING).is_noop

    @pytest.mark.parametrize(
        "status,trigger",
        [
            (OrderStatus.PAID, Trigger.CANCEL),
            (OrderStatus.PAID, Trigger.PAYMENT_EXPIRED),
            (OrderStatus.EXPIRED, Trigger.PAYMENT_PAID),
            (OrderStatus.CANCELLED, Trigger.PAYMENT_PAID),
            (OrderStatus.EXPIRED, Trigger.CANCEL),
        ],
    )
    def test_terminal_states_reject_other_triggers(self, status, trigger):
        with pytest.raises(InvalidOrderTransitionError):
            transition(status, trigger)

    def test_cancel_refused_when_payment_already_paid(self):
        with pytest.raises(InvalidOrderTransitionError) as exc:
            transition(OrderStatus.AWAITING_PAYMENT, Trigger.CANCEL, payment_paid=True)
        assert exc.value.message == "Cannot cancel a paid order"


class TestNumbering:
    def test_order_and_invoice_numbers_are_dated(self):
        now = datetime(2025, 3, 9, tzinfo=timezone.utc)
        assert re.fullmatch(r"ORD-20250309-\d{4}", generate_order_number(now))
        assert re.fullmatch(r"INV-20250309-\d{4}", generate_invoice_number(now))

    def test_ticket_number_format(self):
        number = generate_ticket_number(now_ms=36**3)
        assert re.fullmatch(r"TKT-1000-[0-9A-Z]{6}", number)

    def test_to_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"

    @pytest.mark.parametrize(
        "index,label",
        [(0, "A1-1"), (1, "A1-2"), (9, "A1-10"), (10, "A2-1"), (99, "A10-10"), (100, "B1-1")],
    )
    def test_seat_labels(self, index, label):
        assert seat_label(index) == label


class TestProviderTranslation:
    def test_normalize_accepts_camel_case(self):
        invoice = normalize_invoice(
            {
                "id": "inv_1",
                "externalId": "abc",
                "status": "PENDING",
                "amount": 150000,
                "invoiceUrl": "https://pay.example.com/inv_1",
                "expiryDate": "2025-01-01T10:00:00.000Z",
            }
        )
        assert invoice.external_id == "abc"
        assert invoice.invoice_url == "https://pay.example.com/inv_1"
        assert invoice.amount == Decimal("150000")
        assert invoice.expiry_date == datetime(2025, 1, 1, 10, tzinfo=timezone.utc)

    def test_normalize_accepts_snake_case(self):
        invoice = normalize_invoice(
            {"id": "inv_1", "external_id": "abc", "invoice_url": "u", "payment_method": "BANK"}
        )
        assert invoice.external_id == "abc"
        assert invoice.invoice_url == "u"
        assert invoice.payment_method == "BANK"

    def test_normalize_never_raises_on_missing_fields(self):
        invoice = normalize_invoice({})
        assert invoice.id == ""
        assert invoice.amount == Decimal("0")
        assert invoice.expiry_date is None

    def test_parse_timestamp_tolerates_garbage(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("PAID", PaymentStatus.PAID),
            ("paid", PaymentStatus.PAID),
            ("EXPIRED", PaymentStatus.EXPIRED),
            ("PENDING", PaymentStatus.PENDING),
            ("SETTLED", None),
            (None, None),
        ],
    )
    def test_webhook_status_mapping(self, raw, expected):
        assert translate_webhook_status(raw) is expected

    def test_external_id_must_be_uuid(self):
        assert is_valid_external_id(str(uuid4()))
        assert not is_valid_external_id("invoice_123124123")
        assert not is_valid_external_id("")

    def test_callback_token_comparison(self):
        assert callback_token_matches("secret", "secret")
        assert not callback_token_matches("secret", "wrong")
        assert not callback_token_matches("secret", None)
        assert not callback_token_matches("", "")
