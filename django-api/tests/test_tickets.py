"""Tests for ticket fabrication, downloads and gate check-in.

Run with: pytest tests/test_tickets.py -v
"""

import pytest

from orders.domain import OrderStatus
from tickets.domain import TicketStatus
from tickets.domain.errors import (
    InvalidTicketIdError,
    IssuanceNotFoundError,
    TicketAccessDeniedError,
    TicketFabricationError,
    TicketNotFoundError,
    TicketNotValidError,
    TicketNumberCollisionError,
    TicketsNotIssuableError,
)
from tickets.rendering import PdfTicketRenderer


@pytest.fixture
def order(world, event, buyer):
    return world.service.create_order(buyer, str(event.id), 3).order


@pytest.fixture
def issued(world, order):
    return world.tickets.generate_for_order(order.id.value)


class TestGenerateForOrder:
    def test_one_ticket_per_seat_with_artifacts(self, world, order, issued):
        assert [t.sequence for t in issued] == [0, 1, 2]
        assert [t.seat_label for t in issued] == ["A1-1", "A1-2", "A1-3"]
        assert len({t.ticket_number for t in issued}) == 3
        for ticket in issued:
            assert ticket.status is TicketStatus.ACTIVE
            assert ticket.attendee_email == order.buyer.email
            assert world.blobs.read(ticket.qr_code) == f"PNG:{ticket.ticket_number}".encode()
            assert world.blobs.read(ticket.pdf_file).startswith(b"%PDF")

    def test_regeneration_returns_the_same_batch(self, world, order, issued):
        again = world.tickets.generate_for_order(order.id.value)
        assert [t.id for t in again] == [t.id for t in issued]
        assert world.renderer.pdf_calls == 3

    def test_unknown_order(self, world):
        from uuid import uuid4

        with pytest.raises(IssuanceNotFoundError):
            world.tickets.generate_for_order(uuid4())

    def test_pdf_failure_keeps_rows_and_reports(self, world, order):
        world.renderer.fail_pdf = True

        with pytest.raises(TicketFabricationError):
            world.tickets.generate_for_order(order.id.value)

        tickets = world.tickets.tickets_for_order(order.id.value)
        assert len(tickets) == 3
        assert all(t.qr_code and not t.pdf_file for t in tickets)

    def test_number_collision_surfaces(self, world, order, monkeypatch):
        world.ticket_store.taken_numbers.add("TKT-TAKEN-000000")
        monkeypatch.setattr(
            "tickets.services.ticket_service.generate_ticket_number",
            lambda: "TKT-TAKEN-000000",
        )
        with pytest.raises(TicketNumberCollisionError):
            world.tickets.generate_for_order(order.id.value)
        assert world.tickets.tickets_for_order(order.id.value) == []


class TestGenerateOnRequest:
    def test_unpaid_order_is_refused(self, world, order, buyer):
        with pytest.raises(TicketsNotIssuableError):
            world.tickets.generate(str(order.id), buyer)
        assert world.tickets.tickets_for_order(order.id.value) == []

    def test_paid_order_without_tickets_gets_its_batch(self, world, order, buyer):
        world.order_store.set_status(order.id, OrderStatus.PAID)

        tickets = world.tickets.generate(str(order.id), buyer)

        assert [t.seat_label for t in tickets] == ["A1-1", "A1-2", "A1-3"]

    def test_stranger_is_denied_and_staff_allowed(self, world, order, stranger, staff):
        world.order_store.set_status(order.id, OrderStatus.PAID)
        with pytest.raises(TicketAccessDeniedError):
            world.tickets.generate(str(order.id), stranger)
        assert len(world.tickets.generate(str(order.id), staff)) == 3

    def test_unknown_order(self, world, buyer):
        with pytest.raises(IssuanceNotFoundError):
            world.tickets.generate("not-an-order", buyer)


class TestDownload:
    def test_download_returns_pdf(self, world, buyer, issued):
        name, content = world.tickets.download(str(issued[0].id), buyer)
        assert name == issued[0].pdf_file
        assert content.startswith(b"%PDF")

    def test_missing_pdf_is_rebuilt_on_download(self, world, order, buyer):
        world.renderer.fail_pdf = True
        with pytest.raises(TicketFabricationError):
            world.tickets.generate_for_order(order.id.value)
        world.renderer.fail_pdf = False
        ticket = world.tickets.tickets_for_order(order.id.value)[0]

        name, content = world.tickets.download(str(ticket.id), buyer)

        assert content.startswith(b"%PDF")
        assert world.ticket_store.get_ticket(ticket.id).pdf_file == name

    def test_missing_qr_is_rebuilt_too(self, world, buyer, issued):
        del world.blobs.blobs[issued[0].qr_code]
        del world.blobs.blobs[issued[0].pdf_file]

        world.tickets.download(str(issued[0].id), buyer)

        assert world.blobs.exists(issued[0].qr_code)

    def test_stranger_cannot_download(self, world, stranger, issued):
        with pytest.raises(TicketAccessDeniedError):
            world.tickets.download(str(issued[0].id), stranger)

    def test_regenerate_overwrites_artifacts(self, world, buyer, issued):
        world.tickets.regenerate(str(issued[1].id), buyer)
        assert world.renderer.pdf_calls == 4


class TestTicketReads:
    def test_list_for_order(self, world, order, buyer, issued):
        assert len(world.tickets.list_for_order(str(order.id), buyer)) == 3

    def test_list_for_order_denies_stranger(self, world, order, stranger, issued):
        with pytest.raises(TicketAccessDeniedError):
            world.tickets.list_for_order(str(order.id), stranger)

    def test_list_for_unknown_order(self, world, buyer):
        with pytest.raises(IssuanceNotFoundError):
            world.tickets.list_for_order("not-an-order", buyer)

    def test_get_ticket_errors(self, world, buyer):
        with pytest.raises(InvalidTicketIdError):
            world.tickets.get_ticket("garbage", buyer)
        with pytest.raises(TicketNotFoundError):
            world.tickets.get_ticket("00000000-0000-0000-0000-000000000000", buyer)


class TestGateOperations:
    def test_active_ticket_is_valid(self, world, issued):
        assert world.tickets.validate(str(issued[0].id)).valid

    def test_unknown_ticket_is_invalid(self, world):
        result = world.tickets.validate("00000000-0000-0000-0000-000000000000")
        assert not result.valid
        assert result.ticket is None

    def test_check_in_marks_used(self, world, staff, issued):
        ticket = world.tickets.check_in(str(issued[0].id), staff)

        assert ticket.status is TicketStatus.USED
        assert ticket.checked_in
        assert ticket.checked_in_by == staff.email
        assert not world.tickets.validate(str(issued[0].id)).valid

    def test_double_check_in_is_refused(self, world, staff, issued):
        world.tickets.check_in(str(issued[0].id), staff)
        with pytest.raises(TicketNotValidError):
            world.tickets.check_in(str(issued[0].id), staff)

    def test_only_staff_checks_in(self, world, buyer, issued):
        with pytest.raises(TicketAccessDeniedError):
            world.tickets.check_in(str(issued[0].id), buyer)

    def test_cancel_for_order_invalidates_tickets(self, world, order, issued):
        assert world.tickets.cancel_for_order(order.id.value, "Order cancelled") == 3

        ticket = world.ticket_store.get_ticket(issued[0].id)
        assert ticket.status is TicketStatus.CANCELLED
        assert ticket.notes == "Order cancelled"
        assert not world.tickets.validate(str(ticket.id)).valid
        assert world.tickets.cancel_for_order(order.id.value, "again") == 0


class TestPdfTicketRenderer:
    def test_qr_is_png(self):
        assert PdfTicketRenderer().render_qr("TKT-ABC-123456").startswith(b"\x89PNG")

    def test_html_carries_ticket_details(self, world, issued):
        issuance = world.ticket_store.get_issuance(issued[0].order_id)
        html = PdfTicketRenderer().render_html(issued[0], issuance, b"png")

        assert issued[0].ticket_number in html
        assert "A1-1" in html
        assert "Jazz Night" in html
        assert "data:image/png;base64," in html
