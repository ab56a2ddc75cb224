"""Order lifecycle as a pure transition function.

``transition`` never touches storage. It returns the next status together
with the effects the caller must run, or raises InvalidOrderTransitionError.
A trigger whose target equals the current status is a no-op with no
effects, which is what makes duplicate webhooks and sweeps harmless.
"""

from dataclasses import dataclass
from enum import Enum

from orders.domain.errors import InvalidOrderTransitionError
from orders.domain.models import OrderStatus


class Trigger(str, Enum):
    PAYMENT_CREATED = "payment_created"
    PAYMENT_PAID = "payment_paid"
    PAYMENT_EXPIRED = "payment_expired"
    PAYMENT_PENDING = "payment_pending"
    CANCEL = "cancel"
    DEADLINE_PASSED = "deadline_passed"


class EffectPolicy(Enum):
    CRITICAL = "critical"
    BEST_EFFORT = "best_effort"


class Effect(Enum):
    RELEASE_INVENTORY = ("release_inventory", EffectPolicy.CRITICAL)
    CANCEL_TICKETS = ("cancel_tickets", EffectPolicy.BEST_EFFORT)
    EXPIRE_INVOICE = ("expire_invoice", EffectPolicy.BEST_EFFORT)
    GENERATE_TICKETS = ("generate_tickets", EffectPolicy.BEST_EFFORT)
    SEND_PAID_EMAIL = ("send_paid_email", EffectPolicy.BEST_EFFORT)
    SEND_CANCELLED_EMAIL = ("send_cancelled_email", EffectPolicy.BEST_EFFORT)
    SEND_EXPIRED_EMAIL = ("send_expired_email", EffectPolicy.BEST_EFFORT)

    def __init__(self, key: str, policy: EffectPolicy) -> None:
        self.key = key
        self.policy = policy


@dataclass(frozen=True)
class Transition:
    current: OrderStatus
    next_status: OrderStatus
    effects: tuple[Effect, ...] = ()

    @property
    def is_noop(self) -> bool:
        return self.current is self.next_status

    @property
    def critical_effects(self) -> tuple[Effect, ...]:
        return tuple(e for e in self.effects if e.policy is EffectPolicy.CRITICAL)

    @property
    def best_effort_effects(self) -> tuple[Effect, ...]:
        return tuple(e for e in self.effects if e.policy is EffectPolicy.BEST_EFFORT)


_OPEN = frozenset({OrderStatus.PENDING, OrderStatus.AWAITING_PAYMENT})

# trigger -> (target status, allowed sources, effects)
_RULES: dict[Trigger, tuple[OrderStatus, frozenset[OrderStatus], tuple[Effect, ...]]] = {
    Trigger.PAYMENT_CREATED: (
        OrderStatus.AWAITING_PAYMENT,
        frozenset({OrderStatus.PENDING}),
        (),
    ),
    Trigger.PAYMENT_PAID: (
        OrderStatus.PAID,
        _OPEN,
        (Effect.GENERATE_TICKETS, Effect.SEND_PAID_EMAIL),
    ),
    Trigger.PAYMENT_EXPIRED: (
        OrderStatus.EXPIRED,
        _OPEN,
        (Effect.RELEASE_INVENTORY, Effect.CANCEL_TICKETS, Effect.SEND_EXPIRED_EMAIL),
    ),
    Trigger.CANCEL: (
        OrderStatus.CANCELLED,
        _OPEN,
        (
            Effect.RELEASE_INVENTORY,
            Effect.CANCEL_TICKETS,
            Effect.EXPIRE_INVOICE,
            Effect.SEND_CANCELLED_EMAIL,
        ),
    ),
    Trigger.DEADLINE_PASSED: (
        OrderStatus.EXPIRED,
        frozenset({OrderStatus.PENDING}),
        (
            Effect.RELEASE_INVENTORY,
            Effect.CANCEL_TICKETS,
            Effect.EXPIRE_INVOICE,
            Effect.SEND_EXPIRED_EMAIL,
        ),
    ),
}


def transition(current: OrderStatus, trigger: Trigger, *, payment_paid: bool = False) -> Transition:
    """Compute the next status and effects for ``trigger``.

    Raises:
        InvalidOrderTransitionError: ``trigger`` is not allowed from ``current``.
    """
    if trigger is Trigger.PAYMENT_PENDING:
        return Transition(current, current)

    target, sources, effects = _RULES[trigger]
    if current is target:
        return Transition(current, current)
    if current not in sources:
        raise InvalidOrderTransitionError(current.value, trigger.value)
    if trigger is Trigger.CANCEL and payment_paid:
        raise InvalidOrderTransitionError(
            current.value, trigger.value, message="Cannot cancel a paid order"
        )
    return Transition(current, target, effects)
