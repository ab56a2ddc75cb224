"""Executes transition effects according to their failure policy."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from orders.domain import Effect, EffectPolicy, Order, Trigger
from payments.domain import Payment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectContext:
    order: Order
    payment: Payment | None
    trigger: Trigger


EffectHandler = Callable[[EffectContext], None]


class EffectRunner:
    """Critical effects propagate failures; best-effort ones are logged and skipped."""

    def __init__(self, handlers: Mapping[Effect, EffectHandler]) -> None:
        missing = set(Effect) - set(handlers)
        if missing:
            raise ValueError(f"No handler for effects: {sorted(e.key for e in missing)}")
        self._handlers = dict(handlers)

    def run(self, effects: Iterable[Effect], context: EffectContext) -> list[Effect]:
        """Run ``effects`` in order; return the best-effort ones that failed."""
        failed = []
        for effect in effects:
            handler = self._handlers[effect]
            if effect.policy is EffectPolicy.CRITICAL:
                handler(context)
                continue
            try:
                handler(context)
            except Exception:
                logger.exception(
                    "Effect %s failed for order %s (%s)",
                    effect.key,
                    context.order.order_number,
                    context.trigger.value,
                )
                failed.append(effect)
        return failed
