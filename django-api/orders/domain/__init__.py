from orders.domain.models import (
    Buyer,
    Order,
    OrderCreated,
    OrderDetails,
    OrderId,
    OrderStatus,
)
from orders.domain.state_machine import Effect, EffectPolicy, Transition, Trigger, transition

__all__ = [
    "Buyer",
    "Order",
    "OrderCreated",
    "OrderDetails",
    "OrderId",
    "OrderStatus",
    "Effect",
    "EffectPolicy",
    "Transition",
    "Trigger",
    "transition",
]
