from orders.services.order_service import OrderConfig, OrderService
from orders.services.sweeper import ExpirySweeper, SweepResult

__all__ = ["OrderConfig", "OrderService", "ExpirySweeper", "SweepResult"]
