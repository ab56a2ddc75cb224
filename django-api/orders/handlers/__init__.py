from orders.handlers.views import (
    OrderCancelView,
    OrderDetailView,
    OrderListView,
    OrderPaymentView,
    OrderResendEmailView,
)

__all__ = [
    "OrderListView",
    "OrderDetailView",
    "OrderCancelView",
    "OrderPaymentView",
    "OrderResendEmailView",
]
