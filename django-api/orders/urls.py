from django.urls import path

from orders.handlers import (
    OrderCancelView,
    OrderDetailView,
    OrderListView,
    OrderPaymentView,
    OrderResendEmailView,
)

urlpatterns = [
    path("orders", OrderListView.as_view(), name="order-list"),
    path("orders/<str:order_id>", OrderDetailView.as_view(), name="order-detail"),
    path("orders/<str:order_id>/cancel", OrderCancelView.as_view(), name="order-cancel"),
    path("orders/<str:order_id>/payment", OrderPaymentView.as_view(), name="order-payment"),
    path(
        "orders/<str:order_id>/resend-email",
        OrderResendEmailView.as_view(),
        name="order-resend-email",
    ),
]
