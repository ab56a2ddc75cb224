from enum import Enum


class NotificationKind(str, Enum):
    ORDER_CREATED = "order_created"
    ORDER_PAID = "order_paid"
    ORDER_CANCELLED = "order_cancelled"
    ORDER_EXPIRED = "order_expired"


class NotificationStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
