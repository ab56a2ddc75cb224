from notifications.domain.models import NotificationKind, NotificationStatus

__all__ = ["NotificationKind", "NotificationStatus"]
