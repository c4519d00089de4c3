from jobtrail.notifications.queue import Notification, NotificationKind, NotificationQueue

__all__ = ["Notification", "NotificationKind", "NotificationQueue"]
