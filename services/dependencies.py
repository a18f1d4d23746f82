from services.notification_store import NotificationStore
from services.report_store import InMemoryReportStore, ReportStore

# Process-wide stores (state is lost on restart)
notification_store = NotificationStore()
report_store = InMemoryReportStore(notification_store)


def get_report_store() -> ReportStore:
    return report_store


def get_notification_store() -> NotificationStore:
    return notification_store
