"""Page composition: the three workflows sharing one notification channel."""

from __future__ import annotations

import structlog

from codeshield.gateway.client import AIGateway
from codeshield.notifications import Notification, NotificationBus, NotificationVariant
from codeshield.workflows.best_practices import BestPracticesWorkflow
from codeshield.workflows.scan import ScanWorkflow

logger = structlog.get_logger()


def _audit_notification(notification: Notification) -> None:
    """Record each toast the user is shown; errors at warning level."""
    log = logger.warning if notification.variant is NotificationVariant.DESTRUCTIVE else logger.info
    log(
        "notification_shown",
        id=notification.id,
        variant=notification.variant.value,
        title=notification.title,
        auto_dismiss=notification.duration is not None,
    )


class CodeShieldPage:
    """Everything one visitor's page holds. Results live only as long as the page."""

    def __init__(
        self,
        gateway: AIGateway,
        *,
        notification_limit: int = 5,
        notification_ttl_seconds: float = 8.0,
    ) -> None:
        self.notifications = NotificationBus(limit=notification_limit, ttl_seconds=notification_ttl_seconds)
        self.notifications.subscribe(_audit_notification)
        self.scan = ScanWorkflow(gateway, self.notifications)
        self.best_practices = BestPracticesWorkflow(gateway, self.notifications)

    def snapshot(self) -> dict:
        """JSON-ready view of the page state."""
        scan = self.scan
        result = scan.result
        remediation = scan.remediation.states()
        return {
            "scan": {
                "form": {"language": scan.language, "code": scan.code},
                "is_loading": scan.is_loading,
                "can_clear": scan.can_clear,
                "errors": scan.field_messages(),
                "result": None if result is None else {
                    "finding_count": result.finding_count,
                    "vulnerabilities": [
                        {
                            **vuln.model_dump(),
                            "remediation": (remediation[i].as_dict() if i in remediation
                                            else {"is_loading": False, "suggestion": None}),
                        }
                        for i, vuln in enumerate(result.vulnerabilities)
                    ],
                },
            },
            "best_practices": {
                "form": {"language": self.best_practices.language},
                "is_loading": self.best_practices.is_loading,
                "errors": self.best_practices.field_messages(),
                "result": None if self.best_practices.result is None else self.best_practices.result.html,
            },
            "notifications": [n.as_dict() for n in self.notifications.active()],
        }
