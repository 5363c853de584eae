"""Best-practices form: one language picker, one HTML answer."""

from __future__ import annotations

import structlog

from codeshield.errors import FieldError, FormValidationError
from codeshield.gateway.client import AIGateway
from codeshield.models.forms import BestPracticesRequest, validate_form
from codeshield.models.results import BestPracticesResult
from codeshield.notifications import NotificationBus

logger = structlog.get_logger()

FAILURE_TITLE = "Failed to get best practices"
FAILURE_DESCRIPTION = "An error occurred while generating best practices. Please try again."


class BestPracticesWorkflow:
    def __init__(self, gateway: AIGateway, notifications: NotificationBus) -> None:
        self._gateway = gateway
        self._notifications = notifications
        self.language = ""
        self.is_loading = False
        self.field_errors: list[FieldError] = []
        self.result: BestPracticesResult | None = None

    def set_form(self, language: str | None = None) -> None:
        if language is not None:
            self.language = language

    async def submit(self) -> BestPracticesResult | None:
        if self.is_loading:
            logger.info("best_practices_already_in_flight")
            return None

        try:
            request = validate_form(BestPracticesRequest, {"language": self.language})
        except FormValidationError as exc:
            self.field_errors = exc.errors
            logger.info("best_practices_form_invalid", fields=sorted(exc.by_field()))
            return None

        self.field_errors = []
        self.result = None
        self.is_loading = True
        try:
            self.result = await self._gateway.best_practices(request.language)
            logger.info("best_practices_complete", language=request.language, size=len(self.result.html))
            return self.result
        except Exception as exc:
            self.result = None
            logger.error("best_practices_failed", language=request.language, error=str(exc))
            self._notifications.error(FAILURE_TITLE, FAILURE_DESCRIPTION)
            return None
        finally:
            self.is_loading = False

    def field_messages(self) -> dict[str, list[str]]:
        return FormValidationError(self.field_errors).by_field() if self.field_errors else {}
