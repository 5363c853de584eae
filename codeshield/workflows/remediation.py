"""On-demand remediation suggestions, one independent state per finding."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from codeshield.gateway.client import AIGateway
from codeshield.models.results import RemediationSuggestion, Vulnerability
from codeshield.notifications import NotificationBus

logger = structlog.get_logger()

FAILURE_TITLE = "Failed to get remediation"
FAILURE_DESCRIPTION = "An error occurred while generating suggestions. Please try again."


@dataclass
class RemediationState:
    is_loading: bool = False
    suggestion: RemediationSuggestion | None = None

    def as_dict(self) -> dict:
        return {
            "is_loading": self.is_loading,
            "suggestion": self.suggestion.text if self.suggestion else None,
        }


class RemediationWorkflow:
    """Remediation state keyed by finding index.

    Each finding owns its own loading flag and suggestion, so requests for
    different findings can be in flight at the same time without clobbering
    each other.
    """

    def __init__(self, gateway: AIGateway, notifications: NotificationBus) -> None:
        self._gateway = gateway
        self._notifications = notifications
        self._states: dict[int, RemediationState] = {}

    def state(self, index: int) -> RemediationState:
        return self._states.setdefault(index, RemediationState())

    def states(self) -> dict[int, RemediationState]:
        return dict(self._states)

    def reset(self) -> None:
        self._states.clear()

    async def request(
        self,
        index: int,
        vulnerability: Vulnerability,
        language: str,
        code: str,
    ) -> RemediationSuggestion | None:
        """Ask the gateway for a fix to one finding.

        ``language`` and ``code`` are those of the scan that produced the
        finding. Returns None if the finding is already loading or the call
        failed; failures surface as a notification, never as an exception.
        """
        state = self.state(index)
        if state.is_loading:
            logger.info("remediation_already_in_flight", finding=index)
            return None

        state.suggestion = None
        state.is_loading = True
        try:
            suggestion = await self._gateway.remediate(code, vulnerability.description, language)
            state.suggestion = suggestion
            logger.info("remediation_complete", finding=index, language=language)
            return suggestion
        except Exception as exc:
            logger.error("remediation_failed", finding=index, language=language, error=str(exc))
            self._notifications.error(FAILURE_TITLE, FAILURE_DESCRIPTION)
            return None
        finally:
            state.is_loading = False
