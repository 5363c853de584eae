"""Scan form state, submission and results."""

from __future__ import annotations

import codecs

import structlog

from codeshield.errors import FieldError, FormValidationError
from codeshield.gateway.client import AIGateway
from codeshield.models.forms import ScanRequest, validate_form
from codeshield.models.results import RemediationSuggestion, ScanResult, Vulnerability
from codeshield.notifications import NotificationBus
from codeshield.workflows.remediation import RemediationWorkflow

logger = structlog.get_logger()

EMPTY_RESULT_TITLE = "Scan Complete: No Vulnerabilities Found"
EMPTY_RESULT_DESCRIPTION = "The AI scan completed and found no potential vulnerabilities."
FAILURE_TITLE = "Scan Failed"
FAILURE_DESCRIPTION = "An error occurred while scanning the code. Please try again."


def decode_upload(content: bytes) -> str:
    """Decode an uploaded file the way a browser reads it as text.

    UTF-8, leading BOM dropped, undecodable bytes replaced with U+FFFD.
    """
    if content.startswith(codecs.BOM_UTF8):
        content = content[len(codecs.BOM_UTF8):]
    return content.decode("utf-8", errors="replace")


class ScanWorkflow:
    """Owns the scan form, the in-flight flag and the latest scan result."""

    def __init__(self, gateway: AIGateway, notifications: NotificationBus) -> None:
        self._gateway = gateway
        self._notifications = notifications
        self.language = ""
        self.code = ""
        self.is_loading = False
        self.field_errors: list[FieldError] = []
        self.submitted: ScanRequest | None = None
        self.result: ScanResult | None = None
        self.remediation = RemediationWorkflow(gateway, notifications)

    # ── Form ───────────────────────────────────────────────────────────

    def set_form(self, language: str | None = None, code: str | None = None) -> None:
        if language is not None:
            self.language = language
        if code is not None:
            self.code = code

    @property
    def can_clear(self) -> bool:
        return not self.is_loading and bool(self.code)

    def clear_code(self) -> bool:
        """Empty the code field. Language, results and errors are untouched."""
        if not self.can_clear:
            return False
        self.code = ""
        return True

    def upload_file(self, content: bytes, filename: str = "") -> bool:
        """Replace the code field with the file's text, verbatim."""
        if self.is_loading:
            logger.info("upload_refused_scan_in_flight", filename=filename)
            return False
        self.code = decode_upload(content)
        logger.info("code_uploaded", filename=filename, size=len(content))
        return True

    # ── Submission ─────────────────────────────────────────────────────

    async def submit(self) -> ScanResult | None:
        """Validate the form and run a scan.

        Returns the result, or None when the form is invalid, a scan is
        already running, or the gateway failed.
        """
        if self.is_loading:
            logger.info("scan_already_in_flight")
            return None

        try:
            request = validate_form(ScanRequest, {"language": self.language, "code": self.code})
        except FormValidationError as exc:
            self.field_errors = exc.errors
            logger.info("scan_form_invalid", fields=sorted(exc.by_field()))
            return None

        self.field_errors = []
        self.submitted = request
        self.result = None
        self.remediation.reset()
        self.is_loading = True
        try:
            result = await self._gateway.scan(request.language, request.code)
            if not result.vulnerabilities:
                self._notifications.success(EMPTY_RESULT_TITLE, EMPTY_RESULT_DESCRIPTION)
            self.result = result
            logger.info(
                "scan_complete",
                language=request.language,
                code_length=len(request.code),
                finding_count=result.finding_count,
            )
            return result
        except Exception as exc:
            self.result = None
            logger.error("scan_failed", language=request.language, error=str(exc))
            self._notifications.error(FAILURE_TITLE, FAILURE_DESCRIPTION)
            return None
        finally:
            self.is_loading = False

    def finding(self, index: int) -> Vulnerability:
        """Finding ``index`` of the current result. Raises LookupError if absent."""
        if self.result is None or self.submitted is None:
            raise LookupError("no scan result")
        if not 0 <= index < len(self.result.vulnerabilities):
            raise LookupError(f"no finding at index {index}")
        return self.result.vulnerabilities[index]

    async def remediate(self, index: int) -> RemediationSuggestion | None:
        """Request a fix for finding ``index`` of the current result.

        Raises LookupError if there is no such finding.
        """
        vulnerability = self.finding(index)
        return await self.remediation.request(
            index,
            vulnerability,
            self.submitted.language,
            self.submitted.code,
        )

    def field_messages(self) -> dict[str, list[str]]:
        return FormValidationError(self.field_errors).by_field() if self.field_errors else {}
