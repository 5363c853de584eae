"""Result models returned by the AI gateway and held by the workflows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Vulnerability(BaseModel):
    """A single finding reported by a scan."""

    model_config = ConfigDict(frozen=True)

    description: str
    severity: str
    location: str
    recommendation: str
    references: list[str] | None = None


class ScanResult(BaseModel):
    """Findings of one scan, in the order the gateway reported them."""

    model_config = ConfigDict(frozen=True)

    vulnerabilities: list[Vulnerability]

    @property
    def finding_count(self) -> int:
        return len(self.vulnerabilities)


class RemediationSuggestion(BaseModel):
    """Suggested fix for one finding. Rendered as plain preformatted text."""

    model_config = ConfigDict(frozen=True)

    text: str


class BestPracticesResult(BaseModel):
    """Secure-coding guidance for a language, as HTML from the gateway."""

    model_config = ConfigDict(frozen=True)

    language: str
    html: str


# ── Gateway wire formats ───────────────────────────────────────────────


class GatewayRemediationResponse(BaseModel):
    remediation_suggestions: str = Field(alias="remediationSuggestions")


class GatewayBestPracticesResponse(BaseModel):
    best_practices: str = Field(alias="bestPractices")
