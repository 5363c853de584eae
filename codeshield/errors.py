"""Error taxonomy shared by the forms, the gateway client and the workflows."""

from __future__ import annotations

from dataclasses import dataclass


class CodeShieldError(Exception):
    """Base class for Code Shield errors."""


@dataclass(frozen=True)
class FieldError:
    """One failed constraint on one form field."""

    field: str
    code: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "code": self.code, "message": self.message}


class FormValidationError(CodeShieldError):
    """Form input failed validation. Never reaches the gateway."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(sorted({e.field for e in self.errors}))
        super().__init__(f"invalid form input: {fields}")

    def by_field(self) -> dict[str, list[str]]:
        """Messages grouped per field, in the order they were raised."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


class GatewayError(CodeShieldError):
    """The AI gateway could not be reached or returned an unusable answer."""

    def __init__(self, operation: str, message: str, status_code: int | None = None):
        self.operation = operation
        self.message = message
        self.status_code = status_code
        super().__init__(f"{operation}: {message}")
