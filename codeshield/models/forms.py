"""Pydantic models for the scan and best-practices forms."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from codeshield.config.languages import is_supported_language
from codeshield.errors import FieldError, FormValidationError

MIN_CODE_LENGTH = 20
MAX_CODE_LENGTH = 8000

_FormT = TypeVar("_FormT", bound=BaseModel)


def _blank_if_missing(value: Any) -> Any:
    return "" if value is None else value


def _check_language(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("empty_selection", "Please select a language.")
    if not is_supported_language(value):
        raise PydanticCustomError("unsupported_language", "Please select a supported language.")
    return value


class BestPracticesRequest(BaseModel):
    """Body of a best-practices request."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    language: str = ""

    @field_validator("language", mode="before")
    @classmethod
    def _missing_language(cls, value: Any) -> Any:
        return _blank_if_missing(value)

    @field_validator("language")
    @classmethod
    def _language_selected(cls, value: str) -> str:
        return _check_language(value)


class ScanRequest(BaseModel):
    """A submitted scan. Frozen: a new scan builds a new request."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    language: str = ""
    code: str = ""

    @field_validator("language", "code", mode="before")
    @classmethod
    def _missing_field(cls, value: Any) -> Any:
        return _blank_if_missing(value)

    @field_validator("language")
    @classmethod
    def _language_selected(cls, value: str) -> str:
        return _check_language(value)

    @field_validator("code")
    @classmethod
    def _code_length(cls, value: str) -> str:
        if len(value) < MIN_CODE_LENGTH:
            raise PydanticCustomError(
                "too_short",
                "Please enter at least {min_length} characters of code.",
                {"min_length": MIN_CODE_LENGTH},
            )
        if len(value) > MAX_CODE_LENGTH:
            raise PydanticCustomError(
                "too_long",
                "Code cannot exceed {max_length} characters.",
                {"max_length": MAX_CODE_LENGTH},
            )
        return value


def validate_form(model: type[_FormT], raw: Mapping[str, Any]) -> _FormT:
    """Validate raw form input into ``model`` or raise FormValidationError.

    Pure: no logging, no I/O. Errors keep pydantic's field order.
    """
    try:
        return model.model_validate(dict(raw))
    except ValidationError as exc:
        errors = [
            FieldError(
                field=str(err["loc"][0]) if err["loc"] else "__root__",
                code=err["type"],
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        raise FormValidationError(errors) from None
