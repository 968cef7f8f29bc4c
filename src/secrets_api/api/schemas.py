"""
secrets_api.api.schemas

Request/response models for the HTTP layer.

Responsibilities:
- Validate name/secret payloads (length + allow-list character set).
- Define the problem-details and health report response shapes.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100
SECRET_MIN_LENGTH = 1
SECRET_MAX_LENGTH = 500

# Alphanumerics, whitespace and common punctuation only.
SAFE_INPUT_PATTERN = re.compile(r"""^[a-zA-Z0-9\s\-_.,!?@#$%^&*()'"]+$""")


def _safe_text(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    if not SAFE_INPUT_PATTERN.fullmatch(value):
        raise ValueError(f"{field_name} contains invalid characters")
    return value


class NameRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return _safe_text(v, "Name")


class SecretRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    secret: str = Field(min_length=SECRET_MIN_LENGTH, max_length=SECRET_MAX_LENGTH)

    @field_validator("secret")
    @classmethod
    def _check_secret(cls, v: str) -> str:
        return _safe_text(v, "Secret")


class ProblemDetails(BaseModel):
    """RFC 7807 problem payload."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str | None = None
    instance: str | None = None
    correlation_id: str | None = None
    errors: list[dict[str, Any]] | None = None


class HealthEntryResponse(BaseModel):
    name: str
    status: str
    description: str | None = None
    duration_ms: float
    tags: list[str] = Field(default_factory=list)
    error: str | None = None


class HealthReportResponse(BaseModel):
    status: str
    total_duration_ms: float
    entries: list[HealthEntryResponse] = Field(default_factory=list)
