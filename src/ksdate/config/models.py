"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ksdate.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ksdate.domain.dates import resolve_timezone

DEFAULT_FORMAT = "Y年m月d日"


class DateConfig(BaseModel):
    """[date] section."""

    model_config = {"frozen": True}

    default_format: str = DEFAULT_FORMAT
    timezone: str = "UTC"

    @field_validator("default_format")
    @classmethod
    def _fallback_format(cls, value: str) -> str:
        return value or DEFAULT_FORMAT

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        resolve_timezone(value)
        return value


class PreviewConfig(BaseModel):
    """[preview] section.

    Preview requests are refused while ``secret`` is empty.
    """

    model_config = {"frozen": True}

    secret: str = ""
    nonce_ttl: int = Field(default=86400, gt=0)

