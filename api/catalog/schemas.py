"""
Pydantic schemas for catalog endpoints.
"""

from __future__ import annotations

import uuid
from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]
AuthType = Literal["apiKey", "oauth2", "none"]


def canonical_uuid(value: str) -> str | None:
    """
    Return the hyphenated lowercase form PostgreSQL accepts, or None.

    `uuid.UUID` also takes `urn:uuid:` and braced forms; those are
    normalized here instead of being passed to the store as-is.
    """
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        return None


def _require_http_url(value: str) -> str:
    value = value.strip()
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError("Enter a valid http(s) URL.")
    return value


class StatsInput(BaseModel):
    total_calls: int = Field(default=0, ge=0)
    last_week_calls: int = Field(default=0, ge=0)
    uptime: float = Field(default=99.9, ge=0.0, le=100.0)
    response_time: float = Field(default=0.0, ge=0.0)


class EndpointInput(BaseModel):
    path: str = Field(..., min_length=1, max_length=500)
    method: HttpMethod = "GET"
    description: str = Field(..., min_length=5, max_length=2000)


class CreateApiRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10, max_length=5000)
    base_url: str = Field(..., min_length=1, max_length=2000)
    version: str = Field(default="v1.0", min_length=1, max_length=50)
    documentation_url: str | None = Field(default=None, max_length=2000)
    owner: str = Field(..., min_length=1, max_length=200)
    category_id: str = Field(..., min_length=1, max_length=64)
    tags: list[str] = Field(default_factory=list)
    auth_type: AuthType = "none"
    auth_description: str | None = Field(default=None, max_length=2000)
    stats: StatsInput | None = None
    endpoints: list[EndpointInput] = Field(default_factory=list)

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        return _require_http_url(value)

    @field_validator("category_id")
    @classmethod
    def _check_category_id(cls, value: str) -> str:
        category_id = canonical_uuid(value)
        if category_id is None:
            raise ValueError("category_id must be a UUID.")
        return category_id

    @field_validator("documentation_url")
    @classmethod
    def _check_documentation_url(cls, value: str | None) -> str | None:
        # The form sends "" for "no documentation link".
        if value is None or not value.strip():
            return None
        return _require_http_url(value)

    @field_validator("auth_description")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value if tag.strip()]
