"""Wire models for the storefront API."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _as_id(value: Any) -> Any:
    """The API uses numeric ids; the composer keys everything by string."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int | float):
        return str(int(value))
    return value


class Store(BaseModel):
    """A merchant's store as returned by GET /stores/{slug}."""

    id: str
    name: str
    slug: str
    domain: str | None = None
    logo: str | None = None
    favicon: str | None = None
    description: str | None = None
    template_id: str | None = None
    status: str = "active"

    @field_validator("id", "template_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _as_id(value)


class Page(BaseModel):
    """A content page of a store."""

    id: str
    title: str = ""
    slug: str
    content: str = ""
    type: str = "custom"
    is_published: bool = True
    seo_title: str | None = None
    seo_description: str | None = None
    store_id: str | None = None

    @field_validator("id", "store_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _as_id(value)


class Template(BaseModel):
    """A store template. config carries the starter theme and components."""

    id: str
    name: str = ""
    description: str = ""
    category: str = "general"
    config: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    is_premium: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _as_id(value)

    @field_validator("config", mode="before")
    @classmethod
    def decode_config(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                return {}
        return value if isinstance(value, dict) else {}


class SaveLayoutRequest(BaseModel):
    """What the client sends to save a store or page layout."""

    model_config = {"extra": "forbid"}

    components: list[dict[str, Any]]
    theme: dict[str, Any] = Field(default_factory=dict)


class UploadResponse(BaseModel):
    """What the logo, favicon and media upload endpoints return."""

    url: str
