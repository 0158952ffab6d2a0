"""
PostgresStorage adapter for the composer layout assembly.

Implements the LayoutStorage protocol using Postgres as the backend.
Layouts are stored as JSONB, one row per scope.
"""

from __future__ import annotations

import json
from typing import Any

import asyncpg

from composer.kernel.assembly import LayoutStorage
from composer.kernel.types import LayoutScope

# The store layout uses an empty page_id so the primary key stays NOT NULL.
_STORE_PAGE = ""

SCHEMA = """
CREATE TABLE IF NOT EXISTS store_layouts (
    store_id TEXT NOT NULL,
    page_id TEXT NOT NULL DEFAULT '',
    layout JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    PRIMARY KEY (store_id, page_id)
);

CREATE TABLE IF NOT EXISTS templates (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL DEFAULT '',
    config JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
"""


class PostgresStorage(LayoutStorage):
    """
    Postgres-based storage for layouts.

    Uses two tables:
    - store_layouts: (store_id, page_id) → layout JSONB
    - templates: template_id → config JSONB
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def ensure_schema(self) -> None:
        """Create the layout tables if they do not exist."""
        async with self.pool.acquire() as conn:
            await conn.execute(SCHEMA)

    async def get_layout(self, scope: LayoutScope) -> dict[str, Any] | None:
        """Fetch the layout for a scope. Returns None if not found."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT layout FROM store_layouts WHERE store_id = $1 AND page_id = $2",
                scope.store_id,
                scope.page_id or _STORE_PAGE,
            )
            return _decode(row["layout"]) if row else None

    async def put_layout(self, scope: LayoutScope, data: dict[str, Any]) -> None:
        """Overwrite the layout for a scope."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO store_layouts (store_id, page_id, layout, updated_at)
                VALUES ($1, $2, $3::jsonb, now())
                ON CONFLICT (store_id, page_id)
                DO UPDATE SET layout = EXCLUDED.layout, updated_at = now()
                """,
                scope.store_id,
                scope.page_id or _STORE_PAGE,
                json.dumps(data),
            )

    async def get_template_config(self, template_id: str) -> Any:
        """Fetch a template's stored config. Returns None if not found."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT config FROM templates WHERE id = $1",
                template_id,
            )
            return _decode(row["config"]) if row else None

    async def put_template_config(self, template_id: str, name: str, config: dict[str, Any]) -> None:
        """Create or replace a template's config."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO templates (id, name, config, updated_at)
                VALUES ($1, $2, $3::jsonb, now())
                ON CONFLICT (id)
                DO UPDATE SET name = EXCLUDED.name, config = EXCLUDED.config, updated_at = now()
                """,
                template_id,
                name,
                json.dumps(config),
            )

    async def delete_layout(self, scope: LayoutScope) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(
                "DELETE FROM store_layouts WHERE store_id = $1 AND page_id = $2",
                scope.store_id,
                scope.page_id or _STORE_PAGE,
            )

    async def close(self) -> None:
        """Close the connection pool."""
        await self.pool.close()


def _decode(value: Any) -> Any:
    # asyncpg returns json/jsonb columns as text unless a codec is registered
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value
