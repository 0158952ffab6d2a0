"""
Tests for PostgresStorage adapter.

Requires a running Postgres instance. Tables are created with ensure_schema.
"""

import os
import uuid

import asyncpg
import pytest
import pytest_asyncio

from composer.kernel.assembly import LayoutAssembly
from composer.kernel.postgres_storage import PostgresStorage
from composer.kernel.types import Layout, LayoutScope, PageComponent, ThemeConfig


@pytest_asyncio.fixture
async def db_pool():
    """Create a connection pool for tests."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    pool = await asyncpg.create_pool(database_url)
    yield pool
    await pool.close()


@pytest_asyncio.fixture
async def storage(db_pool):
    """Create a PostgresStorage instance with its tables."""
    storage = PostgresStorage(db_pool)
    await storage.ensure_schema()
    return storage


@pytest_asyncio.fixture
async def assembly(storage):
    return LayoutAssembly(storage)


def new_scope(page_id=None):
    return LayoutScope(store_id=str(uuid.uuid4()), page_id=page_id)


class TestPostgresStorage:
    """Test PostgresStorage CRUD operations."""

    @pytest.mark.asyncio
    async def test_put_and_get(self, storage):
        scope = new_scope()
        data = {"components": [{"id": "a", "type": "spacer", "props": {"height": 10}, "order": 0}], "theme": {}}

        await storage.put_layout(scope, data)
        assert await storage.get_layout(scope) == data

    @pytest.mark.asyncio
    async def test_get_nonexistent(self, storage):
        assert await storage.get_layout(new_scope()) is None

    @pytest.mark.asyncio
    async def test_overwrite(self, storage):
        scope = new_scope()
        await storage.put_layout(scope, {"components": [], "theme": {"colors": {"primary": "#111111"}}})
        await storage.put_layout(scope, {"components": [], "theme": {"colors": {"primary": "#222222"}}})
        assert (await storage.get_layout(scope))["theme"]["colors"]["primary"] == "#222222"

    @pytest.mark.asyncio
    async def test_store_and_page_rows_are_separate(self, storage):
        store = new_scope()
        page = LayoutScope(store_id=store.store_id, page_id="about")
        await storage.put_layout(store, {"components": [], "theme": {"colors": {"primary": "#111111"}}})

        assert await storage.get_layout(page) is None

    @pytest.mark.asyncio
    async def test_delete(self, storage):
        scope = new_scope()
        await storage.put_layout(scope, {"components": []})
        await storage.delete_layout(scope)
        assert await storage.get_layout(scope) is None

    @pytest.mark.asyncio
    async def test_template_config(self, storage):
        template_id = f"tpl-{uuid.uuid4().hex[:8]}"
        config = {"theme": {"colors": {"primary": "#e11d48"}}, "components": []}
        await storage.put_template_config(template_id, "Boutique", config)
        assert await storage.get_template_config(template_id) == config
        assert await storage.get_template_config("tpl-missing-" + uuid.uuid4().hex) is None


class TestPostgresAssembly:
    """LayoutAssembly over Postgres."""

    @pytest.mark.asyncio
    async def test_save_and_load(self, assembly):
        scope = new_scope()
        layout = Layout(
            components=[PageComponent(id="h", type="hero-banner", props={"title": "Hi"}, order=0)],
            theme=ThemeConfig(colors={"primary": "#123456"}),
        )
        await assembly.save_layout(scope, layout)
        loaded = await assembly.load_layout(scope)

        assert loaded.loaded_from == "store"
        assert loaded.components[0].props == {"title": "Hi"}
        assert loaded.theme.colors == {"primary": "#123456"}
