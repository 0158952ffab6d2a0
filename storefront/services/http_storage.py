"""
ApiLayoutStorage: LayoutStorage backed by the storefront API.

Management mode keys scopes by store id and page id. Public mode keys them
by store slug and page slug and is read-only.
"""

from __future__ import annotations

import logging
from typing import Any

from composer.kernel.assembly import LayoutStorage
from composer.kernel.types import LayoutScope
from storefront.exceptions import ApiError
from storefront.services.api_client import StorefrontApi
from storefront.services.notifier import Notifier

logger = logging.getLogger(__name__)


class ApiLayoutStorage(LayoutStorage):
    """
    Adapts StorefrontApi to the assembly's storage protocol.

    Fetch failures are reported to the notifier and re-raised; the assembly
    logs them and moves on to the next fallback step.
    """

    def __init__(self, api: StorefrontApi, public: bool = False, notifier: Notifier | None = None):
        self.api = api
        self.public = public
        self.notifier = notifier

    async def get_layout(self, scope: LayoutScope) -> dict[str, Any] | None:
        try:
            if self.public:
                if scope.is_page:
                    return await self.api.get_public_page_layout(scope.store_id, scope.page_id)
                return await self.api.get_public_store_layout(scope.store_id)
            if scope.is_page:
                return await self.api.get_page_layout(scope.store_id, scope.page_id)
            return await self.api.get_store_layout(scope.store_id)
        except ApiError:
            self._report("Could not load the page layout")
            raise

    async def put_layout(self, scope: LayoutScope, data: dict[str, Any]) -> None:
        if self.public:
            raise ApiError("public layouts are read-only", path=scope.key)
        if scope.is_page:
            await self.api.save_page_layout(scope.store_id, scope.page_id, data)
        else:
            await self.api.save_store_layout(scope.store_id, data)

    async def get_template_config(self, template_id: str) -> Any:
        try:
            template = await self.api.get_template(template_id)
        except ApiError:
            self._report("Could not load the store template")
            raise
        return template.config if template is not None else None

    def _report(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.error(message)
