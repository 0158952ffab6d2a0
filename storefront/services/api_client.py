"""HTTP client for the storefront API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from composer.kernel.products import parse_catalog
from composer.kernel.types import Product
from storefront import config
from storefront.exceptions import ApiError
from storefront.models import Page, SaveLayoutRequest, Store, Template, UploadResponse

logger = logging.getLogger(__name__)


def _unwrap_list(body: Any) -> list[Any]:
    """List endpoints answer either a bare array or {"data": [...]}."""
    if isinstance(body, dict):
        body = body.get("data")
    return body if isinstance(body, list) else []


class StorefrontApi:
    """
    Async client for the storefront API.

    Management endpoints live under /manage/stores/{id}, public ones under
    /stores/{slug}. Reads answer None on 404; every other non-2xx status
    and every transport failure raises ApiError.
    """

    def __init__(
        self,
        api_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = (api_url or config.settings.require_api()).rstrip("/")
        self.token = token if token is not None else config.settings.STOREFRONT_API_TOKEN
        self.client = httpx.AsyncClient(
            timeout=timeout or config.settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
            headers=self._headers(),
        )

    def _headers(self) -> dict:
        """Build request headers."""
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, *, allow_missing: bool = False, **kwargs: Any) -> Any:
        url = f"{self.api_url}{path}"
        try:
            res = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("api: %s %s failed: %s", method, path, e)
            raise ApiError(f"{method} {path} failed: {e}", path=path) from e

        if res.status_code == 404 and allow_missing:
            logger.debug("api: %s %s not found", method, path)
            return None
        if res.status_code >= 400:
            detail = _error_detail(res)
            logger.warning("api: %s %s returned %d: %s", method, path, res.status_code, detail)
            raise ApiError(f"{method} {path} returned {res.status_code}: {detail}", res.status_code, path)

        if not res.content:
            return None
        try:
            return res.json()
        except ValueError as e:
            raise ApiError(f"{method} {path} returned invalid JSON", res.status_code, path) from e

    async def _get(self, path: str) -> Any:
        return await self._request("GET", path, allow_missing=True)

    # -- stores --

    async def get_store(self, store_id: str) -> Store | None:
        path = f"/manage/stores/{store_id}"
        body = await self._get(path)
        return _parse(Store, body, path) if body else None

    async def get_store_by_slug(self, slug: str) -> Store | None:
        path = f"/stores/{slug}"
        body = await self._get(path)
        return _parse(Store, body, path) if body else None

    # -- layouts --

    async def get_store_layout(self, store_id: str) -> dict[str, Any] | None:
        return await self._get(f"/manage/stores/{store_id}/layout")

    async def save_store_layout(self, store_id: str, layout: SaveLayoutRequest | dict[str, Any]) -> Any:
        body = _layout_body(layout)
        return await self._request("POST", f"/manage/stores/{store_id}/layout", json=body)

    async def get_public_store_layout(self, slug: str) -> dict[str, Any] | None:
        return await self._get(f"/stores/{slug}/layout")

    async def get_page_layout(self, store_id: str, page_id: str) -> dict[str, Any] | None:
        return await self._get(f"/manage/stores/{store_id}/pages/{page_id}/layout")

    async def save_page_layout(
        self, store_id: str, page_id: str, layout: SaveLayoutRequest | dict[str, Any]
    ) -> Any:
        body = _layout_body(layout)
        return await self._request("POST", f"/manage/stores/{store_id}/pages/{page_id}/layout", json=body)

    async def get_public_page_layout(self, slug: str, page_slug: str) -> dict[str, Any] | None:
        return await self._get(f"/stores/{slug}/pages/{page_slug}/layout")

    # -- catalog --

    async def get_store_products(self, slug: str) -> list[Product]:
        """Public catalog for a store. A missing store has no products."""
        return parse_catalog(_unwrap_list(await self._get(f"/stores/{slug}/products")))

    async def get_products(self, store_id: str) -> list[Product]:
        return parse_catalog(_unwrap_list(await self._get(f"/manage/stores/{store_id}/products")))

    async def get_template(self, template_id: str) -> Template | None:
        path = f"/templates/{template_id}"
        body = await self._get(path)
        return _parse(Template, body, path) if body else None

    # -- pages --

    async def get_store_pages(self, slug: str) -> list[Page]:
        path = f"/stores/{slug}/pages"
        items = _unwrap_list(await self._get(path))
        return [_parse(Page, item, path) for item in items if isinstance(item, dict)]

    async def get_store_page(self, slug: str, page_slug: str) -> Page | None:
        path = f"/stores/{slug}/pages/{page_slug}"
        body = await self._get(path)
        return _parse(Page, body, path) if body else None

    # -- uploads --

    async def upload_logo(self, store_id: str, filename: str, content: bytes, content_type: str) -> UploadResponse:
        return await self._upload(f"/manage/stores/{store_id}/logo", filename, content, content_type)

    async def upload_favicon(self, store_id: str, filename: str, content: bytes, content_type: str) -> UploadResponse:
        return await self._upload(f"/manage/stores/{store_id}/favicon", filename, content, content_type)

    async def upload_media(self, store_id: str, filename: str, content: bytes, content_type: str) -> UploadResponse:
        return await self._upload(f"/manage/stores/{store_id}/media", filename, content, content_type)

    async def _upload(self, path: str, filename: str, content: bytes, content_type: str) -> UploadResponse:
        body = await self._request("POST", path, files={"file": (filename, content, content_type)})
        if not isinstance(body, dict) or not body.get("url"):
            raise ApiError(f"POST {path} returned no url", path=path)
        logger.info("api: uploaded %s (%d bytes) to %s", filename, len(content), path)
        return _parse(UploadResponse, body, path)

    async def close(self) -> None:
        """Close client."""
        await self.client.aclose()

    async def __aenter__(self) -> StorefrontApi:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


def _layout_body(layout: SaveLayoutRequest | dict[str, Any]) -> dict[str, Any]:
    if isinstance(layout, SaveLayoutRequest):
        return layout.model_dump()
    return SaveLayoutRequest.model_validate(layout).model_dump()


def _error_detail(res: httpx.Response) -> str:
    try:
        body = res.json()
    except ValueError:
        return res.text[:200] or res.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return res.reason_phrase


def _parse(model: type[BaseModel], body: Any, path: str) -> Any:
    """Validate a response body; a malformed body is an API failure."""
    try:
        return model.model_validate(body)
    except ValidationError as e:
        logger.warning("api: malformed response from %s: %s", path, e)
        raise ApiError(f"{path} returned a malformed body", path=path) from e
