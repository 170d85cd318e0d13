from __future__ import annotations

import urllib.parse
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from pokeapi_endpoints.api_client import ApiDecodeError


def _trailing_id(url: str) -> int | None:
    segment = urllib.parse.urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    return int(segment) if segment.isdecimal() else None


def _page_params(url: str | None) -> tuple[int, int] | None:
    if not url:
        return None
    query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)
    try:
        limit = int(query.get("limit", ["20"])[0])
        offset = int(query.get("offset", ["0"])[0])
    except ValueError:
        return None
    return limit, offset


class ApiResource(BaseModel):
    url: str = Field(..., description="Absolute URI of the referenced resource.")

    @property
    def id(self) -> int | None:
        return _trailing_id(self.url)


class NamedApiResource(ApiResource):
    name: str = Field(..., description="Unique name of the referenced resource within its category.")


class ApiResourceList(BaseModel):
    """
    One page of a category listing, or the full snapshot of it.

    The owning endpoint is held as a private attribute so it never appears in
    `model_dump()` output or equality checks.
    """

    count: int
    next: str | None = None
    previous: str | None = None
    results: list[ApiResource] = Field(default_factory=list)

    _endpoint: Any = PrivateAttr(default=None)

    @classmethod
    def from_payload(cls, payload: Any, endpoint: Any) -> "ApiResourceList":
        try:
            page = cls.model_validate(payload)
        except ValidationError as exc:
            raise ApiDecodeError(f"Malformed {cls.__name__} payload: {exc}", body=payload) from exc
        page._endpoint = endpoint
        return page

    def __eq__(self, other: object) -> bool:
        # Compare public fields only; pydantic would also compare the owner.
        if not isinstance(other, ApiResourceList):
            return NotImplemented
        return type(self) is type(other) and self.model_dump() == other.model_dump()

    @property
    def endpoint(self) -> Any:
        return self._endpoint

    async def next_page(self) -> "ApiResourceList | None":
        return await self._follow(self.next)

    async def previous_page(self) -> "ApiResourceList | None":
        return await self._follow(self.previous)

    async def _follow(self, url: str | None) -> "ApiResourceList | None":
        params = _page_params(url)
        if params is None or self._endpoint is None:
            return None
        limit, offset = params
        return await self._endpoint.list(limit=limit, offset=offset)


class NamedApiResourceList(ApiResourceList):
    results: list[NamedApiResource] = Field(default_factory=list)
