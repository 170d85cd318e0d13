from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from pokeapi_endpoints.api_client import ApiClient, ApiDecodeError
from pokeapi_endpoints.cache import NameIndex, ResourceCache, resource_name
from pokeapi_endpoints.schemas import ApiResourceList, NamedApiResourceList


logger = logging.getLogger("pokeapi_endpoints")

EndpointParam = int
NamedEndpointParam = int | str


class Endpoint:
    """
    Cached access to one resource category of the remote API.

    Resources are fetched from `{base}/{resource}/{id}` and kept forever in an
    in-memory cache. Listings come from `{base}/{resource}?limit=&offset=`
    until `list_all()` captures a snapshot, after which pages are sliced from
    that snapshot and the transport is no longer contacted.

    `list_cls`, `on_cache` and `owner` are internal hooks used by
    NamedEndpoint to set the listing type, index each cached resource and
    make listings page through the wrapper.
    """

    def __init__(
        self,
        client: ApiClient,
        resource: str,
        *,
        model: type[BaseModel] | None = None,
        list_cls: type[ApiResourceList] = ApiResourceList,
        on_cache: Callable[[int, Any], None] | None = None,
        owner: Any = None,
    ) -> None:
        self._client = client
        self._resource = resource
        self._model = model
        self._list_cls = list_cls
        self._on_cache = on_cache
        # Listings point back at `owner` so paging goes through a wrapping endpoint.
        self._owner = owner if owner is not None else self
        self._cache = ResourceCache()
        self._list: ApiResourceList | None = None

    @property
    def resource(self) -> str:
        return self._resource

    @property
    def has_snapshot(self) -> bool:
        return self._list is not None

    def get(self, param: EndpointParam) -> Any | None:
        return self._cache.get(param)

    async def resolve(self, param: EndpointParam) -> Any:
        cached = self.get(param)
        if cached is not None:
            logger.debug("cache hit %s/%s", self._resource, param)
            return cached
        return await self.fetch(param)

    async def fetch(self, param: int | str, cache_result: bool = True) -> Any:
        # cache_result is accepted but not consulted: every fetch is cached.
        logger.debug("fetching %s/%s", self._resource, param)
        payload = await self._client.get_json(f"/{self._resource}/{param}")
        rid, data = self._decode(payload)
        self._cache_resource(rid, data)
        return data

    async def list(self, limit: int = 20, offset: int = 0) -> ApiResourceList:
        if self._list is not None:
            # Slice bounds are (offset, limit), not (offset, offset + limit).
            results = self._list.results[offset:limit]
            return self._list_cls.from_payload(
                {
                    "count": self._list.count,
                    "next": self._list.next,
                    "previous": self._list.previous,
                    "results": results,
                },
                self._owner,
            )

        payload = await self._client.get_json(
            f"/{self._resource}", params={"limit": limit, "offset": offset}
        )
        return self._list_cls.from_payload(payload, self._owner)

    async def list_all(self, cache_snapshot: bool = True) -> ApiResourceList:
        if self._list is not None:
            return self._list

        head = await self._client.get_json(f"/{self._resource}", params={"limit": 1})
        count = head.get("count") if isinstance(head, dict) else None
        if not isinstance(count, int) or isinstance(count, bool):
            raise ApiDecodeError(f"Listing for {self._resource} has no integer count", body=head)

        payload = await self._client.get_json(f"/{self._resource}", params={"limit": count})
        listing = self._list_cls.from_payload(payload, self._owner)
        if cache_snapshot:
            logger.debug("captured %s listing snapshot (%d results)", self._resource, len(listing.results))
            self._list = listing
        return listing

    def _decode(self, payload: Any) -> tuple[int, Any]:
        rid = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(rid, int) or isinstance(rid, bool):
            raise ApiDecodeError(f"{self._resource} payload has no integer id", body=payload)
        if self._model is None:
            return rid, payload
        try:
            return rid, self._model.model_validate(payload)
        except ValidationError as exc:
            raise ApiDecodeError(f"Malformed {self._resource} payload: {exc}", body=payload) from exc

    def _cache_resource(self, rid: int, data: Any) -> None:
        self._cache.upsert(rid=rid, data=data)
        if self._on_cache is not None:
            self._on_cache(rid, data)


class NamedEndpoint:
    """
    Endpoint for categories whose resources carry a unique `name`.

    Wraps a plain Endpoint and keeps a name index alongside its cache, so
    lookups accept either the numeric id or the case-insensitive name.
    """

    def __init__(self, client: ApiClient, resource: str, *, model: type[BaseModel] | None = None) -> None:
        self._names = NameIndex()
        self._endpoint = Endpoint(
            client,
            resource,
            model=model,
            list_cls=NamedApiResourceList,
            on_cache=self._index,
            owner=self,
        )

    @property
    def resource(self) -> str:
        return self._endpoint.resource

    @property
    def has_snapshot(self) -> bool:
        return self._endpoint.has_snapshot

    def get(self, param: NamedEndpointParam) -> Any | None:
        if isinstance(param, str):
            rid = self._names.get(param)
            if rid is None:
                return None
            return self._endpoint.get(rid)
        return self._endpoint.get(param)

    async def resolve(self, param: NamedEndpointParam) -> Any:
        cached = self.get(param)
        if cached is not None:
            logger.debug("cache hit %s/%s", self.resource, param)
            return cached
        return await self.fetch(param)

    async def resolve_by_name(self, name: str) -> Any:
        return await self.resolve(name)

    async def fetch(self, param: NamedEndpointParam, cache_result: bool = True) -> Any:
        if isinstance(param, str):
            param = param.lower()
        return await self._endpoint.fetch(param, cache_result)

    async def list(self, limit: int = 20, offset: int = 0) -> NamedApiResourceList:
        return await self._endpoint.list(limit, offset)

    async def list_all(self, cache_snapshot: bool = True) -> NamedApiResourceList:
        return await self._endpoint.list_all(cache_snapshot)

    def _index(self, rid: int, data: Any) -> None:
        name = resource_name(data)
        if name is not None:
            self._names.upsert(name=name, rid=rid)
