from __future__ import annotations

import httpx

from pokeapi_endpoints.api_client import ApiClient
from pokeapi_endpoints.config import AppConfig
from pokeapi_endpoints.endpoint import Endpoint, NamedEndpoint


# Categories whose resources have no `name` and can only be looked up by id.
UNNAMED_RESOURCES = frozenset(
    {"characteristic", "contest-effect", "evolution-chain", "machine", "super-contest-effect"}
)


class EndpointRegistry:
    """
    One endpoint per resource category, all sharing a single ApiClient.

    Endpoints are created on first access and kept for the registry's
    lifetime, so their caches and listing snapshots are shared by every caller.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._endpoints: dict[str, Endpoint | NamedEndpoint] = {}

    @classmethod
    def from_config(
        cls, config: AppConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "EndpointRegistry":
        client = ApiClient(
            base_uri=config.base_uri,
            timeout_seconds=config.timeout_seconds,
            connect_timeout_seconds=config.connect_timeout_seconds,
            transport=transport,
        )
        return cls(client)

    @property
    def client(self) -> ApiClient:
        return self._client

    def endpoint(self, resource: str) -> Endpoint | NamedEndpoint:
        resource = resource.strip().lower().replace("_", "-")
        existing = self._endpoints.get(resource)
        if existing is not None:
            return existing
        if resource in UNNAMED_RESOURCES:
            created: Endpoint | NamedEndpoint = Endpoint(self._client, resource)
        else:
            created = NamedEndpoint(self._client, resource)
        self._endpoints[resource] = created
        return created

    def __getattr__(self, name: str) -> Endpoint | NamedEndpoint:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.endpoint(name)

    async def aclose(self) -> None:
        await self._client.close()
