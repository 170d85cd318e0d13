import httpx
import pytest

from pokeapi_endpoints.config import AppConfig


BASE_URI = "https://pokeapi.test/api/v2"

BERRIES = [
    {"id": 1, "name": "cheri", "growth_time": 3},
    {"id": 2, "name": "chesto", "growth_time": 3},
    {"id": 3, "name": "pecha", "growth_time": 3},
    {"id": 4, "name": "rawst", "growth_time": 3},
    {"id": 5, "name": "aspear", "growth_time": 3},
    {"id": 6, "name": "leppa", "growth_time": 4},
    {"id": 7, "name": "oran", "growth_time": 4},
]


class FakePokeApi:
    """Serves the berry category and records every request it receives."""

    def __init__(self, berries: list[dict] | None = None) -> None:
        self.berries = list(BERRIES if berries is None else berries)
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def page(self, *, limit: int, offset: int) -> dict:
        count = len(self.berries)
        end = min(count, offset + limit)
        return {
            "count": count,
            "next": f"{BASE_URI}/berry?offset={end}&limit={limit}" if end < count else None,
            "previous": f"{BASE_URI}/berry?offset={max(0, offset - limit)}&limit={limit}" if offset > 0 else None,
            "results": [
                {"name": b["name"], "url": f"{BASE_URI}/berry/{b['id']}/"} for b in self.berries[offset:end]
            ],
        }

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/api/v2/berry":
            limit = int(request.url.params.get("limit", "20"))
            offset = int(request.url.params.get("offset", "0"))
            return httpx.Response(200, json=self.page(limit=limit, offset=offset))
        if path.startswith("/api/v2/berry/"):
            key = path.rsplit("/", 1)[-1]
            for berry in self.berries:
                if key == str(berry["id"]) or key == berry["name"]:
                    return httpx.Response(200, json=berry)
        return httpx.Response(404, text="Not Found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        base_uri=BASE_URI,
        timeout_seconds=5.0,
        connect_timeout_seconds=1.0,
        log_level="DEBUG",
    )


@pytest.fixture
def fake_api() -> FakePokeApi:
    return FakePokeApi()
