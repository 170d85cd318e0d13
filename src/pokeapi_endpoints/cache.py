from __future__ import annotations

from typing import Any


def normalize_name(value: str) -> str:
    return value.lower()


def resource_name(resource: Any) -> str | None:
    name = resource.get("name") if isinstance(resource, dict) else getattr(resource, "name", None)
    return name if isinstance(name, str) else None


class ResourceCache:
    """Resolved resources keyed by id. Unbounded; entries are never evicted."""

    def __init__(self) -> None:
        self._by_id: dict[int, Any] = {}

    def upsert(self, *, rid: int, data: Any) -> None:
        self._by_id[rid] = data

    def get(self, rid: int) -> Any | None:
        return self._by_id.get(rid)

    def __contains__(self, rid: object) -> bool:
        return rid in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)


class NameIndex:
    """Normalized resource name -> id, kept in step with a ResourceCache."""

    def __init__(self) -> None:
        self._name_to_id: dict[str, int] = {}

    def upsert(self, *, name: str, rid: int) -> None:
        self._name_to_id[normalize_name(name)] = rid

    def get(self, name: str) -> int | None:
        return self._name_to_id.get(normalize_name(name))

    def __len__(self) -> int:
        return len(self._name_to_id)
