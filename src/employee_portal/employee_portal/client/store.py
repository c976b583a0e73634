from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .api_client import ApiClient


class ResourceCache:
    """Client-side copy of one resource list, keyed by id.

    Mutations go through the API and then re-fetch, so the cache only ever
    holds what the server returned.
    """

    def __init__(self, api: ApiClient, path: str, *, params: Optional[Mapping[str, Any]] = None):
        self._api = api
        self._path = path
        self._params = dict(params or {})
        self._items: Dict[str, Dict[str, Any]] = {}
        self.loaded = False

    def refresh(self) -> List[Dict[str, Any]]:
        rows = self._api.get(self._path, **self._params) or []
        self._items = {str(row["id"]): row for row in rows}
        self.loaded = True
        return self.items()

    def items(self) -> List[Dict[str, Any]]:
        return list(self._items.values())

    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        return self._items.get(str(item_id))

    def create(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        created = self._api.post(self._path, dict(body))
        self.refresh()
        return created

    def update(self, item_id: str, changes: Mapping[str, Any]) -> None:
        self._api.put(f"{self._path}/{item_id}", dict(changes))
        self.refresh()

    def delete(self, item_id: str) -> None:
        self._api.delete(f"{self._path}/{item_id}")
        self.refresh()
