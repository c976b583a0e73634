from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# (method, url, body, headers) -> (status, raw body)
Transport = Callable[[str, str, Optional[bytes], Dict[str, str]], Tuple[int, bytes]]


class ApiError(Exception):
    """Non-2xx response from the portal API."""

    def __init__(self, status: int, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.payload = payload or {}

    @property
    def is_conflict(self) -> bool:
        return self.status == 409

    @property
    def current_version(self) -> Optional[int]:
        return self.payload.get("currentVersion")


def urllib_transport(timeout: float = 10.0) -> Transport:
    def send(method: str, url: str, body: Optional[bytes], headers: Dict[str, str]) -> Tuple[int, bytes]:
        req = urllib.request.Request(url, data=body, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return resp.status, resp.read()
        except urllib.error.HTTPError as e:
            return e.code, e.read()

    return send


class ApiClient:
    """JSON over HTTP against the ``/api`` routes."""

    def __init__(self, base_url: str, *, transport: Optional[Transport] = None):
        self._base_url = base_url.rstrip("/")
        self._transport = transport or urllib_transport()

    def _url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        url = f"{self._base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if query:
            url += "?" + urllib.parse.urlencode(query)
        return url

    def request(self, method: str, path: str, *, json_body: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        headers = {"Accept": "application/json"}
        body = None
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        url = self._url(path, params)
        status, raw = self._transport(method, url, body, headers)
        try:
            payload = json.loads(raw.decode("utf-8")) if raw else None
        except ValueError:
            payload = None

        if not 200 <= status < 300:
            data = payload if isinstance(payload, dict) else {}
            error = data.get("error") or f"HTTP {status}"
            logger.debug("%s %s -> %s: %s", method, url, status, error)
            raise ApiError(status, error, data)
        return payload

    def get(self, path: str, **params: Any) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any) -> Any:
        return self.request("POST", path, json_body=body)

    def put(self, path: str, body: Any) -> Any:
        return self.request("PUT", path, json_body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
