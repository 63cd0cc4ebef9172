from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel

from ..http_client import HttpClient


def query_params(source: BaseModel | Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop unset filters and encode booleans the way the API expects (``true``/``false``)."""
    if source is None:
        return None
    raw = source.model_dump(exclude_none=True) if isinstance(source, BaseModel) else dict(source)
    params: dict[str, Any] = {}
    for key, value in raw.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = value
    return params or None


def expect_dict(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Expected {what} response to be a JSON object")
    return data


@dataclass
class BaseClient:
    http: HttpClient
    extra_headers: dict[str, str] = field(default_factory=dict)

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", None) or {}
        merged = {**self.extra_headers, **headers}
        return self.http.request(method, path, headers=merged or None, **kwargs)
