from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tenant import tenant_headers

logger = logging.getLogger(__name__)

ResponseHook = Callable[[requests.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]

CSRF_COOKIE = "csrftoken"
CSRF_HEADER = "X-CSRFToken"
NON_JSON_FALLBACK = "Respuesta no válida del servidor"


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    cache_ttl_seconds: float = 3.0
    enable_get_cache: bool = True
    _cache: dict[str, tuple[float, dict[str, Any] | list[Any] | None]] | None = None
    _cache_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        if self._cache is None:
            self._cache = {}

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def _base_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        headers.update(tenant_headers(self.config.tenant))
        csrf_token = self.session.cookies.get(CSRF_COOKIE) if self.session is not None else None
        if csrf_token:
            headers[CSRF_HEADER] = csrf_token
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        response_hook: ResponseHook | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        use_get_cache: bool = True,
        invalidate_paths: list[str] | None = None,
    ) -> dict[str, Any] | list[Any] | None:
        response = self._send(
            method,
            path,
            headers=headers,
            json_body=json_body,
            params=params,
            data=data,
            files=files,
            module=module,
            operation=operation,
            use_get_cache=use_get_cache,
        )
        if isinstance(response, _CachedPayload):
            return response.payload

        if response_hook:
            response_hook(response)
        payload = _parse_payload(response)
        if response.ok:
            normalized_method = method.upper()
            if normalized_method == "GET" and self.enable_get_cache and use_get_cache:
                cache_key = self._cache_key(normalized_method, self._build_url(path), params)
                if cache_key:
                    self._write_cache(cache_key, payload)
            if normalized_method != "GET":
                self._invalidate_cache(invalidate_paths or [])
            return payload

        error = map_error(
            response.status_code,
            payload if isinstance(payload, dict) else {"data": payload},
            response.reason,
        )
        if response.status_code == 401:
            logger.info("api_unauthenticated", extra={"path": path, "operation": operation})
        else:
            logger.warning(
                "api_request_failed",
                extra={"path": path, "operation": operation, "status": response.status_code, "error": error.message},
            )
        raise error

    def download(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> bytes:
        response = self._send(
            "GET",
            path,
            params=params,
            module=module,
            operation=operation,
            use_get_cache=False,
        )
        if not isinstance(response, requests.Response):
            raise RuntimeError(f"Downloads are never served from cache: {path}")
        if not response.ok:
            logger.warning("api_download_failed", extra={"path": path, "operation": operation, "status": response.status_code})
            raise map_error(response.status_code, {"message": "Error descarga"}, response.reason)
        return response.content

    def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        module: str,
        operation: str,
        use_get_cache: bool,
    ) -> requests.Response | _CachedPayload:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = self._base_headers()
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        request_context = {
            "headers": request_headers,
            "json_body": json_body,
            "params": params,
        }
        if self.before_request:
            self.before_request(normalized_method, url, request_context)

        should_use_get_cache = self.enable_get_cache and use_get_cache and normalized_method == "GET"
        cache_key = self._cache_key(normalized_method, url, params)
        if should_use_get_cache and cache_key:
            cached = self._read_cache(cache_key)
            if cached is not None:
                return _CachedPayload(cached)

        logger.debug(
            "api_request",
            extra={
                "method": normalized_method,
                "url": url,
                "tenant": self.config.tenant,
                "module": module,
                "operation": operation,
            },
        )
        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    data=data,
                    files=files,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    raise TransportError(
                        message=str(exc) or "Error de conexión con el servidor",
                        status=0,
                        data={"type": type(exc).__name__},
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")
        if self.after_response:
            self.after_response(response)
        return response

    def clear_cache(self) -> None:
        with self._cache_lock:
            if self._cache is not None:
                self._cache.clear()

    def _cache_key(
        self,
        method: str,
        url: str,
        params: Mapping[str, Any] | None,
    ) -> str | None:
        if method != "GET":
            return None
        return json.dumps({"url": url, "tenant": self.config.tenant, "params": dict(params or {})}, sort_keys=True, default=str)

    def _read_cache(self, key: str) -> dict[str, Any] | list[Any] | None:
        with self._cache_lock:
            if self._cache is None:
                return None
            record = self._cache.get(key)
            if not record:
                return None
            expires_at, payload = record
            if time.monotonic() >= expires_at:
                self._cache.pop(key, None)
                return None
            return payload

    def _write_cache(self, key: str, payload: dict[str, Any] | list[Any] | None) -> None:
        with self._cache_lock:
            if self._cache is None:
                self._cache = {}
            self._cache[key] = (time.monotonic() + self.cache_ttl_seconds, payload)

    def _invalidate_cache(self, paths: list[str]) -> None:
        if not paths:
            return
        with self._cache_lock:
            if self._cache is None:
                return
            doomed = [key for key in self._cache if any(path in key for path in paths)]
            for key in doomed:
                self._cache.pop(key, None)


@dataclass(frozen=True)
class _CachedPayload:
    payload: dict[str, Any] | list[Any] | None


def _parse_payload(response: requests.Response) -> dict[str, Any] | list[Any] | None:
    if not response.content:
        return None
    content_type = response.headers.get("Content-Type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError:
            return {"error": "Error parseando respuesta del servidor"}
    text = response.text
    logger.warning(
        "api_non_json_response",
        extra={"status": response.status_code, "content_type": content_type, "preview": text[:200]},
    )
    return {"error": text or NON_JSON_FALLBACK}
