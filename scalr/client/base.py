"""Request pipeline shared by every resource client.

``BaseClient`` builds requests, sends them through the retry policy, maps
error statuses to exceptions and decodes JSON:API bodies into models.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping, Sequence
from typing import IO, Any, TypeVar
from urllib.parse import quote, urlencode

import httpx

from scalr.config import ScalrConfig, merge_config
from scalr.context import Context
from scalr.errors import InvalidValueError, PayloadError, check_response
from scalr.jsonapi import (
    MEDIA_TYPE,
    Resource,
    ResourceList,
    marshal_payload,
    parse_pagination,
    unmarshal_many_payload,
    unmarshal_payload,
)
from scalr.query import encode_query
from scalr.retry import RetryPolicy
from scalr.validations import valid_string_id

logger = logging.getLogger("scalr.client")

T = TypeVar("T")


def path_escape(segment: str) -> str:
    """Quote one URL path segment."""
    return quote(segment, safe="")


class BaseClient:
    """Thread-safe HTTP wrapper around a synchronous ``httpx.Client``."""

    def __init__(self, config: ScalrConfig | None = None):
        config = merge_config(config)

        try:
            base_url = httpx.URL(config.address)
        except httpx.InvalidURL as exc:
            raise InvalidValueError(f"invalid address: {exc}") from exc
        if base_url.scheme not in ("http", "https") or not base_url.host:
            raise InvalidValueError(f"invalid address: {config.address!r}")
        if not config.token:
            raise InvalidValueError("missing API token")

        base_path = config.base_path
        if base_url.path not in ("", "/"):
            base_path = base_url.path
        if not base_path.endswith("/"):
            base_path += "/"
        self.base_url = base_url.copy_with(path=base_path, query=None, fragment=None)

        self.config = config
        self.token = config.token
        self.timeout = config.timeout
        self.num_parallel = config.num_parallel
        self.retry = RetryPolicy(
            retry_server_errors=config.retry_server_errors,
            log_hook=config.retry_log_hook,
        )

        self._lock = threading.Lock()
        self._headers = httpx.Headers(config.headers)
        self._owns_http = config.http_client is None
        self._http = config.http_client or httpx.Client()

    # -- runtime tunables ---------------------------------------------------

    def set_header(self, name: str, value: str) -> None:
        with self._lock:
            self._headers[name] = value

    def remove_header(self, name: str) -> None:
        with self._lock:
            self._headers.pop(name, None)

    def retry_server_errors(self, enabled: bool) -> None:
        """Toggle retries of 5xx responses and transport errors."""
        self.retry.retry_server_errors = enabled

    def headers(self) -> httpx.Headers:
        """Snapshot of the default headers."""
        with self._lock:
            return httpx.Headers(self._headers)

    # -- request building ---------------------------------------------------

    def _url(self, path: str, query: list[tuple[str, str]] | None = None) -> httpx.URL:
        url = self.base_url.join(path)
        if query is not None:
            url = url.copy_with(query=urlencode(query).encode("ascii") if query else None)
        return url

    def _build(
        self,
        method: str,
        url: httpx.URL,
        request_headers: Mapping[str, str],
        content: bytes | None,
        headers: Mapping[str, str] | None,
    ) -> httpx.Request:
        merged = self.headers()
        merged["Authorization"] = f"Bearer {self.token}"
        merged.update(request_headers)
        if headers:
            merged.update(headers)
        return httpx.Request(method, url, headers=merged, content=content)

    def new_request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Build a request for *path*, relative to the API base URL.

        GET payloads are query options. POST, PATCH and DELETE payloads are
        resources (or sequences of them) encoded as JSON:API documents. PUT
        payloads are raw bytes uploaded as-is.
        """
        method = method.upper()
        if method == "GET":
            return self._build(
                method,
                self._url(path, encode_query(payload) if payload is not None else None),
                {"Accept": MEDIA_TYPE},
                None,
                headers,
            )

        if method == "PUT":
            if isinstance(payload, str):
                payload = payload.encode()
            if payload is not None and not isinstance(payload, (bytes, bytearray)):
                raise PayloadError("PUT payload must be bytes")
            return self._build(
                method,
                self._url(path),
                {"Accept": "application/json", "Content-Type": "application/octet-stream"},
                bytes(payload) if payload is not None else None,
                headers,
            )

        content = None
        if payload is not None:
            content = json.dumps(marshal_payload(payload)).encode()
        return self._build(
            method,
            self._url(path),
            {"Accept": MEDIA_TYPE, "Content-Type": MEDIA_TYPE},
            content,
            headers,
        )

    def new_json_request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Build a request with a plain JSON body, for action endpoints."""
        if hasattr(payload, "model_dump"):
            payload = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        content = json.dumps(payload).encode() if payload is not None else None
        return self._build(
            method.upper(),
            self._url(path),
            {"Accept": "application/json", "Content-Type": "application/json"},
            content,
            headers,
        )

    # -- response handling --------------------------------------------------

    @staticmethod
    def decode(response: httpx.Response, into: Any = None) -> Any:
        """Decode *response* into *into* and return the result.

        *into* is a ``Resource`` subclass, a ``ResourceList`` subclass, a
        writable binary stream, or None to discard the body.
        """
        if into is None:
            return None

        if hasattr(into, "write"):
            into.write(response.content)
            return into

        if isinstance(into, type) and issubclass(into, (ResourceList, Resource)):
            try:
                document = response.json()
            except ValueError as exc:
                raise PayloadError(f"invalid JSON:API document: {exc}") from exc
            if issubclass(into, ResourceList):
                items = unmarshal_many_payload(document, into.item_type())
                return into(items=items, pagination=parse_pagination(document))
            return unmarshal_payload(document, into)

        raise PayloadError(
            "destination must be a resource model, a resource list or a writable stream"
        )

    def do(
        self,
        request: httpx.Request,
        into: type[T] | IO[bytes] | None = None,
        *,
        ctx: Context | None = None,
    ) -> Any:
        """Send *request*, raise on error statuses, and decode into *into*."""
        ctx = ctx or Context.background()
        if ctx.done():
            raise ctx.err()

        timeout = self.timeout
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)
        request.extensions["timeout"] = httpx.Timeout(timeout).as_dict()

        logger.debug("%s %s", request.method, request.url)
        try:
            response = self.retry.send(self._http, request, ctx)
        except httpx.TransportError as exc:
            if ctx.done():
                raise ctx.err() from exc
            raise

        try:
            check_response(response)
            return self.decode(response, into)
        finally:
            response.close()

    # -- lifecycle ----------------------------------------------------------

    def close(self) -> None:
        if self._owns_http and not self._http.is_closed:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ResourceClient:
    """One resource family; calls back into the owning client."""

    def __init__(self, client: BaseClient):
        self.client = client

    def _do(
        self,
        method: str,
        path: str,
        payload: Any = None,
        into: Any = None,
        *,
        ctx: Context | None = None,
    ):
        request = self.client.new_request(method, path, payload)
        return self.client.do(request, into, ctx=ctx)


def require_id(value: str | None, what: str) -> str:
    """Validate an identifier argument before any I/O."""
    if not valid_string_id(value):
        raise InvalidValueError(f"invalid value for {what}")
    return value


def require_ids(values: Sequence[Resource], what: str) -> None:
    for value in values:
        require_id(value.id, what)
