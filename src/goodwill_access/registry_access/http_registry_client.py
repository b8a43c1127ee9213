"""HTTP transport for the schema registrar."""

from __future__ import annotations

import logging
from types import TracebackType
from urllib.parse import quote

import httpx

from goodwill_access.configuration.runtime_settings import RegistrySettings

from .registry_contracts import RegistryAccessError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

REGISTRAR_PATH = "/registrar"
_JSON_HEADERS = {"Content-Type": "application/json"}


class HttpRegistryClient:
    """RegistryClient backed by an ``httpx.Client``.

    Use as a context manager so the underlying connection pool is closed.
    There is no retry logic here; failures surface as RegistryAccessError.
    """

    def __init__(
        self,
        settings: RegistrySettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._http = httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            headers=dict(settings.headers),
            transport=transport,
        )

    def __enter__(self) -> HttpRegistryClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def fetch(self, schema_name: str) -> bytes | None:
        response = self._request("GET", _schema_path(schema_name))
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info("Schema %r is not registered", schema_name)
            return None
        _raise_for_status(response)
        return response.content

    def fetch_all(self) -> bytes:
        response = self._request("GET", REGISTRAR_PATH)
        _raise_for_status(response)
        return response.content

    def publish(self, schema_name: str, payload: bytes) -> None:
        response = self._request(
            "PUT", _schema_path(schema_name), content=payload, headers=_JSON_HEADERS
        )
        _raise_for_status(response)
        logger.info("Published schema %r (%d bytes)", schema_name, len(payload))

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s%s", method, self._settings.base_url, path)
        try:
            return self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise RegistryAccessError(f"Registry request {method} {path} failed: {exc}") from exc


def _schema_path(schema_name: str) -> str:
    return f"{REGISTRAR_PATH}/{quote(schema_name, safe='')}"


def _raise_for_status(response: httpx.Response) -> None:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "Registry responded %s for %s %s",
            response.status_code,
            response.request.method,
            response.request.url,
        )
        raise RegistryAccessError(
            f"Registry responded {response.status_code} for {response.request.url}"
        ) from exc
