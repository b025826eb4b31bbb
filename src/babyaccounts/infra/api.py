"""HTTP client for the Baby Accounts backend REST API.

Every screen in the console reads and writes through this client. Collections
live under ``<base_url>/<collection>/`` and records under
``<base_url>/<collection>/<id>/``. List endpoints may answer with a paginated
envelope (``{"count", "next", "previous", "results"}``) or a bare array; both
are normalized to a plain list of records.
"""

from __future__ import annotations

import time
from typing import Any, Iterable, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..logging_config import get_logger

logger = get_logger(__name__)

JSONRecord = dict[str, Any]

RETRY_STATUSES = (429, 500, 502, 503, 504)
IDEMPOTENT_METHODS = ("GET", "HEAD", "PUT", "DELETE")


class BackendError(Exception):
    """Base class for failures talking to the backend."""

    def user_message(self) -> str:
        return str(self) or "The backend request failed."


class BackendUnavailable(BackendError):
    """The backend could not be reached or did not answer in time."""

    def user_message(self) -> str:
        return "The accounts service is unavailable. Please try again shortly."


class BackendResponseError(BackendError):
    """The backend answered with a non-success status."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def user_message(self) -> str:
        details = format_error_payload(self.payload)
        return details or str(self)


class RecordNotFound(BackendResponseError):
    """The requested record does not exist (HTTP 404)."""


def format_error_payload(payload: Any) -> str:
    """Flatten a validation error body into ``field: message`` pairs.

    Backends usually answer 400s with ``{"field": ["message", ...]}``; a
    ``detail`` string is passed through as-is.
    """

    if isinstance(payload, Mapping):
        parts = []
        for key, value in payload.items():
            if isinstance(value, (list, tuple)):
                text = " ".join(str(item) for item in value)
            else:
                text = str(value)
            parts.append(text if key == "detail" else f"{key}: {text}")
        return ", ".join(parts)
    if isinstance(payload, (list, tuple)):
        return ", ".join(str(item) for item in payload)
    if isinstance(payload, str):
        return payload.strip()
    return ""


def normalize_collection(payload: Any) -> list[JSONRecord]:
    """Return the records of a list response.

    Accepts a paginated envelope or a bare array. An envelope without
    ``results`` and a missing payload both yield an empty list; entries that
    are not JSON objects are dropped.
    """

    if payload is None:
        return []
    if isinstance(payload, Mapping):
        records: Iterable[Any] = payload.get("results") or []
    elif isinstance(payload, (list, tuple)):
        records = payload
    else:
        return []
    return [dict(record) for record in records if isinstance(record, Mapping)]


def build_session(retries: int = 2, *, pool_maxsize: int = 10) -> requests.Session:
    """Create a pooled session that retries idempotent calls on transient statuses."""

    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.3,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=IDEMPOTENT_METHODS,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_maxsize=pool_maxsize)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


class BackendAPI:
    """Thin REST client over a shared :class:`requests.Session`."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 2,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else build_session(retries)

    # -- URL helpers -----------------------------------------------------
    def collection_url(self, collection: str) -> str:
        return f"{self.base_url}/{collection.strip('/')}/"

    def record_url(self, collection: str, record_id: int) -> str:
        return f"{self.base_url}/{collection.strip('/')}/{int(record_id)}/"

    # -- transport -------------------------------------------------------
    def _request(self, method: str, url: str, *, json: Any = None) -> Any:
        started = time.perf_counter()
        try:
            response = self._session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning(
                "Backend request failed",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            raise BackendUnavailable(f"{method} {url} failed: {exc}") from exc

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.debug(
            "Backend request completed",
            extra={
                "method": method,
                "url": url,
                "status": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )

        payload = self._decode(response)
        if response.status_code == 404:
            raise RecordNotFound(404, f"{url} was not found", payload)
        if not response.ok:
            logger.warning(
                "Backend returned an error",
                extra={"method": method, "url": url, "status": response.status_code},
            )
            raise BackendResponseError(
                response.status_code,
                f"{method} {url} returned HTTP {response.status_code}",
                payload,
            )
        return payload

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            if response.ok:
                raise BackendResponseError(
                    response.status_code, "The backend returned invalid JSON"
                ) from None
            return response.text

    # -- operations ------------------------------------------------------
    def fetch(self, collection: str) -> Any:
        """Return the raw list payload for ``collection`` (envelope or array)."""

        return self._request("GET", self.collection_url(collection))

    def list_records(self, collection: str) -> list[JSONRecord]:
        return normalize_collection(self.fetch(collection))

    def get(self, collection: str, record_id: int) -> JSONRecord:
        payload = self._request("GET", self.record_url(collection, record_id))
        if not isinstance(payload, Mapping):
            raise BackendResponseError(200, "Expected a JSON object", payload)
        return dict(payload)

    def create(self, collection: str, data: Mapping[str, Any]) -> JSONRecord:
        payload = self._request("POST", self.collection_url(collection), json=dict(data))
        logger.info("Record created", extra={"collection": collection})
        return dict(payload) if isinstance(payload, Mapping) else {}

    def update(self, collection: str, record_id: int, data: Mapping[str, Any]) -> JSONRecord:
        payload = self._request(
            "PUT", self.record_url(collection, record_id), json=dict(data)
        )
        logger.info("Record updated", extra={"collection": collection, "record_id": record_id})
        return dict(payload) if isinstance(payload, Mapping) else {}

    def delete(self, collection: str, record_id: int) -> None:
        self._request("DELETE", self.record_url(collection, record_id))
        logger.info("Record deleted", extra={"collection": collection, "record_id": record_id})

    def ping(self) -> bool:
        """Return True when the transactions collection answers successfully."""

        try:
            self.fetch("transactions")
        except BackendError:
            return False
        return True

    def close(self) -> None:
        self._session.close()
