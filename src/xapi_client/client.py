"""LRS client: sends xAPI statements to a Learning Record Store.

POSTs one statement (JSON object) or a batch (JSON array) to
``<endpoint>statements`` with HTTP Basic auth and the
``X-Experience-API-Version`` header.  Exactly one attempt per call: no
retry, no backoff, and no timeout unless one is given explicitly.

Usage::

    async with LRSClient() as client:
        client.configure("https://lrs.example.com/xapi", "key", "secret")
        ids = await client.send_statement(statement)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

import httpx

from .core.config import LRSConfig, Settings
from .core.errors import ConfigurationError, StatementError, TransmissionError
from .core.ids import generate_id, iso_timestamp
from .core.models import Statement

logger = logging.getLogger(__name__)

VERSION_HEADER = "X-Experience-API-Version"

StatementLike = Statement | Mapping[str, Any]


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

def _to_payload(statement: StatementLike) -> dict[str, Any]:
    """Return a wire dict for *statement* with ``id`` and ``timestamp`` set.

    Always a new dict; the caller's object is never modified.
    """
    if isinstance(statement, Statement):
        payload = statement.to_wire()
    elif isinstance(statement, Mapping):
        payload = dict(statement)
    else:
        raise StatementError(
            f"Expected a Statement or a mapping, got {type(statement).__name__}"
        )

    if not payload.get("id"):
        payload["id"] = generate_id()
    if not payload.get("timestamp"):
        payload["timestamp"] = iso_timestamp()
    return payload


def _build_headers(config: LRSConfig) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        VERSION_HEADER: config.version,
    }


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class LRSClient:
    """Send statements to a single configured LRS.

    Parameters
    ----------
    config:
        Initial connection config.  Defaults to an empty (unconfigured)
        ``LRSConfig``; call :meth:`configure` before sending.
    timeout:
        HTTP timeout in seconds.  ``None`` (default) disables it.
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        config: LRSConfig | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or LRSConfig()
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> LRSClient:
        """Build a client from loaded :class:`Settings`."""
        kwargs.setdefault("timeout", settings.timeout)
        return cls(settings.lrs, **kwargs)

    # -- Configuration -------------------------------------------------------

    @property
    def config(self) -> LRSConfig:
        return self._config

    def configure(
        self,
        endpoint: str,
        username: str,
        password: str,
        version: str | None = None,
    ) -> None:
        """Replace the connection config in full.

        The endpoint is normalized to end with exactly one ``/``.  Nothing
        is validated here; incomplete config is rejected at send time.
        """
        fields: dict[str, str] = {
            "endpoint": endpoint,
            "username": username,
            "password": password,
        }
        if version is not None:
            fields["version"] = version
        self._config = LRSConfig(**fields)

    # -- Lifecycle -----------------------------------------------------------

    def _new_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )

    async def open(self) -> None:
        """Create the shared HTTP client.

        Until ``open()`` (or ``async with``) is used, every send opens and
        closes its own connection.
        """
        if self._client is None:
            self._client = self._new_http_client()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> LRSClient:
        await self.open()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- Sending -------------------------------------------------------------

    async def send_statement(self, statement: StatementLike) -> Any:
        """Send a single statement.

        Returns the LRS response body parsed as JSON (normally the list
        of stored statement IDs).

        Raises
        ------
        ConfigurationError
            Endpoint, username or password is not set.
        TransmissionError
            The LRS answered with a non-2xx status.
        httpx.TransportError
            The request never got a response.
        """
        config = self._snapshot_config()

        payload: dict[str, Any] | None = None
        try:
            payload = _to_payload(statement)
            result = await self._post(config, payload)
        except Exception as exc:
            statement_id = payload["id"] if payload else None
            logger.error("Error sending xAPI statement %s: %s", statement_id, exc)
            raise

        logger.info("xAPI statement sent successfully: %s", payload["id"])
        return result

    async def send_statements(self, statements: Iterable[StatementLike]) -> Any:
        """Send a batch of statements as one JSON array.

        Every element is checked and defaulted individually.  The LRS
        accepts or rejects the batch as a whole.
        """
        config = self._snapshot_config()

        try:
            payload = [_to_payload(s) for s in statements]
            result = await self._post(config, payload)
        except Exception as exc:
            logger.error("Error sending xAPI statements batch: %s", exc)
            raise

        logger.info("%d xAPI statements sent successfully", len(payload))
        return result

    def _snapshot_config(self) -> LRSConfig:
        """Read the current config once per call and check it is complete."""
        config = self._config
        try:
            config.require_complete()
        except ConfigurationError as exc:
            logger.error("xAPI send rejected: %s", exc)
            raise
        return config

    async def _post(
        self, config: LRSConfig, payload: dict[str, Any] | list[dict[str, Any]],
    ) -> Any:
        """Single POST attempt to ``<endpoint>statements``."""
        if self._client is None:
            async with self._new_http_client() as client:
                resp = await self._request(client, config, payload)
        else:
            resp = await self._request(self._client, config, payload)
        if not resp.is_success:
            raise TransmissionError(resp.status_code, resp.reason_phrase, resp.text)
        if not resp.content:
            return None
        return resp.json()

    @staticmethod
    async def _request(
        client: httpx.AsyncClient,
        config: LRSConfig,
        payload: dict[str, Any] | list[dict[str, Any]],
    ) -> httpx.Response:
        return await client.post(
            config.statements_url,
            json=payload,
            headers=_build_headers(config),
            auth=httpx.BasicAuth(config.username, config.password),
        )
