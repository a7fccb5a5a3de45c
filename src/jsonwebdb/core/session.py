"""HTTP session for JsonWebDB.

Wraps an httpx AsyncClient that POSTs JSON request envelopes to the
backend and returns the decoded JSON object. Transport failures are
mapped onto the JsonWebDBError hierarchy; a response carrying
success=false is returned to the caller untouched.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import httpx
import sentry_sdk
import structlog

from jsonwebdb.core.exceptions import (
    BackendError,
    NetworkError,
    ProtocolError,
    TimeoutError,
)
from jsonwebdb.core.models import Response

if TYPE_CHECKING:
    from jsonwebdb.core.config import ResolvedConfig


def _describe(request: dict[str, Any]) -> tuple[str, str | None, str | None]:
    """Return (kind, invoke, source) of a request envelope for logging."""
    for kind, body in request.items():
        if isinstance(body, dict):
            return kind, body.get("invoke"), body.get("source")
        return kind, None, None
    return "", None, None


class Session:
    """A JsonWebDB session bound to one backend URL."""

    def __init__(
        self,
        url: str,
        *,
        session_id: str | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session_id = session_id
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ResolvedConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Session:
        return cls(
            config.url,
            session_id=config.session_id,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            transport=transport,
        )

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def connected(self) -> bool:
        return self._session_id is not None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None and not self._client.is_closed:
            return self._client

        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            verify=self.verify_ssl,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )
        return self._client

    async def invoke(self, request: dict[str, Any]) -> dict[str, Any]:
        """Send one request envelope and return the decoded response object."""
        log = structlog.get_logger()
        client = self._get_client()
        kind, invoke, source = _describe(request)
        span_description = f"{kind}.{invoke}" if invoke else kind

        log.debug("invoking", kind=kind, invoke=invoke, source=source)
        with sentry_sdk.start_span(
            op="http.client", description=span_description
        ) as span:
            start_time = time.monotonic()
            try:
                response = await client.post(self.url, json=request)
                response.raise_for_status()
            except httpx.TimeoutException as e:
                span.set_status("deadline_exceeded")
                log.error("request timeout", url=self.url, kind=kind, invoke=invoke)
                msg = f"Request to {self.url} timed out after {self.timeout}s: {e}"
                raise TimeoutError(msg) from e
            except httpx.HTTPStatusError as e:
                span.set_status("internal_error")
                log.error(
                    "http error",
                    url=self.url,
                    status=e.response.status_code,
                    kind=kind,
                    invoke=invoke,
                )
                msg = f"HTTP {e.response.status_code} from {self.url}"
                raise NetworkError(msg) from e
            except httpx.RequestError as e:
                span.set_status("unavailable")
                log.error("connection error", url=self.url, error=str(e))
                msg = f"Connection failed to {self.url}: {e}"
                raise NetworkError(msg) from e

            duration_ms = (time.monotonic() - start_time) * 1000
            span.set_data("duration_ms", duration_ms)

            try:
                data = response.json()
            except ValueError as e:
                span.set_status("internal_error")
                msg = f"Invalid JSON in response from {self.url}: {e}"
                raise ProtocolError(msg) from e

            if not isinstance(data, dict):
                span.set_status("internal_error")
                msg = (
                    f"Expected a JSON object from {self.url}, "
                    f"got {type(data).__name__}"
                )
                raise ProtocolError(msg)

            log.debug(
                "invoke complete",
                kind=kind,
                invoke=invoke,
                success=data.get("success"),
                duration_ms=f"{duration_ms:.1f}",
            )
            return data

    async def connect(self, username: str | None, password: str | None) -> str:
        """Open a backend session and remember its id.

        Raises BackendError when the backend refuses the credentials.
        """
        request: dict[str, Any] = {
            "Session": {
                "invoke": "connect",
                "connect()": {"username": username, "password": password},
            }
        }
        response = Response.parse(await self.invoke(request))
        if not response.success or not response.session:
            msg = f"Connect to {self.url} failed: {response.message or 'no session'}"
            raise BackendError(msg)

        self._session_id = response.session
        structlog.get_logger().info("connected", url=self.url, session=self._session_id)
        return self._session_id

    async def _session_request(self, invoke: str) -> Response:
        request: dict[str, Any] = {
            "Session": {"invoke": invoke, "session": self._session_id}
        }
        return Response.parse(await self.invoke(request))

    async def commit(self) -> bool:
        return (await self._session_request("commit")).success

    async def rollback(self) -> bool:
        return (await self._session_request("rollback")).success

    async def disconnect(self) -> bool:
        """Close the backend session. A session that is not connected is a no-op."""
        if self._session_id is None:
            return True
        response = await self._session_request("disconnect")
        if response.success:
            self._session_id = None
        return response.success

    async def close(self) -> None:
        """Close the HTTP client. The backend session is left untouched."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
