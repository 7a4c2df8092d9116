"""
HTTP connection used to talk to the Cluster Service.
"""

import httpx
import logging
from typing import Optional, Dict
from contextvars import ContextVar

logger = logging.getLogger(__name__)

# Context variables to track across async calls (e.g. for trace IDs)
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class HttpConnection:
    """
    Unauthenticated connection to a Cluster Service API gateway.

    Features:
    - Lazily created, shared AsyncClient instance.
    - Request ID forwarding for tracing.
    - Optional TLS verification bypass for non-production use.
    - Standardized timeout and connection limits.
    """

    def __init__(
        self,
        base_url: str,
        insecure: bool = False,
        timeout_seconds: float = 30.0,
        max_connections: int = 100,
        max_keepalive: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._insecure = insecure
        self._timeout = httpx.Timeout(timeout_seconds)
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def insecure(self) -> bool:
        return self._insecure

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                limits=self._limits,
                verify=not self._insecure,
                transport=self._transport,
            )
        return self._client

    def get_default_headers(self) -> Dict[str, str]:
        """Base headers sent with every request."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json"
        }

        req_id = request_id_ctx.get()
        if req_id:
            headers["X-Request-ID"] = req_id

        return headers

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a single request. Transport errors are logged and re-raised untouched."""
        headers = kwargs.pop("headers", {})
        merged_headers = {**self.get_default_headers(), **headers}

        try:
            return await self.client.request(method, url, headers=merged_headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Cluster Service request failed: {method} {url} - {str(e)}")
            raise

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def patch(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
