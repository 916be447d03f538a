"""
Minimal async JSON-RPC 2.0 client over httpx.
"""
import itertools
from typing import Any, Optional

import httpx


class JSONRPCError(Exception):
    """Error object returned by a JSON-RPC endpoint."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class JSONRPCClient:
    """
    Async JSON-RPC client for one read-only endpoint.

    A single `httpx.AsyncClient` is reused across requests.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._ids = itertools.count(1)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def make_request(self, method: str, params: list[Any]) -> Any:
        """
        Send one JSON-RPC call.

        Args:
            method: RPC method name (e.g. 'eth_getBalance', 'getBalance')
            params: Positional parameters

        Returns:
            The `result` member of the response

        Raises:
            httpx.HTTPError: Transport failure or non-2xx status
            JSONRPCError: The endpoint returned an error object
        """
        client = await self._get_client()
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        response = await client.post(self.url, json=payload)
        response.raise_for_status()
        body = response.json()

        error = body.get("error")
        if error:
            raise JSONRPCError(
                code=error.get("code", -1),
                message=error.get("message", "unknown error"),
                data=error.get("data"),
            )
        if "result" not in body:
            raise JSONRPCError(code=-1, message=f"malformed response to {method}")
        return body["result"]
