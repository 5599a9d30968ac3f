"""
REST HTTP client for the Lumina admin API.

Every endpoint answers with the `{code, message, data}` envelope; it is
decoded here once and handed to the API wrappers as an `ApiEnvelope`.
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from lumina_console.errors import TransportError
from lumina_console.models.envelope import ApiEnvelope

DEFAULT_BASE_URL = "http://localhost:8080"
API_PREFIX = "/api/v1"
DEFAULT_TIMEOUT_S = 30.0


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}{API_PREFIX}",
            headers={"User-Agent": "lumina-console/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def _auth_headers(self, authenticated: bool) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if authenticated and self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _decode(resp: httpx.Response) -> ApiEnvelope:
        """Decode the standard envelope: { "code": 200, "message": "...", "data": <actual_data> }"""
        try:
            return ApiEnvelope.model_validate(resp.json())
        except (ValueError, ValidationError):
            # ValueError covers bodies that are not JSON at all
            if resp.status_code >= 400:
                raise TransportError(f"HTTP {resp.status_code}: {resp.text[:200]}",
                                     details={"status": resp.status_code})
            raise TransportError(f"Malformed response from {resp.request.url.path}: {resp.text[:200]}")

    async def _send(
        self,
        method: str,
        path: str,
        authenticated: bool,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> ApiEnvelope:
        try:
            resp = await self._client.request(
                method, path, params=params, json=body, headers=self._auth_headers(authenticated),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        return self._decode(resp)

    async def get(self, path: str, params: Optional[dict[str, Any]] = None,
                  authenticated: bool = True) -> ApiEnvelope:
        return await self._send("GET", path, authenticated, params=params)

    async def post(self, path: str, body: Optional[dict[str, Any]] = None,
                   authenticated: bool = True) -> ApiEnvelope:
        return await self._send("POST", path, authenticated, body=body)

    async def put(self, path: str, body: Optional[dict[str, Any]] = None,
                  authenticated: bool = True) -> ApiEnvelope:
        return await self._send("PUT", path, authenticated, body=body)

    async def delete(self, path: str, params: Optional[dict[str, Any]] = None,
                     authenticated: bool = True) -> ApiEnvelope:
        return await self._send("DELETE", path, authenticated, params=params)

    async def close(self) -> None:
        await self._client.aclose()
