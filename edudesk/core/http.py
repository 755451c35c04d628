# edudesk/core/http.py
from typing import Any, Optional

import httpx

from edudesk.core.config import settings
from edudesk.core.errors import ApiError, NetworkError, ResponseFormatError
from edudesk.core.logging import log


class ApiClient:
    """Thin async client for the records backend.

    One attempt per call: no retries, no caching, no knowledge of UI state.
    2xx bodies come back decoded, everything else is raised as a
    ``ConsoleError`` subclass.
    """

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        # httpx requires all four timeout parts (or a single default)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(
                connect=settings.HTTP_CONNECT_TIMEOUT,
                read=settings.HTTP_READ_TIMEOUT,
                write=settings.HTTP_READ_TIMEOUT,
                pool=settings.HTTP_CONNECT_TIMEOUT,
            ),
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    def headers(self) -> dict:
        return {"Accept": "application/json"}

    async def request(self, method: str, path: str, data: Optional[dict] = None) -> Any:
        log.info("api_request", method=method, path=path, has_body=data is not None)

        try:
            response = await self._client.request(method, path, json=data, headers=self.headers())
        except httpx.RequestError as e:
            log.error(
                "api_network_error",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError() from e

        log.info("api_response", method=method, path=path, status_code=response.status_code)

        if not response.is_success:
            error = ApiError.from_body(response.status_code, self._decode(response, strict=False))
            log.warning(
                "api_error_response",
                method=method,
                path=path,
                status_code=response.status_code,
                server_message=error.message,
            )
            raise error

        return self._decode(response, strict=True)

    def _decode(self, response: httpx.Response, strict: bool) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            if not strict:
                return None
            raise ResponseFormatError("The server returned an unreadable response.") from e

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, data: dict) -> Any:
        return await self.request("POST", path, data)

    async def put(self, path: str, data: dict) -> Any:
        return await self.request("PUT", path, data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
