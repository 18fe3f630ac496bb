"""
Authentication core querier.

Uses httpx for asynchronous request/response calls to the core.
"""

import logging
from typing import Any, Optional

import httpx

from auth_session_sdk.domain.errors import TransportFailureError
from auth_session_sdk.ports.core import CoreQuerierPort

logger = logging.getLogger(__name__)


class HttpxCoreQuerier(CoreQuerierPort):
    """
    CoreQuerierPort over HTTP using httpx.

    No retries and no backoff: a failure is reported to the caller as
    TransportFailureError.
    """

    def __init__(
        self,
        connection_uri: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        rid: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.connection_uri = connection_uri.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.rid = rid
        self._client = client

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "HttpxCoreQuerier":
        """
        Build from a plain mapping (e.g. dependency_injector config).

        Raises:
            ValueError: connection_uri is missing
        """
        data = data or {}
        if not data.get("connection_uri"):
            raise ValueError("core.connection_uri is required")
        timeout = data.get("timeout")
        return cls(
            connection_uri=data["connection_uri"],
            api_key=data.get("api_key"),
            timeout=10.0 if timeout is None else float(timeout),
            rid=data.get("rid"),
        )

    def _headers(self) -> dict[str, str]:
        headers = {"content-type": "application/json; charset=utf-8"}
        if self.api_key:
            headers["api-key"] = self.api_key
        if self.rid:
            headers["rid"] = self.rid
        return headers

    async def send_post_request(
        self, path: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._send("POST", path, json=body)

    async def send_get_request(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        return await self._send("GET", path, params=params)

    async def _send(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        url = f"{self.connection_uri}{path}"
        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, headers=self._headers(), **kwargs
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(
                        method, url, headers=self._headers(), **kwargs
                    )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Core returned {e.response.status_code} for {method} {path}")
            raise TransportFailureError(
                f"Core returned status {e.response.status_code}",
                details={
                    "path": path,
                    "status_code": e.response.status_code,
                    "body": e.response.text,
                },
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Core request {method} {path} failed: {e}")
            raise TransportFailureError(
                f"Core request failed: {e}", details={"path": path}
            ) from e
        except ValueError as e:
            logger.error(f"Core returned malformed JSON for {method} {path}")
            raise TransportFailureError(
                "Core returned malformed JSON", details={"path": path}
            ) from e

        if not isinstance(data, dict):
            raise TransportFailureError(
                "Core returned a non-object JSON body", details={"path": path}
            )
        return data
