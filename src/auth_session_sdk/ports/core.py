"""
Authentication Core Port.

Defines the interface for talking to the authentication core, the
external service of record that issues, verifies and rotates sessions.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class CoreQuerierPort(Protocol):
    """
    Port for request/response calls to the authentication core.

    Implementations:
    - HttpxCoreQuerier: HTTP(S) via httpx

    Calls are not retried; a failed call raises TransportFailureError and
    the caller decides what the user sees.
    """

    async def send_post_request(
        self, path: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        """
        POST a JSON body to a core endpoint.

        Args:
            path: Core API path, e.g. "/recipe/session/verify"
            body: JSON-serialisable request body

        Returns:
            The decoded JSON object; contains at least "status"

        Raises:
            TransportFailureError: Network error, non-2xx, or malformed JSON
        """
        ...

    async def send_get_request(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """GET a core endpoint. Same failure semantics as send_post_request."""
        ...
