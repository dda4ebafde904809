"""
HTTP client for the configuration server.

The server exposes collections as JSON: ``GET /<collection>`` lists the
stored objects (either a name -> URL object or a list of names) and
``GET /<collection>/<name>`` returns a single object.
"""

import logging
from typing import Any, Dict, Optional, Set

import httpx

from inspector.exceptions import RemoteError

logger = logging.getLogger(__name__)


class RemoteClient:
    """Synchronous, thread-safe read-only client for the configuration server.

    Usage:
        with RemoteClient("http://localhost:8889") as client:
            names = client.list_names("roles")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Server URL
            timeout: Per-request timeout in seconds
            verify_ssl: Verify TLS certificates
            headers: Extra request headers
            transport: Optional transport, used to stub the server in tests
        """
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Accept": "application/json",
            "User-Agent": "config-inspector/0.1",
        }
        if headers:
            self.headers.update(headers)

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            verify=verify_ssl,
            headers=self.headers,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str) -> Optional[Any]:
        """
        GET a JSON document.

        Returns:
            Decoded JSON, or None on 404

        Raises:
            RemoteError: On connection errors, timeouts, other HTTP errors
                and non-JSON bodies
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self._client.get(f"/{path.lstrip('/')}")
        except httpx.TimeoutException as e:
            raise RemoteError(url, f"timed out: {e}")
        except httpx.HTTPError as e:
            raise RemoteError(url, f"connection failed: {e}")

        if response.status_code == 404:
            logger.debug(f"{url} not found on server")
            return None
        if response.status_code >= 400:
            raise RemoteError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(url, f"invalid JSON: {e}", status_code=response.status_code)

    def list_names(self, path: str) -> Set[str]:
        """Names of every object in a collection (empty if it does not exist)."""
        data = self._get(path)
        if data is None:
            return set()
        if isinstance(data, dict):
            return {str(key) for key in data.keys()}
        if isinstance(data, list):
            return {str(entry) for entry in data}
        raise RemoteError(f"{self.base_url}/{path}", f"unexpected listing type {type(data).__name__}")

    def get_object(self, path: str) -> Optional[Dict[str, Any]]:
        """A single object, or None when it is not stored on the server."""
        data = self._get(path)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise RemoteError(f"{self.base_url}/{path}", f"expected an object, got {type(data).__name__}")
        return data
