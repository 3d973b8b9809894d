"""ActionKit API client.

Thin async wrapper over the project-scoped actions endpoint. The same URL
lists the catalog (GET) and runs an action (POST); both are authenticated
with a bearer credential supplied per request.
"""

from typing import Any, Dict, Optional

import httpx

from .config import get_settings
from .credentials import Credential
from .errors import FatalConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

USER_AGENT = "actionkit-app/1.0"


class ActionKitHTTPError(Exception):
    """Request to the ActionKit API returned a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ActionKitConnectionError(Exception):
    """Failed to reach the ActionKit API (connection error or timeout)."""
    pass


class ActionKitClient:
    """Async client for the ActionKit actions API.

    The client holds no per-request state, so one instance can serve
    concurrent invocations.

    Usage:
        async with ActionKitClient() as client:
            payload = await client.list_actions(credential)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        project_id: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API base URL (defaults to config)
            project_id: Paragon project ID (defaults to config)
            timeout: Request timeout in seconds (defaults to config)
        """
        settings = get_settings()

        self.base_url = (base_url or settings.actionkit_base_url).rstrip("/")
        self.project_id = project_id or settings.paragon_project_id
        self.timeout = timeout or settings.actionkit_timeout

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ActionKitClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def actions_path(self) -> str:
        return f"/projects/{self.project_id}/actions"

    async def _ensure_client(self) -> None:
        """Create HTTP client if not exists."""
        if not self.project_id:
            raise FatalConfigError("PARAGON_PROJECT_ID is not configured")
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": USER_AGENT,
                },
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        credential: Credential,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an authenticated request against the actions endpoint.

        Raises:
            ActionKitHTTPError: On a non-2xx response
            ActionKitConnectionError: If no response was received
        """
        await self._ensure_client()

        try:
            response = await self._client.request(
                method,
                self.actions_path,
                json=json_data,
                headers={"Authorization": credential.authorization_header},
            )
        except httpx.TimeoutException as e:
            raise ActionKitConnectionError(f"Request to ActionKit timed out: {e}") from e
        except httpx.RequestError as e:
            raise ActionKitConnectionError(f"Failed to connect to ActionKit: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ActionKitHTTPError(
                f"HTTP error; status: {response.status_code}",
                status_code=response.status_code,
            )

        return response

    async def list_actions(self, credential: Credential) -> Any:
        """Fetch the raw action catalog payload.

        Returns:
            Decoded JSON body

        Raises:
            ActionKitHTTPError, ActionKitConnectionError: On request failure
            ValueError: If the body is not JSON
        """
        response = await self._request("GET", credential)
        return response.json()

    async def perform_action(
        self,
        action_name: str,
        parameters: Dict[str, Any],
        credential: Credential,
    ) -> Any:
        """Run one action.

        Returns:
            Decoded JSON body, or the raw text when the body is not JSON

        Raises:
            ActionKitHTTPError, ActionKitConnectionError: On request failure
        """
        response = await self._request(
            "POST",
            credential,
            json_data={"action": action_name, "parameters": parameters},
        )
        try:
            return response.json()
        except ValueError:
            return response.text
