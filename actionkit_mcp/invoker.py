"""Remote execution of a single ActionKit action."""

from typing import Any, Dict, Optional

from .client import ActionKitClient, ActionKitConnectionError, ActionKitHTTPError
from .credentials import Credential
from .errors import RemoteRejectedError, TransportError
from .logging_config import ActionCallLogger, get_logger

logger = get_logger(__name__)


class ActionInvoker:
    """Runs actions through the ActionKit API.

    Stateless apart from the shared HTTP client, so concurrent invocations
    do not interfere.
    """

    def __init__(self, client: ActionKitClient):
        self.client = client

    async def invoke(
        self,
        action_name: str,
        parameters: Dict[str, Any],
        credential: Credential,
        integration: Optional[str] = None,
    ) -> Any:
        """Execute one action with concrete parameter values.

        Args:
            action_name: Remote action identifier
            parameters: Validated parameters, forwarded unchanged
            credential: Bearer credential for the request
            integration: Integration the action belongs to, for logging only

        Returns:
            Remote response body, passed through verbatim

        Raises:
            RemoteRejectedError: If the API answered with a non-2xx status
            TransportError: If the API could not be reached
        """
        call_log = ActionCallLogger(logger, action_name, integration)
        call_log.start(parameter_count=len(parameters))

        try:
            result = await self.client.perform_action(action_name, parameters, credential)
        except ActionKitHTTPError as e:
            call_log.failure(str(e), status_code=e.status_code)
            raise RemoteRejectedError(
                f"ActionKit rejected '{action_name}': {e}",
                status_code=e.status_code,
                action_name=action_name,
            ) from e
        except ActionKitConnectionError as e:
            call_log.failure(str(e))
            raise TransportError(
                f"Could not reach ActionKit for '{action_name}': {e}",
                action_name=action_name,
            ) from e

        call_log.success()
        return result
