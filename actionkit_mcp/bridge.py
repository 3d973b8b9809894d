"""Bridge from the ActionKit catalog to MCP tools.

Every action descriptor becomes one tool: its name and description are
carried over, its parameter spec is translated into a ToolSchema, and its
handler forwards validated arguments to the ActionInvoker.
"""

from enum import Enum
from typing import Any, Callable, Dict

from .catalog import ActionDescriptor, Catalog, CatalogFetcher
from .credentials import Credential
from .errors import BuildFailure, UnsupportedTypeError
from .invoker import ActionInvoker
from .logging_config import get_logger
from .schema import StringLengthMode, translate
from .tool_registry import ToolRegistry

logger = get_logger(__name__)

CredentialProvider = Callable[[], Credential]


class FailurePolicy(str, Enum):
    """What to do when one action cannot be bridged."""
    ABORT = "abort"  # no tools at all
    SKIP = "skip"  # log and drop that action


def static_credential(credential: Credential) -> CredentialProvider:
    """Provider that always returns the same credential."""
    def provide() -> Credential:
        return credential
    return provide


class ActionBridge:
    """Builds a ToolRegistry from a catalog.

    Usage:
        bridge = ActionBridge(ActionInvoker(client))
        registry = bridge.build(catalog, credential)
    """

    def __init__(
        self,
        invoker: ActionInvoker,
        failure_policy: FailurePolicy = FailurePolicy.ABORT,
        string_length_mode: StringLengthMode = StringLengthMode.MAX,
    ):
        self.invoker = invoker
        self.failure_policy = FailurePolicy(failure_policy)
        self.string_length_mode = StringLengthMode(string_length_mode)

    def build(self, catalog: Catalog, credential: Credential) -> ToolRegistry:
        """Register one tool per action, in catalog order.

        Args:
            catalog: Parsed action catalog
            credential: Credential every handler will use

        Returns:
            Populated registry

        Raises:
            BuildFailure: Under ABORT, if any action has an unsupported
                parameter type, requires an undeclared parameter, or has a
                duplicate name
        """
        return self.build_with_provider(catalog, static_credential(credential))

    def build_with_provider(
        self,
        catalog: Catalog,
        credential_provider: CredentialProvider,
    ) -> ToolRegistry:
        """Like build(), but resolve the credential on every call."""
        registry = ToolRegistry()
        skipped = 0

        for integration, descriptor in catalog.descriptors():
            try:
                self._register(registry, integration, descriptor, credential_provider)
            except (UnsupportedTypeError, ValueError) as e:
                if self.failure_policy == FailurePolicy.ABORT:
                    logger.error(f"Could not create all ActionKit tools: {e}")
                    raise BuildFailure(
                        f"Could not create all ActionKit tools: {e}",
                        action_name=descriptor.name,
                    ) from e
                skipped += 1
                logger.warning(
                    f"Skipping ActionKit action: {e}",
                    extra={"action": descriptor.name, "integration": integration}
                )

        logger.info(
            "Registered ActionKit tools",
            extra={"tools": len(registry), "skipped": skipped}
        )
        return registry

    def _register(
        self,
        registry: ToolRegistry,
        integration: str,
        descriptor: ActionDescriptor,
        credential_provider: CredentialProvider,
    ) -> None:
        schema = translate(descriptor, self.string_length_mode)
        registry.register(
            name=descriptor.name,
            description=descriptor.description,
            schema=schema,
            handler=self._make_handler(descriptor.name, integration, credential_provider),
            tags=[integration],
        )

    def _make_handler(
        self,
        action_name: str,
        integration: str,
        credential_provider: CredentialProvider,
    ) -> Callable:
        invoker = self.invoker

        async def handler(parameters: Dict[str, Any]) -> Any:
            return await invoker.invoke(
                action_name, parameters, credential_provider(), integration=integration
            )

        handler.__name__ = f"invoke_{action_name}"
        return handler


async def hydrate_tools(
    fetcher: CatalogFetcher,
    bridge: ActionBridge,
    credential: Credential,
) -> ToolRegistry:
    """Fetch the catalog and build the tool registry.

    Raises:
        FetchFailure: If the catalog is unavailable; nothing is registered
        BuildFailure: If the bridge aborts
    """
    catalog = await fetcher.fetch(credential)
    return bridge.build(catalog, credential)
