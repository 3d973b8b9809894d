"""Action catalog models and retrieval.

The ActionKit catalog endpoint answers with:

    {"body": {"<integration>": [<action descriptor>, ...], ...}}

where each descriptor is an OpenAI-style function definition:

    {"type": "function",
     "function": {"name": "SLACK_SEND_MESSAGE",
                  "description": "...",
                  "parameters": {"type": "object",
                                 "properties": {"channel": {"type": "string"}},
                                 "required": ["channel"]}}}

The flat form ({"name", "description", "parameters"}) is accepted as well.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .client import ActionKitClient, ActionKitConnectionError, ActionKitHTTPError
from .credentials import Credential
from .errors import FetchFailure
from .logging_config import get_logger

logger = get_logger(__name__)


class PropertySpec(BaseModel):
    """One named parameter of an action."""

    model_config = ConfigDict(extra="allow")

    type: Any = Field(default=None, description="Declared type kind, checked on translation")
    description: Optional[str] = Field(default=None, description="Human-readable description")


class ParameterSpec(BaseModel):
    """JSON-schema-like parameter block of an action."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="object")
    properties: Dict[str, PropertySpec] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)
    additionalProperties: Optional[bool] = None


class ActionDescriptor(BaseModel):
    """A remotely executable action."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    description: str = Field(default="")
    parameters: ParameterSpec = Field(default_factory=ParameterSpec)

    @model_validator(mode="before")
    @classmethod
    def unwrap_function(cls, data: Any) -> Any:
        """Accept the {"type": "function", "function": {...}} envelope."""
        if isinstance(data, dict) and isinstance(data.get("function"), dict):
            return data["function"]
        return data

    @field_validator("description", mode="before")
    @classmethod
    def null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def required(self) -> List[str]:
        return self.parameters.required


@dataclass(frozen=True)
class Catalog:
    """Integration name -> ordered action descriptors."""
    integrations: Dict[str, List[ActionDescriptor]] = field(default_factory=dict)

    def descriptors(self) -> Iterator[Tuple[str, ActionDescriptor]]:
        """Yield (integration, descriptor) pairs in catalog order."""
        for integration, actions in self.integrations.items():
            for action in actions:
                yield integration, action

    def __len__(self) -> int:
        return sum(len(actions) for actions in self.integrations.values())


def parse_catalog(payload: Any) -> Catalog:
    """Parse a catalog endpoint response body.

    Args:
        payload: Decoded JSON body

    Returns:
        Parsed catalog

    Raises:
        ValueError: If the payload or any descriptor is structurally malformed
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("body"), dict):
        raise ValueError("Catalog response has no 'body' mapping")

    integrations: Dict[str, List[ActionDescriptor]] = {}
    for integration, actions in payload["body"].items():
        if not isinstance(actions, list):
            raise ValueError(f"Integration '{integration}' does not hold a list of actions")
        try:
            integrations[integration] = [
                ActionDescriptor.model_validate(action) for action in actions
            ]
        except ValidationError as e:
            raise ValueError(f"Integration '{integration}' has a malformed action: {e}") from e

    return Catalog(integrations=integrations)


class CatalogFetcher:
    """Retrieves the action catalog for one credential.

    All failure modes collapse to FetchFailure; a partial catalog is never
    returned.
    """

    def __init__(self, client: ActionKitClient):
        self.client = client

    async def fetch(self, credential: Credential) -> Catalog:
        """Fetch and parse the catalog.

        Raises:
            FetchFailure: On any HTTP, transport or parsing error
        """
        try:
            payload = await self.client.list_actions(credential)
            catalog = parse_catalog(payload)
        except (ActionKitHTTPError, ActionKitConnectionError, ValueError) as e:
            logger.error(f"Could not fetch ActionKit catalog: {e}")
            raise FetchFailure(f"Could not fetch ActionKit catalog: {e}") from e

        logger.info(
            "Fetched ActionKit catalog",
            extra={"integrations": len(catalog.integrations), "actions": len(catalog)}
        )
        return catalog
