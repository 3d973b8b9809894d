"""Translation of action parameter specs into validated input schemas.

Each action descriptor yields a ToolSchema: a mapping of parameter name to
FieldRule plus a pydantic model, generated at runtime, that enforces those
rules on tool arguments.

Type kinds map as follows:

    string, object -> str, limited to 255 characters
    boolean        -> bool
    array          -> list of str

Object-typed parameters travel over the string channel; they are not
structurally validated. Every other kind is rejected with
UnsupportedTypeError. Optional parameters accept omission and explicit null.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, create_model

from .catalog import ActionDescriptor
from .errors import UnsupportedTypeError

STRING_LENGTH = 255


class PropertyKind(str, Enum):
    """Closed set of parameter type kinds found in the catalog."""
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class StringLengthMode(str, Enum):
    """How STRING_LENGTH constrains string and object parameters.

    MAX accepts up to STRING_LENGTH characters. EXACT requires exactly
    STRING_LENGTH characters, as the upstream ActionKit schemas did.
    """
    MAX = "max"
    EXACT = "exact"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one parameter."""
    name: str
    kind: PropertyKind
    required: bool
    description: Optional[str] = None


@dataclass(frozen=True)
class ToolSchema:
    """Validated-input contract for one action."""
    action_name: str
    rules: Mapping[str, FieldRule]
    model: Type[BaseModel]

    def validate(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Validate tool arguments.

        Args:
            arguments: Raw arguments from the caller

        Returns:
            The supplied parameters keyed by their original names. Keys the
            caller omitted stay omitted; unknown keys are dropped.

        Raises:
            pydantic.ValidationError: If any rule is violated
        """
        instance = self.model.model_validate(arguments or {})
        return instance.model_dump(by_alias=True, exclude_unset=True)

    def json_schema(self) -> Dict[str, Any]:
        """JSON Schema advertised to MCP clients."""
        return self.model.model_json_schema(by_alias=True)

    @property
    def required(self) -> List[str]:
        return [rule.name for rule in self.rules.values() if rule.required]


def _kind_of(descriptor: ActionDescriptor, name: str, declared: Any) -> PropertyKind:
    if not isinstance(declared, str):
        raise UnsupportedTypeError(descriptor.name, name, declared)
    try:
        return PropertyKind(declared)
    except ValueError:
        raise UnsupportedTypeError(descriptor.name, name, declared) from None


def _base_type(kind: PropertyKind, length_mode: StringLengthMode) -> Any:
    if kind in (PropertyKind.STRING, PropertyKind.OBJECT):
        if length_mode == StringLengthMode.EXACT:
            return Annotated[StrictStr, Field(min_length=STRING_LENGTH, max_length=STRING_LENGTH)]
        return Annotated[StrictStr, Field(max_length=STRING_LENGTH)]
    if kind == PropertyKind.BOOLEAN:
        return StrictBool
    return List[StrictStr]


def translate(
    descriptor: ActionDescriptor,
    string_length_mode: StringLengthMode = StringLengthMode.MAX,
) -> ToolSchema:
    """Derive the input schema for one action.

    Args:
        descriptor: Action to translate
        string_length_mode: How the 255-character limit applies

    Returns:
        Immutable ToolSchema

    Raises:
        UnsupportedTypeError: If a parameter has a kind outside PropertyKind
        ValueError: If required names a parameter that is not declared
    """
    string_length_mode = StringLengthMode(string_length_mode)
    required = set(descriptor.parameters.required)
    unknown = [name for name in descriptor.parameters.required
               if name not in descriptor.parameters.properties]
    if unknown:
        raise ValueError(
            f"Action '{descriptor.name}' requires unknown parameters: {', '.join(unknown)}"
        )

    rules: Dict[str, FieldRule] = {}
    fields: Dict[str, Tuple[Any, Any]] = {}

    for index, (name, prop) in enumerate(descriptor.parameters.properties.items()):
        kind = _kind_of(descriptor, name, prop.type)
        rule = FieldRule(
            name=name,
            kind=kind,
            required=name in required,
            description=prop.description,
        )
        rules[name] = rule

        # Parameter names are arbitrary strings; keep them as aliases of
        # positional field names so they never collide with BaseModel attributes.
        annotation = _base_type(kind, string_length_mode)
        if rule.required:
            fields[f"param_{index}"] = (
                annotation,
                Field(..., alias=name, description=prop.description),
            )
        else:
            fields[f"param_{index}"] = (
                Optional[annotation],
                Field(default=None, alias=name, description=prop.description),
            )

    model = create_model(
        f"{descriptor.name}_input",
        __config__=ConfigDict(extra="ignore", populate_by_name=False),
        **fields,
    )
    return ToolSchema(action_name=descriptor.name, rules=MappingProxyType(rules), model=model)
