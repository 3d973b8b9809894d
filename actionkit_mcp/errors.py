"""Exception hierarchy for the ActionKit MCP bridge.

Construction-time errors (FatalConfigError, FetchFailure, BuildFailure)
abort the process. InvocationFailure is scoped to a single tool call.
"""

from typing import Any, Optional


class ActionKitError(Exception):
    """Base class for all bridge errors."""
    pass


class FatalConfigError(ActionKitError):
    """Required configuration is missing or malformed (e.g. the signing key)."""
    pass


class FetchFailure(ActionKitError):
    """The action catalog could not be retrieved or parsed."""
    pass


class UnsupportedTypeError(ActionKitError):
    """A parameter declares a type kind the translator cannot express."""

    def __init__(self, action_name: str, property_name: str, kind: Any):
        super().__init__(
            f"Action '{action_name}' parameter '{property_name}' has unsupported type {kind!r}"
        )
        self.action_name = action_name
        self.property_name = property_name
        self.kind = kind


class BuildFailure(ActionKitError):
    """Tool set construction was aborted."""

    def __init__(self, message: str, action_name: Optional[str] = None):
        super().__init__(message)
        self.action_name = action_name


class InvocationFailure(ActionKitError):
    """A remote action call failed."""

    def __init__(self, message: str, action_name: Optional[str] = None):
        super().__init__(message)
        self.action_name = action_name


class RemoteRejectedError(InvocationFailure):
    """The ActionKit API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, action_name: Optional[str] = None):
        super().__init__(message, action_name=action_name)
        self.status_code = status_code


class TransportError(InvocationFailure):
    """The request never produced a response (connection error, timeout)."""
    pass
