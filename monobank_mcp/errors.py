"""Typed failures raised by the tool dispatcher and the Monobank client."""

from __future__ import annotations

from collections.abc import Sequence


class MonobankToolError(RuntimeError):
    """Base class for every failure a tool invocation can end with."""


class ValidationError(MonobankToolError):
    """Raised when tool arguments do not match the declared schema."""

    def __init__(self, message: str, *, fields: Sequence[str]) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class UpstreamError(MonobankToolError):
    """Raised when the Monobank API answers with a non-success response."""

    def __init__(self, message: str, *, status_code: int, body: str, endpoint: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint


class TransportError(MonobankToolError):
    """Raised when the outbound request fails before a response arrives."""

    def __init__(self, message: str, *, endpoint: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class UnknownOperationError(MonobankToolError):
    """Raised when a tool name is not part of the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name
