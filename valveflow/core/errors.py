"""
Error hierarchy for the valve pressure pipeline.

Every failure is fatal for the run: there are no retries and no partial
results.
"""

from __future__ import annotations

from typing import Any, Mapping


class ValveflowError(Exception):
    """Base exception for valveflow failures."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class ParseError(ValveflowError):
    """A valve description line could not be parsed."""


class GraphConsistencyError(ValveflowError):
    """The valve graph violates a structural invariant."""


class MalformedRecordError(GraphConsistencyError):
    """A raw valve record handed to the GraphBuilder is invalid."""


class PathNotFoundError(ValveflowError):
    """Two retained valves are not connected by any tunnel path."""


__all__ = [
    "ValveflowError",
    "ParseError",
    "GraphConsistencyError",
    "MalformedRecordError",
    "PathNotFoundError",
]
