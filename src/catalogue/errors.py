from __future__ import annotations

from typing import Any, Dict


class CatalogueError(Exception):
    """Base class for failures surfaced by the catalogue read path."""

    status_code: int = 500
    error_type: str = "INTERNAL_ERROR"
    public_message: str = "internal error"

    def __init__(
        self,
        message: str | None = None,
        *,
        error_type: str | None = None,
        context: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or self.public_message)
        if message is not None:
            self.public_message = message
        if error_type is not None:
            self.error_type = error_type
        self.context: Dict[str, Any] = context or {}


class DependencyUnavailable(CatalogueError):
    """The document store has not been connected yet."""

    error_type = "DEPENDENCY_DOWN"
    public_message = "database not available"

    def __init__(self, dependency: str = "mongodb") -> None:
        super().__init__(context={"dependency": dependency})
        self.dependency = dependency


class NotFound(CatalogueError):
    status_code = 404
    error_type = "NOT_FOUND"
    public_message = "not found"


class QueryFailed(CatalogueError):
    """A store query raised; the cause is chained and only ever logged."""

    error_type = "QUERY_FAILED"
    public_message = "internal error"

    def __init__(self, error_type: str, context: Dict[str, Any] | None = None) -> None:
        super().__init__(error_type=error_type, context=context)


class ConnectError(Exception):
    """A single connection attempt to the document store failed."""

    def __init__(self, target: str, cause: BaseException) -> None:
        super().__init__(f"could not connect to {target}: {cause}")
        self.target = target
        self.cause = cause


__all__ = [
    "CatalogueError",
    "ConnectError",
    "DependencyUnavailable",
    "NotFound",
    "QueryFailed",
]
