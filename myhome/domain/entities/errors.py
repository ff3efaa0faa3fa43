"""
Domain Errors

This module defines custom error classes for node-related exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidIdentityError(DomainError, ValueError):
    """Raised when a category, manufacturer or hardware id is empty or contains
    the descriptor delimiter."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Invalid node {field} {value!r}: {reason}"
        super().__init__(message, {"field": field, "value": value})
        self.field = field


class SourceReadError(DomainError):
    """Raised when a row source cannot supply a requested field."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class PersistentKeyAlreadyAssignedError(DomainError):
    """Raised when a node that already has a persistent key gets a different one."""

    def __init__(self, current: int, requested: int):
        message = (
            f"Persistent key already assigned ({current}), refusing {requested}"
        )
        super().__init__(message, {"current": current, "requested": requested})


class NodeNotFoundError(DomainError):
    """Raised when no stored node matches a persistent key."""

    def __init__(self, node_id: int, details: Optional[Dict[str, Any]] = None):
        message = f"Node with ID {node_id} not found"
        super().__init__(message, details)


class StatusRefreshError(DomainError):
    """Describes a failed status refresh.

    Carried inside an ``Error`` result; ``NodeIdentity.load_status`` never
    raises it.
    """

    def __init__(
        self,
        descriptor: str,
        node_id: int,
        cause: BaseException,
    ):
        message = f"Failed to refresh status of {descriptor} (id={node_id}): {cause}"
        super().__init__(
            message,
            {
                "descriptor": descriptor,
                "node_id": node_id,
                "error_type": type(cause).__name__,
            },
        )
        self.cause = cause
