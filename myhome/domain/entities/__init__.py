"""
Domain Entities Package

This package contains the node entity, its status map and the domain errors.
"""

from .errors import (
    DomainError,
    InvalidIdentityError,
    NodeNotFoundError,
    PersistentKeyAlreadyAssignedError,
    SourceReadError,
    StatusRefreshError,
)
from .node import (
    DEFAULT_NODE_TYPE,
    DESCRIPTOR_DELIMITER,
    GENERIC_MANUFACTURER,
    UNASSIGNED_KEY,
    NodeIdentity,
)
from .status_map import StatusMap

__all__ = [
    "NodeIdentity",
    "StatusMap",
    "DEFAULT_NODE_TYPE",
    "DESCRIPTOR_DELIMITER",
    "GENERIC_MANUFACTURER",
    "UNASSIGNED_KEY",
    "DomainError",
    "InvalidIdentityError",
    "SourceReadError",
    "PersistentKeyAlreadyAssignedError",
    "NodeNotFoundError",
    "StatusRefreshError",
]
