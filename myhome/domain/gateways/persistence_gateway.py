"""
Persistence Gateway Interface - Domain Layer

Narrow read contracts the node entity consumes from the store. Concrete
SQL and MongoDB implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Protocol, runtime_checkable

from myhome.domain.entities.errors import SourceReadError


@runtime_checkable
class IRowSource(Protocol):
    """A single row exposing named field accessors."""

    def get_string(self, name: str) -> Optional[str]:
        """Return the string value of column ``name`` (``None`` for NULL)."""
        ...

    def get_int(self, name: str) -> int:
        """Return the integer value of column ``name``."""
        ...


class MappingRowSource:
    """``IRowSource`` over an in-memory mapping such as a MongoDB document."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def _value(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError as e:
            raise SourceReadError(
                f"Row has no field '{name}'", {"field": name}
            ) from e

    def get_string(self, name: str) -> Optional[str]:
        value = self._value(name)
        return None if value is None else str(value)

    def get_int(self, name: str) -> int:
        value = self._value(name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise SourceReadError(
                f"Field '{name}' is not an integer: {value!r}", {"field": name}
            )
        return value

    def __repr__(self) -> str:
        return f"MappingRowSource({dict(self._data)!r})"


class INodePersistenceGateway(ABC):
    """Interface for the store holding nodes and their status rows."""

    @abstractmethod
    def fetch_status_rows(self, node_id: int) -> Iterable[IRowSource]:
        """
        Read the status rows of a node.

        Equivalent to ``SELECT key, value FROM node_status WHERE node_id = ?``.

        Args:
            node_id: Persistent key of the node (may be the unassigned sentinel)

        Returns:
            Rows exposing ``key`` and ``value`` string fields

        Raises:
            Exception: Any driver failure, left to the caller to handle
        """
        pass

    @abstractmethod
    def fetch_node_rows(self) -> Iterable[IRowSource]:
        """Read every node row: id, category, manufacturer, hardware_id, type."""
        pass

    @abstractmethod
    def fetch_node_row(self, node_id: int) -> Optional[IRowSource]:
        """Read a single node row, ``None`` when it does not exist."""
        pass
