"""SQL implementation of the node persistence gateway over any DB-API 2.0 connection."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Sequence

from myhome.domain.entities.errors import SourceReadError
from myhome.domain.gateways.persistence_gateway import INodePersistenceGateway
from myhome.shared import get_logger

logger = get_logger(__name__)

_PLACEHOLDERS: Dict[str, str] = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%(node_id)s",
    "numeric": ":1",
    "named": ":node_id",
}

NODE_COLUMNS = "id, category, manufacturer, hardware_id, type"


class SqlRowSource:
    """Adapts a cursor row and its column description to ``IRowSource``."""

    def __init__(self, columns: Sequence[str], values: Sequence[Any]):
        self._index = {name.lower(): i for i, name in enumerate(columns)}
        self._values = tuple(values)

    @classmethod
    def from_cursor(cls, cursor: Any) -> List["SqlRowSource"]:
        columns = [column[0] for column in cursor.description or ()]
        return [cls(columns, row) for row in cursor.fetchall()]

    def _value(self, name: str) -> Any:
        try:
            return self._values[self._index[name.lower()]]
        except (KeyError, IndexError) as e:
            raise SourceReadError(
                f"Column '{name}' not found in result set", {"column": name}
            ) from e

    def get_string(self, name: str) -> Optional[str]:
        value = self._value(name)
        return None if value is None else str(value)

    def get_int(self, name: str) -> int:
        value = self._value(name)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise SourceReadError(
                f"Column '{name}' is not an integer: {value!r}", {"column": name}
            ) from e


class SqlPersistenceGateway(INodePersistenceGateway):
    """Reads nodes and node status rows through a DB-API connection."""

    def __init__(
        self,
        connection: Any,
        paramstyle: str = "qmark",
        lock: Optional[threading.RLock] = None,
    ):
        """
        Args:
            connection: Live DB-API 2.0 connection (sqlite3, psycopg, ...)
            paramstyle: Placeholder style of the driver, see PEP 249
            lock: Lock serializing cursor use, shared with the connection owner
        """
        if paramstyle not in _PLACEHOLDERS:
            raise ValueError(f"Unsupported paramstyle: {paramstyle}")
        self.connection = connection
        self.paramstyle = paramstyle
        self._lock = lock or threading.RLock()

    def _params(self, node_id: int) -> Any:
        if self.paramstyle in ("pyformat", "named"):
            return {"node_id": node_id}
        return (node_id,)

    def _query(self, sql: str, params: Any = ()) -> List[SqlRowSource]:
        with self._lock:
            cursor = self.connection.cursor()
            try:
                cursor.execute(sql, params)
                return SqlRowSource.from_cursor(cursor)
            finally:
                cursor.close()

    def fetch_status_rows(self, node_id: int) -> List[SqlRowSource]:
        placeholder = _PLACEHOLDERS[self.paramstyle]
        sql = f'SELECT "key", value FROM node_status WHERE node_id = {placeholder}'
        logger.debug("sql.node_status.query", node_id=node_id)
        return self._query(sql, self._params(node_id))

    def fetch_node_rows(self) -> List[SqlRowSource]:
        logger.debug("sql.nodes.query")
        return self._query(f"SELECT {NODE_COLUMNS} FROM node ORDER BY id")

    def fetch_node_row(self, node_id: int) -> Optional[SqlRowSource]:
        placeholder = _PLACEHOLDERS[self.paramstyle]
        rows = self._query(
            f"SELECT {NODE_COLUMNS} FROM node WHERE id = {placeholder}",
            self._params(node_id),
        )
        return rows[0] if rows else None
