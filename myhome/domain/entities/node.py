"""
Domain Entities - Node

A node is an external component (sensor, actuator, camera, simulator...)
known to the platform. It is identified by its category, manufacturer and
hardware id, joined by ``:`` into a canonical descriptor such as
``enocean:thermokon:0x001``.

Examples for category: "enocean", "ip-camera", "cellphone", "email".
Examples for manufacturer: "generic", "simulator", "userdefined", "thermokon".
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Optional

from myhome.domain.entities.errors import (
    InvalidIdentityError,
    PersistentKeyAlreadyAssignedError,
    SourceReadError,
    StatusRefreshError,
)
from myhome.domain.entities.status_map import StatusMap
from myhome.shared.logging import get_logger
from myhome.shared.results import Result, ResultHandler

if TYPE_CHECKING:
    from myhome.domain.gateways.persistence_gateway import (
        INodePersistenceGateway,
        IRowSource,
    )

logger = get_logger(__name__)

DESCRIPTOR_DELIMITER = ":"
UNASSIGNED_KEY = -1
DEFAULT_NODE_TYPE = "unknown"
# Used by convention when the manufacturer of a node is not known.
GENERIC_MANUFACTURER = "generic"

_UNSET: Any = object()


def _validate_part(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidIdentityError(field, value, "must be a string")
    if not value:
        raise InvalidIdentityError(field, value, "must not be empty")
    if DESCRIPTOR_DELIMITER in value:
        raise InvalidIdentityError(
            field, value, f"must not contain '{DESCRIPTOR_DELIMITER}'"
        )
    return value


def _normalize_type(value: Optional[str]) -> str:
    return "" if value is None else value.lower()


def _read(row: "IRowSource", accessor: str, name: str) -> Any:
    try:
        return getattr(row, accessor)(name)
    except SourceReadError:
        raise
    except Exception as e:
        raise SourceReadError(
            f"Failed to read '{name}' from row: {e}", {"field": name}
        ) from e


class NodeIdentity:
    """Canonical identity of a node plus its status map.

    Category and manufacturer are stored lower case, the hardware id keeps
    its case. None of the three may be empty or contain ``:``. Two nodes are
    equal when their descriptors are equal; ``type``, ``persistent_key`` and
    ``status`` do not take part in the comparison.
    """

    __slots__ = (
        "_category",
        "_manufacturer",
        "_hardware_id",
        "_type",
        "_persistent_key",
        "_key_lock",
        "_status",
    )

    def __init__(
        self,
        category: str,
        manufacturer: str,
        hardware_id: str,
        type: Optional[str] = _UNSET,
    ):
        """
        Args:
            category: Node category, e.g. "enocean"
            manufacturer: Manufacturer, e.g. "thermokon" or "generic"
            hardware_id: Hardware identifier, case sensitive
            type: Optional classification tag; ``None`` clears it to ""

        Raises:
            InvalidIdentityError: If a part is empty or contains ':'
        """
        self._category = _validate_part("category", category).lower()
        self._manufacturer = _validate_part("manufacturer", manufacturer).lower()
        self._hardware_id = _validate_part("hardware_id", hardware_id)
        self._type = DEFAULT_NODE_TYPE
        self._persistent_key = UNASSIGNED_KEY
        self._key_lock = threading.Lock()
        self._status = StatusMap()
        if type is not _UNSET:
            self.type = type

    @classmethod
    def from_row(cls, row: "IRowSource") -> "NodeIdentity":
        """
        Hydrate a node from a stored row.

        The row must expose the string fields ``category``, ``manufacturer``,
        ``hardware_id`` and ``type`` and the integer field ``id``.

        Raises:
            InvalidIdentityError: If the stored identity is not valid
            SourceReadError: If the row cannot supply a field
        """
        node = cls(
            _read(row, "get_string", "category"),
            _read(row, "get_string", "manufacturer"),
            _read(row, "get_string", "hardware_id"),
        )
        node.type = _read(row, "get_string", "type")
        node.assign_persistent_key(_read(row, "get_int", "id"))
        return node

    @classmethod
    def from_descriptor(cls, descriptor: str) -> "NodeIdentity":
        """Build a node from a descriptor as returned by ``to_descriptor``."""
        if not isinstance(descriptor, str):
            raise InvalidIdentityError("descriptor", descriptor, "must be a string")
        parts = descriptor.split(DESCRIPTOR_DELIMITER)
        if len(parts) != 3:
            raise InvalidIdentityError(
                "descriptor", descriptor, "must have exactly three parts"
            )
        return cls(*parts)

    @property
    def category(self) -> str:
        return self._category

    @property
    def manufacturer(self) -> str:
        return self._manufacturer

    @property
    def hardware_id(self) -> str:
        return self._hardware_id

    @property
    def type(self) -> str:
        return self._type

    @type.setter
    def type(self, value: Optional[str]) -> None:
        self._type = _normalize_type(value)

    @property
    def persistent_key(self) -> int:
        with self._key_lock:
            return self._persistent_key

    @property
    def is_persisted(self) -> bool:
        return self.persistent_key != UNASSIGNED_KEY

    def assign_persistent_key(self, key: int) -> None:
        """Record the key given by the store. Only the first key sticks."""
        with self._key_lock:
            if self._persistent_key not in (UNASSIGNED_KEY, key):
                raise PersistentKeyAlreadyAssignedError(self._persistent_key, key)
            self._persistent_key = key

    @property
    def status(self) -> StatusMap:
        return self._status

    def to_descriptor(self) -> str:
        return DESCRIPTOR_DELIMITER.join(
            (self._category, self._manufacturer, self._hardware_id)
        )

    def refresh_status(
        self, gateway: "INodePersistenceGateway"
    ) -> Result[int, StatusRefreshError]:
        """
        Merge the stored status rows into ``status``.

        Rows are applied one by one, so a failure halfway leaves the rows
        read so far in place. Rows with a NULL key or value are skipped. The
        query is issued even if the node has no persistent key yet.

        Returns:
            ``Success`` with the number of rows applied, or ``Error`` wrapping
            a ``StatusRefreshError``. Never raises.
        """
        node_id = self.persistent_key
        applied = 0
        try:
            for row in gateway.fetch_status_rows(node_id):
                key, value = row.get_string("key"), row.get_string("value")
                if key is None or value is None:
                    logger.debug(
                        "node.status.null_value_skipped",
                        descriptor=self.to_descriptor(),
                        node_id=node_id,
                        key=key,
                    )
                    continue
                self._status.put(key, value)
                applied += 1
        except Exception as e:
            return ResultHandler.fail(
                StatusRefreshError(self.to_descriptor(), node_id, e)
            )
        return ResultHandler.ok(applied)

    def load_status(self, gateway: "INodePersistenceGateway") -> None:
        """Best-effort status refresh: failures are logged, never raised."""
        result = self.refresh_status(gateway)
        if ResultHandler.is_error(result):
            error = result.error
            logger.warning(
                "node.status.refresh_failed",
                descriptor=error.details["descriptor"],
                node_id=error.details["node_id"],
                error_type=error.details["error_type"],
                error=str(error.cause),
                exc_info=error.cause,
            )
            return
        logger.debug(
            "node.status.refreshed",
            descriptor=self.to_descriptor(),
            node_id=self.persistent_key,
            rows=result.value,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeIdentity):
            return NotImplemented
        return self.to_descriptor() == other.to_descriptor()

    def __hash__(self) -> int:
        return hash(self.to_descriptor())

    def __str__(self) -> str:
        return self.to_descriptor()

    def __repr__(self) -> str:
        return (
            f"NodeIdentity({self.to_descriptor()!r}, type={self._type!r}, "
            f"persistent_key={self.persistent_key})"
        )
