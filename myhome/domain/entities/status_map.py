"""Thread-safe key/value status of a node."""

from __future__ import annotations

import threading
from collections.abc import MutableMapping
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

StatusItems = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _check(key: object, value: object) -> None:
    if not isinstance(key, str):
        raise TypeError(f"status keys must be str, got {type(key).__name__}")
    if not isinstance(value, str):
        raise TypeError(f"status values must be str, got {type(value).__name__}")


class StatusMap(MutableMapping):
    """Mapping of status keys to string values guarded by an internal lock.

    Callers never need to lock around reads or writes. Iteration walks a
    snapshot of the keys taken under the lock, so writers running on other
    threads do not invalidate it.
    """

    def __init__(self, initial: Optional[StatusItems] = None) -> None:
        self._lock = threading.RLock()
        self._data: Dict[str, str] = {}
        if initial:
            self.merge(initial)

    def __getitem__(self, key: str) -> str:
        with self._lock:
            return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        _check(key, value)
        with self._lock:
            self._data[key] = value

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self._data[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            keys = list(self._data)
        return iter(keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StatusMap):
            return self.snapshot() == other.snapshot()
        if isinstance(other, Mapping):
            return self.snapshot() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StatusMap({self.snapshot()!r})"

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite a single entry."""
        self[key] = value

    def merge(self, items: StatusItems) -> None:
        """Insert or overwrite several entries in one locked step."""
        pairs = list(items.items() if isinstance(items, Mapping) else items)
        for key, value in pairs:
            _check(key, value)
        with self._lock:
            self._data.update(pairs)

    def snapshot(self) -> Dict[str, str]:
        """Return a plain dict copy of the current entries."""
        with self._lock:
            return dict(self._data)
