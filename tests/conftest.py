from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

import pytest
import structlog

from myhome.domain.entities.node import NodeIdentity
from myhome.domain.gateways.persistence_gateway import (
    INodePersistenceGateway,
    MappingRowSource,
)

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class InMemoryGateway(INodePersistenceGateway):
    """Gateway backed by plain lists of dict rows."""

    def __init__(
        self,
        nodes: Sequence[Mapping[str, Any]] = (),
        status: Sequence[Mapping[str, Any]] = (),
    ) -> None:
        self.nodes = [dict(node) for node in nodes]
        self.status = [dict(row) for row in status]
        self.status_queries: List[int] = []

    def fetch_status_rows(self, node_id: int) -> List[MappingRowSource]:
        self.status_queries.append(node_id)
        return [
            MappingRowSource({"key": row["key"], "value": row["value"]})
            for row in self.status
            if row["node_id"] == node_id
        ]

    def fetch_node_rows(self) -> List[MappingRowSource]:
        return [MappingRowSource(node) for node in self.nodes]

    def fetch_node_row(self, node_id: int) -> Optional[MappingRowSource]:
        for node in self.nodes:
            if node.get("id") == node_id:
                return MappingRowSource(node)
        return None


class FailingGateway(INodePersistenceGateway):
    """Gateway whose status read fails, optionally after yielding some rows."""

    def __init__(
        self,
        error: Exception,
        rows_before_failure: Sequence[Mapping[str, str]] = (),
    ) -> None:
        self.error = error
        self.rows_before_failure = list(rows_before_failure)
        self.calls = 0

    def fetch_status_rows(self, node_id: int) -> Iterator[MappingRowSource]:
        self.calls += 1
        for row in self.rows_before_failure:
            yield MappingRowSource(row)
        raise self.error

    def fetch_node_rows(self) -> Iterable[MappingRowSource]:
        raise self.error

    def fetch_node_row(self, node_id: int) -> Optional[MappingRowSource]:
        raise self.error


class RecordingLogger:
    """Stand-in for a structlog logger that keeps every call."""

    def __init__(self) -> None:
        self.events: List[tuple[str, str, Dict[str, Any]]] = []

    def _record(self, level: str):
        def log(event: str, **kwargs: Any) -> None:
            self.events.append((level, event, kwargs))

        return log

    def __getattr__(self, level: str):
        return self._record(level)

    def names(self, level: str | None = None) -> List[str]:
        return [name for lvl, name, _ in self.events if level in (None, lvl)]


class FakeCursor:
    def __init__(
        self,
        documents: Sequence[Dict[str, Any]],
        sort_calls: List[tuple[str, int]] | None = None,
    ):
        self._documents = list(documents)
        self._sort_calls = sort_calls if sort_calls is not None else []

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._sort_calls.append((key, direction))
        self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._documents)


class FakeCollection:
    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.last_query: Dict[str, Any] | None = None
        self.last_projection: Dict[str, Any] | None = None
        self.created_indexes: List[tuple[Any, ...]] = []
        self.sort_calls: List[tuple[str, int]] = []

    def insert_many(self, documents: Iterable[Dict[str, Any]]) -> None:
        self.documents.extend(dict(doc) for doc in documents)

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        self.last_query = query
        for document in self.documents:
            if self._matches(document, query):
                return dict(document)
        return None

    def find(
        self, query: Dict[str, Any], projection: Dict[str, Any] | None = None
    ) -> FakeCursor:
        self.last_query = query
        self.last_projection = projection
        results = [
            self._project(doc, projection)
            for doc in self.documents
            if self._matches(doc, query)
        ]
        return FakeCursor(results, self.sort_calls)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _project(
        document: Dict[str, Any], projection: Dict[str, Any] | None
    ) -> Dict[str, Any]:
        if not projection:
            return dict(document)
        included = [key for key, flag in projection.items() if flag]
        return {key: document[key] for key in included if key in document}

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, value in query.items():
            if document.get(key) != value:
                return False
        return True


class FakeMongoDatabase:
    """Synchronous stand-in for ``MongoDatabase``."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        return self.get_collection(collection_name).find_one(query)

    def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        projection: Dict[str, Any] | None = None,
        sort_by: str | None = None,
        sort_direction: int = 1,
    ) -> List[Dict[str, Any]]:
        cursor = self.get_collection(collection_name).find(query, projection)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        return list(cursor)

    def create_indexes(self) -> None:  # pragma: no cover - stub for tests
        pass

    def close(self) -> None:
        self.closed = True


THERMOKON_ROW: Dict[str, Any] = {
    "id": 7,
    "category": "enocean",
    "manufacturer": "thermokon",
    "hardware_id": "0x001",
    "type": "temperature",
}


@pytest.fixture()
def thermokon_row() -> Dict[str, Any]:
    return dict(THERMOKON_ROW)


@pytest.fixture()
def sample_node() -> NodeIdentity:
    return NodeIdentity("EnOcean", "Thermokon", "0x001A", "Temperature")


@pytest.fixture()
def in_memory_gateway() -> InMemoryGateway:
    return InMemoryGateway(
        nodes=[
            THERMOKON_ROW,
            {
                "id": 8,
                "category": "ip-camera",
                "manufacturer": "generic",
                "hardware_id": "CAM-01",
                "type": None,
            },
        ],
        status=[
            {"node_id": 7, "key": "battery", "value": "92"},
            {"node_id": 7, "key": "temperature", "value": "21.5"},
            {"node_id": 8, "key": "stream", "value": "rtsp://cam-01/live"},
        ],
    )


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def recording_logger(monkeypatch) -> RecordingLogger:
    recorder = RecordingLogger()
    monkeypatch.setattr("myhome.domain.entities.node.logger", recorder)
    return recorder


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root, pymongo = logging.getLogger(), logging.getLogger("pymongo")
    handlers, level, pymongo_level = root.handlers[:], root.level, pymongo.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    pymongo.setLevel(pymongo_level)
    structlog.reset_defaults()
