from __future__ import annotations

from typing import Dict

import pytest
from pymongo import ASCENDING, DESCENDING

from myhome.infrastructure.database.mongo_database import (
    NODE_STATUS_COLLECTION,
    NODES_COLLECTION,
    MongoDatabase,
)
from tests.conftest import FakeCollection


class _StubMongoClient:
    def __init__(self, uri: str) -> None:
        self.uri = uri
        self.databases: Dict[str, _StubDatabase] = {}
        self.closed = False

    def __getitem__(self, name: str) -> "_StubDatabase":
        return self.databases.setdefault(name, _StubDatabase(name))

    def close(self) -> None:
        self.closed = True


class _StubDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture(autouse=True)
def patch_mongo_client(monkeypatch) -> None:
    monkeypatch.setattr(
        "myhome.infrastructure.database.mongo_database.MongoClient",
        _StubMongoClient,
    )


def test_client_uses_configured_database() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "myhome")

    assert database.client.uri == "mongodb://localhost:27017"
    assert database.db.name == "myhome"
    assert database.get_collection("nodes") is database.db["nodes"]


def test_find_one_returns_matching_document() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "myhome")
    database.get_collection(NODES_COLLECTION).insert_many(
        [{"id": 7, "hardware_id": "0x001"}, {"id": 8, "hardware_id": "CAM-01"}]
    )

    assert database.find_one(NODES_COLLECTION, {"id": 8}) == {
        "id": 8,
        "hardware_id": "CAM-01",
    }
    assert database.find_one(NODES_COLLECTION, {"id": 9}) is None


def test_find_many_applies_projection_and_sort() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "myhome")
    collection = database.get_collection(NODES_COLLECTION)
    collection.insert_many(
        [
            {"_id": "x", "id": 8, "category": "ip-camera"},
            {"_id": "y", "id": 7, "category": "enocean"},
        ]
    )

    documents = database.find_many(
        NODES_COLLECTION,
        {},
        projection={"_id": 0, "id": 1},
        sort_by="id",
        sort_direction=DESCENDING,
    )

    assert documents == [{"id": 8}, {"id": 7}]
    assert collection.last_projection == {"_id": 0, "id": 1}
    assert collection.sort_calls == [("id", DESCENDING)]


def test_find_many_without_sort_keeps_store_order() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "myhome")
    collection = database.get_collection(NODE_STATUS_COLLECTION)
    collection.insert_many(
        [
            {"node_id": 7, "key": "battery", "value": "92"},
            {"node_id": 8, "key": "stream", "value": "on"},
            {"node_id": 7, "key": "battery", "value": "88"},
        ]
    )

    documents = database.find_many(NODE_STATUS_COLLECTION, {"node_id": 7})

    assert [doc["value"] for doc in documents] == ["92", "88"]
    assert collection.sort_calls == []


def test_create_indexes_declares_node_indexes() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "myhome")

    database.create_indexes()

    nodes = database.get_collection(NODES_COLLECTION).created_indexes
    assert nodes == [
        ([("id", ASCENDING)], "nodes_id_unique", {"unique": True}),
        (
            [
                ("category", ASCENDING),
                ("manufacturer", ASCENDING),
                ("hardware_id", ASCENDING),
            ],
            "nodes_descriptor_unique",
            {"unique": True},
        ),
    ]
    status = database.get_collection(NODE_STATUS_COLLECTION).created_indexes
    assert status == [([("node_id", ASCENDING)], "node_status_node_id", {})]


def test_close_closes_client() -> None:
    database = MongoDatabase("mongodb://localhost:27017", "myhome")

    database.close()

    assert database.client.closed is True
