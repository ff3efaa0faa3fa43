"""
MongoDB Database - Infrastructure Layer

Thin synchronous pymongo client used by the MongoDB persistence gateway.
"""

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from myhome.shared import get_logger

logger = get_logger(__name__)

NODES_COLLECTION = "nodes"
NODE_STATUS_COLLECTION = "node_status"


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        return self.get_collection(collection_name).find_one(query)

    def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_direction: int = ASCENDING,
    ) -> List[Dict[str, Any]]:
        """
        Find documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            projection: Fields to include or exclude
            sort_by: Field to sort by
            sort_direction: Sort direction (1 for ascending, -1 for descending)

        Returns:
            List of documents
        """
        cursor = self.get_collection(collection_name).find(query, projection)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        return list(cursor)

    def create_indexes(self) -> None:
        """Create the indexes the node gateway queries rely on."""
        nodes = self.get_collection(NODES_COLLECTION)
        nodes.create_index([("id", ASCENDING)], name="nodes_id_unique", unique=True)
        nodes.create_index(
            [
                ("category", ASCENDING),
                ("manufacturer", ASCENDING),
                ("hardware_id", ASCENDING),
            ],
            name="nodes_descriptor_unique",
            unique=True,
        )
        self.get_collection(NODE_STATUS_COLLECTION).create_index(
            [("node_id", ASCENDING)], name="node_status_node_id"
        )
        logger.info("mongo.indexes.ensured", database=self.db.name)

    def close(self) -> None:
        self.client.close()
