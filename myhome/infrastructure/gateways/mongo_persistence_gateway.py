"""MongoDB implementation of the node persistence gateway."""

from typing import List, Optional

from myhome.domain.gateways.persistence_gateway import (
    INodePersistenceGateway,
    MappingRowSource,
)
from myhome.infrastructure.database.mongo_database import (
    NODE_STATUS_COLLECTION,
    NODES_COLLECTION,
    MongoDatabase,
)
from myhome.shared import get_logger

logger = get_logger(__name__)

_NODE_PROJECTION = {
    "_id": 0,
    "id": 1,
    "category": 1,
    "manufacturer": 1,
    "hardware_id": 1,
    "type": 1,
}


class MongoPersistenceGateway(INodePersistenceGateway):
    """Reads ``nodes`` and ``node_status`` documents.

    Status documents look like ``{"node_id": 7, "key": "battery", "value": "92"}``.
    """

    def __init__(self, mongo_database: MongoDatabase):
        self.mongo_database = mongo_database

    def fetch_status_rows(self, node_id: int) -> List[MappingRowSource]:
        logger.debug("mongo.node_status.query", node_id=node_id)
        documents = self.mongo_database.find_many(
            NODE_STATUS_COLLECTION,
            {"node_id": node_id},
            projection={"_id": 0, "key": 1, "value": 1},
        )
        return [MappingRowSource(document) for document in documents]

    def fetch_node_rows(self) -> List[MappingRowSource]:
        logger.debug("mongo.nodes.query")
        documents = self.mongo_database.find_many(
            NODES_COLLECTION, {}, projection=_NODE_PROJECTION, sort_by="id"
        )
        return [MappingRowSource(document) for document in documents]

    def fetch_node_row(self, node_id: int) -> Optional[MappingRowSource]:
        document = self.mongo_database.find_one(NODES_COLLECTION, {"id": node_id})
        if document is None:
            return None
        return MappingRowSource(document)
