"""Persistence gateway implementations - Infrastructure Layer."""

from .mongo_persistence_gateway import MongoPersistenceGateway
from .sql_persistence_gateway import SqlPersistenceGateway, SqlRowSource

__all__ = ["MongoPersistenceGateway", "SqlPersistenceGateway", "SqlRowSource"]
