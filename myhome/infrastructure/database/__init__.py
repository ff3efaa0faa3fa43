"""
Database package - Infrastructure Layer

Database clients backing the persistence gateways: sqlite3 for the SQL
store and pymongo for the document store.
"""

from myhome.infrastructure.database.mongo_database import MongoDatabase
from myhome.infrastructure.database.sqlite_database import SqliteDatabase

__all__ = ["MongoDatabase", "SqliteDatabase"]
