"""
Gateways Package - Domain Layer

This package contains the interfaces the node model uses to read from
the persistent store. Specific implementations are provided by the
infrastructure layer.
"""

from .persistence_gateway import INodePersistenceGateway, IRowSource, MappingRowSource

__all__ = ["INodePersistenceGateway", "IRowSource", "MappingRowSource"]
