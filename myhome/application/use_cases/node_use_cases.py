"""
Node Use Cases - Application Layer

This module defines use cases that hydrate nodes and their status from
the persistence gateway.
"""

from typing import List

from dependency_injector.wiring import Provide, inject

from myhome.domain.entities.errors import (
    DomainError,
    InvalidIdentityError,
    NodeNotFoundError,
    SourceReadError,
)
from myhome.domain.entities.node import NodeIdentity
from myhome.domain.gateways.persistence_gateway import INodePersistenceGateway
from myhome.shared import ResultHandler, get_logger

logger = get_logger(__name__)


class LoadNodesUseCase:
    """Use case for loading every stored node."""

    @inject
    def __init__(
        self,
        persistence_gateway: INodePersistenceGateway = Provide["persistence_gateway"],
    ):
        """
        Initialize the use case with its dependencies.

        Args:
            persistence_gateway: Gateway reading node and status rows
        """
        self.persistence_gateway = persistence_gateway

    def execute(self, with_status: bool = True) -> List[NodeIdentity]:
        """
        Hydrate all stored nodes.

        Args:
            with_status: Also load the status map of each node

        Returns:
            Nodes in store order

        Raises:
            InvalidIdentityError: If a stored identity is not valid
            SourceReadError: If a node row cannot be read
        """
        logger.info("nodes.load_started", with_status=with_status)

        try:
            nodes = [
                NodeIdentity.from_row(row)
                for row in self.persistence_gateway.fetch_node_rows()
            ]
        except (InvalidIdentityError, SourceReadError) as e:
            logger.error(
                "nodes.load_failed",
                error=str(e),
                details=e.details,
                exc_info=e,
            )
            raise

        if with_status:
            for node in nodes:
                node.load_status(self.persistence_gateway)

        logger.info("nodes.loaded", count=len(nodes))
        return nodes


class GetNodeUseCase:
    """Use case for loading a single node by its persistent key."""

    @inject
    def __init__(
        self,
        persistence_gateway: INodePersistenceGateway = Provide["persistence_gateway"],
    ):
        self.persistence_gateway = persistence_gateway

    def execute(self, node_id: int, with_status: bool = True) -> NodeIdentity:
        """
        Raises:
            NodeNotFoundError: If there is no node with this key
            InvalidIdentityError: If the stored identity is not valid
            SourceReadError: If the node row cannot be read
        """
        row = self.persistence_gateway.fetch_node_row(node_id)
        if row is None:
            logger.warning("nodes.not_found", node_id=node_id)
            raise NodeNotFoundError(node_id)

        try:
            node = NodeIdentity.from_row(row)
        except DomainError as e:
            logger.error(
                "nodes.hydrate_failed", node_id=node_id, error=str(e), exc_info=e
            )
            raise

        if with_status:
            node.load_status(self.persistence_gateway)
        return node


class RefreshNodeStatusUseCase:
    """Use case for refreshing the status of an already loaded node."""

    @inject
    def __init__(
        self,
        persistence_gateway: INodePersistenceGateway = Provide["persistence_gateway"],
    ):
        self.persistence_gateway = persistence_gateway

    def execute(self, node: NodeIdentity) -> int:
        """Return the number of status rows applied; 0 when the refresh failed."""
        result = node.refresh_status(self.persistence_gateway)
        if ResultHandler.is_success(result):
            logger.info(
                "nodes.status_refreshed",
                descriptor=node.to_descriptor(),
                rows=result.value,
            )
            return result.value

        error = result.error
        logger.warning(
            "nodes.status_refresh_failed",
            descriptor=node.to_descriptor(),
            error=error.message,
            details=error.details,
        )
        return 0
