"""Use cases package - Application Layer."""

from .node_use_cases import GetNodeUseCase, LoadNodesUseCase, RefreshNodeStatusUseCase

__all__ = ["GetNodeUseCase", "LoadNodesUseCase", "RefreshNodeStatusUseCase"]
