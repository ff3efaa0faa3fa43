"""
Domain Layer Package

This package contains the node model: its identity rules, status map and
the contracts it needs from the persistent store. It has no dependency on
database drivers or frameworks.
"""

# Re-export submodules
from myhome.domain import entities, gateways

__all__ = ["entities", "gateways"]
