"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer: database clients and persistence gateways.
"""

from myhome.infrastructure import database, gateways

__all__ = ["database", "gateways"]
