"""
Source Code Root Module

This module serves as the root for the node model of the MyHome platform.

Layer Structure:
- Domain: Node entity, status map, errors and persistence contracts
- Application: Use cases that hydrate nodes from the store
- Infrastructure: SQL and MongoDB implementations of the persistence gateway
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root and configuration
"""
