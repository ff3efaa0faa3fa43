"""
Application Layer Package

This package contains the use cases that orchestrate node hydration
through the persistence gateway.
"""

# Re-export submodules
from myhome.application import use_cases

__all__ = ["use_cases"]
