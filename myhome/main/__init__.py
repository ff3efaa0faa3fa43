"""
Main module - Main/Composition Root Layer

Its primary responsibilities include:
- Loading settings from the environment
- Configuring dependencies and services (Composition Root)
- Managing the lifetime of the node store
"""

from .config import AppSettings, get_settings
from .container import (
    AppContainer,
    container_lifespan,
    get_container,
    init_container,
)

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
    "container_lifespan",
]
