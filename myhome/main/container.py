"""
Dependency container injection module - Main Layer

This module implements the dependency injection container wiring the
node store, its persistence gateway and the node use cases.
"""

from contextlib import contextmanager
from typing import Iterator

from dependency_injector import containers, providers

from myhome.application.use_cases.node_use_cases import (
    GetNodeUseCase,
    LoadNodesUseCase,
    RefreshNodeStatusUseCase,
)
from myhome.infrastructure.database import MongoDatabase, SqliteDatabase
from myhome.infrastructure.gateways import (
    MongoPersistenceGateway,
    SqlPersistenceGateway,
)
from myhome.shared import (
    EnumDatabaseBackend,
    get_logger,
    update_logging_from_settings,
)

from .config import AppSettings

logger = get_logger(__name__)


def _backend_name(backend: object) -> str:
    return backend.value if hasattr(backend, "value") else str(backend)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..application"])

    # Settings
    config = providers.Configuration()
    backend = providers.Callable(_backend_name, config.database.backend)

    # Infrastructure
    sqlite_database = providers.Singleton(
        SqliteDatabase,
        path=config.database.sqlite_path,
    )

    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    # Gateways
    persistence_gateway = providers.Selector(
        backend,
        sqlite=providers.Singleton(
            SqlPersistenceGateway,
            connection=providers.Callable(lambda db: db.connection, sqlite_database),
            lock=providers.Callable(lambda db: db.lock, sqlite_database),
        ),
        mongo=providers.Singleton(
            MongoPersistenceGateway,
            mongo_database=mongo_database,
        ),
    )

    # Application (use cases)
    load_nodes_use_case = providers.Factory(
        LoadNodesUseCase,
        persistence_gateway=persistence_gateway,
    )

    get_node_use_case = providers.Factory(
        GetNodeUseCase,
        persistence_gateway=persistence_gateway,
    )

    refresh_node_status_use_case = providers.Factory(
        RefreshNodeStatusUseCase,
        persistence_gateway=persistence_gateway,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    update_logging_from_settings(settings)

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@contextmanager
def container_lifespan() -> Iterator[AppContainer]:
    """
    Open the configured store, make sure its schema exists and close it
    again when the block exits.
    """
    container = get_container()
    backend = container.backend()

    if backend == EnumDatabaseBackend.MONGO.value:
        database = container.mongo_database()
        logger.info("container.mongo.ensure_indexes")
        database.create_indexes()
    else:
        database = container.sqlite_database()
        logger.info("container.sqlite.ensure_schema")
        database.create_schema()

    try:
        logger.info("container.resources.initialized", backend=backend)
        yield container
    finally:
        logger.info("container.resources.close", backend=backend)
        database.close()
        logger.info("container.resources.shutdown")
