"""Database initialization script."""

from library_catalog.core.services import DbManageService, DbSessionService
from library_catalog.runtime.config.config_data import ConfigData
from library_catalog.runtime.context import get_config


def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    database_service = DbSessionService(config or get_config())
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
