"""Database initialization script."""

from src.product_api.core.services import DbManageService, DbSessionService
from src.product_api.runtime.config.config_data import ConfigData
from src.product_api.runtime.context import get_config


def init_db(
    config: ConfigData | None = None,
    database_service: DbSessionService | None = None,
) -> None:
    """Create all database tables."""
    config = config or get_config()
    database_service = database_service or DbSessionService(config.database)
    DbManageService(database_service.engine).create_all()


if __name__ == "__main__":
    init_db()
