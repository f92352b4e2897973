"""Command-line entrypoint: ``python -m src.product_api.main serve``."""

from pathlib import Path

import typer
import uvicorn
from loguru import logger

from src.product_api.api.http.app import create_app
from src.product_api.api.utils.app_startup import configure_logging
from src.product_api.core.services import DbSessionService
from src.product_api.runtime.config.config_data import ConfigData
from src.product_api.runtime.config.config_template import load_config
from src.product_api.runtime.context import set_config
from src.product_api.runtime.init_db import init_db

app = typer.Typer(help="Product API service commands")

CONFIG_OPTION = typer.Option(
    Path("config.yaml"), "--config", help="Path to the YAML configuration file"
)


def _load(config_path: Path) -> ConfigData:
    config = load_config(config_path)
    set_config(config)
    configure_logging(config)
    return config


def _prepare_database(config: ConfigData) -> DbSessionService:
    """Connect to the database and create the schema, exiting 1 on failure."""
    database_service = DbSessionService(config.database)

    if not database_service.health_check():
        logger.error("db couldn't start")
        raise typer.Exit(code=1)

    try:
        init_db(config, database_service)
    except Exception:
        logger.exception("db couldn't be initialized")
        raise typer.Exit(code=1)

    return database_service


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Initialize the database and run the HTTP server."""
    config = _load(config_path)
    host = host or config.app.host
    port = port or config.app.port

    database_service = _prepare_database(config)
    api = create_app(config, database_service)

    logger.info("Server running in {}...", port)
    uvicorn.run(api, host=host, port=port, access_log=False)


@app.command(name="init-db")
def init_db_command(config_path: Path = CONFIG_OPTION) -> None:
    """Create the product table and exit."""
    config = _load(config_path)
    database_service = _prepare_database(config)
    database_service.dispose()
    logger.info("Database schema initialized")


if __name__ == "__main__":
    app()
