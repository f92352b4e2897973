from dataclasses import dataclass

from src.product_api.core.services import DbSessionService
from src.product_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
