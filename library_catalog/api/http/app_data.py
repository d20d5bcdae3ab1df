from dataclasses import dataclass

from fastapi.templating import Jinja2Templates

from library_catalog.core.services import DbSessionService
from library_catalog.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    templates: Jinja2Templates
