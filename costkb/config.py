import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

CONFIG_FILE_ENV = "COSTKB_CONFIG_FILE"
LOG_FILE_ENV = "COSTKB_LOG_FILE"


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings read from the YAML file named by ``COSTKB_CONFIG_FILE``.

    A missing variable or file contributes nothing.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] | None = None

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return self.data

    @property
    def data(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._read()
        return self._data

    @staticmethod
    def _read() -> dict[str, Any]:
        config_file = os.environ.get(CONFIG_FILE_ENV)
        if not config_file:
            return {}
        path = Path(config_file).expanduser()
        if not path.is_file():
            return {}
        return yaml.safe_load(path.read_text()) or {}


class Server(BaseModel):
    name: str = "CoST Knowledge Base"
    version: str = "0.1.0"
    description: str = "Infrastructure transparency resource catalog"


class DatabaseConfig(BaseModel):
    url: str = "sqlite+aiosqlite:///./costkb.db"
    echo: bool = False
    auto_migrate: bool = True  # run alembic upgrade on startup


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    # Chatty libraries pinned to their own level
    library_levels: dict[str, str] = {
        "httpx": "WARNING",
        "httpcore": "WARNING",
        "asyncio": "WARNING",
        "aiosqlite": "WARNING",
        "sqlalchemy.engine": "WARNING",
        "alembic": "INFO",
    }

    @property
    def file(self) -> str | None:
        return os.environ.get(LOG_FILE_ENV)


class SearchConfig(BaseModel):
    """Ranking engine tuning."""

    keyword_weight: float = Field(default=0.6, ge=0)
    semantic_weight: float = Field(default=0.4, ge=0)
    title_weight: int = 10
    description_weight: int = 5
    tags_weight: int = 3
    themes_weight: int = 2
    topic_cache_ttl: float = Field(default=60.0, ge=0)  # seconds


class Config(BaseSettings):
    """Application settings.

    Nested values can be set from the environment, e.g.
    ``COSTKB_DATABASE__URL=postgresql+asyncpg://...``.
    """

    server: Server = Server()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    search: SearchConfig = SearchConfig()

    model_config = {
        "env_prefix": "COSTKB_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Explicit arguments win, then env, .env, YAML and secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Install a single root handler; call once before anything logs."""
    root = logging.getLogger()
    root.setLevel(config.level)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler: logging.Handler
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    root.addHandler(handler)

    for name, level in config.library_levels.items():
        logging.getLogger(name).setLevel(level)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
