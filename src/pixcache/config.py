from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from pixcache.shared.constants import (
    CONFIGS_DIR,
    DEFAULT_ROUTE_PREFIX,
    REPOSITORY_ROOT,
    WEB_ROOT,
)


class StorageConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=REPOSITORY_ROOT / ".env", env_prefix="PIXCACHE_", extra="allow"
    )

    storage_root: Path = WEB_ROOT
    base_url: str = "http://localhost"


class AppConfig(StorageConfig):
    model_config = SettingsConfigDict(
        env_file=REPOSITORY_ROOT / ".env", env_prefix="PIXCACHE_", extra="allow"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    configs_dir: Path = CONFIGS_DIR

    default_resolver: str | None = "default"
    secret: str = "change-me"
    route_prefix: str = DEFAULT_ROUTE_PREFIX
    route_pattern: str = "/media/cache/resolve/{filter}/{path}"


app_config = AppConfig()
