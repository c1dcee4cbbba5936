import pytest

from pixcache.infrastructure.config.manager import ConfigManager


@pytest.fixture
def config_manager(configs_dir) -> ConfigManager:
    return ConfigManager(configs_dir)
