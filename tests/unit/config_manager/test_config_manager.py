import pytest
from omegaconf import DictConfig
from pydantic import ValidationError

from pixcache.config import AppConfig
from pixcache.infrastructure.config.constants import (
    ConfigType,
    FiltersConfigSubtype,
    ResolversConfigSubtype,
)
from pixcache.infrastructure.config.exceptions import ConfigFileNotFoundError
from pixcache.infrastructure.config.manager import ConfigManager
from pixcache.infrastructure.resolvers.disk_cache import DiskCacheResolver
from pixcache.infrastructure.resolvers.factory import create_cache_manager
from pixcache.schemas.configs import FiltersConfig, ResolversConfig


class TestConfigManager:
    def test_load_config(self, config_manager):
        config = config_manager.load_config(
            "default", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
        )

        assert isinstance(config, DictConfig)
        assert config.filter_sets.thumbnail.format == "png"
        assert list(config.filter_sets.thumbnail.filters.thumbnail.size) == [120, 90]

    def test_load_config_is_cached(self, config_manager):
        first = config_manager.load_config(
            "default", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
        )
        second = config_manager.load_config(
            "default", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
        )

        assert first is second

    def test_load_config_as_model(self, config_manager, configs_dir):
        filters = config_manager.load_config_as_model(
            "default", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
        )
        resolvers = config_manager.load_config_as_model(
            "default", ConfigType.RESOLVERS, ResolversConfigSubtype.DEFAULT
        )

        assert isinstance(filters, FiltersConfig)
        assert filters.filter_sets["banner"].cache == "disk"
        assert isinstance(resolvers, ResolversConfig)
        assert resolvers.resolvers["disk"].type == "disk_cache"

    def test_load_config_from_string(self, config_manager):
        config = config_manager.load_config_from_string("default", "resolvers", "default")

        assert config.default_resolver == "default"

    def test_missing_config_file_raises(self, config_manager):
        with pytest.raises(ConfigFileNotFoundError):
            config_manager.load_config(
                "missing", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
            )

    def test_invalid_config_raises(self, config_manager, configs_dir):
        (configs_dir / "filters" / "broken.yaml").write_text(
            "filter_sets:\n  thumbnail:\n    quality: 1000\n"
        )

        with pytest.raises(ValidationError):
            config_manager.load_config(
                "broken", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
            )

    def test_list_available_configs(self, config_manager):
        assert config_manager.list_available_configs() == {
            "filters": {"default": ["default"]},
            "resolvers": {"default": ["default"]},
        }

    def test_generate_default_config(self, tmp_path):
        manager = ConfigManager(tmp_path / "fresh")

        config = manager.generate_default_config(
            ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT, config_name="generated"
        )

        assert config.filter_sets == {}
        assert (tmp_path / "fresh" / "filters" / "generated.yaml").exists()
        assert manager.list_available_configs() == {"filters": {"default": ["generated"]}}

    def test_generate_default_configs_refuses_overwrite(self, config_manager):
        with pytest.raises(ValueError, match="overwrite=True"):
            config_manager.generate_default_configs()

    def test_generate_default_configs_overwrite(self, config_manager):
        config_manager.generate_default_configs(overwrite=True)

        filters = config_manager.load_config_as_model(
            "default", ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT
        )
        assert filters.filter_sets == {}


def test_create_cache_manager_from_config_files(config_manager, tmp_path):
    app_settings = AppConfig(storage_root=tmp_path / "web", secret="s3cret")

    cache_manager = create_cache_manager(
        "default", manager=config_manager, app_config=app_settings
    )

    assert cache_manager.frozen is True
    assert cache_manager.filter_config.names() == ["thumbnail", "banner"]
    assert isinstance(cache_manager.get_resolver("banner"), DiskCacheResolver)
    assert cache_manager.generate_url("a.jpg", "thumbnail").startswith(
        "/media/cache/resolve/thumbnail/a.png?"
    )
