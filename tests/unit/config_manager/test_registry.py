import pytest
from pydantic import BaseModel

from pixcache.infrastructure.config.constants import (
    ConfigType,
    FiltersConfigSubtype,
    ResolversConfigSubtype,
)
from pixcache.infrastructure.config.exceptions import (
    ConfigNotRegisteredError,
    InvalidConfigSubtype,
    InvalidConfigType,
)
from pixcache.infrastructure.config.registry import (
    CONFIG_REGISTRY,
    get_config_schema,
    get_default_config,
    list_registered_configs,
    register_config,
    validate_config_with_schema,
)
from pixcache.schemas.configs import FiltersConfig, ResolversConfig


def test_schemas_are_registered():
    assert get_config_schema(ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT) is FiltersConfig
    assert (
        get_config_schema(ConfigType.RESOLVERS, ResolversConfigSubtype.DEFAULT)
        is ResolversConfig
    )


def test_list_registered_configs():
    registered = list_registered_configs()

    assert registered["filters"] == ["default"]
    assert registered["resolvers"] == ["default"]


def test_validate_config_with_schema():
    validated = validate_config_with_schema(
        {"filter_sets": {"small": {"format": "png"}}}, FiltersConfig
    )

    assert validated.filter_sets["small"].format == "png"


def test_validate_config_with_schema_failure():
    with pytest.raises(Exception):
        validate_config_with_schema({"filter_sets": {"small": {"quality": 0}}}, FiltersConfig)


def test_get_default_config():
    assert get_default_config(ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT) == {
        "filter_sets": {}
    }

    resolvers = get_default_config(ConfigType.RESOLVERS, ResolversConfigSubtype.DEFAULT)
    assert resolvers["default_resolver"] == "default"
    assert resolvers["resolvers"]["default"]["type"] == "web_path"


def test_invalid_config_type_is_rejected():
    with pytest.raises(InvalidConfigType):
        get_config_schema("filters", FiltersConfigSubtype.DEFAULT)


def test_missing_arguments_are_rejected():
    with pytest.raises(ValueError):
        get_config_schema(ConfigType.FILTERS)


def test_unregistered_schema_raises(monkeypatch):
    monkeypatch.delitem(CONFIG_REGISTRY, (ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT))

    with pytest.raises(ConfigNotRegisteredError):
        get_config_schema(ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT)


def test_register_config_overwrites(monkeypatch):
    monkeypatch.setitem(
        CONFIG_REGISTRY, (ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT), FiltersConfig
    )

    @register_config(ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT)
    class OtherFiltersConfig(BaseModel):
        pass

    assert get_config_schema(ConfigType.FILTERS, FiltersConfigSubtype.DEFAULT) is OtherFiltersConfig


def test_invalid_subtype_is_rejected():
    with pytest.raises(InvalidConfigSubtype):
        get_config_schema(ConfigType.FILTERS, "nested")
