from pathlib import Path
from unittest.mock import Mock

import pytest
from PIL import Image

from pixcache.application.cache_manager import CacheManager
from pixcache.application.ports.outbound.resolver import Resolver
from pixcache.domain.entities.binary import Binary
from pixcache.infrastructure.filters.configuration import FilterConfiguration
from pixcache.infrastructure.routing.router import RouteTable, register_filter_routes
from pixcache.infrastructure.routing.signer import UriSigner

SECRET = "aSecret"
ROUTE_PATTERN = "/media/cache/resolve/{filter}/{path}"


@pytest.fixture
def filter_configuration() -> FilterConfiguration:
    return FilterConfiguration(
        {
            "thumbnail": {"format": "png", "filters": {"thumbnail": {"size": [120, 90]}}},
            "banner": {"cache": "cdn"},
            "original": {},
        }
    )


@pytest.fixture
def router(filter_configuration) -> RouteTable:
    table = RouteTable(base_url="http://example.com")
    register_filter_routes(table, filter_configuration, prefix="_imagine", pattern=ROUTE_PATTERN)
    return table


@pytest.fixture
def signer() -> UriSigner:
    return UriSigner(SECRET)


@pytest.fixture
def resolver_factory():
    """Build Mock resolvers restricted to the Resolver interface."""

    def factory() -> Mock:
        return Mock(spec=Resolver)

    return factory


@pytest.fixture
def cache_manager(filter_configuration, router, signer) -> CacheManager:
    return CacheManager(
        filter_config=filter_configuration,
        router=router,
        signer=signer,
        default_resolver="default",
    )


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a simple test image."""
    return Image.new("RGB", (200, 100), color="white")


@pytest.fixture
def sample_binary(sample_image) -> Binary:
    return Binary.from_image(sample_image, format="png")


FILTERS_YAML = """\
filter_sets:
  thumbnail:
    format: png
    filters:
      thumbnail:
        size: [120, 90]
  banner:
    cache: disk
"""

RESOLVERS_YAML = """\
default_resolver: default
resolvers:
  default:
    type: web_path
    web_root: {web_root}
  disk:
    type: disk_cache
    caches_dir: {caches_dir}
"""


@pytest.fixture
def configs_dir(tmp_path) -> Path:
    """Configs directory with a ``default`` filters and resolvers config."""
    configs = tmp_path / "configs"
    (configs / "filters").mkdir(parents=True)
    (configs / "resolvers").mkdir(parents=True)
    (configs / "filters" / "default.yaml").write_text(FILTERS_YAML)
    (configs / "resolvers" / "default.yaml").write_text(
        RESOLVERS_YAML.format(web_root=tmp_path / "web", caches_dir=tmp_path / "caches")
    )
    return configs
