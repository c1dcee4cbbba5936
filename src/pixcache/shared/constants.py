from pathlib import Path

from pixcache.shared.utils.path_utils import find_repository_root

REPOSITORY_ROOT: Path = find_repository_root()
CONFIGS_DIR = REPOSITORY_ROOT / "configs"
CACHES_DIR = REPOSITORY_ROOT / "caches"
WEB_ROOT = REPOSITORY_ROOT / "web"

DEFAULT_ROUTE_PREFIX = "_imagine"
DEFAULT_CACHE_PREFIX = "media/cache"
SIGNATURE_PARAMETER = "_hash"
