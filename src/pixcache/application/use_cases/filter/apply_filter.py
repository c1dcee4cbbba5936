"""Use case behind the filter action URL generated by the cache manager."""

from dataclasses import dataclass, field
from typing import Any, final, override

from pixcache.application.cache_manager import CacheManager
from pixcache.application.ports.outbound.engine import AssetLoader, FilterEngine
from pixcache.application.ports.outbound.routing import UrlSigner
from pixcache.application.use_cases.base import BaseRequest, BaseResponse, BaseUseCase
from pixcache.domain.exceptions import PathTraversalError, SignatureMismatchError
from pixcache.domain.services.paths import is_traversal
from pixcache.shared.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ApplyFilterRequest(BaseRequest):
    """Request to get the filtered image of ``path``."""

    path: str
    filter: str
    runtime_config: dict[str, Any] = field(default_factory=dict)
    url: str | None = None


@dataclass
class ApplyFilterResponse(BaseResponse):
    """Locator of the filtered image, ``generated`` when it was created by this call."""

    locator: str
    generated: bool


@final
class ApplyFilter(BaseUseCase[ApplyFilterRequest, ApplyFilterResponse]):
    """
    Resolve the filtered image, generating and storing it on a cache miss.

    When the image is already stored the loader and the engine are not
    touched. Otherwise the source image is loaded, filtered, stored through
    the cache manager and then resolved.
    """

    def __init__(
        self,
        loader: AssetLoader,
        engine: FilterEngine,
        cache_manager: CacheManager,
        signer: UrlSigner | None = None,
    ):
        """
        Initialize the use case.

        Args:
            loader: Port finding source images
            engine: Port applying filter sets
            cache_manager: Cache manager storing and resolving filtered images
            signer: Optional signer verifying ``request.url``
        """
        self.loader = loader
        self.engine = engine
        self.cache_manager = cache_manager
        self.signer = signer

    @override
    def execute(self, request: ApplyFilterRequest) -> ApplyFilterResponse:
        if is_traversal(request.path):
            raise PathTraversalError(request.path)

        if request.url is not None and self.signer is not None:
            if not self.signer.check(request.url):
                logger.warning("Rejected unsigned filter URL", url=request.url)
                raise SignatureMismatchError(
                    f"Signed URL does not match for path {request.path} "
                    f"and filter {request.filter}"
                )

        if self.cache_manager.is_stored(request.path, request.filter):
            return ApplyFilterResponse(
                locator=self.cache_manager.resolve(request.path, request.filter),
                generated=False,
            )

        logger.info("Generating filtered image", path=request.path, filter=request.filter)

        binary = self.loader.find(request.filter, request.path)
        filtered = self.engine.apply_filter(binary, request.filter, request.runtime_config)
        self.cache_manager.store(filtered, request.path, request.filter)

        return ApplyFilterResponse(
            locator=self.cache_manager.resolve(request.path, request.filter),
            generated=True,
        )
