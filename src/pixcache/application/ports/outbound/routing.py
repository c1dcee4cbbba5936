from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Router(Protocol):
    """Builds URLs for named routes."""

    def generate_url(
        self, name: str, params: Mapping[str, Any], absolute: bool = False
    ) -> str:
        """Generate the URL of route ``name`` filled with ``params``."""
        ...


@runtime_checkable
class UrlSigner(Protocol):
    """Produces tamper-evident URLs."""

    def sign(self, url: str) -> str:
        """Return ``url`` extended with a signature."""
        ...

    def check(self, url: str) -> bool:
        """Whether the signature of ``url`` is valid."""
        ...
