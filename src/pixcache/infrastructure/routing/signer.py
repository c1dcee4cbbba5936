"""HMAC based URL signing."""

import base64
import hashlib
import hmac
from typing import final, override
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pixcache.application.ports.outbound.routing import UrlSigner
from pixcache.shared.constants import SIGNATURE_PARAMETER


@final
class UriSigner(UrlSigner):
    """Signs URLs with an HMAC-SHA256 of the URL (query sorted) in a query parameter.

    A fragment is part of the signed URL and stays at its end.
    """

    def __init__(self, secret: str, parameter: str = SIGNATURE_PARAMETER):
        if not secret:
            raise ValueError("A secret is required to sign URLs")
        self._secret = secret.encode()
        self.parameter = parameter

    @override
    def sign(self, url: str) -> str:
        url = self._normalize(url)
        parts = urlsplit(url)
        signature = urlencode([(self.parameter, self._compute_hash(url))])
        query = f"{parts.query}&{signature}" if parts.query else signature
        return urlunsplit(parts._replace(query=query))

    @override
    def check(self, url: str) -> bool:
        """Check that ``url`` carries a valid signature."""
        parts = urlsplit(url)
        pairs = parse_qsl(parts.query, keep_blank_values=True)

        signatures = [value for key, value in pairs if key == self.parameter]
        if len(signatures) != 1:
            return False

        unsigned = urlunsplit(
            parts._replace(
                query=urlencode([(k, v) for k, v in pairs if k != self.parameter])
            )
        )
        expected = self._compute_hash(self._normalize(unsigned))
        return hmac.compare_digest(expected, signatures[0])

    def _normalize(self, url: str) -> str:
        parts = urlsplit(url)
        pairs = sorted(parse_qsl(parts.query, keep_blank_values=True))
        return urlunsplit(parts._replace(query=urlencode(pairs)))

    def _compute_hash(self, url: str) -> str:
        digest = hmac.new(self._secret, url.encode(), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).decode().rstrip("=")
