import pytest

from pixcache.infrastructure.routing.signer import UriSigner


class TestUriSigner:
    def test_sign_appends_hash_parameter(self, signer):
        signed = signer.sign("http://example.com/foo")

        assert signed.startswith("http://example.com/foo?_hash=")

    def test_sign_appends_to_existing_query(self, signer):
        signed = signer.sign("http://example.com/foo?bar=1")

        assert signed.startswith("http://example.com/foo?bar=1&_hash=")

    def test_sign_is_deterministic(self, signer):
        assert signer.sign("/foo?b=2&a=1") == signer.sign("/foo?b=2&a=1")

    def test_query_order_does_not_matter(self, signer):
        assert signer.sign("/foo?b=2&a=1") == signer.sign("/foo?a=1&b=2")

    def test_check_accepts_signed_url(self, signer):
        assert signer.check(signer.sign("/media/cache/resolve/thumb/a b/c.png?x=1"))

    @pytest.mark.parametrize(
        "url",
        [
            "/foo",
            "/foo?_hash=forged",
        ],
    )
    def test_check_rejects_unsigned_or_forged(self, signer, url):
        assert signer.check(url) is False

    def test_check_rejects_tampered_url(self, signer):
        signed = signer.sign("/foo?size=10")

        assert signer.check(signed.replace("size=10", "size=99")) is False

    def test_different_secret_does_not_verify(self, signer):
        assert UriSigner("other").check(signer.sign("/foo")) is False

    def test_custom_parameter(self):
        signer = UriSigner("secret", parameter="sig")

        signed = signer.sign("/foo")

        assert "?sig=" in signed
        assert signer.check(signed)

    def test_empty_secret_is_rejected(self):
        with pytest.raises(ValueError):
            UriSigner("")

    def test_fragment_stays_after_signature(self, signer):
        signed = signer.sign("/foo?bar=1#top")

        assert signed.startswith("/foo?bar=1&_hash=")
        assert signed.endswith("#top")
        assert signer.check(signed)

    def test_check_rejects_changed_fragment(self, signer):
        signed = signer.sign("/foo#top")

        assert signer.check(signed.replace("#top", "#other")) is False
