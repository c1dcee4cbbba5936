"""Tests for WebPathResolver on top of LocalFileStorage."""

import pytest

from pixcache.infrastructure.persistence.storage.local import LocalFileStorage
from pixcache.infrastructure.resolvers.web_path import WebPathResolver


@pytest.fixture
def web_resolver(tmp_path) -> WebPathResolver:
    return WebPathResolver(
        storage=LocalFileStorage(tmp_path),
        base_url="http://example.com/",
        cache_prefix="/media/cache/",
    )


class TestWebPathResolver:
    def test_not_stored_initially(self, web_resolver):
        assert web_resolver.is_stored("images/cats.jpg", "thumbnail") is False

    def test_store_writes_below_cache_prefix(self, web_resolver, tmp_path, sample_binary):
        web_resolver.store(sample_binary, "images/cats.jpg", "thumbnail")

        stored = tmp_path / "media" / "cache" / "thumbnail" / "images" / "cats.jpg"
        assert stored.read_bytes() == sample_binary.content
        assert web_resolver.is_stored("images/cats.jpg", "thumbnail") is True
        assert web_resolver.is_stored("images/cats.jpg", "banner") is False

    def test_resolve_builds_public_url(self, web_resolver):
        assert (
            web_resolver.resolve("/images/cats.jpg", "thumbnail")
            == "http://example.com/media/cache/thumbnail/images/cats.jpg"
        )

    def test_remove_specific_paths(self, web_resolver, sample_binary):
        web_resolver.store(sample_binary, "a.jpg", "thumbnail")
        web_resolver.store(sample_binary, "b.jpg", "thumbnail")
        web_resolver.store(sample_binary, "a.jpg", "banner")

        web_resolver.remove(["a.jpg", "missing.jpg"], ["thumbnail", "banner"])

        assert web_resolver.is_stored("a.jpg", "thumbnail") is False
        assert web_resolver.is_stored("a.jpg", "banner") is False
        assert web_resolver.is_stored("b.jpg", "thumbnail") is True

    def test_remove_all_paths_of_filters(self, web_resolver, tmp_path, sample_binary):
        web_resolver.store(sample_binary, "a.jpg", "thumbnail")
        web_resolver.store(sample_binary, "nested/b.jpg", "thumbnail")
        web_resolver.store(sample_binary, "a.jpg", "banner")

        web_resolver.remove([], ["thumbnail"])

        assert not (tmp_path / "media" / "cache" / "thumbnail").exists()
        assert web_resolver.is_stored("a.jpg", "banner") is True

    def test_remove_all_of_unknown_filter_is_noop(self, web_resolver):
        web_resolver.remove([], ["never-stored"])
