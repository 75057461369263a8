"""Tests for ManifestConfig."""
import pytest
from pydantic import ValidationError

from wpt_manifest.config import ManifestConfig


def test_defaults_point_at_wpt():
    config = ManifestConfig()

    assert config.repo_slug == "web-platform-tests/wpt"
    assert config.api_url == "https://api.github.com"
    assert config.token is None
    assert config.redis_url is None


def test_from_slug():
    config = ManifestConfig.from_slug("someone/fork", token="t")

    assert config.repo_owner == "someone"
    assert config.repo_name == "fork"
    assert config.token == "t"


@pytest.mark.parametrize("slug", ["wpt", "/wpt", "a/b/c", "owner/"])
def test_from_slug_rejects_bad_slugs(slug):
    with pytest.raises(ValueError):
        ManifestConfig.from_slug(slug)


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        ManifestConfig(timeout_seconds=0)


def test_api_url_trailing_slash_stripped():
    assert ManifestConfig(api_url="https://ghe.example/api/v3/").api_url == "https://ghe.example/api/v3"
