"""Pytest fixtures for wpt-manifest tests."""
from typing import Dict, List, Optional, Set

import httpx
import pytest

from wpt_manifest.config import ManifestConfig
from wpt_manifest.github import GitHubClient
from wpt_manifest.manifest import ManifestAPI

SHA_1 = "1" * 40
SHA_2 = "2" * 40
SHA_ABC = "abcdef0123456789abcdef0123456789abcdef01"

DOWNLOAD_HOST = "github.com"


def manifest_name(sha: str) -> str:
    return f"MANIFEST-{sha}.json.gz"


class FakeGitHub:
    """In-process stand-in for the GitHub API and release downloads.

    Routes on request path; every request is recorded in ``requests``.
    Names in ``broken`` ("search", "latest", "tag", "download") raise a
    transport error instead of answering.
    """

    def __init__(self, owner: str = "web-platform-tests", repo: str = "wpt"):
        self.owner = owner
        self.repo = repo
        self.releases: Dict[str, Optional[dict]] = {}
        self.latest_tag: Optional[str] = None
        self.search_results: Dict[str, List[int]] = {}
        self.downloads: Dict[str, bytes] = {}
        self.broken: Set[str] = set()
        self.requests: List[httpx.Request] = []
        self.queries: List[str] = []

    def add_release(self, tag: str, asset_names: List[str], latest: bool = False) -> dict:
        assets = []
        for name in asset_names:
            url = f"https://{DOWNLOAD_HOST}/{self.owner}/{self.repo}/releases/download/{tag}/{name}"
            assets.append({"name": name, "browser_download_url": url, "size": 10})
            self.downloads[url] = f"gzipped bytes of {name}".encode()
        payload = {"tag_name": tag, "name": tag, "draft": False, "assets": assets}
        self.releases[tag] = payload
        if latest:
            self.latest_tag = tag
        return payload

    def add_search_result(self, sha: str, *numbers: int) -> None:
        self.search_results[sha] = list(numbers)

    def routes_hit(self, name: str) -> int:
        return sum(1 for r in self.requests if self._route(r) == name)

    def _route(self, request: httpx.Request) -> str:
        path = request.url.path
        if request.url.host == DOWNLOAD_HOST:
            return "download"
        if path == "/search/issues":
            return "search"
        if path.endswith("/releases/latest"):
            return "latest"
        if "/releases/tags/" in path:
            return "tag"
        return "unknown"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._route(request)
        if route in self.broken:
            raise httpx.ConnectError(f"{route} unavailable", request=request)

        if route == "search":
            q = request.url.params["q"]
            self.queries.append(q)
            sha = q.split()[0][len("SHA:"):]
            numbers = self.search_results.get(sha, [])
            return httpx.Response(
                200,
                json={
                    "total_count": len(numbers),
                    "incomplete_results": False,
                    "items": [{"number": n, "title": f"PR {n}"} for n in numbers],
                },
            )
        if route == "latest":
            return self._release_response(self.latest_tag)
        if route == "tag":
            return self._release_response(request.url.path.rsplit("/", 1)[-1])
        if route == "download":
            data = self.downloads.get(str(request.url))
            if data is None:
                return httpx.Response(404, content=b"Not Found")
            return httpx.Response(200, content=data)
        return httpx.Response(404, json={"message": "Not Found"})

    def _release_response(self, tag: Optional[str]) -> httpx.Response:
        if tag is None or tag not in self.releases:
            return httpx.Response(404, json={"message": "Not Found"})
        payload = self.releases[tag]
        if payload is None:
            return httpx.Response(
                200, content=b"null", headers={"Content-Type": "application/json"}
            )
        return httpx.Response(200, json=payload)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def config() -> ManifestConfig:
    return ManifestConfig(token="test-token")


@pytest.fixture
def github_client(fake_github, config):
    client = GitHubClient(config, transport=httpx.MockTransport(fake_github.handler))
    yield client
    client.close()


@pytest.fixture
def http_client(fake_github):
    client = httpx.Client(transport=httpx.MockTransport(fake_github.handler))
    yield client
    client.close()


@pytest.fixture
def manifest_api(config, github_client, http_client) -> ManifestAPI:
    return ManifestAPI(config, github_client=github_client, http_client=http_client)


class FakeRedis:
    """Minimal stand-in for ``redis.Redis`` covering GET/SET with expiry."""

    def __init__(
        self,
        fail_with: Optional[Exception] = None,
        fail_writes_with: Optional[Exception] = None,
    ):
        self.data: Dict[str, bytes] = {}
        self.expiries: Dict[str, object] = {}
        self.fail_with = fail_with
        self.fail_writes_with = fail_writes_with

    def get(self, key):
        if self.fail_with:
            raise self.fail_with
        return self.data.get(key)

    def set(self, key, value, ex=None, px=None):
        if self.fail_with:
            raise self.fail_with
        if self.fail_writes_with:
            raise self.fail_writes_with
        self.data[key] = value
        self.expiries[key] = px if px is not None else ex
        return True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
