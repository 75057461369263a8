"""Resolve a commit SHA to the bytes of its gzipped MANIFEST release asset."""
import logging
from datetime import timedelta
from typing import NamedTuple, Optional

import httpx

from wpt_manifest.cache.store import CacheStore, new_cache_store
from wpt_manifest.config import WPT_REPO_NAME, WPT_REPO_OWNER, ManifestConfig
from wpt_manifest.core.errors import AssetFetchError
from wpt_manifest.github.client import GitHubClient, build_http_client
from wpt_manifest.manifest.assets import fetch_asset, select_manifest_asset
from wpt_manifest.manifest.lookup import find_release

logger = logging.getLogger(__name__)


class ResolvedManifest(NamedTuple):
    sha: str
    data: bytes


def get_manifest_for_sha(
    client: GitHubClient,
    http_client: httpx.Client,
    sha: Optional[str],
    owner: str = WPT_REPO_OWNER,
    repo: str = WPT_REPO_NAME,
) -> ResolvedManifest:
    """Load the (gzipped) manifest JSON for the release associated with ``sha``.

    This takes a few hops on the GitHub API, so callers should cache the
    result (see ``new_cache_store``). The returned SHA comes from the asset
    filename and is not compared with the requested one.

    Raises:
        GitHubAPIError: If a GitHub lookup fails
        ManifestError: For any other resolution failure; ``fetched_sha`` is set
            once the manifest asset has been matched
    """
    release, tag = find_release(client, sha, owner, repo)
    fetched_sha, url = select_manifest_asset(release.assets, tag)

    response = fetch_asset(http_client, url, fetched_sha)
    try:
        data = b"".join(response.iter_bytes())
    except httpx.HTTPError as e:
        raise AssetFetchError(
            f"Failed reading {url}: {e}", url=url, fetched_sha=fetched_sha
        ) from e
    finally:
        response.close()

    logger.info(f"Fetched {len(data)} bytes of manifest for {fetched_sha[:12]}")
    return ResolvedManifest(fetched_sha, data)


class ManifestAPI:
    """Manifest fetches plus a factory for cache stores to memoize them.

    The API never caches by itself; callers decide whether and how to use the
    stores returned by ``new_cache_store``.
    """

    def __init__(
        self,
        config: Optional[ManifestConfig] = None,
        github_client: Optional[GitHubClient] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.config = config or ManifestConfig()
        self._github = github_client or GitHubClient(self.config)
        self._http = http_client or build_http_client(self.config)

    def close(self) -> None:
        self._github.close()
        self._http.close()

    def __enter__(self) -> "ManifestAPI":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def get_manifest_for_sha(self, sha: Optional[str]) -> ResolvedManifest:
        return get_manifest_for_sha(
            self._github,
            self._http,
            sha,
            owner=self.config.repo_owner,
            repo=self.config.repo_name,
        )

    def new_cache_store(self, ttl: timedelta) -> CacheStore:
        return new_cache_store(ttl, redis_url=self.config.redis_url)
