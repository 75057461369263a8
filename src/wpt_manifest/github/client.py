"""Thin synchronous GitHub REST client over httpx.

Only the three calls needed to locate a manifest release are implemented.
Transport failures and error statuses surface as ``GitHubAPIError``.
"""
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from wpt_manifest.config import ManifestConfig
from wpt_manifest.core.errors import GitHubAPIError
from wpt_manifest.github.models import Release, SearchResult

logger = logging.getLogger(__name__)


def build_http_client(
    config: ManifestConfig,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the plain HTTP client used for asset downloads.

    Release asset URLs redirect to a CDN, so redirects are followed.
    """
    return httpx.Client(
        timeout=config.timeout_seconds,
        follow_redirects=True,
        transport=transport,
    )


class GitHubClient:
    """Release and search lookups against one GitHub API endpoint."""

    def __init__(
        self,
        config: ManifestConfig,
        transport: Optional[httpx.BaseTransport] = None,
        client: Optional[httpx.Client] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"

        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=config.api_url,
            timeout=config.timeout_seconds,
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"GitHub request failed for {path}: {e}", url=path) from e

        if response.is_error:
            raise GitHubAPIError(
                f"GitHub returned HTTP {response.status_code} for {response.request.url}",
                url=str(response.request.url),
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Invalid JSON from GitHub for {response.request.url}",
                url=str(response.request.url),
                status_code=response.status_code,
            ) from e

    def _parse_release(self, data: Any, path: str) -> Optional[Release]:
        if data is None:
            return None
        try:
            return Release.model_validate(data)
        except ValidationError as e:
            raise GitHubAPIError(f"Unexpected release payload from {path}: {e}", url=path) from e

    def get_latest_release(self, owner: str, repo: str) -> Optional[Release]:
        path = f"/repos/{owner}/{repo}/releases/latest"
        logger.debug(f"GET {path}")
        return self._parse_release(self._get_json(path), path)

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> Optional[Release]:
        path = f"/repos/{owner}/{repo}/releases/tags/{tag}"
        logger.debug(f"GET {path}")
        return self._parse_release(self._get_json(path), path)

    def search_issues(self, query: str) -> SearchResult:
        path = "/search/issues"
        logger.debug(f"GET {path} q={query!r}")
        data = self._get_json(path, params={"q": query})
        try:
            return SearchResult.model_validate(data or {})
        except ValidationError as e:
            raise GitHubAPIError(f"Unexpected search payload: {e}", url=path) from e
