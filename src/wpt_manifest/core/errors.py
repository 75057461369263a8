"""Core exception types for wpt-manifest."""
from typing import Optional


class WptManifestError(Exception):
    """Base exception for all wpt-manifest errors."""
    pass


class GitHubAPIError(WptManifestError):
    """Raised when a call to the GitHub API fails (transport or HTTP status)."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class ManifestError(WptManifestError):
    """Raised when a SHA cannot be resolved to a manifest asset.

    ``fetched_sha`` holds the full SHA taken from the asset name when the
    failure happened after the asset was matched, and is ``None`` otherwise.
    It is informational only.
    """

    def __init__(self, message: str, fetched_sha: Optional[str] = None):
        super().__init__(message)
        self.fetched_sha = fetched_sha


class NoSearchResultsError(ManifestError):
    """Raised when the issue search finds nothing for a SHA."""

    def __init__(self, sha: str):
        super().__init__(f"No search results found for SHA {sha}")
        self.sha = sha


class NoAssetsError(ManifestError):
    """Raised when a release is missing or has no assets."""

    def __init__(self, tag: str):
        super().__init__(f"No assets found for {tag} release")
        self.tag = tag


class NoManifestAssetError(ManifestError):
    """Raised when no release asset matches the manifest filename pattern."""

    def __init__(self, tag: str):
        super().__init__(f"No manifest asset found for release {tag}")
        self.tag = tag


class AssetFetchError(ManifestError):
    """Raised when downloading the matched manifest asset fails."""

    def __init__(self, message: str, url: str, fetched_sha: Optional[str] = None):
        super().__init__(message, fetched_sha=fetched_sha)
        self.url = url


class CacheStoreError(WptManifestError):
    """Raised when the cache backend fails to read or write."""
    pass
