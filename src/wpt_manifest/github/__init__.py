"""GitHub collaborator: REST client and payload models."""
from wpt_manifest.github.client import GitHubClient, build_http_client
from wpt_manifest.github.models import Asset, Issue, Release, SearchResult

__all__ = [
    "Asset",
    "GitHubClient",
    "Issue",
    "Release",
    "SearchResult",
    "build_http_client",
]
