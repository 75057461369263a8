"""Release lookup: map a commit identifier to the release holding its manifest.

Releases are tagged per merged pull request (``merge_pr_<N>``), not per
commit, so anything other than ``latest`` goes through the issue search to
find the PR first.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from wpt_manifest.config import WPT_REPO_NAME, WPT_REPO_OWNER
from wpt_manifest.core.errors import NoAssetsError, NoSearchResultsError
from wpt_manifest.github.client import GitHubClient
from wpt_manifest.github.models import Release

logger = logging.getLogger(__name__)

LATEST_SHA = "latest"


def is_latest(sha: Optional[str]) -> bool:
    """True for the ``latest`` sentinel (an empty SHA also means latest)."""
    return not sha or sha == LATEST_SHA


def search_query(sha: str, owner: str = WPT_REPO_OWNER, repo: str = WPT_REPO_NAME) -> str:
    return f"SHA:{sha} repo:{owner}/{repo}"


def merge_pr_tag(number: int) -> str:
    return f"merge_pr_{number}"


class LookupStrategy(enum.Enum):
    LATEST = "latest"
    SEARCH = "search"


@dataclass(frozen=True)
class ReleaseQuery:
    """Which lookup to run; ``sha`` is only set for ``SEARCH``."""

    strategy: LookupStrategy
    sha: Optional[str] = None

    @classmethod
    def for_sha(cls, sha: Optional[str]) -> "ReleaseQuery":
        if is_latest(sha):
            return cls(LookupStrategy.LATEST)
        return cls(LookupStrategy.SEARCH, sha)


def find_release(
    client: GitHubClient,
    sha: Optional[str],
    owner: str = WPT_REPO_OWNER,
    repo: str = WPT_REPO_NAME,
) -> Tuple[Release, str]:
    """Find the release whose assets should contain the manifest for ``sha``.

    Args:
        client: GitHub API collaborator
        sha: Full or abbreviated commit SHA, or ``latest``
        owner: Repository owner
        repo: Repository name

    Returns:
        (release, tag) where tag is ``latest`` or ``merge_pr_<N>``

    Raises:
        GitHubAPIError: If any GitHub call fails (never retried)
        NoSearchResultsError: If the issue search found nothing for ``sha``
        NoAssetsError: If the release is missing or has no assets
    """
    query = ReleaseQuery.for_sha(sha)

    if query.strategy is LookupStrategy.LATEST:
        tag = LATEST_SHA
        logger.info(f"Looking up latest release of {owner}/{repo}")
        release = client.get_latest_release(owner, repo)
    else:
        q = search_query(query.sha, owner, repo)
        logger.info(f"Searching issues: {q}")
        result = client.search_issues(q)
        if result is None or not result.items:
            raise NoSearchResultsError(query.sha)

        tag = merge_pr_tag(result.items[0].number)
        logger.info(f"SHA {query.sha} → release {tag}")
        release = client.get_release_by_tag(owner, repo, tag)

    if release is None or not release.assets:
        raise NoAssetsError(tag)
    return release, tag
