"""Pydantic models for the subset of GitHub API payloads we read."""
from typing import List, Optional

from pydantic import BaseModel, Field


class Asset(BaseModel):
    """A downloadable file attached to a release."""

    name: str = Field(..., description="Asset filename")
    browser_download_url: str = Field(..., description="Public download URL")

    @property
    def download_url(self) -> str:
        return self.browser_download_url


class Release(BaseModel):
    """A tagged GitHub release and its assets.

    GitHub returns far more fields than these; anything else is ignored.
    """

    tag_name: str = Field(..., description="Release tag, e.g. 'merge_pr_123'")
    name: Optional[str] = Field(default=None, description="Human readable release title")
    assets: List[Asset] = Field(default_factory=list)


class Issue(BaseModel):
    """An issue or pull request returned by the search API."""

    number: int = Field(..., gt=0, description="Issue/PR number")
    title: Optional[str] = None


class SearchResult(BaseModel):
    """Response body of ``GET /search/issues``."""

    total_count: int = 0
    items: List[Issue] = Field(default_factory=list)
