"""Runtime configuration for the GitHub and cache collaborators."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

WPT_REPO_OWNER = "web-platform-tests"
WPT_REPO_NAME = "wpt"
GITHUB_API_URL = "https://api.github.com"


class ManifestConfig(BaseModel):
    """Settings shared by the GitHub client, the asset downloader and cache stores."""

    repo_owner: str = Field(default=WPT_REPO_OWNER, description="Owner of the repo publishing releases")
    repo_name: str = Field(default=WPT_REPO_NAME, description="Name of the repo publishing releases")
    api_url: str = Field(default=GITHUB_API_URL, description="GitHub REST API base URL")
    token: Optional[str] = Field(default=None, description="GitHub token, sent as a bearer token")
    timeout_seconds: float = Field(default=30.0, description="Per-request network timeout")
    redis_url: Optional[str] = Field(default=None, description="Redis URL backing cache stores")

    model_config = ConfigDict(frozen=True)

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be positive; got {v}")
        return v

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def repo_slug(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @classmethod
    def from_slug(cls, slug: str, **kwargs) -> "ManifestConfig":
        """Build a config from an ``owner/name`` repository slug."""
        owner, sep, name = slug.strip("/").partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must look like 'owner/name'; got '{slug}'")
        return cls(repo_owner=owner, repo_name=name, **kwargs)
