"""Manifest resolution: release lookup, asset selection and download."""
from wpt_manifest.manifest.assets import (
    ASSET_REGEX,
    fetch_asset,
    parse_asset_sha,
    select_manifest_asset,
)
from wpt_manifest.manifest.lookup import (
    LATEST_SHA,
    LookupStrategy,
    ReleaseQuery,
    find_release,
    is_latest,
)
from wpt_manifest.manifest.resolver import ManifestAPI, ResolvedManifest, get_manifest_for_sha

__all__ = [
    "ASSET_REGEX",
    "LATEST_SHA",
    "LookupStrategy",
    "ManifestAPI",
    "ReleaseQuery",
    "ResolvedManifest",
    "fetch_asset",
    "find_release",
    "get_manifest_for_sha",
    "is_latest",
    "parse_asset_sha",
    "select_manifest_asset",
]
