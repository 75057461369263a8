"""Manifest asset selection and download."""
import logging
import re
from typing import Iterable, Optional, Tuple

import httpx

from wpt_manifest.core.errors import AssetFetchError, NoManifestAssetError
from wpt_manifest.github.models import Asset

logger = logging.getLogger(__name__)

# Valid manifest filename; the full SHA is captured in group 1.
ASSET_REGEX = re.compile(r"^MANIFEST-([0-9a-fA-F]{40})\.json\.gz$")


def parse_asset_sha(name: str) -> Optional[str]:
    """Return the SHA embedded in a manifest asset name, or None."""
    match = ASSET_REGEX.match(name)
    return match.group(1) if match else None


def select_manifest_asset(assets: Iterable[Asset], tag: str) -> Tuple[str, str]:
    """Pick the first asset named ``MANIFEST-<sha>.json.gz``.

    Returns:
        (fetched_sha, download_url)

    Raises:
        NoManifestAssetError: If no asset name matches
    """
    for asset in assets:
        sha = parse_asset_sha(asset.name)
        if sha is not None:
            logger.info(f"Matched manifest asset {asset.name} in release {tag}")
            return sha, asset.download_url
    raise NoManifestAssetError(tag)


def fetch_asset(http_client: httpx.Client, url: str, fetched_sha: str) -> httpx.Response:
    """Start downloading an asset and hand back the unread streaming response.

    The caller owns the response and must close it.

    Raises:
        AssetFetchError: On transport failure or an HTTP error status
    """
    request = http_client.build_request("GET", url)
    try:
        response = http_client.send(request, stream=True)
    except httpx.HTTPError as e:
        raise AssetFetchError(
            f"Failed to download {url}: {e}", url=url, fetched_sha=fetched_sha
        ) from e

    if response.is_error:
        response.close()
        raise AssetFetchError(
            f"Download of {url} returned HTTP {response.status_code}",
            url=url,
            fetched_sha=fetched_sha,
        )
    return response
