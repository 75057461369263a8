"""wpt-manifest CLI - Command line interface for wpt-manifest."""
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import Optional

import click

from wpt_manifest import __version__
from wpt_manifest.cache import CacheStore
from wpt_manifest.config import GITHUB_API_URL, ManifestConfig
from wpt_manifest.core.errors import (
    AssetFetchError,
    CacheStoreError,
    GitHubAPIError,
    NoAssetsError,
    NoManifestAssetError,
    NoSearchResultsError,
)
from wpt_manifest.manifest import ManifestAPI, ResolvedManifest, is_latest, parse_asset_sha

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(name)s: %(message)s",
)
logger = logging.getLogger("wpt_manifest")

EXIT_NOT_FOUND = 3
EXIT_UPSTREAM = 4


def build_api(config: ManifestConfig) -> ManifestAPI:
    return ManifestAPI(config)


def _cache_key(sha: str) -> str:
    return f"MANIFEST-{sha}"


def _read_cached(store: CacheStore, sha: str) -> Optional[ResolvedManifest]:
    try:
        cached = store.get(_cache_key(sha))
    except CacheStoreError as e:
        logger.warning(f"Cache read failed, resolving {sha} uncached: {str(e)}")
        return None
    if cached is None:
        return None
    fetched_sha, sep, data = cached.partition(b"\n")
    fetched_sha = fetched_sha.decode("ascii", errors="replace")
    # Entries are keyed like the asset itself, so the stored SHA must form a valid asset name.
    if not sep or parse_asset_sha(f"{_cache_key(fetched_sha)}.json.gz") is None:
        logger.warning(f"Ignoring malformed cache entry for {sha}")
        return None
    return ResolvedManifest(fetched_sha, data)


def _write_cached(store: CacheStore, sha: str, entry: bytes) -> None:
    try:
        store.put(_cache_key(sha), entry)
    except CacheStoreError as e:
        logger.warning(f"Cache write failed for {sha}: {str(e)}")


def resolve_with_cache(api: ManifestAPI, store: CacheStore, sha: str) -> ResolvedManifest:
    """Resolve ``sha``, reading and filling ``store`` around the uncached call.

    ``latest`` moves over time, so it is never read from the cache; its
    result is still written under the resolved full SHA. Cache failures are
    logged and never fail the resolution.
    """
    if not is_latest(sha):
        cached = _read_cached(store, sha)
        if cached is not None:
            logger.info(f"Cache hit for {sha}")
            return cached

    resolved = api.get_manifest_for_sha(sha)
    entry = resolved.sha.encode("ascii") + b"\n" + resolved.data
    _write_cached(store, resolved.sha, entry)
    if not is_latest(sha) and sha != resolved.sha:
        _write_cached(store, sha, entry)
    return resolved


@click.group()
@click.version_option(__version__, prog_name="wpt-manifest")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """wpt-manifest - Fetch WPT MANIFEST release assets by commit SHA."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.option(
    "--sha",
    default="latest",
    show_default=True,
    help="Full or abbreviated commit SHA, or 'latest'",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: MANIFEST-<sha>.json.gz in the current directory)",
)
@click.option(
    "--repo",
    default="web-platform-tests/wpt",
    show_default=True,
    help="Repository publishing the manifest releases (owner/name)",
)
@click.option(
    "--api-url",
    envvar="WPT_MANIFEST_API_URL",
    default=GITHUB_API_URL,
    show_default=True,
    help="GitHub API base URL",
)
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    default=None,
    help="GitHub token (default: $GITHUB_TOKEN)",
)
@click.option(
    "--redis-url",
    envvar="WPT_MANIFEST_REDIS_URL",
    default=None,
    help="Redis URL for the cache (default: in-memory)",
)
@click.option(
    "--cache-ttl",
    type=click.IntRange(min=1),
    default=None,
    help="Cache resolved manifests for this many seconds",
)
def fetch(
    sha: str,
    output: Optional[Path],
    repo: str,
    api_url: str,
    token: Optional[str],
    redis_url: Optional[str],
    cache_ttl: Optional[int],
):
    """Download the gzipped MANIFEST asset for a WPT commit.

    Examples:
        wpt-manifest fetch --sha latest
        wpt-manifest fetch --sha 1a2b3c4d5e --output manifest.json.gz

    Exit codes:
        0: Success
        1: Generic runtime failure
        2: Invalid CLI usage
        3: No release or manifest asset for the SHA
        4: GitHub or download failure
    """
    try:
        config = ManifestConfig.from_slug(
            repo, api_url=api_url, token=token, redis_url=redis_url
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--repo")

    try:
        with build_api(config) as api:
            if cache_ttl is not None:
                store = api.new_cache_store(timedelta(seconds=cache_ttl))
                resolved = resolve_with_cache(api, store, sha)
            else:
                resolved = api.get_manifest_for_sha(sha)

        output = output or Path(f"MANIFEST-{resolved.sha}.json.gz")
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(resolved.data)

        click.echo(f"[OK] Manifest fetched: {sha}")
        click.echo(f"  SHA: {resolved.sha}")
        click.echo(f"  Bytes: {len(resolved.data)}")
        click.echo(f"  Path: {output}")
        sys.exit(0)

    except (NoSearchResultsError, NoAssetsError, NoManifestAssetError) as e:
        logger.error(f"Not found: {str(e)}")
        sys.exit(EXIT_NOT_FOUND)

    except GitHubAPIError as e:
        if e.not_found:
            logger.error(f"Not found: {str(e)}")
            sys.exit(EXIT_NOT_FOUND)
        logger.error(f"GitHub lookup failed: {str(e)}")
        sys.exit(EXIT_UPSTREAM)

    except AssetFetchError as e:
        logger.error(f"Download failed for {e.fetched_sha}: {str(e)}")
        sys.exit(EXIT_UPSTREAM)

    except Exception as e:
        logger.error(f"Fetch failed: {str(e)}")
        sys.exit(1)


@main.command("parse-name")
@click.argument("name")
def parse_name(name: str):
    """Print the commit SHA embedded in a MANIFEST asset filename.

    Exit codes:
        0: NAME is a manifest asset name
        3: NAME does not match MANIFEST-<40 hex>.json.gz
    """
    sha = parse_asset_sha(name)
    if sha is None:
        logger.error(f"Not a manifest asset name: {name}")
        sys.exit(EXIT_NOT_FOUND)
    click.echo(sha)


if __name__ == "__main__":
    main()
