"""wpt-manifest: resolve WPT commits to their published MANIFEST release assets."""

__version__ = "0.1.0"
