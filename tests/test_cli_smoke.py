"""Smoke tests for wpt-manifest CLI."""
import subprocess

import pytest


@pytest.mark.parametrize(
    "args",
    [
        ["--help"],
        ["fetch", "--help"],
        ["parse-name", "--help"],
    ],
)
def test_cli_help_returns_zero_exit_code(args):
    """Execute wpt-manifest help for each command and verify it returns exit code 0."""
    result = subprocess.run(
        ["wpt-manifest", *args],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "Usage:" in result.stdout


def test_cli_version():
    result = subprocess.run(
        ["wpt-manifest", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "0.1.0" in result.stdout
