"""Tests for run configuration."""

from pathlib import Path

import pytest

from git_smart_clean.config import DEFAULT_EXCLUDE, CleanConfig, parse_exclude


def test_parse_exclude_trims_entries() -> None:
    """Test splitting and trimming the exclude list."""
    assert parse_exclude(" main , release ,hotfix") == ("main", "release", "hotfix")


def test_parse_exclude_drops_empty_entries() -> None:
    """Test that stray commas are ignored."""
    assert parse_exclude("main,,develop,") == ("main", "develop")
    assert parse_exclude("") == ()


def test_default_config() -> None:
    """Test defaults match the command line defaults."""
    config = CleanConfig()
    assert config.path == Path(".")
    assert config.exclude == parse_exclude(DEFAULT_EXCLUDE) == ("main", "master", "develop")
    assert config.older_than is None
    assert config.interactive
    assert not config.dry_run
    assert config.threshold_suffix == ""


def test_threshold_suffix() -> None:
    """Test the message fragment for an age threshold."""
    assert CleanConfig(older_than=30).threshold_suffix == " older than 30 days"
    assert CleanConfig(older_than=0).threshold_suffix == " older than 0 days"


@pytest.mark.parametrize("kwargs", [{"older_than": -1}, {"workers": 0}])
def test_invalid_values_rejected(kwargs: dict) -> None:
    """Test validation of numeric options."""
    with pytest.raises(ValueError):
        CleanConfig(**kwargs)
