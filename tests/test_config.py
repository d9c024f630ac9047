"""Tests for YAML configuration loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from box import Box

from mimecraft.config import clear_config, get_config, load_config
from mimecraft.exceptions import ConfigFileNotFoundError, ConfigFormatError

CopyFixture = Callable[[str, str, "str | None"], Path]


def test_load_explicit_file(fixtures_root: Path) -> None:
    """Explicit files are parsed into a Box."""
    config = load_config(fixtures_root / "config" / "mimecraft.conf.yml")

    assert isinstance(config, Box)
    assert config.mail.session.policy == "smtp"
    assert config.mail.limits.max_attachments == 5
    assert config.logging.level == "DEBUG"


def test_load_missing_explicit_file(tmp_path: Path) -> None:
    """A missing explicit path is an error."""
    with pytest.raises(ConfigFileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_invalid_yaml(fixtures_root: Path) -> None:
    """Malformed YAML raises ConfigFormatError."""
    with pytest.raises(ConfigFormatError, match="Invalid YAML"):
        load_config(fixtures_root / "config" / "invalid.yml")


def test_non_mapping_root(fixtures_root: Path) -> None:
    """The YAML root must be a mapping."""
    with pytest.raises(ConfigFormatError, match="must be a mapping"):
        load_config(fixtures_root / "config" / "list_root.yml")


def test_empty_file(fixtures_root: Path) -> None:
    """An empty file gives an empty configuration."""
    assert load_config(fixtures_root / "config" / "empty.yml") == Box()


def test_discovery_without_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No file in the current directory gives an empty configuration."""
    monkeypatch.chdir(tmp_path)

    assert load_config() == Box()


def test_discovery_in_current_directory(
    copy_fixture: CopyFixture, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``mimecraft.conf.yml`` is picked up from the current directory."""
    copy_fixture("config", "mimecraft.conf.yml", None)
    monkeypatch.chdir(tmp_path)

    assert load_config().mail.session.max_line_length == 100


def test_get_config_is_cached(copy_fixture: CopyFixture, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """``get_config`` loads once until ``clear_config`` is called."""
    monkeypatch.chdir(tmp_path)
    first = get_config()
    assert first == Box()

    copy_fixture("config", "mimecraft.conf.yml", None)
    assert get_config() is first

    clear_config()
    assert get_config().mail.limits.max_attachments == 5
