"""Shared pytest fixtures for the mimecraft test suite."""

from __future__ import annotations

# Disable Rich colors and force a wide terminal before rich is imported
import os

os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"
os.environ["COLUMNS"] = "200"

import logging
import pathlib
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

import mimecraft.config as _cfg
from mimecraft import MessageBuilder

# pylint: disable=redefined-outer-name


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return the root directory containing persistent test fixtures."""

    return pathlib.Path(__file__).parent / "fixtures"


@pytest.fixture
def copy_fixture(fixtures_root: Path, tmp_path: Path) -> Callable[[str, str, str | None], Path]:
    """Copy a fixture file into the pytest temp directory."""

    def _copy(subdir: str, fixture_name: str, dest_name: str | None = None) -> Path:
        """Copy the requested fixture file and return the destination path."""

        src = fixtures_root / subdir / fixture_name
        dst = tmp_path / (dest_name or fixture_name)
        shutil.copyfile(src, dst)
        return dst

    return _copy


@pytest.fixture(autouse=True)
def reset_config_cache() -> Iterator[None]:
    """Make every test start without a cached configuration."""

    _cfg.clear_config()
    yield
    _cfg.clear_config()


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Restore the ``mimecraft`` logger after tests that configure it."""

    logger = logging.getLogger("mimecraft")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def complete_builder() -> MessageBuilder:
    """Return a builder with every required field set."""

    return MessageBuilder().from_("sender@example.com").to("user@example.com").subject("Greetings").text("Hello")


@pytest.fixture
def attachment_file(tmp_path: Path) -> Path:
    """Create a small text file usable as an attachment source."""

    file_path = tmp_path / "attachments" / "data.txt"
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text("payload", encoding="utf-8")
    return file_path
