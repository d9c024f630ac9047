"""YAML configuration loading for mimecraft.

Configuration lives in ``mimecraft.conf.yml`` (current directory) or in an
explicit file. It is returned as a :class:`box.Box` so sections can be read
with attribute access::

    config = load_config("mail.yml")
    config.mail.limits.max_attachments

Supported sections are ``mail.session``, ``mail.limits`` and ``logging``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from box import Box

from mimecraft.exceptions import ConfigFileNotFoundError, ConfigFormatError

log = logging.getLogger(__name__)

#: File name looked up in the current directory when no path is given.
DEFAULT_CONFIG_FILENAME = "mimecraft.conf.yml"

_cached_config: Box | None = None


def _load_yaml_file(path: Path, encoding: str = "utf-8") -> Box:
    """Parse one YAML file into a Box.

    Raises:
        ConfigFileNotFoundError: If ``path`` does not exist.
        ConfigFormatError: If the file is not valid YAML or its root is not a mapping.
    """
    if not path.is_file():
        raise ConfigFileNotFoundError(str(path))

    try:
        with path.open(encoding=encoding) as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigFormatError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return Box()
    if not isinstance(data, Mapping):
        raise ConfigFormatError(f"Configuration root in {path} must be a mapping, got {type(data).__name__}")
    return Box(data)


def load_config(path: str | Path | None = None, *, encoding: str = "utf-8") -> Box:
    """Load configuration from a YAML file.

    Args:
        path: Explicit file to read. When None, ``mimecraft.conf.yml`` in the
            current directory is used if it exists, otherwise an empty Box
            is returned.
        encoding: File encoding.

    Returns:
        Configuration as a Box.

    Raises:
        ConfigFileNotFoundError: If an explicit ``path`` does not exist.
        ConfigFormatError: If the file cannot be parsed.

    Examples:
        >>> load_config("missing.yml")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        mimecraft.exceptions.ConfigFileNotFoundError: Configuration file not found: missing.yml
    """
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if not candidate.is_file():
            log.debug("No %s found in %s, using empty configuration", DEFAULT_CONFIG_FILENAME, Path.cwd())
            return Box()
        path = candidate

    config = _load_yaml_file(Path(path), encoding=encoding)
    log.debug("Loaded configuration from %s", path)
    return config


def get_config() -> Box:
    """Return the configuration of the current directory, loading it once."""
    global _cached_config  # pylint: disable=global-statement
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def clear_config() -> None:
    """Forget the cached configuration so the next ``get_config`` reloads it."""
    global _cached_config  # pylint: disable=global-statement
    _cached_config = None


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "clear_config",
    "get_config",
    "load_config",
]
