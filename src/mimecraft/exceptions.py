"""Exceptions raised by the mimecraft package.

Exception hierarchy::

    MimecraftError
        ConfigError (invalid configuration, also ValueError)
            ConfigFileNotFoundError (explicit config path missing)
            ConfigFormatError (unreadable YAML or wrong root type)
        MessageBuildError (base for every build failure)
            MissingRequiredFieldError (from/to/subject/body unset)
            MessageConstructionError (mail library rejected a value)
            AttachmentLimitError (session limits exceeded)
"""

from __future__ import annotations

from mimecraft.models import BuildErrorKind


class MimecraftError(Exception):
    """Base exception for all mimecraft errors."""


class ConfigError(MimecraftError, ValueError):
    """Configuration is invalid.

    Raised when a configuration file or mapping contains values that
    cannot be turned into a session or limits object.
    """


class ConfigFileNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist.

    Attributes:
        path: The path that was looked up.
    """

    def __init__(self, path: str) -> None:
        """Initialize ConfigFileNotFoundError.

        Args:
            path: The path that was looked up.
        """
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class ConfigFormatError(ConfigError):
    """A configuration file could not be parsed."""


class MessageBuildError(MimecraftError):
    """Base exception for every failure of a message build.

    Callers that only care whether a build succeeded catch this class;
    ``kind`` tells the categories apart and ``cause`` keeps the original
    exception raised by the ``email`` package, if any.

    Attributes:
        kind: Category of the failure.
        cause: Underlying exception, or None.
    """

    kind: BuildErrorKind = BuildErrorKind.CONSTRUCTION_FAILURE

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        """Initialize MessageBuildError.

        Args:
            message: Human-readable error message.
            cause: Underlying exception, if any.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause


class MissingRequiredFieldError(MessageBuildError):
    """A required field was not set before ``build``.

    Attributes:
        field_name: Name of the missing field (``from``, ``to``,
            ``subject`` or ``body``).

    Examples:
        >>> raise MissingRequiredFieldError("subject")
        Traceback (most recent call last):
        ...
        mimecraft.exceptions.MissingRequiredFieldError: Required field 'subject' is not set
    """

    kind = BuildErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, field_name: str) -> None:
        """Initialize MissingRequiredFieldError.

        Args:
            field_name: Name of the missing field.
        """
        super().__init__(f"Required field '{field_name}' is not set")
        self.field_name = field_name


class MessageConstructionError(MessageBuildError):
    """The mail library rejected an address, header or content value."""

    kind = BuildErrorKind.CONSTRUCTION_FAILURE


class AttachmentLimitError(MessageBuildError):
    """Attachments exceed the count or size limits of the session."""

    kind = BuildErrorKind.LIMIT_EXCEEDED


__all__ = [
    "AttachmentLimitError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "MessageBuildError",
    "MessageConstructionError",
    "MimecraftError",
    "MissingRequiredFieldError",
]
