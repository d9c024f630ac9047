"""Data models for the mimecraft package.

This module defines the core data structures used to describe a message:

- BodyKind: Enum for the body content type (plain, html)
- BuildErrorKind: Enum tagging the category of a build failure
- FileAttachment: Attachment sourced from a filesystem path
- BytesAttachment: Attachment sourced from an in-memory buffer
- MessageConfig: Frozen snapshot of everything needed to build a message
- BuildResult: Outcome of a build that does not raise
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from email.message import EmailMessage

    from mimecraft.exceptions import MessageBuildError

#: Content type used for attachments whose type is unknown.
DEFAULT_ATTACHMENT_CONTENT_TYPE = "application/octet-stream"

#: Prefix of the generated name for attachments without a filename.
FALLBACK_FILENAME_PREFIX = "file_"


class BodyKind(str, Enum):
    """Content type of the message body.

    Attributes:
        PLAIN: ``text/plain`` body encoded as UTF-8.
        HTML: ``text/html`` body encoded as UTF-8.
    """

    PLAIN = "plain"
    HTML = "html"


class BuildErrorKind(str, Enum):
    """Category of a build failure.

    Attributes:
        MISSING_REQUIRED_FIELD: from, to, subject or body was not set.
        CONSTRUCTION_FAILURE: the ``email`` package rejected a value, or an
            attachment source could not be read.
        LIMIT_EXCEEDED: attachments exceed the session limits.
    """

    MISSING_REQUIRED_FIELD = "missing_required_field"
    CONSTRUCTION_FAILURE = "construction_failure"
    LIMIT_EXCEEDED = "limit_exceeded"


@dataclass(frozen=True, slots=True)
class FileAttachment:
    """Attachment read from the local filesystem at build time.

    Attributes:
        filename: Display name in the message. Empty or None falls back to
            ``file_<index>``.
        path: Source file. None, a missing path or a directory means the
            attachment is skipped.

    Examples:
        >>> FileAttachment("report.pdf", "/tmp/report.pdf").path
        PosixPath('/tmp/report.pdf')
    """

    filename: str | None
    path: Path | None

    def __post_init__(self) -> None:
        """Normalize string paths to ``Path`` objects."""
        if self.path is not None and not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True, slots=True)
class BytesAttachment:
    """Attachment held in memory.

    Attributes:
        filename: Display name in the message. Empty or None falls back to
            ``file_<index>``.
        content: Raw payload. None or empty means the attachment is skipped.
        content_type: MIME type of the payload.
    """

    filename: str | None
    content: bytes | None
    content_type: str = DEFAULT_ATTACHMENT_CONTENT_TYPE


Attachment = FileAttachment | BytesAttachment


@dataclass(frozen=True, slots=True)
class MessageConfig:
    """Snapshot of the fields collected by a ``MessageBuilder``.

    ``None`` marks a field that was never set.

    Attributes:
        sender: Address for the ``From`` header.
        recipient: Address for the ``To`` header.
        subject: Subject line.
        body: Body text or HTML markup.
        body_kind: Whether ``body`` is plain text or HTML.
        attachments: Ordered attachments.

    Examples:
        >>> config = MessageConfig(sender="a@example.com", recipient="b@example.com")
        >>> config.body_kind
        <BodyKind.PLAIN: 'plain'>
    """

    sender: str | None = None
    recipient: str | None = None
    subject: str | None = None
    body: str | None = None
    body_kind: BodyKind = BodyKind.PLAIN
    attachments: tuple[Attachment, ...] = ()

    @property
    def is_html(self) -> bool:
        """Whether the body is HTML."""
        return self.body_kind == BodyKind.HTML


@dataclass(slots=True)
class BuildResult:
    """Outcome of ``try_build_message``.

    Exactly one of ``message`` and ``error`` is set.

    Attributes:
        message: The assembled message on success.
        error: The build error on failure.

    Examples:
        >>> BuildResult().ok
        False
    """

    message: EmailMessage | None = None
    error: MessageBuildError | None = None

    @property
    def ok(self) -> bool:
        """Whether the build produced a message."""
        return self.message is not None and self.error is None

    @property
    def kind(self) -> BuildErrorKind | None:
        """Failure category, or None on success."""
        return self.error.kind if self.error is not None else None

    @property
    def cause(self) -> BaseException | None:
        """Underlying exception that made the build fail, if any."""
        return self.error.cause if self.error is not None else None

    def unwrap(self) -> EmailMessage:
        """Return the message or raise the stored error.

        Raises:
            MessageBuildError: If the build failed.
        """
        if self.error is not None:
            raise self.error
        if self.message is None:
            raise ValueError("BuildResult holds neither a message nor an error")
        return self.message


__all__ = [
    "DEFAULT_ATTACHMENT_CONTENT_TYPE",
    "FALLBACK_FILENAME_PREFIX",
    "Attachment",
    "BodyKind",
    "BuildErrorKind",
    "BuildResult",
    "BytesAttachment",
    "FileAttachment",
    "MessageConfig",
]
