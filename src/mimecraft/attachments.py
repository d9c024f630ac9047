"""Attachment source resolution.

Turns a :data:`~mimecraft.models.Attachment` into the name, MIME type and
payload that end up in the message, or reports that it must be skipped.
A missing source is not an error: file attachments whose path is unset or
does not point to a regular file, and byte attachments with no content,
resolve to ``None``.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mimecraft.exceptions import AttachmentLimitError
from mimecraft.logging import TRACE_LEVEL
from mimecraft.models import (
    DEFAULT_ATTACHMENT_CONTENT_TYPE,
    FALLBACK_FILENAME_PREFIX,
    BytesAttachment,
    FileAttachment,
)
from mimecraft.utils import format_bytes

if TYPE_CHECKING:
    from pathlib import Path

    from mimecraft.models import Attachment

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedAttachment:
    """Attachment ready to be added to a message.

    Attributes:
        filename: Name shown to the recipient.
        maintype: MIME main type (``application``, ``image``...).
        subtype: MIME subtype.
        data: Payload bytes.
    """

    filename: str
    maintype: str
    subtype: str
    data: bytes

    @property
    def content_type(self) -> str:
        """Full MIME type, e.g. ``application/pdf``."""
        return f"{self.maintype}/{self.subtype}"


def fallback_filename(index: int) -> str:
    """Return the generated name for the attachment at ``index``.

    Examples:
        >>> fallback_filename(0)
        'file_0'
    """
    return f"{FALLBACK_FILENAME_PREFIX}{index}"


def guess_content_type(path: Path) -> str:
    """Guess the MIME type of a file from its name.

    Compressed files (``.gz``, ``.bz2``...) and unknown extensions are
    reported as ``application/octet-stream``.

    Examples:
        >>> from pathlib import Path
        >>> guess_content_type(Path("notes.txt"))
        'text/plain'
        >>> guess_content_type(Path("blob"))
        'application/octet-stream'
    """
    content_type, encoding = mimetypes.guess_type(path.name)
    if content_type is None or encoding is not None:
        return DEFAULT_ATTACHMENT_CONTENT_TYPE
    return content_type


def _split_content_type(content_type: str) -> tuple[str, str]:
    maintype, sep, subtype = content_type.strip().partition("/")
    if not sep or not maintype or not subtype or "/" in subtype:
        raise ValueError(f"Invalid attachment content type: {content_type!r}")
    return maintype.lower(), subtype.lower()


def resolve_attachment(
    attachment: Attachment,
    index: int,
    *,
    max_size: int | None = None,
) -> ResolvedAttachment | None:
    """Resolve one attachment, or return None when its source is missing.

    Args:
        attachment: File or bytes attachment.
        index: Position of the attachment in the message's attachment list,
            used for the fallback name.
        max_size: Largest payload accepted, in bytes. Files are checked
            against it before being read. None means no limit.

    Returns:
        The resolved attachment, or None if it must be skipped.

    Raises:
        AttachmentLimitError: If a file is larger than ``max_size``.
        OSError: If an existing file cannot be read.
        ValueError: If a byte attachment declares a malformed content type.
        TypeError: If ``attachment`` is neither a file nor a bytes attachment.
    """
    if not isinstance(attachment, (FileAttachment, BytesAttachment)):
        raise TypeError(f"Unsupported attachment type: {type(attachment).__name__}")

    filename = attachment.filename or fallback_filename(index)

    if isinstance(attachment, FileAttachment):
        path = attachment.path
        if path is None or not path.is_file():
            log.debug("Skipping attachment #%d (%s): source file %s not found", index, filename, path)
            return None
        if max_size is not None:
            size = path.stat().st_size
            if size > max_size:
                raise AttachmentLimitError(
                    f"Attachment '{filename}' ({format_bytes(size)}) exceeds size limit of {format_bytes(max_size)}"
                )
        data = path.read_bytes()
        content_type = guess_content_type(path)
    else:
        if not attachment.content:
            log.debug("Skipping attachment #%d (%s): no content", index, filename)
            return None
        data = bytes(attachment.content)
        content_type = attachment.content_type or DEFAULT_ATTACHMENT_CONTENT_TYPE

    maintype, subtype = _split_content_type(content_type)
    log.log(TRACE_LEVEL, "Attachment #%d resolved: %s (%s/%s, %d bytes)", index, filename, maintype, subtype, len(data))
    return ResolvedAttachment(filename=filename, maintype=maintype, subtype=subtype, data=data)


__all__ = [
    "ResolvedAttachment",
    "fallback_filename",
    "guess_content_type",
    "resolve_attachment",
]
