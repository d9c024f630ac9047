"""Fluent assembly of MIME email messages.

mimecraft collects sender, recipient, subject, body and attachments and
hands back a ready ``multipart/mixed`` :class:`email.message.EmailMessage`.
Sending it is left to the caller's transport.

Examples:
    >>> from mimecraft import BytesAttachment, MessageBuilder
    >>> message = (
    ...     MessageBuilder()
    ...     .from_("sender@example.com")
    ...     .to("user@example.com")
    ...     .subject("Report")
    ...     .text("See attached.")
    ...     .attachments([BytesAttachment("", b"payload")])
    ...     .build()
    ... )
    >>> [part.get_filename() for part in message.iter_attachments()]
    ['file_0']
"""

from mimecraft.builder import MessageBuilder, build_message, try_build_message
from mimecraft.config import get_config, load_config
from mimecraft.exceptions import (
    AttachmentLimitError,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigFormatError,
    MessageBuildError,
    MessageConstructionError,
    MimecraftError,
    MissingRequiredFieldError,
)
from mimecraft.limits import MailLimits, get_mail_limits
from mimecraft.models import (
    Attachment,
    BodyKind,
    BuildErrorKind,
    BuildResult,
    BytesAttachment,
    FileAttachment,
    MessageConfig,
)
from mimecraft.session import MailSession

__version__ = "0.1.0"

__all__ = [
    "Attachment",
    "AttachmentLimitError",
    "BodyKind",
    "BuildErrorKind",
    "BuildResult",
    "BytesAttachment",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "FileAttachment",
    "MailLimits",
    "MailSession",
    "MessageBuildError",
    "MessageBuilder",
    "MessageConfig",
    "MessageConstructionError",
    "MimecraftError",
    "MissingRequiredFieldError",
    "build_message",
    "get_config",
    "get_mail_limits",
    "load_config",
    "try_build_message",
]
