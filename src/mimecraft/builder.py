"""Fluent builder assembling ``multipart/mixed`` email messages.

Fields are collected with chained setters and turned into an
:class:`~email.message.EmailMessage` by :meth:`MessageBuilder.build`. All the
MIME work (header encoding, charsets, boundaries, transfer encodings) is done
by the standard :mod:`email` package under the policy of the
:class:`~mimecraft.session.MailSession`.

Examples:
    Plain text message with one attachment::

        from mimecraft import BytesAttachment, MessageBuilder

        message = (
            MessageBuilder()
            .from_("sender@example.com")
            .to("user@example.com")
            .subject("Weekly report")
            .text("See attached.")
            .attachments([BytesAttachment("report.csv", b"a,b\\n1,2\\n")])
            .build()
        )

    Result-returning variant::

        result = MessageBuilder().to("user@example.com").try_build()
        if not result.ok:
            print(result.kind, result.error)
"""

from __future__ import annotations

import logging
from email.errors import MessageError, ObsoleteHeaderDefect
from email.headerregistry import Address, HeaderRegistry
from email.message import EmailMessage
from typing import TYPE_CHECKING

from mimecraft.attachments import resolve_attachment
from mimecraft.exceptions import (
    AttachmentLimitError,
    MessageBuildError,
    MessageConstructionError,
    MissingRequiredFieldError,
)
from mimecraft.logging import TRACE_LEVEL
from mimecraft.models import BodyKind, BuildResult, MessageConfig
from mimecraft.session import MailSession
from mimecraft.utils import format_bytes

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mimecraft.attachments import ResolvedAttachment
    from mimecraft.limits import MailLimits
    from mimecraft.models import Attachment

log = logging.getLogger(__name__)

BODY_CHARSET = "utf-8"

# Errors the email package raises for values it refuses.
_CONSTRUCTION_ERRORS = (ValueError, TypeError, OSError, MessageError)

_HEADER_FACTORY = HeaderRegistry()


class MessageBuilder:
    """Collect message fields and build an ``EmailMessage``.

    Setters store values as given and return the builder, so calls can be
    chained. Nothing is validated until :meth:`build`. The builder is not
    modified by ``build`` and can be built again.

    Examples:
        >>> message = (
        ...     MessageBuilder()
        ...     .from_("sender@example.com")
        ...     .to("user@example.com")
        ...     .subject("Hello")
        ...     .html("<p>Hi</p>")
        ...     .build()
        ... )
        >>> message.get_content_type()
        'multipart/mixed'
    """

    def __init__(self) -> None:
        self._sender: str | None = None
        self._recipient: str | None = None
        self._subject: str | None = None
        self._body: str | None = None
        self._body_kind = BodyKind.PLAIN
        self._attachments: tuple[Attachment, ...] = ()

    def from_(self, address: str) -> MessageBuilder:
        """Set the ``From`` address."""
        self._sender = address
        return self

    def sender(self, address: str) -> MessageBuilder:
        """Alias of :meth:`from_`."""
        return self.from_(address)

    def to(self, address: str) -> MessageBuilder:
        """Set the single ``To`` address."""
        self._recipient = address
        return self

    def subject(self, subject: str) -> MessageBuilder:
        """Set the subject line."""
        self._subject = subject
        return self

    def text(self, body: str) -> MessageBuilder:
        """Set a plain text body, replacing any previous body."""
        self._body = body
        self._body_kind = BodyKind.PLAIN
        return self

    def html(self, body: str) -> MessageBuilder:
        """Set an HTML body, replacing any previous body."""
        self._body = body
        self._body_kind = BodyKind.HTML
        return self

    def attachments(self, attachments: Iterable[Attachment] | None) -> MessageBuilder:
        """Replace the attachment list. None clears it."""
        self._attachments = tuple(attachments) if attachments is not None else ()
        return self

    def config(self) -> MessageConfig:
        """Return a frozen snapshot of the current fields."""
        return MessageConfig(
            sender=self._sender,
            recipient=self._recipient,
            subject=self._subject,
            body=self._body,
            body_kind=self._body_kind,
            attachments=self._attachments,
        )

    def build(self, session: MailSession | None = None) -> EmailMessage:
        """Build the message.

        Args:
            session: Session providing the email policy and limits.
                Defaults to :meth:`MailSession.default`.

        Returns:
            The assembled ``multipart/mixed`` message.

        Raises:
            MissingRequiredFieldError: If from, to, subject or body is unset.
            MessageConstructionError: If the email package rejects a value
                or an attachment file cannot be read.
            AttachmentLimitError: If attachments exceed the session limits.
        """
        return build_message(self.config(), session)

    def try_build(self, session: MailSession | None = None) -> BuildResult:
        """Build the message without raising build errors.

        Returns:
            BuildResult holding either the message or the error.
        """
        return try_build_message(self.config(), session)


def _validate_required(config: MessageConfig) -> None:
    required = (
        ("from", config.sender),
        ("to", config.recipient),
        ("subject", config.subject),
        ("body", config.body),
    )
    for field_name, value in required:
        if value is None:
            raise MissingRequiredFieldError(field_name)


def _display_name(value: str, parsed_name: str) -> str:
    """Return the display name as typed when it only differs from the parsed one in spacing."""
    raw_name, sep, _ = value.rpartition("<")
    raw_name = raw_name.strip()
    if sep and raw_name and raw_name.split() == parsed_name.split():
        return raw_name
    return parsed_name


def _parse_address(field_name: str, value: str) -> Address:
    """Parse exactly one address, accepting the ``Name <addr>`` form.

    Raises:
        MessageConstructionError: If the value holds no address, several
            addresses, a group, or anything the header parser flags as a defect.
    """
    try:
        header = _HEADER_FACTORY(field_name.capitalize(), value)
    # IndexError: the header parser indexes past the end on a dangling "@".
    except (*_CONSTRUCTION_ERRORS, IndexError) as exc:
        raise MessageConstructionError(f"Invalid '{field_name}' address {value!r}: {exc}", cause=exc) from exc

    # Obsolete syntax such as "J. Doe" in a display name is still a usable address.
    defects = [defect for defect in header.defects if not isinstance(defect, ObsoleteHeaderDefect)]
    cause: Exception | None = None
    if defects:
        cause = defects[0]
    elif len(header.addresses) != 1:
        cause = ValueError(f"expected exactly one address, found {len(header.addresses)}")
    elif header.groups[0].display_name is not None:
        cause = ValueError(f"address groups are not allowed, got group {header.groups[0].display_name!r}")
    if cause is not None:
        raise MessageConstructionError(f"Invalid '{field_name}' address {value!r}: {cause}", cause=cause) from cause

    parsed = header.addresses[0]
    try:
        return Address(
            display_name=_display_name(value, parsed.display_name),
            username=parsed.username,
            domain=parsed.domain,
        )
    except _CONSTRUCTION_ERRORS as exc:
        raise MessageConstructionError(f"Invalid '{field_name}' address {value!r}: {exc}", cause=exc) from exc


def _check_limits(parts: list[ResolvedAttachment], limits: MailLimits | None) -> None:
    if limits is None:
        return
    if len(parts) > limits.max_attachments:
        raise AttachmentLimitError(f"Maximum of {limits.max_attachments} attachments exceeded ({len(parts)} given)")
    for part in parts:
        if len(part.data) > limits.max_attachment_size:
            raise AttachmentLimitError(
                f"Attachment '{part.filename}' ({format_bytes(len(part.data))}) "
                f"exceeds size limit of {limits.max_attachment_size_display}"
            )


def build_message(config: MessageConfig, session: MailSession | None = None) -> EmailMessage:
    """Assemble an ``EmailMessage`` from a message configuration.

    The message is always ``multipart/mixed``: the body is the first part,
    followed by the attachments in the order given. Attachments whose source
    is missing are skipped. Attachments without a filename are named
    ``file_<index>``.

    Args:
        config: Fields of the message.
        session: Session providing the email policy and limits.

    Returns:
        The assembled message.

    Raises:
        MissingRequiredFieldError: If from, to, subject or body is None.
        MessageConstructionError: If the email package rejects a value or an
            attachment file cannot be read. The original exception is kept
            in ``cause``.
        AttachmentLimitError: If the session sets limits and the attachments
            exceed them.
    """
    _validate_required(config)
    session = session or MailSession.default()

    sender = _parse_address("from", config.sender)  # type: ignore[arg-type]
    recipient = _parse_address("to", config.recipient)  # type: ignore[arg-type]

    limits = session.limits
    max_size = limits.max_attachment_size if limits is not None else None
    parts: list[ResolvedAttachment] = []
    try:
        for index, attachment in enumerate(config.attachments):
            part = resolve_attachment(attachment, index, max_size=max_size)
            if part is not None:
                parts.append(part)
    except _CONSTRUCTION_ERRORS as exc:
        raise MessageConstructionError(f"Cannot read attachment: {exc}", cause=exc) from exc

    _check_limits(parts, limits)

    log.debug(
        "Building %s message to %s with %d attachment(s) (%d skipped)",
        config.body_kind.value,
        recipient.addr_spec,
        len(parts),
        len(config.attachments) - len(parts),
    )

    try:
        message = EmailMessage(policy=session.policy)
        message["From"] = sender
        message["To"] = recipient
        message["Subject"] = config.subject
        message.set_content(config.body, subtype=config.body_kind.value, charset=BODY_CHARSET)
        message.make_mixed()
        for part in parts:
            message.add_attachment(part.data, maintype=part.maintype, subtype=part.subtype, filename=part.filename)
    except _CONSTRUCTION_ERRORS as exc:
        raise MessageConstructionError(f"Cannot assemble message: {exc}", cause=exc) from exc

    if log.isEnabledFor(TRACE_LEVEL):
        log.log(TRACE_LEVEL, "From: %s, To: %s, Subject: %s", message["From"], message["To"], message["Subject"])
        for index, mime_part in enumerate(message.iter_parts()):
            log.log(TRACE_LEVEL, "Part %d: %s %s", index, mime_part.get_content_type(), mime_part.get_filename() or "")

    return message


def try_build_message(config: MessageConfig, session: MailSession | None = None) -> BuildResult:
    """Same as :func:`build_message` but return failures as a ``BuildResult``.

    Examples:
        >>> result = try_build_message(MessageConfig(recipient="user@example.com"))
        >>> result.kind
        <BuildErrorKind.MISSING_REQUIRED_FIELD: 'missing_required_field'>
    """
    try:
        message = build_message(config, session)
    except MessageBuildError as exc:
        log.debug("Message build failed (%s): %s", exc.kind.value, exc)
        return BuildResult(error=exc)
    return BuildResult(message=message)


__all__ = [
    "BODY_CHARSET",
    "MessageBuilder",
    "build_message",
    "try_build_message",
]
