"""Config-driven limits applied to message attachments.

Values are read from the ``mail.limits`` section of the configuration and
clamped to hard bounds, so a configuration file can tighten but never
remove the protection.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mimecraft.utils import format_bytes, parse_size_string

log = logging.getLogger(__name__)

#: Default maximum size of a single attachment (25 MiB).
DEFAULT_MAX_ATTACHMENT_SIZE = 25 * 1024 * 1024

#: Default maximum number of attachments per message.
DEFAULT_MAX_ATTACHMENTS = 20

#: Hard maximum size of a single attachment (50 MiB).
HARD_MAX_ATTACHMENT_SIZE = 50 * 1024 * 1024

#: Hard maximum number of attachments per message.
HARD_MAX_ATTACHMENTS = 50


@dataclass(frozen=True, slots=True)
class MailLimits:
    """Attachment limits enforced while building a message.

    Sessions carry limits only when configured; see ``MailSession.from_config``.

    Attributes:
        max_attachment_size: Maximum payload size of one attachment, in bytes.
        max_attachments: Maximum number of attachments in one message.

    Examples:
        >>> MailLimits(max_attachment_size=1024, max_attachments=2).max_attachment_size_display
        '1.0 KiB'
    """

    max_attachment_size: int = DEFAULT_MAX_ATTACHMENT_SIZE
    max_attachments: int = DEFAULT_MAX_ATTACHMENTS

    @property
    def max_attachment_size_display(self) -> str:
        """Human-readable maximum attachment size."""
        return format_bytes(self.max_attachment_size)


def _limits_section(config: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not config:
        return {}
    mail = config.get("mail")
    if not isinstance(mail, Mapping):
        return {}
    limits = mail.get("limits")
    return limits if isinstance(limits, Mapping) else {}


def get_mail_limits(config: Mapping[str, Any] | None = None) -> MailLimits:
    """Build ``MailLimits`` from a configuration mapping.

    Invalid values fall back to the defaults, values above the hard
    maximum are clamped, and at least one attachment is always allowed.

    Args:
        config: Full configuration mapping (the ``mail.limits`` section is read).
            None or empty uses the defaults.

    Returns:
        The effective limits.

    Examples:
        >>> get_mail_limits({"mail": {"limits": {"max_attachments": 100}}}).max_attachments
        50
    """
    section = _limits_section(config)

    max_size = DEFAULT_MAX_ATTACHMENT_SIZE
    raw_size = section.get("max_attachment_size")
    if raw_size is not None:
        try:
            max_size = parse_size_string(raw_size)
        except (TypeError, ValueError):
            log.warning("Invalid mail.limits.max_attachment_size %r, using default", raw_size)
            max_size = DEFAULT_MAX_ATTACHMENT_SIZE
    max_size = max(1, min(max_size, HARD_MAX_ATTACHMENT_SIZE))

    max_count = DEFAULT_MAX_ATTACHMENTS
    raw_count = section.get("max_attachments")
    if raw_count is not None:
        try:
            max_count = int(raw_count)
        except (TypeError, ValueError):
            log.warning("Invalid mail.limits.max_attachments %r, using default", raw_count)
            max_count = DEFAULT_MAX_ATTACHMENTS
    max_count = max(1, min(max_count, HARD_MAX_ATTACHMENTS))

    return MailLimits(max_attachment_size=max_size, max_attachments=max_count)


__all__ = [
    "DEFAULT_MAX_ATTACHMENTS",
    "DEFAULT_MAX_ATTACHMENT_SIZE",
    "HARD_MAX_ATTACHMENTS",
    "HARD_MAX_ATTACHMENT_SIZE",
    "MailLimits",
    "get_mail_limits",
]
