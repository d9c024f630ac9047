"""Mail session: the context a message is assembled in.

A :class:`MailSession` carries the :mod:`email.policy` that governs header
encoding, line length and line endings, plus the attachment limits. The
builder only reads it; sending the resulting message is left to whatever
transport the caller owns.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from email import policy as email_policy
from email.policy import EmailPolicy
from typing import Any

from mimecraft.exceptions import ConfigError
from mimecraft.limits import MailLimits, get_mail_limits

log = logging.getLogger(__name__)

_POLICIES: dict[str, EmailPolicy] = {
    "default": email_policy.default,
    "smtp": email_policy.SMTP,
    "smtputf8": email_policy.SMTPUTF8,
}


@dataclass(frozen=True, slots=True)
class MailSession:
    """Policy and limits used while building messages.

    Attributes:
        policy: Policy passed to every ``EmailMessage`` the builder creates.
        limits: Attachment count and size limits. None means no limits.

    Examples:
        >>> from email import policy
        >>> session = MailSession(policy=policy.SMTP)
        >>> session.policy.linesep
        '\\r\\n'
    """

    policy: EmailPolicy = email_policy.default
    limits: MailLimits | None = None

    @classmethod
    def default(cls) -> MailSession:
        """Return a session with the default policy and no attachment limits."""
        return cls()

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> MailSession:
        """Create a session from the ``mail`` section of a configuration.

        Args:
            config: Configuration mapping. When None, the cached
                ``mimecraft.conf.yml`` of the current directory is used.

        Returns:
            Configured MailSession.

        Raises:
            ConfigError: If the policy name or ``max_line_length`` is invalid.

        Examples:
            >>> MailSession.from_config({"mail": {"session": {"policy": "smtp"}}}).policy.linesep
            '\\r\\n'
        """
        if config is None:
            from mimecraft.config import get_config  # pylint: disable=import-outside-toplevel

            config = get_config()

        mail = config.get("mail") or {}
        section = mail.get("session") if isinstance(mail, Mapping) else None
        if section is None:
            section = {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"mail.session must be a mapping, got {type(section).__name__}")

        policy_name = str(section.get("policy", "default")).lower()
        policy = _POLICIES.get(policy_name)
        if policy is None:
            available = ", ".join(sorted(_POLICIES))
            raise ConfigError(f"Unknown mail policy '{policy_name}'. Available: {available}")

        max_line_length = section.get("max_line_length")
        if max_line_length is not None:
            if isinstance(max_line_length, bool) or not isinstance(max_line_length, int) or max_line_length <= 0:
                raise ConfigError(f"mail.session.max_line_length must be a positive integer, got {max_line_length!r}")
            policy = policy.clone(max_line_length=max_line_length)

        # Limits apply only when the configuration has a mail.limits section.
        limits = None
        if isinstance(mail, Mapping) and isinstance(mail.get("limits"), Mapping):
            limits = get_mail_limits(config)
        if limits is None:
            log.debug("Mail session: policy=%s, no attachment limits", policy_name)
        else:
            log.debug(
                "Mail session: policy=%s, max_attachments=%d, max_attachment_size=%s",
                policy_name,
                limits.max_attachments,
                limits.max_attachment_size_display,
            )
        return cls(policy=policy, limits=limits)


__all__ = ["MailSession"]
