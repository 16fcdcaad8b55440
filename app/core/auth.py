"""Admin allow-list authorization.

Admin commands are authorized by the sender's numeric Telegram id only.
The allow-list comes from a comma-separated environment variable.

An empty allow-list is interpreted through an explicit mode:
- ``AdminMode.OPEN_IF_EMPTY`` (default): every sender is an admin. This lets
  a freshly deployed bot be configured by whoever talks to it first.
- ``AdminMode.STRICT``: nobody is an admin until ids are configured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from app.core.config import TelegramSettings, settings
from app.core.errors import AuthenticationAppError

logger = logging.getLogger(__name__)


class AdminMode(str, Enum):
    OPEN_IF_EMPTY = "open_if_empty"
    STRICT = "strict"


def parse_admin_ids(ids_string: str | None) -> frozenset[str]:
    """Parse comma-separated admin ids into a set.

    Examples:
        >>> sorted(parse_admin_ids("111, 222 ,333"))
        ['111', '222', '333']
        >>> parse_admin_ids(None)
        frozenset()
    """
    if not ids_string:
        return frozenset()

    return frozenset(part.strip() for part in ids_string.split(",") if part.strip())


@dataclass(frozen=True)
class AdminPolicy:
    """Decides whether a sender may run admin commands."""

    admin_ids: frozenset[str] = frozenset()
    mode: AdminMode = AdminMode.OPEN_IF_EMPTY

    @classmethod
    def from_settings(cls, telegram: TelegramSettings | None = None) -> "AdminPolicy":
        cfg = telegram or settings.telegram
        return cls(admin_ids=parse_admin_ids(cfg.admin_ids), mode=AdminMode(cfg.admin_policy))

    @property
    def is_open(self) -> bool:
        """True when every sender is treated as an admin."""
        return not self.admin_ids and self.mode is AdminMode.OPEN_IF_EMPTY

    def is_admin(self, sender_id: int | str | None) -> bool:
        if not self.admin_ids:
            return self.mode is AdminMode.OPEN_IF_EMPTY
        if sender_id is None:
            return False
        return str(sender_id) in self.admin_ids

    def require_admin(self, sender_id: int | str | None, *, command: str) -> None:
        """Raise unless ``sender_id`` is an admin.

        Raises:
            AuthenticationAppError: If the sender is not allowed.
        """
        if self.is_admin(sender_id):
            return

        logger.warning(
            "admin_policy.denied",
            extra={"sender_id": sender_id, "command": command},
        )
        raise AuthenticationAppError(
            code="admin_only",
            message=f"Only admin(s) can use /{command}.",
        )
