"""Action boundary: turn client errors into user-facing notifications."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from blogcms.client.errors import (
    ActionInProgressError,
    AuthorizationError,
    ClientError,
    NotFoundError,
    SessionExpiredError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "info" | "warning" | "error"
    message: str


@dataclass
class ActionResult:
    ok: bool
    value: Any = None
    error: Optional[ClientError] = None
    navigate_away: bool = False
    session_expired: bool = False


def _level_for(error: ClientError) -> str:
    if isinstance(error, ActionInProgressError):
        return "info"
    if isinstance(error, AuthorizationError):
        return "warning"
    return "error"


def run_action(
    action: Callable[[], Any],
    notify: Optional[Callable[[Notification], None]] = None,
    success_message: Optional[str] = None,
) -> ActionResult:
    """Run ``action`` once. Client errors are reported through ``notify``, never retried."""
    try:
        value = action()
    except ClientError as exc:
        logger.info("[client] action failed: %s: %s", type(exc).__name__, exc.message)
        if notify:
            notify(Notification(_level_for(exc), exc.message))
        return ActionResult(
            ok=False,
            error=exc,
            navigate_away=isinstance(exc, NotFoundError),
            session_expired=isinstance(exc, SessionExpiredError),
        )
    if notify and success_message:
        notify(Notification("success", success_message))
    return ActionResult(ok=True, value=value)
