"""Logging helpers for the Gigboard backend.

Loggers live under the ``gigboard`` hierarchy so that
``gigboard.logging_config.setup_gigboard_logging`` captures API logs
alongside the marketplace core.
"""

import logging

_auth_logger = logging.getLogger("gigboard.api.auth_events")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a backend module."""
    return logging.getLogger(name)


def log_auth_event(event: str, user_id: str | None, success: bool, reason: str | None = None) -> None:
    """Record an authentication event (signup, signin, signout, token)."""
    outcome = "ok" if success else "failed"
    message = f"AUTH {event} | user={user_id or '-'} | {outcome}"
    if reason:
        message += f" | reason={reason}"
    if success:
        _auth_logger.info(message)
    else:
        _auth_logger.warning(message)
