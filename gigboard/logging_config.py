"""
Local logging for gigboard.

``setup_gigboard_logging`` attaches a daily file handler to the ``gigboard``
logger so every module logger (``gigboard.marketplace.*``) lands in
``$GIGBOARD_DATA_DIR/logs/local-{date}.log``. ``log_marketplace_event``
appends one line per lifecycle event to a separate
``marketplace-events-{date}.log`` for easy auditing.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_module_logger = logging.getLogger(__name__)


def get_log_dir() -> Path:
    """Directory for log files, created on demand."""
    base = os.environ.get("GIGBOARD_DATA_DIR") or str(Path.home() / ".gigboard")
    log_dir = Path(base) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def setup_gigboard_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure the ``gigboard`` logger with a file handler.

    Unknown level names fall back to INFO. DEBUG also echoes to the console.
    Safe to call more than once.
    """
    logger = logging.getLogger("gigboard")
    log_level = getattr(logging, str(level).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logger.setLevel(log_level)

    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger

    log_dir = Path(log_dir) if log_dir else get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(log_dir / f"local-{_today()}.log")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if log_level == logging.DEBUG:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger


def log_marketplace_event(event_type: str, details: str, actor_id: str = "system") -> None:
    """Append a lifecycle event line: ``{ts} | {event} | actor={id} | {details}``."""
    path = get_log_dir() / f"marketplace-events-{_today()}.log"
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{timestamp} | {event_type} | actor={actor_id} | {details}\n")
    except OSError as e:
        _module_logger.warning(f"Could not write marketplace event log: {e}")


def log_job_event(actor_id: str, job_id: str, status: str) -> None:
    log_marketplace_event("job", f"id={job_id} | status={status}", actor_id=actor_id)


def log_application_event(actor_id: str, application_id: str, job_id: str, status: str) -> None:
    log_marketplace_event(
        "application", f"id={application_id} | job={job_id} | status={status}", actor_id=actor_id
    )
