import logging
import logging.handlers
import os
import re
import sys
from pathlib import Path
from typing import List, Optional

APP_LOGGER = "gymcrm"

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", '
    '"message": "%(message)s", "line": %(lineno)d}'
)


class SecurityFilter(logging.Filter):
    """Mask tokens, passwords and payment signatures before a record is written"""

    REDACTIONS = [
        (re.compile(r"eyJ[\w-]*\.[\w-]*\.[\w-]*"), "[JWT_TOKEN]"),
        (re.compile(r"Bearer\s+[\w.-]+", re.IGNORECASE), "Bearer [TOKEN]"),
        (re.compile(r"(password|secret|razorpay_signature)[\"\s]*[:=][\"\s]*[^,}\s]+", re.IGNORECASE), r"\1: [HIDDEN]"),
        (re.compile(r"session-id[a-f0-9]{32}"), "session-id[SESSION]"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        msg = str(record.msg)
        for pattern, replacement in self.REDACTIONS:
            msg = pattern.sub(replacement, msg)
        record.msg = msg
        return True


def _env_level(name: str, default: str) -> int:
    return getattr(logging, os.getenv(name, default).upper(), logging.INFO)


def _handlers(formatter: logging.Formatter, level: int, log_file: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        )

    redact = os.getenv("ENABLE_SECURITY_FILTER", "false").lower() == "true"
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        if redact:
            handler.addFilter(SecurityFilter())
    return handlers


def setup_logging() -> logging.Logger:
    """Configure console and rotating file logging from the environment.

    LOG_LEVEL, SQL_LOG_LEVEL and LOG_FORMAT ("text" or "json") pick levels and
    layout. LOG_FILE_PATH defaults to ``logs/app.log`` next to the package and
    an empty value turns the file handler off. AUTH_LOG_EVENTS=false keeps
    login/logout chatter out of the logs.
    """
    level = _env_level("LOG_LEVEL", "INFO")
    default_file = Path(__file__).resolve().parents[2] / "logs" / "app.log"
    log_file = os.getenv("LOG_FILE_PATH", str(default_file))
    json_logs = os.getenv("LOG_FORMAT", "text").lower() == "json"
    formatter = logging.Formatter(JSON_FORMAT if json_logs else TEXT_FORMAT)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in _handlers(formatter, level, log_file):
        root.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(_env_level("SQL_LOG_LEVEL", "WARNING"))
    logging.getLogger(APP_LOGGER).setLevel(level)
    auth_events = os.getenv("AUTH_LOG_EVENTS", "true").lower() == "true"
    logging.getLogger(f"{APP_LOGGER}.auth").setLevel(logging.INFO if auth_events else logging.ERROR)

    root.info("Logging initialized level=%s file=%s", logging.getLevelName(level), log_file or "-")
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{APP_LOGGER}.{name}")


def log_auth_event(event_type: str, email: Optional[str] = None,
                   session_id: Optional[str] = None, success: bool = True):
    """Record a login/logout/register outcome; only a short hash of the session is logged"""
    session_ref = f"#{hash(session_id) % 10000}" if session_id else "-"
    outcome = "ok" if success else "failed"
    get_logger("auth").log(
        logging.INFO if success else logging.WARNING,
        f"Auth {event_type} {outcome} user={email or 'unknown'} session={session_ref}",
    )


def log_security_event(event_type: str, details: str, level: str = "WARNING"):
    get_logger("security").log(
        getattr(logging, level.upper(), logging.WARNING),
        f"Security event: {event_type} - {details}",
    )
