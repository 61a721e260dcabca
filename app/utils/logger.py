import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from app.config import DEBUG, LOG_COLORS

access_logger = logging.getLogger("app.access")

COLORS = {
    "reset": "\x1b[0m",
    "bright": "\x1b[1m",
    "dim": "\x1b[2m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "red": "\x1b[31m",
    "gray": "\x1b[90m",
}

SEPARATOR = "-" * 80


@dataclass
class LogEntry:
    timestamp: str
    method: str
    path: str
    status: int
    response_time: int
    request_id: str
    user_agent: Optional[str] = None
    ip: Optional[str] = None
    query: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, Any]] = None


def colorize(text: str, color: str, enabled: bool = LOG_COLORS) -> str:
    if not enabled:
        return text
    return f"{COLORS[color]}{text}{COLORS['reset']}"


def status_color(status: int) -> str:
    if status >= 500:
        return "red"
    if status >= 400:
        return "yellow"
    return "green"


def format_message(entry: LogEntry, colors: bool = LOG_COLORS) -> str:
    """
    Format an access log entry as a single line:

        [2026-10-18T12:00:00.000Z] GET /wishes 200 3ms (req_..._...)
    """
    return " ".join([
        colorize(f"[{entry.timestamp}]", "gray", colors),
        colorize(entry.method, "blue", colors),
        entry.path,
        colorize(str(entry.status), status_color(entry.status), colors),
        colorize(f"{entry.response_time}ms", "dim", colors),
        colorize(f"({entry.request_id})", "gray", colors),
    ])


def entry_details(entry: LogEntry) -> Dict[str, Any]:
    details = {}
    if entry.user_agent:
        details["userAgent"] = entry.user_agent
    if entry.ip:
        details["ip"] = entry.ip
    if entry.query:
        details["query"] = entry.query
    if entry.error:
        details["error"] = entry.error
    return details


def log(entry: LogEntry, colors: bool = LOG_COLORS) -> None:
    """Emit the access line, an optional details line, and a separator for errors."""
    level = logging.ERROR if entry.status >= 500 else logging.INFO
    access_logger.log(level, format_message(entry, colors))

    details = entry_details(entry)
    if details:
        access_logger.log(level, "%s %s", colorize("Details:", "dim", colors), details)

    if entry.status >= 400:
        access_logger.log(level, SEPARATOR)


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Access lines carry their own timestamp
    if not access_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        access_logger.addHandler(handler)
    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False
