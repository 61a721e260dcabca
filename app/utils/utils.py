import random
import string
import time
from datetime import datetime, timezone

BASE36_CHARS = string.digits + string.ascii_lowercase

def trim_value(value):
    if isinstance(value, str):
        return value.strip()
    elif isinstance(value, list):
        return [item.strip() if isinstance(item, str) else item for item in value]
    return value

def generate_request_id() -> str:
    """
    Build a request identifier of the form req_<epoch-ms>_<9 base36 chars>.

    Returns:
        str: e.g. "req_1760789012345_k3j9x0a1b"
    """
    suffix = "".join(random.choices(BASE36_CHARS, k=9))
    return f"req_{int(time.time() * 1000)}_{suffix}"

def bytes_to_mb(value: int) -> float:
    """Convert bytes to megabytes rounded to two decimals."""
    return round(value / 1024 / 1024, 2)

def format_mb(value: int) -> str:
    """Render a byte count the way /ping reports memory, e.g. "42.17MB"."""
    return f"{bytes_to_mb(value)}MB"

def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
