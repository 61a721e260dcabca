import logging
import os
import resource
import sys
import time
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.config import API_NAME, API_VERSION, TIMEZONE
from app.services.database import get_db, ping_database
from app.utils.utils import format_mb, utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])

START_TIME = time.time()

LOCALTIME_PATH = "/etc/localtime"
TIMEZONE_FILE = "/etc/timezone"

def iana_timezone(localtime_path: str = LOCALTIME_PATH, timezone_file: str = TIMEZONE_FILE):
    """
    Resolve the system zone as an IANA name, e.g. "Asia/Jakarta".

    Follows the /etc/localtime symlink into the zoneinfo tree, then falls back
    to /etc/timezone. Returns None when neither yields a name.
    """
    try:
        target = os.path.realpath(localtime_path)
        if "zoneinfo/" in target:
            return target.split("zoneinfo/", 1)[1]
    except OSError:
        pass
    try:
        with open(timezone_file) as tz_file:
            name = tz_file.read().strip()
        return name or None
    except OSError:
        return None

def resolved_timezone() -> str:
    if TIMEZONE:
        return TIMEZONE
    return iana_timezone() or datetime.now().astimezone().tzname() or "UTC"

def uptime_seconds() -> int:
    return int(time.time() - START_TIME)

def peak_rss_bytes() -> int:
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    return peak if sys.platform == "darwin" else peak * 1024

def current_rss_bytes() -> int:
    try:
        with open("/proc/self/statm") as statm:
            pages = int(statm.read().split()[1])
        return pages * os.sysconf("SC_PAGE_SIZE")
    except (OSError, ValueError, IndexError):
        return peak_rss_bytes()

def memory_usage() -> dict:
    return {
        "heapUsed": format_mb(current_rss_bytes()),
        "heapTotal": format_mb(peak_rss_bytes()),
    }

@router.get("/", summary="Root endpoint", response_description="Returns basic API information")
def root():
    return {
        "success": True,
        "data": {
            "name": API_NAME,
            "timestamp": utc_now_iso(),
            "documentation": "/swagger",
            "status": "operational"
        }
    }

@router.get("/ping", summary="Ping endpoint", response_description="Returns server status and runtime information")
def ping():
    return {
        "success": True,
        "data": {
            "timestamp": utc_now_iso(),
            "timezone": resolved_timezone(),
            "name": API_NAME,
            "version": API_VERSION,
            "uptime": uptime_seconds(),
            "database": "connected",
            "memory": memory_usage()
        }
    }

@router.get("/health", summary="Health check", response_description="Health status of the API and its dependencies")
def health(db: Session = Depends(get_db)):
    try:
        ping_database(db)
        return {
            "success": True,
            "data": {
                "status": "healthy",
                "timestamp": utc_now_iso(),
                "services": {"api": "operational", "database": "operational"}
            }
        }
    except Exception as e:
        logger.error(f"Database health probe failed: {e}")
        return {
            "success": False,
            "data": {
                "status": "unhealthy",
                "timestamp": utc_now_iso(),
                "services": {"api": "operational", "database": "failed"}
            }
        }
