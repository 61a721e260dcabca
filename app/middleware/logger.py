import logging
import time
import traceback
import uuid
from fastapi import Request
from fastapi.responses import JSONResponse
from app.utils import logger as access_log
from app.utils.logger import LogEntry, colorize
from app.utils.utils import generate_request_id, utc_now_iso

logger = logging.getLogger(__name__)

POWERED_BY = "FastAPI + Uvicorn"


def client_ip(request: Request):
    return request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip") or None


def build_entry(request: Request, request_id: str, started: float, status: int, error=None) -> LogEntry:
    return LogEntry(
        timestamp=utc_now_iso(),
        method=request.method,
        path=request.url.path,
        status=status,
        response_time=int((time.perf_counter() - started) * 1000),
        request_id=request_id,
        user_agent=request.headers.get("user-agent") or None,
        ip=client_ip(request),
        query=dict(request.query_params),
        error=error,
    )


def internal_error_response(request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "timestamp": utc_now_iso(),
            "requestId": request_id,
        },
        headers={"X-Error-ID": str(uuid.uuid4())},
    )


async def logger_middleware(request: Request, call_next):
    """
    Access logging for every request.

    Assigns a request id, times the request, logs one access line on
    completion and stamps X-Request-ID / X-Response-Time / X-Powered-By on the
    response. Exceptions that escape a route are logged with their stack and
    turned into a generic 500 JSON response.
    """
    request_id = generate_request_id()
    started = time.perf_counter()
    request.state.request_id = request_id

    logger.info("%s Starting %s %s", colorize(f"[{utc_now_iso()}]", "gray"), request.method, request.url)

    try:
        response = await call_next(request)
        entry = build_entry(request, request_id, started, response.status_code)
    except Exception as exc:
        logger.exception(f"Unhandled error processing request {request_id}")
        entry = build_entry(
            request, request_id, started, 500,
            error={"message": str(exc) or "Unknown error", "stack": traceback.format_exc()},
        )
        response = internal_error_response(request_id)

    access_log.log(entry)

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time"] = f"{entry.response_time}ms"
    response.headers["X-Powered-By"] = POWERED_BY
    return response
