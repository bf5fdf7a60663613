# ABOUTME: FastAPI app: POST /api/ai/{priority,priority/batch,scheduling,compliance,report} and GET /health.
# ABOUTME: Responses wrapped as {success, data}; errors as {success: false, message}. Request log per call.

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import CORS_ORIGINS, DEBUG_ERRORS, LOG_LEVEL, MAX_BATCH_SIZE
from core.schemas import (
    ApiResponse,
    ComplianceRequest,
    ComplianceResult,
    PriorityInput,
    PriorityResult,
    RankedTask,
    RankItem,
    Report,
    ReportInput,
    ScheduleInput,
    ScheduleResult,
)
from core.telemetry import log_evaluation
from priority_advisor import (
    calculate_priority,
    check_compliance,
    generate_report,
    generate_schedule,
    rank_tasks,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_started_at = time.monotonic()


def _evaluate(operation: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Run one advisor function and emit its telemetry line, success or not."""
    start = time.perf_counter()
    try:
        result = fn(*args)
    except Exception:
        log_evaluation(
            operation=operation,
            latency_ms=(time.perf_counter() - start) * 1000,
            confidence=None,
            success=False,
        )
        raise
    log_evaluation(
        operation=operation,
        latency_ms=(time.perf_counter() - start) * 1000,
        confidence=getattr(result, "confidence", None),
        success=True,
    )
    return result


ai_router = APIRouter(prefix="/api/ai", tags=["ai"])


@ai_router.post("/priority", response_model=ApiResponse[PriorityResult])
def post_priority(req: PriorityInput):
    """Score one task's priority from KPI weights, urgency, effort, risk and dependency."""
    return ApiResponse[PriorityResult](data=_evaluate("priority", calculate_priority, req))


@ai_router.post("/priority/batch", response_model=ApiResponse[list[RankedTask]])
def post_priority_batch(req: list[RankItem]):
    """Score a list of tasks and return them highest priority first."""
    if len(req) > MAX_BATCH_SIZE:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": f"At most {MAX_BATCH_SIZE} tasks can be ranked per request.",
            },
        )
    return ApiResponse[list[RankedTask]](data=_evaluate("priority_batch", rank_tasks, req))


@ai_router.post("/scheduling", response_model=ApiResponse[ScheduleResult])
def post_scheduling(req: ScheduleInput):
    """Recommend a start/end window for a task and list scheduling conflicts."""
    return ApiResponse[ScheduleResult](data=_evaluate("scheduling", generate_schedule, req))


@ai_router.post("/compliance", response_model=ApiResponse[ComplianceResult])
def post_compliance(req: ComplianceRequest):
    """Screen text against the sensitive-term watch-list."""
    return ApiResponse[ComplianceResult](
        data=_evaluate("compliance", check_compliance, req.text)
    )


@ai_router.post("/report", response_model=ApiResponse[Report])
def post_report(req: ReportInput):
    """Generate a weekly or monthly progress report."""
    return ApiResponse[Report](data=_evaluate("report", generate_report, req))


app = FastAPI(title="AI Priority Advisor API")
app.include_router(ai_router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    logging.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logging.info(
            "%s %s - 500 - %.0fms",
            request.method,
            request.url.path,
            (time.perf_counter() - start) * 1000,
        )
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    logging.info(
        "%s %s - %s - %.0fms",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.exception_handler(RequestValidationError)
async def handle_validation_error(_request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid request body.",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logging.error(
        "%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc
    )
    message = str(exc) if DEBUG_ERRORS else "Internal server error."
    return JSONResponse(status_code=500, content={"success": False, "message": message})


@app.get("/health")
def get_health():
    """Liveness probe with server time and uptime in seconds."""
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
    }
