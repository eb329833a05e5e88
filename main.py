import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from core.assessment.errors import EvaluationNotFound, StoreError
from core.assessment.events import UNHANDLED_ERROR, VALIDATION_ERROR, log_security_event
from core.assessment.models import (
    CreateEvaluationResponse,
    EvaluateRequest,
    EvaluationListResponse,
    EvaluationReportResponse,
    EvaluationResponse,
)
from core.assessment.service import EvaluationService
from core.assessment.store import FileEvaluationStore
from questionnaire import QUESTION_IDS, allowed_values, catalog

# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("security_dashboard")

logger.info("Data directory: %s", settings.DATA_DIR)
logger.info("Rate limiting: %s", settings.RATE_LIMIT if settings.RATE_LIMIT_ENABLED else "DISABLED")

# -------------------------------------------------------------------
# FastAPI App
# -------------------------------------------------------------------

app = FastAPI(
    title="Security Dashboard API",
    version="1.0.0",
    description="Personal digital-security self-assessment: score, recommendations and history.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
app.state.limiter = limiter

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; img-src 'self' data: https:"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


BODY_TOO_LARGE = {"success": False, "message": "Request body too large"}


class BodySizeLimitMiddleware:
    """
    Rejects request bodies over max_bytes with 413.

    A declared Content-Length is checked up front. Chunked bodies are
    buffered up to the limit and then replayed to the app.
    """

    def __init__(self, app, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        content_length = headers.get(b"content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = JSONResponse(
                    status_code=400,
                    content={"success": False, "message": "Invalid Content-Length"},
                )
                await response(scope, receive, send)
                return
            if declared > self.max_bytes:
                await JSONResponse(status_code=413, content=BODY_TOO_LARGE)(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        messages = []
        received = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_bytes:
                await JSONResponse(status_code=413, content=BODY_TOO_LARGE)(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)


app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response

# -------------------------------------------------------------------
# Storage / Service
# -------------------------------------------------------------------

_store = FileEvaluationStore(settings.DATA_DIR)


def get_service() -> EvaluationService:
    return EvaluationService(_store, risk_aware_wifi=settings.RISK_AWARE_WIFI_SCORING)

# -------------------------------------------------------------------
# Startup
# -------------------------------------------------------------------

@app.on_event("startup")
def on_startup():
    logger.info("Security Dashboard starting up...")
    _store.initialize()
    logger.info("Security Dashboard startup complete")

# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/questions")
@limiter.limit(settings.RATE_LIMIT)
def list_questions(request: Request):
    return {"success": True, "data": catalog()}


@app.post("/api/evaluate", response_model=CreateEvaluationResponse)
@limiter.limit(settings.RATE_LIMIT)
def evaluate(
    request: Request,
    payload: EvaluateRequest,
    service: EvaluationService = Depends(get_service),
):
    try:
        result = service.create_evaluation(payload)
    except StoreError:
        raise HTTPException(status_code=500, detail="Error processing the evaluation")
    return CreateEvaluationResponse(data=result)


@app.get("/api/evaluations", response_model=EvaluationListResponse)
@limiter.limit(settings.RATE_LIMIT)
def list_evaluations(request: Request, service: EvaluationService = Depends(get_service)):
    try:
        summaries = service.list_evaluations()
    except StoreError:
        raise HTTPException(status_code=500, detail="Error retrieving evaluations")
    return EvaluationListResponse(data=summaries)


@app.get("/api/evaluations/{evaluation_id}", response_model=EvaluationResponse)
@limiter.limit(settings.RATE_LIMIT)
def get_evaluation(
    request: Request,
    evaluation_id: str,
    service: EvaluationService = Depends(get_service),
):
    try:
        evaluation = service.get_evaluation(evaluation_id)
    except EvaluationNotFound:
        raise HTTPException(status_code=404, detail="Evaluation not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Error retrieving the evaluation")
    return EvaluationResponse(data=evaluation)


@app.get("/api/evaluations/{evaluation_id}/report", response_model=EvaluationReportResponse)
@limiter.limit(settings.RATE_LIMIT)
def get_evaluation_report(
    request: Request,
    evaluation_id: str,
    service: EvaluationService = Depends(get_service),
):
    try:
        report = service.get_report(evaluation_id)
    except EvaluationNotFound:
        raise HTTPException(status_code=404, detail="Evaluation not found")
    except StoreError:
        raise HTTPException(status_code=500, detail="Error retrieving the evaluation")
    return EvaluationReportResponse(data=report)

# -------------------------------------------------------------------
# Error handlers
# -------------------------------------------------------------------

def _field_error(err) -> dict:
    loc = [str(p) for p in err.get("loc", ()) if p != "body"]
    message = err.get("msg", "Invalid value")
    # answers.<question>: tell the caller which values are accepted
    if len(loc) == 2 and loc[0] == "answers" and loc[1] in QUESTION_IDS:
        message = f"{message}; allowed values: {', '.join(allowed_values(loc[1]))}"
    return {"field": ".".join(loc), "message": message}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [_field_error(err) for err in exc.errors()]
    log_security_event(VALIDATION_ERROR, path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request", "errors": errors},
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": "Too many requests from this IP, please try again later.",
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    log_security_event(UNHANDLED_ERROR, path=request.url.path, error=type(exc).__name__)
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
