import time
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agentstore.core.config import get_settings
from agentstore.core.errors import AppError, ErrorCategory
from agentstore.core.logging import configure_logging
from agentstore.llm.handle import ProviderHandle

settings = get_settings()
log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: logging, then the one-time model provider initialization
    configure_logging(settings.log_level, debug=settings.debug)
    app.state.llm = ProviderHandle.initialize(settings)
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request logging ───────────────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=uuid.uuid4().hex,
        method=request.method,
        path=request.url.path,
    )
    t0 = time.monotonic()
    response = await call_next(request)
    log.info(
        "request_completed",
        status=response.status_code,
        duration_ms=int((time.monotonic() - t0) * 1000),
    )
    return response


# ── Error payloads ────────────────────────────────────────────────────────────
# Every failure leaves as {"error": ..., "category": ...}; validation failures
# add "errors": [{"field", "message"}, ...].

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


def _unreadable_body(err: dict) -> bool:
    # an empty body surfaces as a missing body rather than a JSON decode error
    if err.get("type") == "json_invalid":
        return True
    return err.get("type") == "missing" and tuple(err.get("loc", ())) == ("body",)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    raw = exc.errors()
    if any(_unreadable_body(err) for err in raw):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Invalid JSON in request body",
                "category": ErrorCategory.INTERNAL.value,
            },
        )

    errors: list[dict[str, str]] = []
    for err in raw:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        if err.get("type") == "agent_field":
            message = err["msg"]
        elif field == "body":
            message = "Request body must be a JSON object"
        else:
            message = f"{field}: {err['msg']}"
        errors.append({"field": field, "message": message})

    error = AppError(
        status.HTTP_400_BAD_REQUEST,
        "; ".join(e["message"] for e in errors),
        ErrorCategory.INVALID_INPUT,
        errors,
    )
    return JSONResponse(status_code=error.status_code, content=error.payload())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_error", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": str(exc) or "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
        },
    )


# ── Routers ───────────────────────────────────────────────────────────────────
from agentstore.api.routes import agents  # noqa: E402

app.include_router(agents.router, prefix="/agents", tags=["Agents"])


# ── Health check ──────────────────────────────────────────────────────────────
@app.get("/health", tags=["Health"])
async def health() -> dict:
    return {"status": "ok", "version": settings.app_version}
