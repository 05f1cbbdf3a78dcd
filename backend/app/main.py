"""
FastAPI application for the LogicCraft analyzer.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app import __version__
from backend.app.config import settings, logger
from backend.app.models import (
    AIReportResponse,
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
)
from complexity import AIComplexityAnalyzer, analyze_complexity
from providers.openrouter_provider import OpenRouterProvider


# ---------------------------------------------------------------------------
# AI reporter wiring
# ---------------------------------------------------------------------------


def build_provider() -> OpenRouterProvider:
    return OpenRouterProvider(
        api_key=settings.OPENROUTER_API_KEY,
        models=settings.openrouter_models,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_tokens=settings.MAX_TOKENS,
        temperature=settings.TEMPERATURE,
    )


async def get_ai_analyzer():
    """Per-request AI analyzer; closes its HTTP client afterwards."""
    async with AIComplexityAnalyzer(build_provider) as analyzer:
        yield analyzer


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


async def request_size_middleware(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH"):
        content_length = request.headers.get("content-length")
        try:
            size = int(content_length) if content_length else 0
        except ValueError:
            return JSONResponse(
                status_code=400,
                content={"success": False, "error": "Invalid Content-Length header"},
            )
        if size > settings.MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=413,
                content={
                    "success": False,
                    "error": "request_too_large",
                    "details": f"Request body exceeds {settings.MAX_REQUEST_SIZE} bytes",
                },
            )
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------


analysis_router = APIRouter()


@analysis_router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={413: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def analyze_code(request: AnalyzeRequest):
    """
    Estimate complexity with the local heuristic classifier.

    Never fails for well-formed requests: unrecognized code degrades to
    O(1)/O(1). Synchronous, so FastAPI runs it in the threadpool.
    """
    request_id = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    start_time = time.perf_counter()

    result = analyze_complexity(request.code, request.language)

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "[%s] analyze language=%s chars=%d -> %s, %s (%.2fms)",
        request_id,
        request.language,
        len(request.code),
        result.time,
        result.space,
        elapsed_ms,
    )
    return AnalyzeResponse(success=True, language=request.language, result=result)


@analysis_router.post("/analyze/ai", response_model=AIReportResponse)
async def analyze_code_ai(
    request: AnalyzeRequest,
    analyzer: AIComplexityAnalyzer = Depends(get_ai_analyzer),
):
    """
    Ask the LLM for a complexity report.

    Provider problems come back as a "Key Missing" or "AI Unavailable"
    report instead of an error status.
    """
    start_time = time.perf_counter()
    report = await analyzer.report(request.code, request.language)
    elapsed_time = time.perf_counter() - start_time

    logger.info(
        "AI report language=%s model=%s -> %s, %s (%.3fs)",
        request.language,
        report.model,
        report.time,
        report.space,
        elapsed_time,
    )
    return AIReportResponse(success=True, model=report.model, result=report)


health_router = APIRouter()


@health_router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "ai": "enabled" if settings.ai_enabled else "disabled",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------------------------------------------------------
# FastAPI app assembly
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("LogicCraft analyzer v%s starting", __version__)
    if settings.ai_enabled:
        logger.info("AI reports enabled (models: %s)", ", ".join(settings.openrouter_models))
    else:
        logger.warning("OPENROUTER_API_KEY not configured - AI reports disabled")

    yield

    logger.info("Shutting down")


app = FastAPI(
    title="LogicCraft Analyzer API",
    description="Heuristic code complexity analysis with optional AI reports",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log without request bodies; answer with a generic 500."""
    logger.error(
        "Unhandled exception on %s %s: %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc)[:200],
    )
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log field names and error types only, never submitted values."""
    error_details = [
        {"field": err.get("loc", [])[-1] if err.get("loc") else "unknown", "type": err.get("type")}
        for err in exc.errors()[:5]
    ]
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, error_details)
    return JSONResponse(status_code=422, content={"success": False, "error": "Invalid request format"})


app.middleware("http")(security_headers_middleware)
app.middleware("http")(request_size_middleware)

cors_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "LogicCraft Analyzer API",
        "version": __version__,
        "ai": "enabled" if settings.ai_enabled else "disabled",
        "endpoints": {
            "/api/v1/analyze": "POST - Heuristic complexity (input: code, language)",
            "/api/v1/analyze/ai": "POST - AI complexity report (input: code, language)",
            "/health": "GET - Health check",
        },
    }


app.include_router(health_router, prefix="/api/v1", tags=["health"])
app.include_router(analysis_router, prefix="/api/v1", tags=["analysis"])
app.include_router(health_router, tags=["health-compat"])
app.include_router(analysis_router, tags=["analysis-compat"])
