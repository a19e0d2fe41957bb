"""
Rotation Planner FastAPI Application.

Main entry point for the REST API.
Exposes endpoints for generating and validating three-worker rotation schedules.

Run with:
    uvicorn service.api_server:app --reload --port 8080

Or production:
    uvicorn service.api_server:app --host 0.0.0.0 --port 8080 --workers 2
"""

import os
import sys
import uuid
import logging
import pathlib
from datetime import datetime

# Setup path
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from service.models import HealthResponse, VersionResponse
from service.routers import v1_router

API_VERSION = "0.1.0"
ENGINE_VERSION = "rotaplan-py-0.1.0"

# ============================================================================
# LOGGING SETUP
# ============================================================================

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("rotaplan.api")

# ============================================================================
# MIDDLEWARE: REQUEST ID TRACKING
# ============================================================================

class RequestIdMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests for tracing."""

    async def dispatch(self, request: Request, call_next):
        # Use incoming X-Request-ID or generate new UUID
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        return response

# ============================================================================
# FASTAPI APP
# ============================================================================

app = FastAPI(
    title="Rotation Planner API",
    description="REST API for three-worker rotation schedule synthesis",
    version=API_VERSION,
    docs_url="/docs",
    openapi_url="/openapi.json"
)

app.add_middleware(RequestIdMiddleware)

cors_origins = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"
).split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix="/v1")

# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok")


@app.get("/version", response_model=VersionResponse)
async def get_version():
    """Get API and engine version information."""
    return VersionResponse(apiVersion=API_VERSION, engineVersion=ENGINE_VERSION)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(
        "Unhandled exception requestId=%s: %s",
        request_id,
        str(exc),
        exc_info=True
    )
    return ORJSONResponse(
        status_code=500,
        content={
            "status": "ERROR",
            "error": "Internal server error",
            "meta": {
                "requestId": request_id,
                "timestamp": datetime.now().isoformat()
            }
        }
    )


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info"
    )
