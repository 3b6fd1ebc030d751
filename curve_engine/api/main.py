"""FastAPI application for the curve engine."""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from curve_engine import __version__
from curve_engine.api.endpoints import curve_error_handler, router
from curve_engine.errors import CurveError

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("CURVE_ENGINE_HOST", "0.0.0.0")
PORT = int(os.environ.get("CURVE_ENGINE_PORT", "8000"))
DEBUG = os.environ.get("CURVE_ENGINE_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB); quote requests are a handful of fields
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="Curve Engine",
    description="Hybrid and Weighted AMM curve math as a service",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            size = int(content_length)
        except ValueError:
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
        if size > MAX_REQUEST_SIZE:
            return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.add_exception_handler(CurveError, curve_error_handler)
app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the curve engine API server.

    Configuration via environment variables:
    - CURVE_ENGINE_HOST: Host to bind to (default: 0.0.0.0)
    - CURVE_ENGINE_PORT: Port to bind to (default: 8000)
    - CURVE_ENGINE_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "curve_engine.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
