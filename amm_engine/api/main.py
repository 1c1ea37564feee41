"""FastAPI application for the AMM quote service.

The service is read-only apart from pool creation: quotes are computed
against the current snapshot and never applied.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm_engine import __version__
from amm_engine.api.endpoints import router
from amm_engine.errors import AMMError, PoolAlreadyExists, PoolNotFound
from amm_engine.safe_int import SafeIntError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("AMM_PORT", "8000"))
DEBUG = os.environ.get("AMM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

ERROR_STATUS = {
    PoolNotFound: 404,
    PoolAlreadyExists: 409,
}

app = FastAPI(
    title="AMM Engine",
    description="Constant-product pool pricing and liquidity quotes",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and not (content_length.isascii() and content_length.isdigit()):
        return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(AMMError)
async def amm_error_handler(request: Request, exc: AMMError) -> JSONResponse:
    """Map engine errors to 4xx responses carrying the error code."""
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.info("request_rejected", path=request.url.path, error=exc.code, status=status_code)
    return JSONResponse(status_code=status_code, content={"error": exc.code, "detail": str(exc)})


@app.exception_handler(SafeIntError)
async def arithmetic_error_handler(request: Request, exc: SafeIntError) -> JSONResponse:
    """Arithmetic rejections (e.g. u64 overflow of a result) are client errors."""
    logger.info("request_rejected", path=request.url.path, error=exc.code, status=400)
    return JSONResponse(status_code=400, content={"error": exc.code, "detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the AMM API server.

    Configuration via environment variables:
    - AMM_HOST: Host to bind to (default: 0.0.0.0)
    - AMM_PORT: Port to bind to (default: 8000)
    - AMM_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "amm_engine.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
