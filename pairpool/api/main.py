"""FastAPI application for the pool quote service.

Note: The service only quotes. State-changing calls go through the Router
in-process; exposing them over HTTP would need caller authentication.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pairpool import __version__
from pairpool.api.endpoints import router
from pairpool.errors import PoolError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("PAIRPOOL_HOST", "0.0.0.0")
PORT = int(os.environ.get("PAIRPOOL_PORT", "8000"))
DEBUG = os.environ.get("PAIRPOOL_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Pair Pool",
    description="Quotes for a tax-aware constant-product pool",
    version=__version__,
)


@app.exception_handler(PoolError)
async def pool_error_handler(request: Request, exc: PoolError) -> JSONResponse:
    """Report quote failures as 422 with the error class name."""
    logger.warning(
        "quote_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        message=str(exc),
    )
    return JSONResponse(status_code=422, content={"detail": f"{type(exc).__name__}: {exc}"})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - PAIRPOOL_HOST: Host to bind to (default: 0.0.0.0)
    - PAIRPOOL_PORT: Port to bind to (default: 8000)
    - PAIRPOOL_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "pairpool.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
