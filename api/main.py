"""
Capitol Trades Query Service - FastAPI Application

Main FastAPI application with CORS, error mapping, and router registration.
Run with: uvicorn api.main:app --reload --port 8000
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import assets, momentum, politicians, system, trades
from config.settings import get_config
from modules.errors import FetchError, NotFoundError, QueryError, ValidationError

api_logger = logging.getLogger("capitol_trades.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    api_logger.info("Capitol Trades API starting...")
    yield
    api_logger.info("Capitol Trades API shutting down...")


app = FastAPI(
    title="Capitol Trades Query API",
    description="Congressional stock trade lookups and analytics scraped from Capitol Trades",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# -----------------------------------------------------------------------------
# Error Mapping
# -----------------------------------------------------------------------------
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.exception_handler(QueryError)
async def query_error_handler(request: Request, exc: QueryError):
    if isinstance(exc.cause, NotFoundError):
        status_code = 404
    elif isinstance(exc.cause, FetchError):
        status_code = 502
    else:
        status_code = 500
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


# Register routers
app.include_router(trades.router, prefix="/api/trades", tags=["Trades"])
app.include_router(assets.router, prefix="/api/assets", tags=["Assets"])
app.include_router(politicians.router, prefix="/api/politicians", tags=["Politicians"])
app.include_router(momentum.router, prefix="/api/momentum", tags=["Momentum"])
app.include_router(system.router, prefix="/api", tags=["System"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API health check."""
    return {
        "status": "healthy",
        "service": "Capitol Trades Query API",
        "version": "1.0.0",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe; does not contact the source site."""
    return {"status": "ok", "source": get_config().scraping.base_url}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host=get_config().api.host, port=get_config().api.port, reload=True)
