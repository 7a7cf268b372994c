"""
DevToolbox Diff Backend - FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routers import config, diff
from services.config_manager import ConfigManager
from services.lcs import DiffTooLargeError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the backend"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    config_manager = ConfigManager.get_instance()
    configure_logging(config_manager.get("logging", {}).get("level", "info"))
    logger.info("Starting DevToolbox Diff Backend (config: %s)", config_manager.config_file)
    logger.info("Diff size limit: %s cells", config_manager.get("diff", {}).get("maxCells"))

    yield

    logger.info("Shutting down DevToolbox Diff Backend")


app = FastAPI(
    title="DevToolbox Diff Backend",
    description="Line and character diff engine for the browser toolbox",
    version="1.0.0",
    lifespan=lifespan,
)

# The toolbox frontend is served from a different origin during development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DiffTooLargeError)
async def diff_too_large_handler(request: Request, exc: DiffTooLargeError) -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={"detail": str(exc), "cells": exc.cells, "max_cells": exc.max_cells},
    )


# Include routers
app.include_router(diff.router, prefix="/api/diff", tags=["diff"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "devtoolbox-diff-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
