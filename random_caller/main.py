# /random_caller/main.py

import os
import logging

import uvicorn

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import (
    classes_router,
    selection_router,
    export_router,
    dashboard_router,
)

# --- Service Imports for Startup Logic ---
from .services.caller_session import CallerSession
from .services.database_service import open_db_service

LOG_LEVEL = os.getenv("RANDOM_CALLER_LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup: open storage and load (or create) the roster.
    db = open_db_service()
    app.state.caller_session = CallerSession(db)
    logger.info("Random Caller ready with %d classes.", len(app.state.caller_session.roster.classes))
    yield
    # Runs once at shutdown.
    db.close()


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Random Caller API",
    description="Local roster manager that calls on students fairly, without repeats until everyone has gone.",
    version="2.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(selection_router.router, prefix="/api/selection", tags=["Selection"])
app.include_router(export_router.router, prefix="/api/export", tags=["Export"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Random Caller is running!", "version": app.version}


def run() -> None:
    """Entry point for the `random-caller` console script."""
    uvicorn.run(
        app,
        host=os.getenv("RANDOM_CALLER_HOST", "127.0.0.1"),
        port=int(os.getenv("RANDOM_CALLER_PORT", "8000")),
        log_level=LOG_LEVEL.lower(),
    )
