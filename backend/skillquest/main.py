"""FastAPI application entry point.

This module wires together the API routers, configures middleware and
startup tasks, and exposes the ASGI application object used by the
server.
"""

import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from skillquest.routes import (
    users,
    modules,
    lessons,
    progress,
    quizzes,
    learning,
)
from skillquest.database import create_db_and_tables, async_session
from skillquest.crud import ensure_sample_content, create_sample_prompts

# Basic logging configuration.  The log level can be controlled with an
# environment variable so deployments can adjust verbosity without code
# changes.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

SEED_SAMPLE_CONTENT = os.getenv("SEED_SAMPLE_CONTENT", "true").lower() == "true"

app = FastAPI(title="SkillQuest API")

# CORS setup; the single-page frontend is served from another origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    """Create tables and seed the built-in curriculum and practice prompts."""

    await create_db_and_tables()
    if SEED_SAMPLE_CONTENT:
        async with async_session() as session:
            await ensure_sample_content(session)
            await create_sample_prompts(session)
    logger.info("SkillQuest API ready")


app.include_router(users.router)
app.include_router(modules.router)
app.include_router(lessons.router)
app.include_router(progress.router)
app.include_router(quizzes.router)
app.include_router(learning.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler that logs the stack trace once."""
    logger.exception("Unhandled error during request %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
