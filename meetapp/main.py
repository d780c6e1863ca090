"""
Meetapp API - FastAPI Application

Main entry point for the FastAPI application.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from meetapp.api import router as api_router
from meetapp.core.config import get_settings
from meetapp.core.errors import PreconditionError, StoreError
from meetapp.db import models_registry  # noqa: F401 - Import to register models
from meetapp.db.base import Base
from meetapp.db.session import engine
from meetapp.services.mail_service import MailService
from meetapp.workers.inscription_mail import InscriptionMailHandler
from meetapp.workers.jobs import InscriptionMailJob
from meetapp.workers.mail_queue import MailQueue

settings = get_settings()


async def init_database() -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


def create_mail_queue() -> MailQueue:
    """Mail queue with every job handler registered."""
    queue = MailQueue()
    queue.register(InscriptionMailJob, InscriptionMailHandler(MailService(settings)))
    return queue


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Meetapp API...")

    if settings.database_url.startswith("sqlite"):
        Path(settings.data_folder).mkdir(parents=True, exist_ok=True)

    await init_database()

    worker: asyncio.Task | None = None
    if settings.enable_mail_worker:
        app.state.mail_queue = create_mail_queue()
        app.state.mail_queue.start()
        worker = asyncio.create_task(app.state.mail_queue.run())
        logger.info("Mail worker started")
    else:
        logger.info("Mail worker disabled - notifications will not be queued")

    logger.info(f"Meetapp API started on port {settings.port}")

    yield

    logger.info("Shutting down Meetapp API...")
    if worker:
        await app.state.mail_queue.stop()
        worker.cancel()
        await asyncio.gather(worker, return_exceptions=True)
        logger.info("Mail worker stopped")
    await engine.dispose()
    logger.info("Meetapp API stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Meetapp API - meetup subscriptions",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(PreconditionError)
async def precondition_exception_handler(
    request: Request, exc: PreconditionError
) -> JSONResponse:
    """Unknown meetup or user referenced by the request."""
    return JSONResponse(status_code=404, content={"error": exc.message})


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Storage failures are retryable by the client."""
    logger.error(f"Store error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=503,
        content={"error": "Service temporarily unavailable, try again"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"Code": 500, "Message": str(exc)},
    )


app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "meetapp.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
