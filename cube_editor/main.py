from __future__ import annotations

import logging
from contextlib import asynccontextmanager

logging.basicConfig(level=logging.INFO)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis

from cube_editor.api.editor import router as editor_router
from cube_editor.api.health import router as health_router
from cube_editor.config import settings
from cube_editor.engine.controller import AssignmentController
from cube_editor.engine.models import CubeState
from cube_editor.engine.oracle_loader import load_oracle
from cube_editor.engine.session import EditorSession
from cube_editor.engine.state_store import StateStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting up cube editor...")

    redis = Redis.from_url(settings.redis_url, decode_responses=False)
    app.state.redis = redis

    oracle = load_oracle(settings.parity_oracle)
    answer = CubeState.from_vector(settings.answer_state)
    controller = AssignmentController(answer=answer, oracle=oracle)
    session = EditorSession(controller, StateStore(redis, key_prefix=settings.key_prefix))
    app.state.editor_session = session

    restored = await session.start()
    logger.info(f"Editor session started (restored={restored})")
    logger.info("Server startup complete")

    yield

    # Shutdown
    logger.info("Shutting down cube editor...")
    await redis.close()
    logger.info("Server shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="cube-editor",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(editor_router, prefix="/api/v1")
    app.include_router(health_router)

    return app


app = create_app()
