"""FastAPI application entrypoint with Lambda handler."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from .config import settings
from .routes import alexa, health
from .services.pipeline import Skill
from .services.standard import build_default_skill

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.service_name} in {settings.environment} mode")
    yield
    logger.info(f"Shutting down {settings.service_name}")


def create_app(skill: Skill | None = None) -> FastAPI:
    """Create the webhook application serving the given skill."""
    application = FastAPI(
        title="Skill Dispatch",
        description="Alexa skill request dispatch runtime",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    application.state.skill = skill or build_default_skill(settings)

    # CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    application.include_router(health.router)
    application.include_router(alexa.router)

    return application


app = create_app()

# Lambda handler via Mangum
handler = Mangum(app, lifespan="off")
