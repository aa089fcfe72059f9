# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import asyncio
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from . import __version__
from .api.v1 import gate_router
from .core.logging_config import setup_logging
from .infrastructure.db.mongo_connection import close_client, ensure_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Ensures MongoDB indexes on startup. An unreachable database is logged and
    does not stop the app from starting; scans then fail with 503 until it is back.
    """
    try:
        await asyncio.to_thread(ensure_indexes)
    except Exception as e:
        logger.error(f"Failed to ensure MongoDB indexes: {e}", exc_info=True)

    yield

    try:
        close_client()
    except Exception as e:
        logger.error(f"Error closing MongoDB client: {e}", exc_info=True)

    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    setup_logging()

    application = FastAPI(
        title="Campus Gate Access API",
        version=__version__,
        description="Face-recognition gate decisions with attendance and access logging",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(gate_router, prefix="/api/v1/gate")

    return application


# Create application instance
app = create_application()
