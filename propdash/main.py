"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from propdash.api.routes import api_router
from propdash.core.config import settings
from propdash.core.database import Base, engine
from propdash.core.logging import configure_logging

# Import models for Base.metadata.create_all - order matters for foreign keys
from propdash.models import (
    property,  # noqa: F401
    transaction,  # noqa: F401
    energy_bill,  # noqa: F401
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    configure_logging()
    # Startup: Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info(
        "Loaded %d energy groups: %s",
        len(settings.ENERGY_GROUPS),
        ", ".join(g.id for g in settings.ENERGY_GROUPS),
    )
    yield
    # Shutdown: cleanup if needed


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Property management dashboard and shared energy bill calculator",
    lifespan=lifespan,
)


@app.get("/")
def root() -> dict[str, str]:
    """Service banner."""
    return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION}


# Include API routers
app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "propdash.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
