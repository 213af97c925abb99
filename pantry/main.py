"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pantry.api import data, items, storage_areas
from pantry.api.dependencies import build_store
from pantry.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the pantry store before serving requests."""
    store = build_store(settings)
    store.load()
    app.state.store = store
    logger.info(f"Pantry store ready ({settings.persistence_backend} persistence)")
    yield


app = FastAPI(
    title="Pantry API",
    description="Self-hosted pantry inventory with storage areas, opened items and expiry dates",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(storage_areas.router)
app.include_router(items.router)
app.include_router(data.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    store = getattr(app.state, "store", None)
    return {
        "status": "healthy",
        "environment": settings.environment,
        "store_ready": store is not None and store.is_ready,
        "last_error": store.last_error if store else None,
    }


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
