"""FastAPI dependencies for the pantry store."""

from fastapi import HTTPException, Request, status

from pantry.config import Settings
from pantry.database import SessionLocal, init_db
from pantry.services.errors import (
    ContractViolationError,
    InvalidReferenceError,
    NotFoundError,
    PantryError,
    StoreNotReadyError,
)
from pantry.services.pantry_store import PantryStore
from pantry.services.persistence import MemoryPersistence, SqlPersistence


def build_store(settings: Settings) -> PantryStore:
    """Create the store for the configured persistence backend (not yet loaded)."""
    if settings.persistence_backend == "memory":
        return PantryStore(MemoryPersistence())

    init_db()
    return PantryStore(SqlPersistence(SessionLocal))


def get_store(request: Request) -> PantryStore:
    """Get the application's pantry store."""
    return request.app.state.store


def http_error(error: PantryError) -> HTTPException:
    """Translate a store error into an HTTP error response."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, InvalidReferenceError | ContractViolationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, StoreNotReadyError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
