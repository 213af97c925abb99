"""Whole-inventory export, import and reset endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from pantry.api.dependencies import get_store, http_error
from pantry.schemas.snapshot import PantrySnapshotPayload
from pantry.services.entities import PantryItem, PantrySnapshot, StorageArea
from pantry.services.errors import PantryError
from pantry.services.ledger import as_utc
from pantry.services.pantry_store import PantryStore

router = APIRouter(prefix="/api/v1", tags=["data"])


@router.get("/export", response_model=PantrySnapshotPayload)
def export_data(store: Annotated[PantryStore, Depends(get_store)]):
    """Export every storage area and item."""
    return store.export_snapshot()


@router.post("/import", response_model=PantrySnapshotPayload)
def import_data(
    payload: PantrySnapshotPayload,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Replace the whole inventory with an exported snapshot.

    Items pointing at storage areas missing from the snapshot are dropped.
    """
    snapshot = PantrySnapshot(
        areas=[StorageArea(**area.model_dump()) for area in payload.areas],
        items=[
            PantryItem(
                **item.model_dump(exclude={"created_at", "opened_at"}),
                created_at=as_utc(item.created_at),
                opened_at=as_utc(item.opened_at),
            )
            for item in payload.items
        ],
    )
    try:
        return store.import_snapshot(snapshot)
    except PantryError as e:
        raise http_error(e) from None


@router.delete("/data", status_code=status.HTTP_204_NO_CONTENT)
def clear_data(store: Annotated[PantryStore, Depends(get_store)]):
    """Delete every storage area and item."""
    try:
        store.clear()
    except PantryError as e:
        raise http_error(e) from None
