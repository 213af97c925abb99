"""Storage area API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from pantry.api.dependencies import get_store, http_error
from pantry.schemas.item import PantryItemResponse, StackedPantryItemResponse
from pantry.schemas.storage_area import (
    StorageAreaCount,
    StorageAreaCreate,
    StorageAreaReorder,
    StorageAreaResponse,
    StorageAreaUpdate,
)
from pantry.services.entities import SetColor, SetIcon, SetName
from pantry.services.errors import PantryError
from pantry.services.pantry_store import PantryStore

router = APIRouter(prefix="/api/v1/storage-areas", tags=["storage-areas"])


@router.get("", response_model=list[StorageAreaResponse])
def list_storage_areas(store: Annotated[PantryStore, Depends(get_store)]):
    """List all storage areas in display order."""
    return store.list_areas()


@router.post("", response_model=StorageAreaResponse, status_code=status.HTTP_201_CREATED)
def create_storage_area(
    area_data: StorageAreaCreate,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Add a storage area at the end of the display order."""
    try:
        area = store.add_area(area_data.name, area_data.icon, area_data.color)
    except PantryError as e:
        raise http_error(e) from None

    if area is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Storage area name must not be blank",
        )
    return area


@router.put("/order", response_model=list[StorageAreaResponse])
def reorder_storage_areas(
    reorder: StorageAreaReorder,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Set the display order of the storage areas."""
    try:
        return store.reorder_areas(reorder.ids)
    except PantryError as e:
        raise http_error(e) from None


@router.get("/{area_id}", response_model=StorageAreaResponse)
def get_storage_area(
    area_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Get a specific storage area."""
    try:
        return store.get_area(area_id)
    except PantryError as e:
        raise http_error(e) from None


@router.put("/{area_id}", response_model=StorageAreaResponse)
def update_storage_area(
    area_id: str,
    area_data: StorageAreaUpdate,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Update a storage area's name, icon or color."""
    updates = []
    if area_data.name is not None:
        updates.append(SetName(area_data.name))
    if area_data.icon is not None:
        updates.append(SetIcon(area_data.icon))
    if area_data.color is not None:
        updates.append(SetColor(area_data.color))

    try:
        return store.update_area(area_id, *updates)
    except PantryError as e:
        raise http_error(e) from None


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_storage_area(
    area_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Delete a storage area and every item in it."""
    try:
        store.delete_area(area_id)
    except PantryError as e:
        raise http_error(e) from None


@router.get("/{area_id}/items", response_model=list[PantryItemResponse])
def list_storage_area_items(
    area_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """List the items in a storage area, sorted by name."""
    try:
        store.get_area(area_id)
    except PantryError as e:
        raise http_error(e) from None

    return store.items_for_area(area_id)


@router.get("/{area_id}/items/stacked", response_model=list[StackedPantryItemResponse])
def list_stacked_storage_area_items(
    area_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """List a storage area for display.

    Unopened items come first. Opened items sharing a name, opening day and
    expiry date are combined into one entry listing the ids it covers.
    """
    try:
        store.get_area(area_id)
    except PantryError as e:
        raise http_error(e) from None

    return store.stacked_items_for_area(area_id)


@router.get("/{area_id}/count", response_model=StorageAreaCount)
def count_storage_area_items(
    area_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Total quantity of everything in a storage area."""
    try:
        store.get_area(area_id)
    except PantryError as e:
        raise http_error(e) from None

    return StorageAreaCount(storage_area_id=area_id, count=store.item_count_for_area(area_id))
