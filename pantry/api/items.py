"""Pantry item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from pantry.api.dependencies import get_store, http_error
from pantry.schemas.item import (
    OpenItemRequest,
    PantryItemCreate,
    PantryItemResponse,
    PantryItemUpdate,
)
from pantry.services.entities import MoveToArea, SetItemName, SetQuantity
from pantry.services.errors import PantryError
from pantry.services.pantry_store import PantryStore

router = APIRouter(prefix="/api/v1/items", tags=["items"])


@router.get("", response_model=list[PantryItemResponse])
def list_items(
    store: Annotated[PantryStore, Depends(get_store)],
    storage_area_id: str | None = Query(default=None, description="Only items in this area"),
):
    """List all items, optionally only those in one storage area."""
    if storage_area_id is not None:
        return store.items_for_area(storage_area_id)
    return store.list_items()


@router.get("/expired", response_model=list[PantryItemResponse])
def list_expired_items(store: Annotated[PantryStore, Depends(get_store)]):
    """List items past their expiry date, soonest expiry first."""
    return store.expired_items()


@router.post("", response_model=PantryItemResponse, status_code=status.HTTP_201_CREATED)
def add_item(
    item_data: PantryItemCreate,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Add stock of an item.

    Stock merges into an unopened item in the same area with the same name
    (ignoring case) and expiry date; otherwise a new item is created.
    """
    try:
        item = store.add_item(
            item_data.name,
            item_data.quantity,
            item_data.storage_area_id,
            item_data.expiry_date,
        )
    except PantryError as e:
        raise http_error(e) from None

    if item is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Item name must not be blank and quantity must be at least 1",
        )
    return item


@router.get("/{item_id}", response_model=PantryItemResponse)
def get_item(
    item_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Get a specific item."""
    try:
        return store.get_item(item_id)
    except PantryError as e:
        raise http_error(e) from None


@router.put("/{item_id}", response_model=PantryItemResponse)
def update_item(
    item_id: str,
    item_data: PantryItemUpdate,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Rename an item, move it to another area or set its quantity.

    A quantity below 1 removes the item (204). Moving to an unknown area is
    a 400.
    """
    updates = []
    if item_data.name is not None:
        updates.append(SetItemName(item_data.name))
    if item_data.storage_area_id is not None:
        updates.append(MoveToArea(item_data.storage_area_id))
    if item_data.quantity is not None:
        updates.append(SetQuantity(item_data.quantity))

    try:
        item = store.update_item(item_id, *updates)
    except PantryError as e:
        raise http_error(e) from None

    if item is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    item_id: str,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Remove an item."""
    try:
        store.remove_item(item_id)
    except PantryError as e:
        raise http_error(e) from None


@router.post("/{item_id}/open", response_model=list[PantryItemResponse])
def open_item(
    item_id: str,
    request: OpenItemRequest,
    store: Annotated[PantryStore, Depends(get_store)],
):
    """Start using some or all of an item.

    Returns the opened item, or the remaining unopened item followed by the
    newly opened one when only part of the quantity was opened.
    """
    try:
        return store.open_item(item_id, request.quantity)
    except PantryError as e:
        raise http_error(e) from None
