"""Errors raised by the pantry store."""


class PantryError(Exception):
    """Base class for pantry store errors."""


class NotFoundError(PantryError):
    """An id does not reference an existing storage area or item."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} '{entity_id}' not found")


class InvalidReferenceError(PantryError):
    """An item was created against a storage area that does not exist."""

    def __init__(self, storage_area_id: str):
        self.storage_area_id = storage_area_id
        super().__init__(f"Invalid storage_area_id '{storage_area_id}'")


class ContractViolationError(PantryError):
    """An operation was called with arguments outside its accepted range."""


class StoreNotReadyError(PantryError):
    """A mutation was attempted before a load completed successfully."""

    def __init__(self, reason: str = "Pantry store is still loading"):
        super().__init__(reason)
