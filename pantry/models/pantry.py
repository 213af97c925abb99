"""Pantry item table."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String

from pantry.database import Base


class PantryItemRecord(Base):
    """Persisted pantry item."""

    __tablename__ = "pantry_items"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    storage_area_id = Column(
        String(64),
        ForeignKey("storage_areas.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    is_opened = Column(Boolean, nullable=False, default=False)
    opened_at = Column(DateTime(timezone=True), nullable=True)
    expiry_date = Column(Date, nullable=True)  # items with different dates never merge
