"""Storage area table."""

from sqlalchemy import Column, Integer, String

from pantry.database import Base


class StorageAreaRecord(Base):
    """Persisted storage area. Deleting a row deletes its items (ON DELETE CASCADE)."""

    __tablename__ = "storage_areas"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    icon = Column(String(50), nullable=False)  # AreaIcon value
    color = Column(String(50), nullable=False)  # AreaColor value
    sort_order = Column(Integer, nullable=False, default=0)
