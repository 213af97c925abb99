"""Enums for model fields."""

from enum import StrEnum


class AreaIcon(StrEnum):
    """Icons a storage area can be displayed with."""

    REFRIGERATOR = "refrigerator"
    SNOWFLAKE = "snowflake"
    WAREHOUSE = "warehouse"
    BOX = "box"
    HOME = "home"
    ARCHIVE = "archive"
    PACKAGE = "package"


class AreaColor(StrEnum):
    """Accent colors for storage areas."""

    SLATE = "slate"
    BLUE = "blue"
    CYAN = "cyan"
    EMERALD = "emerald"
    AMBER = "amber"
    VIOLET = "violet"
    ROSE = "rose"
