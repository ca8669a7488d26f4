"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- SeriesEntity: The series record reconciled by each refresh
- PersonInfo: Cast or crew member
- MetadataField: Fields a user can lock
- SeriesStatus, DayOfWeek, PersonType: Enumerations
"""

from animeta.core.entities.series import (
    DayOfWeek,
    MetadataField,
    PersonInfo,
    PersonType,
    SeriesEntity,
    SeriesStatus,
)

__all__ = [
    "DayOfWeek",
    "MetadataField",
    "PersonInfo",
    "PersonType",
    "SeriesEntity",
    "SeriesStatus",
]
