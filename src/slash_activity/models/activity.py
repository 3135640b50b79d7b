"""Data models for the activity store.

Dataclasses representing a stored activity record and a lookup filter.
"""

import sqlite3
from dataclasses import asdict, dataclass
from typing import Any

from slash_activity.exceptions import ActivityDecodeError, InvalidActivityValueError
from slash_activity.models.enums import ActivityLevel, ActivityType


@dataclass(frozen=True)
class Activity:
    """A single audit-log record.

    ``id`` and ``created_ts`` are assigned by the database at insert time.
    """

    id: int
    creator_id: int
    created_ts: int
    type: ActivityType
    level: ActivityLevel
    payload: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Activity":
        """Create from database row.

        Raises:
            ActivityDecodeError: If the stored type or level is not a known value.
        """
        try:
            activity_type = ActivityType.parse(row["type"])
            level = ActivityLevel.parse(row["level"])
        except InvalidActivityValueError as e:
            raise ActivityDecodeError(
                f"Stored activity has unknown {e.field} {e.value!r}",
                activity_id=row["id"],
            ) from e
        return cls(
            id=row["id"],
            creator_id=row["creator_id"],
            created_ts=int(row["created_ts"]),
            type=activity_type,
            level=level,
            payload=row["payload"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict using wire values."""
        data = asdict(self)
        data["type"] = self.type.value
        data["level"] = self.level.value
        return data


@dataclass(frozen=True)
class FindActivity:
    """Filter for activity lookups.

    Set fields are combined with AND. ``None`` or the empty string leaves a
    field unconstrained; any other value must be a known wire string.
    """

    type: ActivityType | None = None
    level: ActivityLevel | None = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "type", _optional(ActivityType, self.type))
        object.__setattr__(self, "level", _optional(ActivityLevel, self.level))

    def is_empty(self) -> bool:
        """Return True when no field constrains the lookup."""
        return self.type is None and self.level is None


def _optional(enum_cls: Any, value: Any) -> Any:
    if value is None or value == "":
        return None
    return enum_cls.parse(value)
