"""Parameterized WHERE clause assembly.

Conditions and their bound values are accumulated in lockstep, so the
positional parameters always line up with the placeholders in the SQL text.
Values are never interpolated into the statement.
"""

from dataclasses import dataclass, field
from typing import Any

from slash_activity.constants import FILTERABLE_COLUMNS, WHERE_BASE_PREDICATE
from slash_activity.models.activity import FindActivity


@dataclass
class WhereClause:
    """Conjunction of equality predicates with positional parameters."""

    conditions: list[str] = field(default_factory=lambda: [WHERE_BASE_PREDICATE])
    params: list[Any] = field(default_factory=list)

    def equals(self, column: str, value: Any) -> "WhereClause":
        """Append ``column = ?`` bound to ``value``.

        Raises:
            ValueError: If the column is not a filterable activity column.
        """
        if column not in FILTERABLE_COLUMNS:
            raise ValueError(f"Cannot filter on column: {column}")
        self.conditions.append(f"{column} = ?")
        self.params.append(value)
        return self

    @property
    def sql(self) -> str:
        """Predicate text joined with AND (without the WHERE keyword)."""
        return " AND ".join(self.conditions)

    @classmethod
    def for_filter(cls, find: FindActivity) -> "WhereClause":
        """Build the predicate for the set fields of a FindActivity."""
        where = cls()
        if find.type is not None:
            where.equals("type", find.type.value)
        if find.level is not None:
            where.equals("level", find.level.value)
        return where
