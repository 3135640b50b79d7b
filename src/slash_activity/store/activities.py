"""Activity operations for the activity store.

Functions for recording activities and looking them up by filter.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING

from slash_activity.constants import ACTIVITY_COLUMNS, ACTIVITY_TABLE, DEFAULT_PAYLOAD
from slash_activity.exceptions import StoreError
from slash_activity.models.activity import Activity, FindActivity
from slash_activity.models.enums import ActivityLevel, ActivityType
from slash_activity.store.query import WhereClause

if TYPE_CHECKING:
    from slash_activity.store.context import OperationContext
    from slash_activity.store.core import ActivityStore

logger = logging.getLogger(__name__)

_INSERT_SQL = f"""
    INSERT INTO {ACTIVITY_TABLE} (creator_id, type, level, payload)
    VALUES (?, ?, ?, ?)
    RETURNING id, created_ts
"""

_SELECT_SQL = f"SELECT {', '.join(ACTIVITY_COLUMNS)} FROM {ACTIVITY_TABLE}"


def create_activity(
    store: ActivityStore,
    creator_id: int,
    activity_type: ActivityType | str,
    level: ActivityLevel | str,
    payload: str = DEFAULT_PAYLOAD,
    ctx: OperationContext | None = None,
) -> Activity:
    """Record a new activity.

    Args:
        store: The ActivityStore instance.
        creator_id: Identity of the acting principal.
        activity_type: Activity type (member or wire string).
        level: Activity level (member or wire string).
        payload: Opaque payload text, usually JSON.
        ctx: Optional cancellation/deadline context.

    Returns:
        The stored Activity with its generated id and created_ts.

    Raises:
        InvalidActivityValueError: If the type or level is unknown or empty.
        StoreError: If the insert or commit fails. Nothing is persisted.
    """
    activity_type = ActivityType.parse(activity_type)
    level = ActivityLevel.parse(level)

    with store._transaction("create_activity", ctx) as conn:
        cursor = conn.execute(
            _INSERT_SQL,
            (creator_id, activity_type.value, level.value, payload),
        )
        # Drain the RETURNING cursor so the statement is finished before COMMIT
        rows = cursor.fetchall()
        if len(rows) != 1:
            raise StoreError(
                f"Insert returned {len(rows)} rows, expected 1",
                operation="create_activity",
            )
        activity_id, created_ts = rows[0]["id"], rows[0]["created_ts"]

    activity = Activity(
        id=activity_id,
        creator_id=creator_id,
        created_ts=int(created_ts),
        type=activity_type,
        level=level,
        payload=payload,
    )
    logger.debug(
        f"Recorded activity {activity.id} ({activity.type.value}/{activity.level.value}) "
        f"for creator {creator_id}"
    )
    return activity


def list_activities(
    store: ActivityStore,
    find: FindActivity | None = None,
    ctx: OperationContext | None = None,
) -> list[Activity]:
    """List activities matching every set field of the filter.

    Args:
        store: The ActivityStore instance.
        find: Filter; None or an empty filter matches all activities.
        ctx: Optional cancellation/deadline context.

    Returns:
        Matching activities in insertion order. Empty when nothing matches.
    """
    with store._transaction("list_activities", ctx, write=False) as conn:
        return _list_activities(conn, find or FindActivity())


def get_activity(
    store: ActivityStore,
    find: FindActivity | None = None,
    ctx: OperationContext | None = None,
) -> Activity | None:
    """Get the most recent activity matching the filter.

    Args:
        store: The ActivityStore instance.
        find: Filter; None or an empty filter matches all activities.
        ctx: Optional cancellation/deadline context.

    Returns:
        The newest matching Activity, or None if nothing matches.
    """
    with store._transaction("get_activity", ctx, write=False) as conn:
        matches = _list_activities(conn, find or FindActivity(), newest_first=True, limit=1)
    if not matches:
        return None
    return matches[0]


def _list_activities(
    conn: sqlite3.Connection,
    find: FindActivity,
    *,
    newest_first: bool = False,
    limit: int | None = None,
) -> list[Activity]:
    """Run the filtered select inside an open transaction."""
    where = WhereClause.for_filter(find)
    order = "created_ts DESC, id DESC" if newest_first else "id ASC"
    query = f"{_SELECT_SQL} WHERE {where.sql} ORDER BY {order}"
    params = list(where.params)
    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)

    cursor = conn.execute(query, params)
    return [Activity.from_row(row) for row in cursor.fetchall()]
