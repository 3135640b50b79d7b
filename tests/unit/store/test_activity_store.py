"""Tests for ActivityStore create, list and get operations.

Covers:
- create_activity(): generated fields, validation of type and level
- list_activities(): filter conjunction, ordering, empty results
- get_activity(): absence, most-recent tie-break
- identity and immutability of stored records
"""

from __future__ import annotations

import dataclasses
import itertools
import sqlite3
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from slash_activity.exceptions import ConfigurationError, InvalidActivityValueError
from slash_activity.models import (
    Activity,
    ActivityLevel,
    ActivityType,
    FindActivity,
    ShortcutCreatePayload,
)
from slash_activity.store import ActivityStore

CREATOR_ID = 101


def _seed_grid(store: ActivityStore) -> list[Activity]:
    """Insert one activity for every type x level combination."""
    return [
        store.create_activity(CREATOR_ID, activity_type, level, f"{activity_type.value}:{level.value}")
        for activity_type, level in itertools.product(ActivityType, ActivityLevel)
    ]


# ==========================================================================
# create_activity()
# ==========================================================================


class TestCreateActivity:
    """Verify inserts return the database-generated fields."""

    def test_returns_generated_fields(self, store: ActivityStore) -> None:
        before = int(time.time())
        payload = ShortcutCreatePayload(shortcut_id=42).to_json()

        activity = store.create_activity(
            CREATOR_ID, ActivityType.SHORTCUT_CREATE, ActivityLevel.INFO, payload
        )

        assert activity.id > 0
        assert before - 1 <= activity.created_ts <= int(time.time()) + 1
        assert activity.creator_id == CREATOR_ID
        assert activity.type is ActivityType.SHORTCUT_CREATE
        assert activity.level is ActivityLevel.INFO
        assert activity.payload == payload

    def test_accepts_wire_strings(self, store: ActivityStore) -> None:
        activity = store.create_activity(CREATOR_ID, "shortcut.view", "WARN", "{}")

        assert activity.type is ActivityType.SHORTCUT_VIEW
        assert activity.level is ActivityLevel.WARN

    def test_empty_payload_is_allowed(self, store: ActivityStore) -> None:
        activity = store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO)

        assert activity.payload == ""
        assert store.get_activity(FindActivity(type=ActivityType.SHORTCUT_VIEW)) == activity

    @pytest.mark.parametrize(
        ("activity_type", "level", "field"),
        [
            ("shortcut.delete", "INFO", "type"),
            ("", "INFO", "type"),
            ("shortcut.create", "DEBUG", "level"),
            ("shortcut.create", "", "level"),
        ],
    )
    def test_rejects_unknown_values(
        self, store: ActivityStore, activity_type: str, level: str, field: str
    ) -> None:
        with pytest.raises(InvalidActivityValueError) as exc_info:
            store.create_activity(CREATOR_ID, activity_type, level, "{}")

        assert exc_info.value.field == field
        assert store.list_activities() == []

    def test_ids_are_distinct_and_increasing(self, store: ActivityStore) -> None:
        ids = [
            store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO).id
            for _ in range(25)
        ]

        assert len(set(ids)) == len(ids)
        assert ids == sorted(ids)

    def test_ids_are_distinct_across_threads(self, store: ActivityStore) -> None:
        def create_batch(creator_id: int) -> list[int]:
            return [
                store.create_activity(
                    creator_id, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO, "{}"
                ).id
                for _ in range(10)
            ]

        with ThreadPoolExecutor(max_workers=4) as pool:
            batches = list(pool.map(create_batch, range(4)))

        ids = [activity_id for batch in batches for activity_id in batch]
        assert len(ids) == 40
        assert len(set(ids)) == 40
        assert len(store.list_activities()) == 40


# ==========================================================================
# list_activities()
# ==========================================================================


class TestListActivities:
    """Verify the filter predicate is a conjunction of the set fields."""

    def test_empty_store_returns_empty_list(self, store: ActivityStore) -> None:
        assert store.list_activities() == []
        assert store.list_activities(FindActivity(level=ActivityLevel.ERROR)) == []

    def test_no_filter_returns_all_in_insertion_order(self, store: ActivityStore) -> None:
        created = _seed_grid(store)

        assert store.list_activities() == created
        assert store.list_activities(FindActivity()) == created

    @pytest.mark.parametrize(
        ("activity_type", "level"),
        list(itertools.product(ActivityType, ActivityLevel)),
    )
    def test_both_fields_match_exactly_one(
        self, store: ActivityStore, activity_type: ActivityType, level: ActivityLevel
    ) -> None:
        _seed_grid(store)

        result = store.list_activities(FindActivity(type=activity_type, level=level))

        assert len(result) == 1
        assert result[0].type is activity_type
        assert result[0].level is level

    @pytest.mark.parametrize("activity_type", list(ActivityType))
    def test_type_only(self, store: ActivityStore, activity_type: ActivityType) -> None:
        created = _seed_grid(store)

        result = store.list_activities(FindActivity(type=activity_type))

        assert result == [a for a in created if a.type is activity_type]
        assert {a.level for a in result} == set(ActivityLevel)

    @pytest.mark.parametrize("level", list(ActivityLevel))
    def test_level_only(self, store: ActivityStore, level: ActivityLevel) -> None:
        created = _seed_grid(store)

        result = store.list_activities(FindActivity(level=level))

        assert result == [a for a in created if a.level is level]
        assert {a.type for a in result} == set(ActivityType)

    def test_empty_string_filter_is_wildcard(self, store: ActivityStore) -> None:
        created = _seed_grid(store)

        assert store.list_activities(FindActivity(type="", level="")) == created


# ==========================================================================
# get_activity()
# ==========================================================================


class TestGetActivity:
    """Verify single lookups."""

    def test_round_trip(self, store: ActivityStore) -> None:
        created = store.create_activity(
            CREATOR_ID, ActivityType.SHORTCUT_CREATE, ActivityLevel.ERROR, '{"shortcutId": 9}'
        )

        found = store.get_activity(
            FindActivity(type=ActivityType.SHORTCUT_CREATE, level=ActivityLevel.ERROR)
        )

        assert found == created

    def test_absent_returns_none(self, store: ActivityStore) -> None:
        store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO)

        assert store.get_activity(FindActivity(type=ActivityType.SHORTCUT_CREATE)) is None

    def test_absent_on_empty_store(self, store: ActivityStore) -> None:
        assert store.get_activity() is None

    def test_returns_most_recent_match(self, store: ActivityStore) -> None:
        for _ in range(3):
            store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO)
        latest = store.create_activity(7, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO)
        store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_CREATE, ActivityLevel.INFO)

        assert store.get_activity(FindActivity(type=ActivityType.SHORTCUT_VIEW)) == latest

    def test_repeated_reads_are_identical(self, store: ActivityStore) -> None:
        _seed_grid(store)
        find = FindActivity(level=ActivityLevel.WARN)

        first = store.get_activity(find)
        second = store.get_activity(find)

        assert first is not None
        assert first == second


# ==========================================================================
# Records and store lifecycle
# ==========================================================================


class TestStoreLifecycle:
    """Verify construction variants and record immutability."""

    def test_records_are_frozen(self, store: ActivityStore) -> None:
        activity = store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO)

        with pytest.raises(dataclasses.FrozenInstanceError):
            activity.payload = "changed"  # type: ignore[misc]

    def test_creates_parent_directory(self, db_path: Path) -> None:
        assert not db_path.parent.exists()

        store = ActivityStore(db_path)
        store.close()

        assert db_path.exists()

    def test_data_survives_reopen(self, db_path: Path) -> None:
        first = ActivityStore(db_path)
        created = first.create_activity(CREATOR_ID, ActivityType.SHORTCUT_CREATE, ActivityLevel.INFO)
        first.close()

        second = ActivityStore(db_path)
        try:
            assert second.list_activities() == [created]
        finally:
            second.close()

    def test_supplied_connection(self) -> None:
        conn = sqlite3.connect(":memory:")
        store = ActivityStore(connection=conn)

        created = store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.WARN)
        store.close()

        # The hosting application still owns the connection
        count = conn.execute("SELECT COUNT(*) FROM activity").fetchone()[0]
        assert count == 1
        assert store.get_activity() == created
        conn.close()

    def test_in_memory_store_is_shared_across_threads(self) -> None:
        store = ActivityStore(":memory:")
        created = store.create_activity(CREATOR_ID, ActivityType.SHORTCUT_VIEW, ActivityLevel.INFO)

        with ThreadPoolExecutor(max_workers=2) as pool:
            listed = pool.submit(store.list_activities).result()
            other = pool.submit(
                store.create_activity, 7, ActivityType.SHORTCUT_CREATE, ActivityLevel.WARN
            ).result()

        assert listed == [created]
        assert store.list_activities() == [created, other]
        store.close()

    def test_requires_path_or_connection(self) -> None:
        with pytest.raises(ConfigurationError):
            ActivityStore()
