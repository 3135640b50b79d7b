"""Database schema for the activity store.

One append-only table. Tables are created when missing; there is no
versioned migration step.
"""

SCHEMA_SQL = """
-- Append-only audit log of shortcut events.
-- id and created_ts are generated on insert and returned via RETURNING.
CREATE TABLE IF NOT EXISTS activity (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    creator_id INTEGER NOT NULL,
    created_ts BIGINT NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER)),
    type TEXT NOT NULL DEFAULT '',
    level TEXT NOT NULL CHECK (level IN ('INFO', 'WARN', 'ERROR')) DEFAULT 'INFO',
    payload TEXT NOT NULL DEFAULT '{}'
);
"""
