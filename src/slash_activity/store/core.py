"""Core ActivityStore class for the activity store.

Contains the main ActivityStore class with connection and transaction
management, and delegation to the activities operation module.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from pathlib import Path

from slash_activity.config.settings import StoreSettings
from slash_activity.constants import (
    DEFAULT_BUSY_TIMEOUT_SECONDS,
    DEFAULT_PAYLOAD,
    IN_MEMORY_DB_PATH,
    PROGRESS_HANDLER_STEPS,
)
from slash_activity.exceptions import (
    ConfigurationError,
    OperationCancelledError,
    StoreError,
)
from slash_activity.models.activity import Activity, FindActivity
from slash_activity.models.enums import ActivityLevel, ActivityType
from slash_activity.store import activities
from slash_activity.store.context import OperationContext
from slash_activity.store.schema import SCHEMA_SQL

logger = logging.getLogger(__name__)


class ActivityStore:
    """SQLite-based append-only store for activity records.

    Each operation is one round trip inside its own transaction. Writes
    commit at the end of the block; reads always roll back. Any failure
    rolls back and surfaces as StoreError with the driver error attached.
    """

    def __init__(
        self,
        db_path: Path | str | None = None,
        *,
        connection: sqlite3.Connection | None = None,
        busy_timeout: float = DEFAULT_BUSY_TIMEOUT_SECONDS,
        operation_timeout: float | None = None,
    ):
        """Initialize the activity store.

        Args:
            db_path: Path to SQLite database file. Each thread opens its own
                connection to it. ":memory:" gets one connection shared by
                all threads.
            connection: Connection supplied by the hosting application, used
                instead of db_path. The store takes over its transaction
                control and row factory.
            busy_timeout: Seconds to wait on a locked database.
            operation_timeout: Deadline applied to operations called without
                an explicit context.

        Raises:
            ConfigurationError: If neither db_path nor connection is given.
        """
        if db_path is None and connection is None:
            raise ConfigurationError("ActivityStore needs a db_path or a connection")

        self.db_path = Path(db_path) if db_path is not None else None
        self.busy_timeout = busy_timeout
        self.operation_timeout = operation_timeout
        self._local = threading.local()
        # One transaction at a time on a connection shared between threads
        self._shared_lock = threading.Lock()
        self._owns_shared_conn = False

        # A private in-memory database per thread would split the data
        if connection is None and str(db_path) == IN_MEMORY_DB_PATH:
            connection = sqlite3.connect(
                IN_MEMORY_DB_PATH,
                check_same_thread=False,
                timeout=busy_timeout,
                isolation_level=None,
            )
            self._owns_shared_conn = True

        self._shared_conn = connection
        if connection is not None:
            self._prepare_connection(connection)
        self._ensure_schema()

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> "ActivityStore":
        """Create a store from StoreSettings."""
        return cls(
            settings.db_path,
            busy_timeout=settings.busy_timeout_seconds,
            operation_timeout=settings.operation_timeout_seconds,
        )

    @staticmethod
    def _prepare_connection(conn: sqlite3.Connection) -> None:
        # BEGIN/COMMIT/ROLLBACK are issued explicitly by _transaction
        conn.autocommit = sqlite3.LEGACY_TRANSACTION_CONTROL
        conn.isolation_level = None
        conn.row_factory = sqlite3.Row

    def _get_connection(self) -> sqlite3.Connection:
        """Get the supplied connection, or this thread's own connection."""
        if self._shared_conn is not None:
            return self._shared_conn
        if not hasattr(self._local, "conn") or self._local.conn is None:
            conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                timeout=self.busy_timeout,
                isolation_level=None,
            )
            self._prepare_connection(conn)
            # WAL lets readers proceed while a writer holds the lock
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            self._local.conn = conn
        local_conn: sqlite3.Connection = self._local.conn
        return local_conn

    def _default_context(self) -> OperationContext | None:
        if self.operation_timeout is None:
            return None
        return OperationContext(timeout=self.operation_timeout)

    @contextmanager
    def _transaction(
        self,
        operation: str,
        ctx: OperationContext | None = None,
        *,
        write: bool = True,
    ) -> Iterator[sqlite3.Connection]:
        """Context manager for one unit of work.

        Write transactions commit when the block completes. Read transactions
        are always rolled back. Every failing exit path rolls back. On a
        shared connection the whole block holds the store lock.

        Raises:
            OperationCancelledError: If ctx is cancelled or its deadline passes.
            StoreError: If beginning, executing or committing fails.
        """
        ctx = ctx or self._default_context()
        if ctx is not None:
            ctx.raise_if_done(operation)

        lock = self._shared_lock if self._shared_conn is not None else nullcontext()
        with lock:
            # The deadline may have passed while waiting for the lock
            if ctx is not None:
                ctx.raise_if_done(operation)

            conn = self._get_connection()
            if ctx is not None:
                conn.set_progress_handler(ctx.done, PROGRESS_HANDLER_STEPS)
            began = False
            try:
                conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
                began = True
                yield conn
                if write:
                    if ctx is not None:
                        ctx.raise_if_done(operation)
                    self._commit(conn)
                else:
                    self._rollback(conn)
            except sqlite3.Error as e:
                self._release(conn, began)
                if ctx is not None and ctx.done():
                    raise OperationCancelledError(operation, ctx.reason() or "") from e
                logger.error(f"Activity store {operation} failed: {e}", exc_info=True)
                raise StoreError(
                    f"Activity store {operation} failed: {e}", operation=operation
                ) from e
            except BaseException:
                self._release(conn, began)
                raise
            finally:
                if ctx is not None:
                    conn.set_progress_handler(None, 0)

    def _release(self, conn: sqlite3.Connection, began: bool) -> None:
        """Abandon the transaction after a failure."""
        # Drop the handler first so it cannot interrupt the ROLLBACK itself
        conn.set_progress_handler(None, 0)
        if began:
            self._rollback(conn)

    def _commit(self, conn: sqlite3.Connection) -> None:
        conn.execute("COMMIT")

    def _rollback(self, conn: sqlite3.Connection) -> None:
        # SQLite may already have rolled back (e.g. after an interrupt)
        if conn.in_transaction:
            conn.execute("ROLLBACK")

    def _ensure_schema(self) -> None:
        """Create the activity table if it does not exist."""
        if self._shared_conn is None and self.db_path is not None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._transaction("ensure_schema") as conn:
            conn.execute(SCHEMA_SQL)
        logger.debug(f"Activity store schema ready ({self.db_path or 'supplied connection'})")

    def close(self) -> None:
        """Close this thread's connection. A supplied connection is left open."""
        if self._owns_shared_conn and self._shared_conn is not None:
            with self._shared_lock:
                self._shared_conn.close()
                self._shared_conn = None
            return
        if hasattr(self._local, "conn") and self._local.conn:
            self._local.conn.close()
            self._local.conn = None

    # ==========================================================================
    # Activity operations - delegate to activities module
    # ==========================================================================

    def create_activity(
        self,
        creator_id: int,
        activity_type: ActivityType | str,
        level: ActivityLevel | str,
        payload: str = DEFAULT_PAYLOAD,
        ctx: OperationContext | None = None,
    ) -> Activity:
        """Record a new activity and return it with its generated fields."""
        return activities.create_activity(self, creator_id, activity_type, level, payload, ctx)

    def list_activities(
        self, find: FindActivity | None = None, ctx: OperationContext | None = None
    ) -> list[Activity]:
        """List activities matching the filter."""
        return activities.list_activities(self, find, ctx)

    def get_activity(
        self, find: FindActivity | None = None, ctx: OperationContext | None = None
    ) -> Activity | None:
        """Get the most recent activity matching the filter, or None."""
        return activities.get_activity(self, find, ctx)
