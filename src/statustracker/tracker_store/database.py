"""SQLite engine and session setup for the Tracker Store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from statustracker.tracker_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY = ":memory:"

# Milliseconds a writer waits on a locked file before SQLite gives up
BUSY_TIMEOUT_MS = 5000


class Database:
    """Owns the engine and session factory for one SQLite database.

    File databases run in WAL mode with a busy timeout so the API's worker
    threads can read while another request writes. ``":memory:"`` keeps a
    single shared connection instead. Foreign keys are enforced on both.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def in_memory(self) -> bool:
        return self.db_path == MEMORY

    @property
    def engine(self) -> Engine:
        """Create the engine on first use."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        if self.in_memory:
            # One connection shared by every thread, or each would see an empty DB
            engine = create_engine(
                f"sqlite:///{MEMORY}",
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(f"sqlite:///{self.db_path}")

        file_backed = not self.in_memory

        @event.listens_for(engine, "connect")
        def configure_connection(dbapi_connection: object, _connection_record: object) -> None:
            cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
            cursor.execute("PRAGMA foreign_keys=ON")
            if file_backed:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
            cursor.close()

        return engine

    def create_tables(self) -> None:
        """Create the categories and tracked_items tables if missing."""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Open a session; loaded rows stay usable after commit."""
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions()

    def pragma(self, name: str) -> object:
        """Read a single-valued PRAGMA such as ``journal_mode``."""
        with self.engine.connect() as conn:
            return conn.execute(text(f"PRAGMA {name}")).scalar()

    def close(self) -> None:
        """Dispose of the engine; the next access reconnects."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None
