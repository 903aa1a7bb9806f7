import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from app.config import Settings, get_settings


app_settings: Settings = get_settings()
logger = logging.getLogger(__name__)


def is_sqlite_url(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _is_sqlite_memory(database_url: str) -> bool:
    url = make_url(database_url)
    if url.database in (None, "", ":memory:"):
        return True
    return url.query.get("mode") == "memory"


def build_engine(database_url: str, *, busy_timeout_seconds: int | None = None) -> Engine:
    """
    Create an engine whose write transactions serialize on the same rows.

    On SQLite every transaction is opened with ``BEGIN IMMEDIATE`` so that two
    sale transactions never both hold a read snapshot and then race for the
    write lock; the loser waits on ``busy_timeout`` instead of failing with a
    stale snapshot. Other backends rely on row locks taken by the queries.
    """
    if busy_timeout_seconds is None:
        busy_timeout_seconds = app_settings.DB_BUSY_TIMEOUT_SECONDS

    sqlite = is_sqlite_url(database_url)
    sqlite_memory = sqlite and _is_sqlite_memory(database_url)

    connect_args = {}
    engine_kwargs: dict[str, object] = dict(pool_pre_ping=True)
    if sqlite:
        connect_args = {"check_same_thread": False, "timeout": busy_timeout_seconds}
        if sqlite_memory:
            engine_kwargs.update(poolclass=StaticPool)

    new_engine = create_engine(database_url, connect_args=connect_args, **engine_kwargs)

    if sqlite:
        busy_timeout_ms = busy_timeout_seconds * 1000

        @event.listens_for(new_engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            # Transactions are begun explicitly by the "begin" listener below.
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms}")
                if not sqlite_memory:
                    try:
                        cursor.execute("PRAGMA journal_mode=WAL")
                        cursor.execute("PRAGMA synchronous=NORMAL")
                    except sqlite3.DatabaseError:
                        logger.warning("SQLite WAL mode unavailable; using default journal.")
            finally:
                cursor.close()

        @event.listens_for(new_engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return new_engine


engine = build_engine(app_settings.DATABASE_URL)
