from __future__ import annotations

import logging
from typing import Callable, Protocol, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# PostgreSQL SQLSTATEs meaning "another transaction got there first".
_PG_CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
_SQLITE_CONFLICT_MARKERS = ("database is locked", "database table is locked", "database is busy")


class TransactionCoordinator(Protocol):
    """
    Atomic execution primitive the sales core relies on.

    ``run_transaction(fn)`` calls ``fn`` with a session bound to a single open
    transaction. All writes made by ``fn`` become visible together when it
    returns, or not at all if it raises.
    """

    def run_transaction(self, fn: Callable[[Session], T]) -> T: ...


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_conflict(exc: DBAPIError) -> bool:
    if _sqlstate(exc) in _PG_CONFLICT_SQLSTATES:
        return True
    if isinstance(exc, OperationalError):
        text = str(exc.orig).lower()
        return any(marker in text for marker in _SQLITE_CONFLICT_MARKERS)
    return False


class SqlAlchemyTransactionCoordinator:
    """
    Runs units of work on sessions from a SQLAlchemy ``sessionmaker``.

    Domain errors raised inside ``fn`` roll the transaction back and propagate
    unchanged. Driver errors are translated: write conflicts become
    `ConflictError`, connectivity failures become `StoreUnavailableError`.
    Nothing is retried here.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def run_transaction(self, fn: Callable[[Session], T]) -> T:
        try:
            with self._session_factory() as session:
                with session.begin():
                    return fn(session)
        except DBAPIError as exc:
            if is_conflict(exc):
                logger.warning("Transaction aborted by a concurrent writer: %s", exc.orig)
                raise ConflictError(
                    "The operation conflicted with a concurrent update; retry it."
                ) from exc
            if exc.connection_invalidated or isinstance(exc, OperationalError):
                logger.error("Data store unavailable", exc_info=True)
                raise StoreUnavailableError("The data store is unavailable.") from exc
            raise


__all__ = ["SqlAlchemyTransactionCoordinator", "TransactionCoordinator", "is_conflict"]
