"""
Exception hierarchy for the dealership sales core.

Every failure surfaced by the inventory ledger, the sale recorder and the
transaction coordinator is a subclass of `DealershipError`. Each class carries
a stable ``code`` for programmatic handling and an ``http_status`` used by the
HTTP adapter when rendering the error.

Callers that only care about "something went wrong in the core" can catch
`DealershipError`; callers implementing a retry policy should look at the
concrete class:

- `ValidationError`, `NotFoundError`: never worth retrying.
- `OutOfStockError`: terminal for the request; retry only after a restock.
- `ConflictError`: the store aborted the transaction; retry the whole call.
- `StoreUnavailableError`: connectivity problem; retry with backoff.
"""

from __future__ import annotations

from typing import Iterable


class DealershipError(Exception):
    """
    Base exception for all sales core errors.

    Example
    -------
    >>> try:
    ...     recorder.record_sale(...)
    ... except DealershipError as exc:
    ...     render(exc.code, str(exc))
    """

    code: str = "dealership_error"
    http_status: int = 500

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "An unspecified dealership error occurred."
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""


class ValidationError(DealershipError):
    """
    Raised when input is malformed. No state change has occurred.

    ``fields`` lists the offending field paths, e.g. ``["customer.email"]``.
    """

    code: str = "validation_error"
    http_status: int = 422

    def __init__(self, fields: Iterable[str], message: str | None = None) -> None:
        self.fields = list(fields)
        if message is None:
            message = "Invalid value for: {}".format(", ".join(self.fields))
        super().__init__(message)


class NotFoundError(DealershipError):
    """Raised when a referenced car, sale or salesperson does not exist."""

    code: str = "not_found"
    http_status: int = 404


class OutOfStockError(DealershipError):
    """
    Raised when a car's stock is insufficient at decrement time.

    The check that raises this is evaluated atomically with the decrement, so
    the error is authoritative for the transaction that observed it.
    """

    code: str = "out_of_stock"
    http_status: int = 409

    def __init__(self, car_id: int, requested: int = 1, message: str | None = None) -> None:
        self.car_id = car_id
        self.requested = requested
        if message is None:
            message = "Car is out of stock"
        super().__init__(message)


class ConflictError(DealershipError):
    """
    Raised when the store aborts a transaction because of a concurrent writer.

    Safe to retry the whole operation from scratch.
    """

    code: str = "conflict"
    http_status: int = 409


class StoreUnavailableError(DealershipError):
    """Raised on connectivity failures to the data store."""

    code: str = "store_unavailable"
    http_status: int = 503


class InvalidSaleTransitionError(DealershipError):
    """Raised when a sale cannot move to the requested status."""

    code: str = "invalid_transition"
    http_status: int = 409


__all__ = [
    "ConflictError",
    "DealershipError",
    "InvalidSaleTransitionError",
    "NotFoundError",
    "OutOfStockError",
    "StoreUnavailableError",
    "ValidationError",
]
