"""Error taxonomy shared by the service layer and the HTTP routers.

Services raise these; routers translate them with ``to_http_exception`` so
every failure reaches the client as ``{"detail": "<message>"}``.
"""

from fastapi import HTTPException, status


class ShopLedgerError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShopLedgerError):
    """Bad input shape or range. Raised before any mutation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ShopLedgerError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ShopLedgerError):
    status_code = status.HTTP_409_CONFLICT


class InsufficientStockError(ShopLedgerError):
    """Requested quantity exceeds stock on hand."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, available: int, required: int):
        super().__init__(
            "Not enough stock. Available: {}, Required: {}".format(available, required)
        )
        self.available = available
        self.required = required


class PersistenceError(ShopLedgerError):
    """The store rejected a write or read. Nothing was applied."""


class PartialFailureError(ShopLedgerError):
    """A dependent write failed after a destructive write committed."""


def to_http_exception(exc: ShopLedgerError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


__all__ = [
    "ConflictError",
    "InsufficientStockError",
    "NotFoundError",
    "PartialFailureError",
    "PersistenceError",
    "ShopLedgerError",
    "ValidationError",
    "to_http_exception",
]
