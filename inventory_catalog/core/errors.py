from enum import Enum


class ErrorKind(str, Enum):
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    PERSISTENCE_IO_FAILURE = "persistence_io_failure"
    MALFORMED_PERSISTED_RECORD = "malformed_persisted_record"
    INVALID_INPUT = "invalid_input"


class InventoryError(Exception):
    """Base error carrying the kind the store reports back to callers."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message, kind=None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class InsufficientStockError(InventoryError):
    kind = ErrorKind.INSUFFICIENT_STOCK


class MalformedRecordError(InventoryError):
    kind = ErrorKind.MALFORMED_PERSISTED_RECORD

    def __init__(self, message, line_number=None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


__all__ = [
    "ErrorKind",
    "InsufficientStockError",
    "InventoryError",
    "MalformedRecordError",
]
