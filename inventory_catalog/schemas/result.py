from typing import Optional

from pydantic import BaseModel, ValidationError

from inventory_catalog.core.errors import ErrorKind, InventoryError
from inventory_catalog.models.item import InventoryItem


def _snapshot(item):
    if item is None:
        return None
    return item.model_copy()


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


class OperationResult(BaseModel):
    """Outcome of a store operation, returned instead of raising."""

    ok: bool
    message: str
    error: Optional[ErrorKind] = None
    item: Optional[InventoryItem] = None

    @classmethod
    def success(cls, message, item=None):
        return cls(ok=True, message=message, item=_snapshot(item))

    @classmethod
    def failure(cls, error, message, item=None):
        return cls(ok=False, message=message, error=error, item=_snapshot(item))

    @classmethod
    def from_error(cls, exc: InventoryError, item=None, message=None):
        return cls.failure(exc.kind, message or exc.message, item=item)

    @classmethod
    def invalid_input(cls, exc: ValidationError):
        return cls.failure(
            ErrorKind.INVALID_INPUT,
            f"Invalid input: {describe_validation_error(exc)}",
        )


__all__ = ["OperationResult", "describe_validation_error"]
