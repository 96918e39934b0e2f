import math
from enum import Enum

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from inventory_catalog.core.constants import COLUMN_DELIMITER
from inventory_catalog.core.errors import ErrorKind, InsufficientStockError, InventoryError
from inventory_catalog.core.numbers import format_amount, format_percent


class ItemKind(str, Enum):
    PLAIN = "plain"
    DISCOUNTED = "discounted"


def _check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        raise InventoryError(
            f"Quantity must be a non-negative whole number, got {quantity!r}.",
            ErrorKind.INVALID_INPUT,
        )
    return quantity


class InventoryItem(BaseModel):
    """One inventory record: a plain item, or a discounted one when ``kind`` says so."""

    id: int
    company_name: str = ""
    name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    stock_quantity: int = Field(ge=0)
    kind: ItemKind = ItemKind.PLAIN
    discount: float = Field(default=0.0, ge=0, lt=1, allow_inf_nan=False)

    @field_validator("company_name", "name")
    @classmethod
    def _check_text(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if COLUMN_DELIMITER in value or "\n" in value or "\r" in value:
            raise ValueError(
                f"{info.field_name} must not contain '{COLUMN_DELIMITER}' or line breaks"
            )
        if info.field_name == "name" and not value:
            raise ValueError("name must not be empty")
        return value

    @model_validator(mode="after")
    def _check_kind(self):
        if self.kind is ItemKind.PLAIN and self.discount != 0:
            raise ValueError("plain items carry no discount")
        if self.kind is ItemKind.DISCOUNTED and self.discount <= 0:
            raise ValueError("discounted items need a discount greater than zero")
        return self

    @classmethod
    def create(cls, item_id, company_name, name, price, stock_quantity, discount=0.0):
        """Build a plain item when ``discount`` is zero, a discounted one otherwise."""
        kind = ItemKind.DISCOUNTED if discount > 0 else ItemKind.PLAIN
        return cls(
            id=item_id,
            company_name=company_name,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            kind=kind,
            discount=discount,
        )

    @property
    def is_discounted(self) -> bool:
        return self.kind is ItemKind.DISCOUNTED

    def effective_price(self) -> float:
        if self.kind is ItemKind.DISCOUNTED:
            return self.price * (1 - self.discount)
        return self.price

    def add_stock(self, quantity: int) -> None:
        self.stock_quantity += _check_quantity(quantity)

    def remove_stock(self, quantity: int) -> None:
        _check_quantity(quantity)
        if self.stock_quantity < quantity:
            raise InsufficientStockError(f"Insufficient stock for item: {self.name}")
        self.stock_quantity -= quantity

    def set_price(self, new_price) -> None:
        if isinstance(new_price, bool) or not isinstance(new_price, (int, float)):
            raise InventoryError(f"Price must be a number, got {new_price!r}.")
        if not math.isfinite(new_price) or new_price < 0:
            raise InventoryError(f"Price must be a non-negative number, got {new_price!r}.")
        self.price = float(new_price)

    def describe(self) -> str:
        text = (
            f"ID: {self.id} | Company: {self.company_name} | Name: {self.name}"
            f" - Price: {format_amount(self.price)}"
        )
        if self.is_discounted:
            text += f" (Discount: {format_percent(self.discount)})"
        return text + f" (Stock: {self.stock_quantity})"


__all__ = ["InventoryItem", "ItemKind"]
