import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from inventory_catalog.core.constants import INVENTORY_CAPACITY, NOT_APPLICABLE
from inventory_catalog.core.errors import ErrorKind, InventoryError, MalformedRecordError
from inventory_catalog.core.numbers import format_amount, format_percent
from inventory_catalog.models.item import InventoryItem
from inventory_catalog.schemas.result import OperationResult
from inventory_catalog.services.table_codec import load_table, render_border, render_row, save_table

logger = logging.getLogger(__name__)

_LISTING_COLUMNS = (
    ("ID", 5),
    ("Company", 36),
    ("Name", 22),
    ("Price", 14),
    ("Effective Price", 17),
    ("Stock Quantity", 16),
    ("Discount", 12),
)
_LISTING_WIDTHS = tuple(width for _, width in _LISTING_COLUMNS)


def _listing_values(item: InventoryItem):
    discount = format_percent(item.discount) if item.is_discounted else NOT_APPLICABLE
    return (
        item.id,
        item.company_name,
        item.name,
        format_amount(item.price),
        f"{item.effective_price():.1f}",
        item.stock_quantity,
        discount,
    )


def render_listing(items) -> str:
    border = render_border(_LISTING_WIDTHS)
    lines = [
        "Current Inventory:",
        border,
        render_row([label for label, _ in _LISTING_COLUMNS], _LISTING_WIDTHS),
        border,
    ]
    for item in items:
        lines.append(render_row(_listing_values(item), _LISTING_WIDTHS))
    lines.append(border)
    return "\n".join(lines)


def _not_found(item_id):
    return OperationResult.failure(
        ErrorKind.NOT_FOUND,
        f"Item not found in inventory: ID {item_id}",
    )


class InventoryStore:
    """
    Fixed-capacity inventory held in ordered slots.

    Empty slots are ``None``. Lookups scan slots in order, new records take the
    first empty slot, and every successful mutation rewrites the table file.
    """

    def __init__(self, path, capacity: int = INVENTORY_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.path = Path(path)
        self.capacity = capacity
        self._slots: list[Optional[InventoryItem]] = [None] * capacity
        # Set when the table file exists but could not be read back.
        self._load_failed = False

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    @property
    def is_full(self) -> bool:
        return all(slot is not None for slot in self._slots)

    def items(self) -> list[InventoryItem]:
        return [slot for slot in self._slots if slot is not None]

    def slots(self) -> list[Optional[InventoryItem]]:
        return list(self._slots)

    def get_item(self, item_id) -> Optional[InventoryItem]:
        index = self._index_of(item_id)
        return None if index is None else self._slots[index]

    def _index_of(self, item_id) -> Optional[int]:
        for index, slot in enumerate(self._slots):
            if slot is not None and slot.id == item_id:
                return index
        return None

    def _find_by_name(self, name) -> Optional[InventoryItem]:
        wanted = name.casefold()
        for slot in self._slots:
            if slot is not None and slot.name.casefold() == wanted:
                return slot
        return None

    def _first_free_slot(self) -> Optional[int]:
        for index, slot in enumerate(self._slots):
            if slot is None:
                return index
        return None

    # ------------------------------------------------------------------ #
    #  Persistence
    # ------------------------------------------------------------------ #
    def load(self) -> OperationResult:
        """Replace the slots with the records stored in the table file."""
        self._slots = [None] * self.capacity
        self._load_failed = False
        try:
            records = load_table(self.path, self.capacity)
        except FileNotFoundError:
            logger.info("No inventory file at %s; starting with an empty inventory.", self.path)
            return OperationResult.success(
                "No inventory file found. Starting with an empty inventory."
            )
        except MalformedRecordError as exc:
            self._load_failed = True
            logger.error("Inventory file %s is malformed: %s", self.path, exc)
            return OperationResult.from_error(
                exc,
                message=f"Error loading inventory from file: {exc}",
            )
        except OSError as exc:
            self._load_failed = True
            logger.error("Could not read inventory file %s", self.path, exc_info=True)
            return OperationResult.failure(
                ErrorKind.PERSISTENCE_IO_FAILURE,
                f"Error loading inventory from file: {exc}",
            )

        for index, record in enumerate(records):
            self._slots[index] = record
        logger.info("Loaded %d items from %s", len(records), self.path)
        return OperationResult.success(f"Loaded {len(records)} items from inventory file.")

    def save(self) -> OperationResult:
        if self._load_failed:
            logger.error("Refusing to overwrite %s after a failed load", self.path)
            return OperationResult.failure(
                ErrorKind.PERSISTENCE_IO_FAILURE,
                f"Error saving inventory to file: {self.path} could not be loaded, so it was left untouched.",
            )
        try:
            save_table(self.path, self.items())
        except OSError as exc:
            logger.error("Could not write inventory file %s", self.path, exc_info=True)
            return OperationResult.failure(
                ErrorKind.PERSISTENCE_IO_FAILURE,
                f"Error saving inventory to file: {exc}",
            )
        logger.debug("Saved %d items to %s", len(self), self.path)
        return OperationResult.success("Inventory saved.")

    def _commit(self, message, item) -> OperationResult:
        # The in-memory change stays applied even when the write fails.
        logger.info(message)
        saved = self.save()
        if not saved.ok:
            return OperationResult.failure(
                ErrorKind.PERSISTENCE_IO_FAILURE,
                f"{message}. {saved.message}",
                item=item,
            )
        return OperationResult.success(message, item=item)

    # ------------------------------------------------------------------ #
    #  Operations
    # ------------------------------------------------------------------ #
    def add_item(
        self,
        item_id,
        company_name,
        name,
        price,
        stock_quantity,
        discount=0.0,
    ) -> OperationResult:
        try:
            item = InventoryItem.create(item_id, company_name, name, price, stock_quantity, discount)
        except ValidationError as exc:
            return OperationResult.invalid_input(exc)

        # Compare on the validated id so "1" and 1 collide.
        if self._index_of(item.id) is not None:
            logger.info("Rejected duplicate item ID %s", item.id)
            return OperationResult.failure(
                ErrorKind.DUPLICATE_IDENTIFIER,
                f"Item with the ID: {item.id} already exists please enter a different ID for the new item.",
            )

        index = self._first_free_slot()
        if index is None:
            logger.warning("Inventory is full (%d items); rejected item ID %s", self.capacity, item_id)
            return OperationResult.failure(
                ErrorKind.CAPACITY_EXCEEDED,
                "Inventory is full. Cannot add more items.",
            )
        self._slots[index] = item
        return self._commit(f"Item added to inventory: {item.name}", item)

    def remove_item(self, item_id) -> OperationResult:
        index = self._index_of(item_id)
        if index is None:
            return _not_found(item_id)
        item = self._slots[index]
        self._slots[index] = None
        return self._commit(f"Item removed from inventory: ID {item_id}", item)

    def search_item(self, name) -> OperationResult:
        item = self._find_by_name(name)
        if item is None:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND,
                f"Item not found in inventory: {name}",
            )
        return OperationResult.success(f"Item found in inventory: {item.describe()}", item=item)

    def edit_item(self, item_id, new_price) -> OperationResult:
        item = self.get_item(item_id)
        if item is None:
            return _not_found(item_id)
        try:
            item.set_price(new_price)
        except InventoryError as exc:
            return OperationResult.from_error(exc)
        return self._commit(f"Item price updated: {item.describe()}", item)

    def add_stock(self, item_id, quantity) -> OperationResult:
        item = self.get_item(item_id)
        if item is None:
            return _not_found(item_id)
        try:
            item.add_stock(quantity)
        except InventoryError as exc:
            return OperationResult.from_error(exc)
        return self._commit(f"Stock added for item: {item.describe()}", item)

    def remove_stock(self, item_id, quantity) -> OperationResult:
        item = self.get_item(item_id)
        if item is None:
            return _not_found(item_id)
        try:
            item.remove_stock(quantity)
        except InventoryError as exc:
            logger.info("Stock removal rejected for item ID %s: %s", item_id, exc)
            return OperationResult.from_error(exc, item=item)
        return self._commit(f"Stock removed for item: {item.describe()}", item)

    def request_item(self, name, quantity) -> OperationResult:
        """Purchase ``quantity`` units of the first item whose name matches."""
        item = self._find_by_name(name)
        if item is None:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND,
                f"Item not found in inventory: {name}",
            )
        try:
            item.remove_stock(quantity)
        except InventoryError as exc:
            logger.info("Purchase rejected for %s: %s", item.name, exc)
            return OperationResult.from_error(exc, item=item)
        return self._commit(f"Item successfully purchased: {item.name}", item)

    def display_inventory(self) -> str:
        return render_listing(self.items())


__all__ = ["InventoryStore", "render_listing"]
