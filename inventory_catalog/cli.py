import argparse
import logging

from pydantic import ValidationError

from inventory_catalog.config import get_settings
from inventory_catalog.core.constants import MENU_CHOICES
from inventory_catalog.core.logging import setup_logging
from inventory_catalog.schemas.item import ItemCreate
from inventory_catalog.schemas.result import describe_validation_error
from inventory_catalog.services.inventory_store import InventoryStore

logger = logging.getLogger(__name__)

MENU = """
---------------Menu:---------------
1. Add item to inventory
2. Remove item from inventory
3. Search for item by name
4. Edit item price
5. Add stock quantity for item
6. Remove stock quantity for item
7. Show available items in inventory
8. Request item from inventory
9. Exit"""

EXIT_CHOICE = 9


class InventoryMenu:
    """Numbered text menu driving an ``InventoryStore``."""

    def __init__(self, store: InventoryStore, read=None, write=None, title=None):
        self.store = store
        self.title = title
        self._read = read or input
        self._write = write or print
        self._actions = {
            1: self.add_item,
            2: self.remove_item,
            3: self.search_item,
            4: self.edit_price,
            5: self.add_stock,
            6: self.remove_stock,
            7: self.show_inventory,
            8: self.request_item,
        }

    def _prompt_text(self, prompt: str) -> str:
        return self._read(prompt).strip()

    def _prompt_int(self, prompt: str, min_val=None) -> int:
        while True:
            try:
                value = int(self._prompt_text(prompt))
            except ValueError:
                self._write("Invalid whole number. Please try again.")
                continue
            if min_val is not None and value < min_val:
                self._write(f"Value must be >= {min_val}. Try again.")
                continue
            return value

    def _prompt_float(self, prompt: str, min_val=None) -> float:
        while True:
            try:
                value = float(self._prompt_text(prompt))
            except ValueError:
                self._write("Invalid number. Please try again.")
                continue
            if min_val is not None and value < min_val:
                self._write(f"Value must be >= {min_val}. Try again.")
                continue
            return value

    def _report(self, result) -> None:
        self._write(result.message)

    def add_item(self) -> None:
        try:
            payload = ItemCreate(
                id=self._prompt_int("Enter item ID to add the item(Item ID must be unique): "),
                company_name=self._prompt_text("Enter company name: "),
                name=self._prompt_text("Enter item name: "),
                price=self._prompt_float("Enter item price: ", min_val=0.0),
                stock_quantity=self._prompt_int("Enter stock quantity: ", min_val=0),
                discount=self._prompt_float(
                    "Enter discount as a decimal fraction (if no discount, enter 0): ",
                    min_val=0.0,
                ),
            )
        except ValidationError as exc:
            self._write(f"Invalid input: {describe_validation_error(exc)}")
            return
        self._report(
            self.store.add_item(
                payload.id,
                payload.company_name,
                payload.name,
                payload.price,
                payload.stock_quantity,
                payload.discount,
            )
        )

    def remove_item(self) -> None:
        item_id = self._prompt_int("Enter item ID to remove the item: ")
        self._report(self.store.remove_item(item_id))

    def search_item(self) -> None:
        name = self._prompt_text("Enter item name to search for the item in the inventory: ")
        self._report(self.store.search_item(name))

    def edit_price(self) -> None:
        item_id = self._prompt_int("Enter item ID to edit its price: ")
        price = self._prompt_float("Enter new price: ", min_val=0.0)
        self._report(self.store.edit_item(item_id, price))

    def add_stock(self) -> None:
        item_id = self._prompt_int("Enter item ID to add stock quantity: ")
        quantity = self._prompt_int("Enter quantity to add: ", min_val=0)
        self._report(self.store.add_stock(item_id, quantity))

    def remove_stock(self) -> None:
        item_id = self._prompt_int("Enter item ID to remove stock quantity: ")
        quantity = self._prompt_int("Enter quantity to remove: ", min_val=0)
        self._report(self.store.remove_stock(item_id, quantity))

    def show_inventory(self) -> None:
        self._write(self.store.display_inventory())

    def request_item(self) -> None:
        name = self._prompt_text("Enter item name to request from inventory: ")
        if not self.store.search_item(name).ok:
            self._write("Item not available in the inventory.")
            return
        self._write("Item available in the inventory.")
        quantity = self._prompt_int("Enter quantity to purchase: ", min_val=0)
        self._report(self.store.request_item(name, quantity))

    def run(self) -> None:
        if self.title:
            self._write(self.title)
        while True:
            self._write(MENU)
            try:
                raw_choice = self._prompt_text("Enter your choice: ")
                try:
                    choice = int(raw_choice)
                except ValueError:
                    choice = None
                if choice == EXIT_CHOICE:
                    self._write("Exiting program...")
                    return
                if choice not in MENU_CHOICES:
                    self._write("Invalid choice. Please enter a number between 1 and 9.")
                    continue
                self._actions[choice]()
            except EOFError:
                logger.debug("Input closed; leaving the menu.")
                self._write("Exiting program...")
                return


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Manage a small inventory catalog from a numbered text menu."
    )
    parser.add_argument(
        "--file",
        default=None,
        help="Inventory table file. Default: the INVENTORY_FILE setting.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level. Default: the LOG_LEVEL setting.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    settings = get_settings()

    store = InventoryStore(args.file or settings.INVENTORY_FILE)
    result = store.load()
    if not result.ok:
        # A table that failed to load is never rewritten.
        raise SystemExit(result.message)

    InventoryMenu(store, title=settings.APP_NAME).run()


if __name__ == "__main__":
    main()
