from inventory_catalog.services.inventory_store import InventoryStore
from inventory_catalog.services.table_codec import load_table, parse_table, render_table, save_table

__all__ = [
    "InventoryStore",
    "load_table",
    "parse_table",
    "render_table",
    "save_table",
]
