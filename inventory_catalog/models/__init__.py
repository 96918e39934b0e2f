from inventory_catalog.models.item import InventoryItem, ItemKind

__all__ = ["InventoryItem", "ItemKind"]
