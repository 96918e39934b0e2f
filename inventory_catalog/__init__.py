from inventory_catalog.models.item import InventoryItem, ItemKind
from inventory_catalog.schemas.result import OperationResult
from inventory_catalog.services.inventory_store import InventoryStore

__all__ = ["InventoryItem", "InventoryStore", "ItemKind", "OperationResult"]
