INVENTORY_CAPACITY = 15

COLUMN_DELIMITER = "|"
NOT_APPLICABLE = "N/A"

TABLE_MARKER = "Current Inventory:"
TABLE_TITLE = "Current Inventory:- "
TABLE_BORDER = (
    "+----+----------------------------------+--------------------------"
    "+------------+-----------------+--------------+"
)
TABLE_HEADER = (
    "| ID | Company                          | Name                     "
    "| Price      | Stock Quantity  | Discount     |"
)
TABLE_FIELD_COUNT = 6

MENU_CHOICES = range(1, 10)
