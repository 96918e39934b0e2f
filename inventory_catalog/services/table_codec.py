import logging
from pathlib import Path

from pydantic import ValidationError

from inventory_catalog.core.constants import (
    COLUMN_DELIMITER,
    INVENTORY_CAPACITY,
    NOT_APPLICABLE,
    TABLE_BORDER,
    TABLE_FIELD_COUNT,
    TABLE_HEADER,
    TABLE_MARKER,
    TABLE_TITLE,
)
from inventory_catalog.core.errors import MalformedRecordError
from inventory_catalog.core.numbers import format_amount, format_percent, parse_fraction
from inventory_catalog.models.item import InventoryItem
from inventory_catalog.schemas.result import describe_validation_error

logger = logging.getLogger(__name__)

# Cell widths of the persisted table, taken from the border segments.
TABLE_WIDTHS = tuple(len(segment) for segment in TABLE_BORDER.strip("+").split("+"))


def render_border(widths) -> str:
    return "+" + "+".join("-" * width for width in widths) + "+"


def render_row(values, widths) -> str:
    cells = [" " + str(value).ljust(width - 1) for value, width in zip(values, widths)]
    return COLUMN_DELIMITER + COLUMN_DELIMITER.join(cells) + COLUMN_DELIMITER


def _row_values(item: InventoryItem):
    discount = format_percent(item.discount) if item.is_discounted else NOT_APPLICABLE
    return (
        item.id,
        item.company_name,
        item.name,
        format_amount(item.price),
        item.stock_quantity,
        discount,
    )


def render_table(items) -> str:
    lines = [TABLE_TITLE, TABLE_BORDER, TABLE_HEADER, TABLE_BORDER]
    for item in items:
        lines.append(render_row(_row_values(item), TABLE_WIDTHS))
        lines.append(TABLE_BORDER)
    return "\n".join(lines) + "\n"


def save_table(path, items) -> Path:
    table_path = Path(path)
    with table_path.open("w", encoding="utf-8") as handle:
        handle.write(render_table(items))
    return table_path


def _is_border(line):
    return line.startswith("+") and set(line) <= {"+", "-"}


def _split_row(line, line_number):
    if not (line.startswith(COLUMN_DELIMITER) and line.endswith(COLUMN_DELIMITER)):
        raise MalformedRecordError(f"not a table row: {line!r}", line_number)
    fields = [part.strip() for part in line[1:-1].split(COLUMN_DELIMITER)]
    if len(fields) != TABLE_FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {TABLE_FIELD_COUNT} fields, found {len(fields)}",
            line_number,
        )
    return fields


def _is_header(fields):
    return fields[0].upper() == "ID"


def _parse_row(fields, line_number) -> InventoryItem:
    raw_id, company_name, name, raw_price, raw_stock, raw_discount = fields
    try:
        item_id = int(raw_id)
        price = float(raw_price)
        stock_quantity = int(raw_stock)
        if raw_discount.upper() == NOT_APPLICABLE:
            discount = 0.0
        else:
            discount = parse_fraction(raw_discount)
    except ValueError as exc:
        raise MalformedRecordError(str(exc), line_number) from exc

    try:
        return InventoryItem.create(
            item_id,
            company_name,
            name,
            price,
            stock_quantity,
            discount,
        )
    except ValidationError as exc:
        raise MalformedRecordError(describe_validation_error(exc), line_number) from exc


def parse_table(lines, capacity=INVENTORY_CAPACITY) -> list[InventoryItem]:
    """
    Parse the persisted table back into records, in file order.

    Everything before the marker line is ignored. Border lines, blank lines and
    the column header are skipped. Any unreadable row aborts the whole parse
    with ``MalformedRecordError``.
    """
    numbered = enumerate(lines, start=1)
    for _, line in numbered:
        if TABLE_MARKER in line:
            break
    else:
        logger.warning("No '%s' marker found; treating the table as empty.", TABLE_MARKER)
        return []

    items = []
    seen_ids = set()
    for line_number, raw_line in numbered:
        line = raw_line.strip()
        if not line or _is_border(line):
            continue
        fields = _split_row(line, line_number)
        if _is_header(fields):
            continue
        if len(items) >= capacity:
            logger.warning(
                "Inventory table holds more than %d records; ignoring rows from line %d on.",
                capacity,
                line_number,
            )
            break
        item = _parse_row(fields, line_number)
        if item.id in seen_ids:
            raise MalformedRecordError(f"duplicate item ID {item.id}", line_number)
        seen_ids.add(item.id)
        items.append(item)
    return items


def load_table(path, capacity=INVENTORY_CAPACITY) -> list[InventoryItem]:
    with Path(path).open("r", encoding="utf-8") as handle:
        return parse_table(handle, capacity)


__all__ = [
    "TABLE_WIDTHS",
    "load_table",
    "parse_table",
    "render_border",
    "render_row",
    "render_table",
    "save_table",
]
