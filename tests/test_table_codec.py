import tempfile
import unittest
from pathlib import Path

from inventory_catalog.core.constants import TABLE_BORDER, TABLE_HEADER, TABLE_TITLE
from inventory_catalog.core.errors import MalformedRecordError
from inventory_catalog.core.numbers import format_amount, format_percent, parse_fraction
from inventory_catalog.models.item import InventoryItem, ItemKind
from inventory_catalog.services.table_codec import load_table, parse_table, render_table, save_table


def _as_tuples(items):
    return sorted(
        (item.id, item.company_name, item.name, item.price, item.stock_quantity, item.kind, item.discount)
        for item in items
    )


class NumberFormatTest(unittest.TestCase):
    def test_format_amount(self):
        self.assertEqual(format_amount(9.5), "9.5")
        self.assertEqual(format_amount(20), "20.0")
        self.assertEqual(format_amount(9.55), "9.55")

    def test_format_percent(self):
        self.assertEqual(format_percent(0.1), "10.0%")
        self.assertEqual(format_percent(0.25), "25.0%")
        self.assertEqual(format_percent(0.1234), "12.34%")

    def test_parse_fraction(self):
        self.assertEqual(parse_fraction("10.0%"), 0.1)
        self.assertEqual(parse_fraction(" 12.34 % "), 0.1234)
        self.assertEqual(parse_fraction("0.1"), 0.1)
        with self.assertRaises(ValueError):
            parse_fraction("ten")


class TableCodecTest(unittest.TestCase):
    def test_render_matches_file_framing(self):
        items = [
            InventoryItem.create(1, "Acme", "Widget", 9.5, 100),
            InventoryItem.create(2, "Acme", "Gadget", 20.0, 50, 0.1),
        ]
        lines = render_table(items).splitlines()
        self.assertEqual(lines[0], TABLE_TITLE)
        self.assertEqual(lines[1], TABLE_BORDER)
        self.assertEqual(lines[2], TABLE_HEADER)
        self.assertEqual(lines[3], TABLE_BORDER)
        self.assertEqual(
            lines[4],
            "| %-3d| %-33s| %-20s     | %-10.1f | %-15d | N/A          |"
            % (1, "Acme", "Widget", 9.5, 100),
        )
        self.assertEqual(lines[5], TABLE_BORDER)
        self.assertTrue(lines[6].endswith("| 10.0%        |"))
        self.assertEqual(len(lines[4]), len(TABLE_BORDER))
        self.assertEqual(len(lines[6]), len(TABLE_BORDER))
        self.assertEqual(len(lines), 8)

    def test_round_trip(self):
        items = [
            InventoryItem.create(7, "Acme Corporation", "Widget", 9.5, 100),
            InventoryItem.create(3, "", "Gadget", 20.0, 0, 0.1),
            InventoryItem.create(12, "Globex", "Sprocket", 3.14159, 7, 0.125),
            InventoryItem.create(4, "Initech", "A very long item name indeed", 0.0, 1, 0.3333),
        ]
        parsed = parse_table(render_table(items).splitlines())
        self.assertEqual(_as_tuples(parsed), _as_tuples(items))
        self.assertEqual([item.id for item in parsed], [7, 3, 12, 4])

    def test_parse_skips_preamble_and_accepts_fraction_discount(self):
        text = "\n".join(
            [
                "some preamble",
                TABLE_TITLE,
                TABLE_BORDER,
                TABLE_HEADER,
                TABLE_BORDER,
                "| 5  | Acme | Gizmo | 12.0 | 3 | 0.2 |",
                TABLE_BORDER,
                "",
            ]
        )
        parsed = parse_table(text.splitlines())
        self.assertEqual(len(parsed), 1)
        self.assertIs(parsed[0].kind, ItemKind.DISCOUNTED)
        self.assertEqual(parsed[0].discount, 0.2)

    def test_parse_without_marker_is_empty(self):
        self.assertEqual(parse_table(["| 1 | a | b | 1 | 1 | N/A |"]), [])

    def test_parse_stops_at_capacity(self):
        items = [InventoryItem.create(i, "Acme", f"Item {i}", 1.0, 1) for i in range(1, 5)]
        parsed = parse_table(render_table(items).splitlines(), capacity=2)
        self.assertEqual([item.id for item in parsed], [1, 2])

    def test_malformed_rows_abort(self):
        bad_rows = [
            "| x  | Acme | Widget | 1.0 | 1 | N/A |",
            "| 1  | Acme | Widget | cheap | 1 | N/A |",
            "| 1  | Acme | Widget | 1.0 | 1 |",
            "| 1  | Acme | Widget | 1.0 | -3 | N/A |",
            "| 1  | Acme | Widget | 1.0 | 1 | lots |",
        ]
        for row in bad_rows:
            with self.subTest(row=row):
                with self.assertRaises(MalformedRecordError):
                    parse_table([TABLE_TITLE, TABLE_BORDER, row])

    def test_duplicate_ids_rejected(self):
        rows = [
            TABLE_TITLE,
            TABLE_BORDER,
            "| 1 | Acme | Widget | 1.0 | 1 | N/A |",
            "| 1 | Acme | Gadget | 1.0 | 1 | N/A |",
        ]
        with self.assertRaises(MalformedRecordError) as ctx:
            parse_table(rows)
        self.assertEqual(ctx.exception.line_number, 4)

    def test_save_and_load_file(self):
        items = [InventoryItem.create(1, "Acme", "Widget", 9.5, 100)]
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "inventory.txt"
            save_table(path, items)
            self.assertTrue(path.read_text(encoding="utf-8").startswith(TABLE_TITLE + "\n"))
            loaded = load_table(path)
        self.assertEqual(_as_tuples(loaded), _as_tuples(items))


if __name__ == "__main__":
    unittest.main()
