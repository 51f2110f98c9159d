"""Unit tests for CSV export"""

from campus_dashboard.domain.csv_export import (
    STOCK_PRODUCT_COLUMNS,
    STUDENT_COLUMNS,
    Column,
    export_csv,
)
from campus_dashboard.domain.stock import product_rows


def test_export_science_products(science_products, categories):
    rows = product_rows(science_products, categories)

    text = export_csv(rows, STOCK_PRODUCT_COLUMNS)

    assert text.split("\n") == [
        '"Product","Category","Quantity"',
        '"Chemistry Lab Kit","Science","54"',
        '"Safety Goggles","Science","35"',
        "",
    ]


def test_export_empty_rows_writes_header_only():
    assert export_csv([], STOCK_PRODUCT_COLUMNS) == '"Product","Category","Quantity"\n'


def test_export_doubles_embedded_quotes():
    columns = (Column("Name", lambda r: r["name"]),)

    text = export_csv([{"name": 'The "Best" Kit'}], columns)

    assert text.splitlines()[1] == '"The ""Best"" Kit"'


def test_export_renders_enums_and_custom_terminator(students):
    text = export_csv(students[:1], STUDENT_COLUMNS, line_terminator="\r\n")

    lines = text.split("\r\n")
    assert lines[0] == '"ID","Name","Email","Class","Status","Balance"'
    assert lines[1] == '"stu-001","Amelia Carter","amelia.carter@example.com","Grade 10","active","450"'
