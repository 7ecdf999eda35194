from asset_inventory.utils.tsv_import import BATCH_COLUMNS, parse_tsv_rows


def test_parses_complete_row():
    rows = parse_tsv_rows("LT-1\tLaptop\tSpare\tLaptops\tHQ\tgood\t3\t999.99\t2024-01-15T08:00:00")

    assert len(rows) == 1
    assert rows[0].number == 1
    assert rows[0].error is None
    assert rows[0].values == {
        "item_code": "LT-1",
        "name": "Laptop",
        "description": "Spare",
        "category_name": "Laptops",
        "location_name": "HQ",
        "condition": "good",
        "quantity": "3",
        "purchase_price": "999.99",
        "purchase_date": "2024-01-15T08:00:00",
    }


def test_blank_lines_are_skipped_and_not_numbered():
    text = "\n\nA\tB\t\tC\tD\tgood\t1\t1\t2024-01-01\n   \nE\tF\t\tG\tH\tfair\t1\t1\t2024-01-02\n"

    rows = parse_tsv_rows(text)

    assert [row.number for row in rows] == [1, 2]
    assert [row.item_code for row in rows] == ["A", "E"]


def test_empty_description_becomes_none_and_bare_date_gets_midnight():
    rows = parse_tsv_rows("A\tB\t\tC\tD\tgood\t1\t1\t2024-01-01")

    assert rows[0].values["description"] is None
    assert rows[0].values["purchase_date"] == "2024-01-01T00:00:00"


def test_wrong_column_count_is_reported():
    rows = parse_tsv_rows("A\tB\tC")

    assert rows[0].error == f"expected {len(BATCH_COLUMNS)} columns, got 3"
    assert rows[0].item_code == "A"


def test_windows_line_endings():
    rows = parse_tsv_rows("A\tB\t\tC\tD\tgood\t1\t1\t2024-01-01\r\nE\tF\t\tG\tH\tpoor\t2\t5\t2024-01-02\r\n")

    assert len(rows) == 2
    assert rows[1].values["condition"] == "poor"


def test_empty_text():
    assert parse_tsv_rows("") == []
