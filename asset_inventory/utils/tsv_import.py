"""Parsing of tab-separated inventory rows pasted from spreadsheets."""

import csv
import io
from dataclasses import dataclass

BATCH_COLUMNS = (
    "item_code",
    "name",
    "description",
    "category_name",
    "location_name",
    "condition",
    "quantity",
    "purchase_price",
    "purchase_date",
)

OPTIONAL_COLUMNS = {"description"}


@dataclass
class ParsedRow:
    number: int
    values: dict | None = None
    error: str | None = None

    @property
    def item_code(self) -> str:
        if self.values:
            return self.values.get("item_code") or "?"
        return "?"


def parse_tsv_rows(text: str) -> list[ParsedRow]:
    """Split ``text`` into one ``ParsedRow`` per non-blank line.

    Rows are numbered from 1 in the order they appear, ignoring blank
    lines. A row with the wrong number of columns is returned with
    ``error`` set instead of raising, so the caller can keep importing
    the remaining rows. Empty optional cells become ``None``.
    """
    parsed: list[ParsedRow] = []
    reader = csv.reader(io.StringIO(text.strip("\r\n")), delimiter="\t")

    for row in reader:
        if not any(cell.strip() for cell in row):
            continue

        number = len(parsed) + 1
        cells = [cell.strip() for cell in row]

        if len(cells) != len(BATCH_COLUMNS):
            parsed.append(
                ParsedRow(
                    number=number,
                    values={"item_code": cells[0]},
                    error=f"expected {len(BATCH_COLUMNS)} columns, got {len(cells)}",
                )
            )
            continue

        values = {}
        for column, cell in zip(BATCH_COLUMNS, cells):
            if column in OPTIONAL_COLUMNS and cell == "":
                values[column] = None
            elif column == "purchase_date" and len(cell) == 10:
                # Bare dates from spreadsheets mean midnight
                values[column] = f"{cell}T00:00:00"
            else:
                values[column] = cell

        parsed.append(ParsedRow(number=number, values=values))

    return parsed
