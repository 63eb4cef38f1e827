"""CSV export of trade records.

The output starts with a UTF-8 byte-order mark so spreadsheet programs
detect the character set of non-ASCII notes correctly.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Optional

from tradejournal.errors import WriteError
from tradejournal.models import TradeRecord

logger = logging.getLogger(__name__)

BOM = "\ufeff"
DEFAULT_EXPORT_NAME = "trading_journal_pro.csv"

EXPORT_HEADERS = [
    "Date",
    "Pair",
    "Direction",
    "Entry Price",
    "Exit Price",
    "Size",
    "PnL",
    "Reason",
    "Emotion",
    "Result",
    "Notes",
]


def format_number(value: Optional[float]) -> str:
    """Format a price or size for export; empty for missing values."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_pnl(value: Optional[float]) -> str:
    """Format a PnL with 2 decimals; empty for open trades."""
    if value is None:
        return ""
    return f"{value:.2f}"


def record_to_row(record: TradeRecord) -> list[str]:
    """Convert a record to its exported column values."""
    return [
        record.date.isoformat(),
        record.pair,
        record.direction,
        format_number(record.entry_price),
        format_number(record.exit_price),
        format_number(record.position_size),
        format_pnl(record.calculated_pnl),
        record.entry_reason,
        record.emotion_pre,
        record.result,
        record.notes,
    ]


def export_csv(records: Iterable[TradeRecord]) -> str:
    """Render records as CSV text.

    Rows end with CRLF. Fields containing the delimiter, quotes, or a
    carriage return or line feed are quoted.

    Args:
        records: Records in the order they should appear.

    Returns:
        CSV text prefixed with a byte-order mark.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(EXPORT_HEADERS)
    for record in records:
        writer.writerow(record_to_row(record))
    return BOM + buffer.getvalue()


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse exported CSV text back into rows keyed by header.

    Args:
        text: CSV text, with or without the byte-order mark.

    Returns:
        List of rows in file order.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]
    reader = csv.DictReader(io.StringIO(text, newline=""))
    return [dict(row) for row in reader]


def write_csv(records: Iterable[TradeRecord], path: Path) -> int:
    """Write records to a CSV file.

    Returns:
        Number of records written.

    Raises:
        WriteError: If the file could not be written.
    """
    records = list(records)
    content = export_csv(records)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        logger.error("Failed to export to %s: %s", path, e)
        raise WriteError(f"Failed to write {path}: {e}") from e

    logger.info("Exported %d trades to %s", len(records), path)
    return len(records)
