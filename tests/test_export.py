"""Tests for CSV export.

**Feature: trade-journal**
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tests.factories import make_record
from tradejournal.errors import WriteError
from tradejournal.export import (
    BOM,
    EXPORT_HEADERS,
    export_csv,
    format_number,
    parse_csv,
    record_to_row,
    write_csv,
)


class TestExportFormat:
    """
    The export has a byte-order mark, the fixed header and one row per record.
    """

    def test_bom_and_header(self):
        text = export_csv([])

        assert text.startswith(BOM)
        assert text[len(BOM):].splitlines()[0] == (
            "Date,Pair,Direction,Entry Price,Exit Price,Size,PnL,Reason,Emotion,Result,Notes"
        )

    def test_row_values(self):
        record = make_record(
            "2024-05-15",
            pair="btc/usd",
            entry=100,
            exit_price=110.5,
            size=2,
            entry_reason="Breakout",
            emotion_pre="Calm",
            notes="Clean setup",
        )
        assert record_to_row(record) == [
            "2024-05-15", "BTC/USD", "Long", "100", "110.5", "2", "21.00",
            "Breakout", "Calm", "Win", "Clean setup",
        ]

    def test_open_trade_has_empty_exit_and_pnl(self):
        row = record_to_row(make_record(exit_price=None))
        assert row[4] == ""
        assert row[6] == ""
        assert row[9] == "Pending"

    def test_carriage_return_is_quoted(self):
        text = export_csv([make_record(notes="a\rb")])
        assert '"a\rb"' in text

    def test_delimiter_is_quoted(self):
        text = export_csv([make_record(notes="late entry, early exit")])
        assert '"late entry, early exit"' in text

    def test_format_number(self):
        assert format_number(None) == ""
        assert format_number(3.0) == "3"
        assert format_number(0.02) == "0.02"


class TestExportRoundTrip:
    """
    *For any* records, parsing the export gives back their visible
    fields in order, including text with delimiters, quotes and newlines.
    """

    def test_round_trip_with_special_text(self):
        records = [
            make_record("2024-05-15", notes='said "wait", then entered', entry_reason="a,b"),
            make_record("2024-05-14", notes="line one\nline two", emotion_pre="FOMO"),
            make_record("2024-05-13", notes="ราคาทะลุแนวต้าน", exit_price=None),
            make_record("2024-05-12", notes="a\rb", entry_reason="x\r\ny"),
        ]
        rows = parse_csv(export_csv(records))

        assert [list(row.values()) for row in rows] == [record_to_row(r) for r in records]
        assert list(rows[0].keys()) == EXPORT_HEADERS

    @given(
        notes=st.lists(
            st.text(
                alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\x00"),
                max_size=40,
            ),
            min_size=1,
            max_size=5,
        ),
    )
    @settings(max_examples=50)
    def test_notes_survive(self, notes: list[str]):
        records = [make_record(notes=n, entry_reason=n) for n in notes]
        rows = parse_csv(export_csv(records))

        assert [row["Notes"] for row in rows] == notes
        assert [row["Reason"] for row in rows] == notes

    def test_parse_without_bom(self):
        text = export_csv([make_record()])[len(BOM):]
        assert parse_csv(text)[0]["Pair"] == "BTC/USD"


class TestWriteCsv:
    """
    Writing to disk keeps the byte-order mark.
    """

    def test_write(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.csv"
            count = write_csv([make_record(), make_record(exit_price=None)], path)

            assert count == 2
            raw = path.read_bytes()
            assert raw.startswith(b"\xef\xbb\xbf")
            assert len(parse_csv(raw.decode("utf-8"))) == 2

    def test_write_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(WriteError):
                write_csv([make_record()], Path(tmpdir) / "missing" / "out.csv")
