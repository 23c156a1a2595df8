# SODA Client
# File: tests/test_converters.py
# Version: v1

import json
from pathlib import Path

import pytest

from soda_client.converters import Converter, CsvConverter, JsonConvertible
from soda_client.errors import InvalidPayloadError

DATASET_CSV = Path(__file__).parent / "datasets" / "dataset.csv"


def test_csv_rows_keyed_by_header_in_order() -> None:
    records = json.loads(CsvConverter.from_file(DATASET_CSV).to_json())

    assert len(records) == 3
    assert records[0] == {
        "date_posted": "2011-03-28T00:00:00",
        "state": "CA",
        "sample_type": "Pasteurized",
        "milk_type": "Whole",
    }
    assert [r["state"] for r in records] == ["CA", "WA", "New York, NY"]


def test_csv_from_file_matches_csv_from_string() -> None:
    from_string = CsvConverter(DATASET_CSV.read_text(encoding="utf-8"))
    from_file = CsvConverter.from_file(DATASET_CSV)

    assert from_string.to_json() == from_file.to_json()


def test_csv_surrounding_whitespace_is_ignored() -> None:
    assert CsvConverter("\n\na,b\n1,2\n\n").to_json() == '[{"a": "1", "b": "2"}]'


def test_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        CsvConverter.from_file("path/to/fake-file.csv")


def test_converters_satisfy_protocol() -> None:
    assert isinstance(CsvConverter("a\n1"), JsonConvertible)
    assert isinstance(CsvConverter("a\n1"), Converter)

    with pytest.raises(TypeError):
        Converter("a\n1")


@pytest.mark.parametrize(
    "data", ["a,b\n1\n", "a,b\n1,2\n3,4,5\n"], ids=["short_row", "long_row"]
)
def test_ragged_csv_is_rejected(data) -> None:
    with pytest.raises(InvalidPayloadError, match="row"):
        CsvConverter(data).to_json()


def test_empty_cells_are_not_ragged() -> None:
    assert json.loads(CsvConverter("a,b\n1,\n").to_json()) == [{"a": "1", "b": ""}]
