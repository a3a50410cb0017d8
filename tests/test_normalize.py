import pytest

from excel2vcard.models import ContactRecord
from excel2vcard.normalize import (
    MissingHeaderError,
    cell_to_string,
    normalize_header,
    normalize_rows,
    normalize_table,
)
from excel2vcard.sources import read_csv_rows


def test_header_normalization():
    assert normalize_header(" First Name ") == "firstname"
    assert normalize_header("E-Mail\tAddress") == "e-mailaddress"
    assert normalize_header("city") == "city"
    assert normalize_header(None) == ""
    assert normalize_header("   ") == ""


def test_cell_to_string_types():
    assert cell_to_string("Paris") == "Paris"
    assert cell_to_string(49.9) == "49"
    assert cell_to_string(-3.7) == "-3"
    assert cell_to_string(4915112345678) == "4915112345678"
    assert cell_to_string(True) == "true"
    assert cell_to_string(False) == "false"
    assert cell_to_string(None) == ""
    assert cell_to_string(float("nan")) == ""


def test_rows_map_onto_header_and_drop_blanks():
    header = ["Name", " E Mail ", None, "ZIP", "Favourite Colour"]
    rows = [
        ["  Jane Doe ", "", "ignored", 75001.0, "blue"],
        [None, "   ", None, None, None],
        None,
        ["Bob"],
    ]
    records = normalize_rows(header, rows)

    assert len(records) == 2
    jane, bob = records
    assert jane.name == "Jane Doe"
    assert jane.email is None
    assert jane.zip == "75001"
    assert jane.extra == {"favouritecolour": "blue"}
    assert jane.source_row == 2
    assert bob.name == "Bob"
    assert bob.source_row == 5


def test_row_with_only_unknown_column_still_produces_record():
    records = normalize_rows(["notes"], [["call back"]])
    assert len(records) == 1
    assert records[0].as_dict() == {"notes": "call back"}
    assert records[0].name is None


def test_table_without_header_is_fatal():
    with pytest.raises(MissingHeaderError):
        normalize_table([])
    with pytest.raises(MissingHeaderError):
        normalize_table([(None, None), ("Jane",)])


def test_blank_csv_header_is_fatal():
    rows = read_csv_rows(b",,\nJane,x@y,Paris\n")
    with pytest.raises(MissingHeaderError):
        normalize_table(rows)
    with pytest.raises(MissingHeaderError):
        normalize_table([("  ", ""), ("Jane", "x@y")])


def test_table_with_header_only_is_empty():
    assert normalize_table([("name", "email")]) == []


def test_record_emptiness():
    assert ContactRecord().is_empty()
    assert ContactRecord(source_row=7).is_empty()
    assert not ContactRecord.from_fields({"notes": "x"}).is_empty()
