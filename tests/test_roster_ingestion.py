# /tests/test_roster_ingestion.py

import io
import pytest
from fastapi import UploadFile

from random_caller.models.roster_model import Class, Outcome, Roster
from random_caller.services.roster_helpers import roster_ingestion


@pytest.fixture
def empty_roster():
    return Roster(classes=[Class(id="cls_1", name="Class 1")])


def _names(roster):
    return [s.name for s in roster.find_class("cls_1").students]


# --- parse_bulk_input ---

def test_parse_plain_lines_skips_blank_lines():
    assert roster_ingestion.parse_bulk_input("\n  Alice \n\n  Bob   Jones\n") == ["Alice", "Bob Jones"]


def test_parse_csv_takes_first_cell_and_skips_header():
    text = 'Name,Score\n"Alice",5\n  Bob , 3\n'
    assert roster_ingestion.parse_bulk_input(text) == ["Alice", "Bob"]


def test_parse_csv_without_header_keeps_first_row():
    assert roster_ingestion.parse_bulk_input("Alice,5\nBob,3") == ["Alice", "Bob"]


def test_parse_csv_header_detection_is_case_insensitive():
    assert roster_ingestion.parse_bulk_input("Student NAME,id\nCy,1") == ["Cy"]


def test_parse_mixed_lines_treated_as_csv():
    # A single comma anywhere switches every line to CSV mode.
    assert roster_ingestion.parse_bulk_input("Name\nAlice,5\nBob,3") == ["Alice", "Bob"]


def test_parse_handles_windows_newlines_and_empty_cells():
    assert roster_ingestion.parse_bulk_input("Alice,1\r\n,2\r\nBob,3") == ["Alice", "Bob"]


def test_parse_only_splits_on_newlines():
    # A lone carriage return is whitespace inside a name, not a line break.
    assert roster_ingestion.parse_bulk_input("Ann\rBo\nCy") == ["Ann Bo", "Cy"]


def test_parse_empty_text():
    assert roster_ingestion.parse_bulk_input("   \n  ") == []


# --- bulk_import ---

def test_bulk_import_skips_duplicates_in_batch(empty_roster):
    added, outcome = roster_ingestion.bulk_import(empty_roster, "cls_1", "Alice\nbob\nAlice")
    assert (added, outcome) == (2, Outcome.OK)
    assert _names(empty_roster) == ["Alice", "bob"]


def test_bulk_import_twice_adds_nothing_second_time(empty_roster):
    roster_ingestion.bulk_import(empty_roster, "cls_1", "Alice\nbob\nAlice")
    added, outcome = roster_ingestion.bulk_import(empty_roster, "cls_1", "Alice\nbob\nAlice")
    assert (added, outcome) == (0, Outcome.OK)
    assert len(_names(empty_roster)) == 2


def test_bulk_import_csv_with_header(empty_roster):
    added, _ = roster_ingestion.bulk_import(empty_roster, "cls_1", "Name\nAlice,5\nBob,3")
    assert added == 2
    assert _names(empty_roster) == ["Alice", "Bob"]


def test_bulk_import_new_students_have_zero_counters(empty_roster):
    roster_ingestion.bulk_import(empty_roster, "cls_1", "Alice")
    student = empty_roster.find_class("cls_1").students[0]
    assert (student.correct, student.incorrect, student.calledThisRound) == (0, 0, False)


def test_bulk_import_edge_outcomes(empty_roster):
    assert roster_ingestion.bulk_import(empty_roster, "cls_1", "  ") == (0, Outcome.NOTHING_TO_IMPORT)
    assert roster_ingestion.bulk_import(empty_roster, "cls_x", "Alice") == (0, Outcome.CLASS_NOT_FOUND)


# --- read_upload_text ---

@pytest.mark.asyncio
async def test_read_upload_text_strips_bom():
    upload = UploadFile(file=io.BytesIO("\ufeffName\nAlice".encode("utf-8")), filename="roster.csv")
    assert await roster_ingestion.read_upload_text(upload) == "Name\nAlice"


@pytest.mark.asyncio
async def test_read_upload_text_rejects_binary():
    upload = UploadFile(file=io.BytesIO(b"\xff\xfe\x00\x81"), filename="roster.xlsx")
    with pytest.raises(ValueError):
        await roster_ingestion.read_upload_text(upload)
