# /tests/test_state_store.py

import json
import pytest

from random_caller.models.roster_model import DEFAULT_CLASS_NAMES, Roster
from random_caller.services import state_store


def _assert_default(roster: Roster):
    assert roster.version == 2
    assert [c.name for c in roster.classes] == list(DEFAULT_CLASS_NAMES)
    assert all(c.students == [] for c in roster.classes)
    assert len({c.id for c in roster.classes}) == 3


# --- migrate ---

def test_migrate_round_trip_preserves_every_field(sample_roster):
    """A valid version-2 roster survives encode -> decode -> migrate unchanged."""
    decoded = json.loads(state_store.serialize(sample_roster))
    assert state_store.migrate(decoded) == sample_roster


def test_migrate_v1_resets_round_flags_and_fills_defaults():
    parsed = {
        "version": 1,
        "classes": [
            {"id": "c1", "name": "Period 1", "students": [
                {"id": "s1", "name": "Ana", "correct": 4, "incorrect": "2", "calledThisRound": True},
                {"name": "Ben", "correct": "lots"},
            ]},
            {"students": "not-a-list"},
        ],
    }
    roster = state_store.migrate(parsed)

    assert roster.version == 2
    first, second = roster.classes
    assert first.id == "c1" and first.name == "Period 1"
    ana, ben = first.students
    assert (ana.correct, ana.incorrect, ana.calledThisRound) == (4, 2, False)
    assert ben.id.startswith("stu_")
    assert (ben.correct, ben.incorrect) == (0, 0)
    assert second.id.startswith("cls_")
    assert second.name == "Class"
    assert second.students == []


def test_migrate_v2_backfills_missing_fields():
    parsed = {
        "version": 2,
        "classes": [
            {"id": "c1", "name": "Bio"},
            {"id": "c2", "name": "Chem", "students": [
                {"id": "s1", "name": "Dee", "correct": "3", "calledThisRound": "yes"},
                {"id": "s2", "name": "Eli", "correct": 1, "incorrect": 1, "calledThisRound": True},
            ]},
        ],
    }
    roster = state_store.migrate(parsed)

    assert roster.classes[0].students == []
    dee, eli = roster.classes[1].students
    assert (dee.correct, dee.incorrect, dee.calledThisRound) == (3, 0, False)
    # Well-formed round state is kept for version-2 documents.
    assert eli.calledThisRound is True


@pytest.mark.parametrize("parsed", [
    None,
    "a string",
    [1, 2, 3],
    {"version": 3, "classes": []},
    {"version": 2},
    {"version": 2, "classes": "nope"},
    {"version": True, "classes": []},
    {"classes": []},
])
def test_migrate_unknown_shapes_fall_back_to_default(parsed):
    _assert_default(state_store.migrate(parsed))


def test_coerce_count_handles_odd_values():
    assert state_store._coerce_count(None) == 0
    assert state_store._coerce_count(True) == 0
    assert state_store._coerce_count("7") == 7
    assert state_store._coerce_count(2.9) == 2
    assert state_store._coerce_count(-4) == 0
    assert state_store._coerce_count(float("nan")) == 0
    assert state_store._coerce_count({"n": 1}) == 0


# --- load / save ---

def test_load_returns_default_when_storage_is_empty(db_service):
    _assert_default(state_store.load(db_service))


def test_save_then_load_restores_roster(db_service, sample_roster):
    state_store.save(sample_roster, db_service)
    assert state_store.load(db_service) == sample_roster


def test_load_falls_back_to_legacy_key(db_service):
    legacy = {"version": 1, "classes": [{"id": "old", "name": "Legacy", "students": [{"id": "s", "name": "Fay"}]}]}
    db_service.set_item(state_store.LEGACY_STORAGE_KEY, json.dumps(legacy))

    roster = state_store.load(db_service)

    assert roster.classes[0].name == "Legacy"
    assert roster.classes[0].students[0].name == "Fay"


def test_current_key_wins_over_legacy_key(db_service, sample_roster):
    db_service.set_item(state_store.LEGACY_STORAGE_KEY, json.dumps({"version": 1, "classes": []}))
    state_store.save(sample_roster, db_service)
    assert state_store.load(db_service) == sample_roster


def test_load_unparsable_document_returns_default(db_service):
    db_service.set_item(state_store.STORAGE_KEY, "{not json")
    _assert_default(state_store.load(db_service))


def test_load_structurally_invalid_document_returns_default(db_service):
    db_service.set_item(state_store.STORAGE_KEY, json.dumps({"version": 2, "classes": 5}))
    _assert_default(state_store.load(db_service))


def test_load_undecodable_file_returns_default(db_service, tmp_path):
    (tmp_path / "data" / "random_caller_v2.json").write_bytes(b'{"version": 2, "classes": [\xff\xfe]}')
    _assert_default(state_store.load(db_service))


def test_load_deeply_nested_document_returns_default(db_service):
    db_service.set_item(state_store.STORAGE_KEY, "[" * 200000 + "]" * 200000)
    _assert_default(state_store.load(db_service))


def test_load_checks_both_keys_before_defaulting(mocker):
    db = mocker.MagicMock()
    db.get_item.return_value = None
    _assert_default(state_store.load(db))
    assert db.get_item.call_count == 2


def test_serialized_document_uses_persisted_keys(sample_roster):
    document = json.loads(state_store.serialize(sample_roster))
    student = document["classes"][0]["students"][0]
    assert set(document) == {"version", "classes"}
    assert set(student) == {"id", "name", "correct", "incorrect", "calledThisRound"}
