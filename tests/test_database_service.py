# /tests/test_database_service.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from random_caller.db.database import init_db
from random_caller.services.database_service import DatabaseService


@pytest.fixture
def sql_db_service():
    """A DatabaseService over a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    service = DatabaseService(db_session=session)
    yield service
    service.close()


@pytest.fixture(params=["file", "sql"])
def any_db_service(request, db_service, sql_db_service):
    """Runs a test against both storage backends."""
    return db_service if request.param == "file" else sql_db_service


def test_get_missing_key_returns_none(any_db_service):
    assert any_db_service.get_item("random_caller_v2") is None


def test_set_and_get_item(any_db_service):
    any_db_service.set_item("random_caller_v2", '{"version": 2}')
    assert any_db_service.get_item("random_caller_v2") == '{"version": 2}'


def test_set_item_overwrites_previous_value(any_db_service):
    any_db_service.set_item("random_caller_v2", "first")
    any_db_service.set_item("random_caller_v2", "second")
    assert any_db_service.get_item("random_caller_v2") == "second"


def test_file_repository_leaves_no_temp_files(db_service, tmp_path):
    db_service.set_item("random_caller_v2", "{}")
    files = sorted(p.name for p in (tmp_path / "data").iterdir())
    assert files == ["random_caller_v2.json"]


def test_file_repository_rejects_path_like_keys(db_service):
    with pytest.raises(ValueError):
        db_service.set_item("../escape", "{}")


def test_read_errors_are_reported_as_missing(db_service, mocker):
    mocker.patch.object(db_service.storage_repo, "get_item", side_effect=OSError("disk gone"))
    assert db_service.get_item("random_caller_v2") is None


def test_write_errors_propagate(db_service, mocker):
    mocker.patch.object(db_service.storage_repo, "set_item", side_effect=OSError("read-only"))
    with pytest.raises(OSError):
        db_service.set_item("random_caller_v2", "{}")
