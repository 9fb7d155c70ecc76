# /tests/conftest.py

import random
import pytest

from random_caller.models.roster_model import Class, Roster, Student
from random_caller.services.caller_session import CallerSession
from random_caller.services.database_service import DatabaseService


@pytest.fixture
def db_service(tmp_path):
    """
    Creates a NEW, CLEAN file-backed DatabaseService for EACH test function,
    with its files redirected to a temporary directory.
    """
    service = DatabaseService(data_dir=str(tmp_path / "data"))
    yield service
    service.close()


@pytest.fixture
def sample_roster():
    """Two classes: one with three students, one empty."""
    return Roster(classes=[
        Class(id="cls_math", name="Math", students=[
            Student(id="stu_alice", name="Alice", correct=1, incorrect=3),
            Student(id="stu_bob", name="Bob"),
            Student(id="stu_cara", name="Cara", correct=2, calledThisRound=True),
        ]),
        Class(id="cls_art", name="Art"),
    ])


@pytest.fixture
def session(db_service, sample_roster):
    """A CallerSession over the sample roster with a seeded random generator."""
    return CallerSession(db_service, roster=sample_roster, rng=random.Random(1234))
