from pathlib import Path

import pytest

from db.connection import Database
from db.init_db import create_tables
from db.seed import seed

SAMPLE_CSV = Path(__file__).resolve().parent / "data" / "animals_sample.csv"


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "registry.sqlite"))
    database.open()
    create_tables(database)
    yield database
    database.close()


@pytest.fixture
def seeded_db(db):
    report = seed(db, source=str(SAMPLE_CSV), exclude_users=True)
    assert report.success
    return db
