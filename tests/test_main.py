import main
from db.seed import seed
from services.animal_service import AnimalService
from tests.conftest import SAMPLE_CSV


def test_parse_args():
    assert main.parse_args([]).db_setup is False
    assert main.parse_args(["--db-setup"]).db_setup is True


def test_setup_database_recreates_and_seeds(db, monkeypatch):
    conn = db.get_connection()
    conn.execute("INSERT INTO species (name) VALUES ('Stale')")
    conn.commit()
    monkeypatch.setattr(main, "seed", lambda database, **kwargs: seed(database, password="pw", **kwargs))

    assert main.setup_database(db, source=str(SAMPLE_CSV), batch_size=4) is True

    assert len(AnimalService(db).find()) == 10
    names = [r["name"] for r in conn.execute("SELECT name FROM species ORDER BY id")]
    assert names == ["Cat", "Dog"]


def test_setup_database_fails_without_default_password(db, capsys):
    assert main.setup_database(db, source=str(SAMPLE_CSV)) is False
    assert "errors" in capsys.readouterr().out


def test_main_runs_session(tmp_path, monkeypatch):
    started = []

    class FakeSystem:
        def __init__(self, db):
            self.db = db

        def start(self):
            started.append(self.db.is_open)

    monkeypatch.setattr(main, "DB_STORAGE", str(tmp_path / "main.sqlite"))
    monkeypatch.setattr(main, "System", FakeSystem)

    assert main.main([]) == 0
    assert started == [True]


def test_main_db_setup_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "DB_STORAGE", str(tmp_path / "main.sqlite"))
    monkeypatch.setattr(main, "setup_database", lambda db: False)

    assert main.main(["--db-setup"]) == 1
