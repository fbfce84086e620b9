import pytest

from db.seed import (
    AnimalSeeder,
    count_records,
    parse_coordinate,
    parse_date,
    parse_sex_and_neutered,
    seed,
)
from models.animal import AnimalSex
from services.animal_service import AnimalService
from services.user_service import UserService
from tests.conftest import SAMPLE_CSV


class TestFieldParsing:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Neutered Male", (AnimalSex.MALE, True)),
            ("Spayed Female", (AnimalSex.FEMALE, True)),
            ("Intact Male", (AnimalSex.MALE, False)),
            ("Intact Female", (AnimalSex.FEMALE, False)),
            ("castrated male", (AnimalSex.MALE, True)),
            ("Unknown", (AnimalSex.UNKNOWN, False)),
            ("", (AnimalSex.UNKNOWN, False)),
            (None, (AnimalSex.UNKNOWN, False)),
        ],
    )
    def test_parse_sex_and_neutered(self, text, expected):
        assert parse_sex_and_neutered(text) == expected

    def test_parse_date(self):
        assert parse_date("2014-04-10T00:00:00").isoformat() == "2014-04-10"
        assert parse_date("2013-01-15").isoformat() == "2013-01-15"
        assert parse_date("") is None
        assert parse_date("not a date") is None

    @pytest.mark.parametrize("text, expected", [("30.5", 30.5), ("", None), ("0", None), ("abc", None)])
    def test_parse_coordinate(self, text, expected):
        assert parse_coordinate(text) == expected


class TestSeed:

    def test_counts_source_records(self):
        assert count_records(str(SAMPLE_CSV)) == 10

    def test_report_counts_every_table(self, db):
        report = seed(db, source=str(SAMPLE_CSV), batch_size=3, username="admin", password="secret")

        assert report.success is True
        assert report.processed == report.total == 10
        assert report.species == 2
        assert report.breeds == 6
        assert report.outcome_types == 4
        assert report.outcome_subtypes == 4
        assert report.users == 1
        assert len(AnimalService(db).find()) == 10

    def test_seeded_animal_fields(self, seeded_db):
        first, second, third = AnimalService(seeded_db).find(
            {"id": [1, 2, 3]}, include_outcome=True, include_breed=True
        )

        assert first.legacy_id == "A746874"
        assert first.sex == AnimalSex.MALE and first.neutered is True
        assert first.date_of_birth.isoformat() == "2014-04-10"
        assert first.location_lat == pytest.approx(30.5066578739)
        assert first.has_location()
        assert second.sex == AnimalSex.FEMALE and second.neutered is True
        assert third.name == "Max"
        assert third.breed.name == "Labrador Retriever Mix"
        assert third.outcome_type.name == "Adoption"
        assert third.outcome_subtype is None
        assert not third.has_location()

    def test_animal_without_outcome(self, seeded_db):
        luna = AnimalService(seeded_db).find({"name": "Luna"})[0]

        assert luna.outcome_type_id is None
        assert luna.outcome_subtype_id is None
        assert luna.sex == AnimalSex.UNKNOWN

    def test_failed_batch_rolls_back_processed_count(self, db, monkeypatch):
        original = AnimalService.create
        calls = []

        def fail_second_batch(self, data, **kwargs):
            calls.append(len(data))
            if len(calls) == 2:
                return None
            return original(self, data, **kwargs)

        monkeypatch.setattr(AnimalService, "create", fail_second_batch)

        report = seed(db, source=str(SAMPLE_CSV), batch_size=5, exclude_users=True)

        assert report.success is False
        assert report.total == 10
        assert report.processed == 5
        assert calls == [5, 5]
        monkeypatch.setattr(AnimalService, "create", original)
        assert len(AnimalService(db).find()) == 5

    def test_missing_source_file(self, db, tmp_path):
        report = seed(db, source=str(tmp_path / "missing.csv"), exclude_users=True)

        assert report.success is False
        assert report.processed == 0
        assert AnimalService(db).find() == []

    def test_exclude_animals_keeps_reference_rows(self, db):
        report = AnimalSeeder(db, batch_size=4).run(str(SAMPLE_CSV), exclude_animals=True)

        assert report.success is True
        assert report.species == 2
        assert AnimalService(db).find() == []

    def test_creates_default_user(self, db):
        seed(db, source=str(SAMPLE_CSV), username="keeper", password="s3cret")

        users = UserService(db, encrypt_passwords=False)
        assert users.authenticate("keeper", "s3cret").username == "keeper"
        assert users.find({"username": "keeper"})[0].is_admin is True

    def test_blank_default_password_stops_seeding(self, db):
        report = seed(db, source=str(SAMPLE_CSV), username="admin", password="")

        assert report.success is False
        assert report.users == 0
        assert AnimalService(db).find() == []
