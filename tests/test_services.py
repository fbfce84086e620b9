from datetime import date

import pytest

from models.animal import Animal, AnimalSex
from repositories.errors import PersistenceError, RecordNotFoundError
from repositories.filters import SEARCH_EMPTY, Contains
from services.animal_service import AnimalService
from services.base_service import Page
from services.breed_service import BreedService
from services.outcome_service import OutcomeService
from services.species_service import SpeciesService


@pytest.fixture
def animals(seeded_db):
    return AnimalService(seeded_db)


class TestAnimalFind:

    def test_finds_all_animals_without_criteria(self, animals):
        found = animals.find()

        assert len(found) == 10
        assert isinstance(found[0], Animal)
        assert [a.id for a in found] == list(range(1, 11))

    def test_finds_with_single_criteria_case_insensitive(self, animals):
        found = animals.find({"color": "white"})

        assert [a.id for a in found] == [3, 8]
        assert all(a.color == "White" for a in found)
        assert found[0].breed is None

    def test_finds_with_multiple_criteria(self, animals):
        found = animals.find({"color": "White", "sex": AnimalSex.MALE})

        assert [a.id for a in found] == [3]

    def test_wildcard_returns_only_substring_matches(self, animals):
        found = animals.find({"name": "%A%"})

        assert sorted(a.name for a in found) == ["Bella", "Daisy", "Luna", "Max"]
        assert all("a" in a.name.lower() for a in found)

    def test_filter_expression_can_be_passed_directly(self, animals):
        found = animals.find({"name": Contains("BEL")})

        assert [a.name for a in found] == ["Bella"]

    def test_wildcard_matches_non_ascii_names(self, animals):
        rene = animals.create({"name": "RENÉ", "species_id": 1})

        assert [a.id for a in animals.find({"name": "%RENÉ%"})] == [rene.id]
        assert [a.id for a in animals.find({"name": "%ren%"})] == [rene.id]

    def test_number_like_words_match_case_insensitively(self, animals):
        animals.create([{"name": "Nan", "species_id": 1}, {"name": "Inf", "species_id": 2}])

        assert [a.name for a in animals.find({"name": "nan"})] == ["Nan"]
        assert [a.name for a in animals.find({"name": "INF"})] == ["Inf"]

    def test_prefix_pattern_treats_underscore_literally(self, animals):
        animals.create([{"name": "Max_2", "species_id": 2}, {"name": "Maxi2", "species_id": 2}])

        assert [a.name for a in animals.find({"name": "max_%"})] == ["Max_2"]

    def test_empty_sentinel_matches_blank_names(self, animals):
        found = animals.find({"name": SEARCH_EMPTY})

        assert [a.legacy_id for a in found] == ["A746874", "A725717"]

    def test_list_value_matches_any_id(self, animals):
        found = animals.find({"id": [2, 4, 99]})

        assert [a.id for a in found] == [2, 4]

    def test_pagination_continues_previous_page(self, animals):
        first = animals.find(limit=5, page=0)
        second = animals.find(limit=5, page=1)

        assert [a.id for a in first] == [1, 2, 3, 4, 5]
        assert [a.id for a in second] == [6, 7, 8, 9, 10]

    def test_include_count_returns_page(self, animals):
        result = animals.find({"species_id": 2}, limit=3, include_count=True)

        assert isinstance(result, Page)
        assert len(result.items) == 3
        assert result.count == 6

    def test_order_by_single_field(self, animals):
        found = animals.find({"species_id": 1}, order_by="name")

        assert [a.name for a in found] == ["", "", "Luna", "Milo"]

    def test_eager_loads_related_records(self, animals):
        animal = animals.find(
            {"id": 2}, include_species=True, include_breed=True, include_outcome=True
        )[0]

        assert animal.species.name == "Cat"
        assert animal.breed.name == "Domestic Shorthair Mix"
        assert animal.outcome_type.name == "Transfer"
        assert animal.outcome_type.is_subtype is False
        assert animal.outcome_subtype.name == "Partner"
        assert animal.outcome_subtype.is_subtype is True

    def test_return_plain_gives_dicts(self, animals):
        found = animals.find({"id": 1}, include_species=True, return_plain=True)

        assert isinstance(found[0], dict)
        assert found[0]["species"] == {"id": 1, "name": "Cat"}

    def test_returns_none_when_storage_fails(self, animals, monkeypatch):
        def broken(*args, **kwargs):
            raise PersistenceError("faked error")

        monkeypatch.setattr(animals.repo, "find", broken)

        assert animals.find() is None
        with pytest.raises(PersistenceError):
            animals.find(throw_on_error=True)

    def test_unknown_include_flag_is_rejected(self, seeded_db):
        with pytest.raises(TypeError):
            SpeciesService(seeded_db).find(include_breed=True)


class TestAnimalCreateUpdateDelete:

    def test_create_then_find_by_id(self, animals):
        data = {
            "name": "Rex",
            "species_id": 2,
            "breed_id": 3,
            "color": "Brindle",
            "sex": AnimalSex.MALE,
            "neutered": True,
            "date_of_birth": date(2020, 1, 31),
            "location_lat": 30.25,
            "location_long": -97.75,
        }
        created = animals.create(data, include_species=True)

        assert created.id > 10
        assert created.species.name == "Dog"
        stored = animals.find({"id": created.id})[0]
        for field, value in data.items():
            assert getattr(stored, field) == value

    def test_bulk_create_returns_every_record(self, animals):
        created = animals.create(
            [{"name": "A", "species_id": 1}, {"name": "B", "species_id": 2}],
            return_plain=True,
        )

        assert [a["name"] for a in created] == ["A", "B"]
        assert all(a["id"] > 0 for a in created)

    def test_bulk_create_is_all_or_nothing(self, animals):
        result = animals.create([{"name": "Ok", "species_id": 1}, {"name": "Bad", "species_id": 999}])

        assert result is None
        assert animals.find({"name": "Ok"}) == []

    def test_create_without_species_fails(self, animals):
        assert animals.create({"name": "Nobody"}) is None

    def test_update_changes_only_supplied_fields(self, animals):
        before = animals.find({"id": 3})[0]

        assert animals.update({"id": 3, "name": "Maximus", "neutered": False}) is True

        after = animals.find({"id": 3})[0]
        assert after.name == "Maximus"
        assert after.neutered is False
        assert after.color == before.color
        assert after.sex == before.sex
        assert after.date_of_birth == before.date_of_birth

    def test_update_unknown_id(self, animals):
        assert animals.update({"id": 999, "name": "Ghost"}) is False
        with pytest.raises(RecordNotFoundError):
            animals.update({"id": 999, "name": "Ghost"}, throw_on_error=True)

    def test_update_rejects_unknown_fields(self, animals):
        assert animals.update({"id": 1, "nickname": "Kitty"}) is False

    def test_delete_removes_exactly_given_ids(self, animals):
        assert animals.delete([2, 5]) == 2

        assert animals.find({"id": [2, 5]}) == []
        assert len(animals.find()) == 8

    def test_delete_single_id(self, animals):
        assert animals.delete(7) == 1
        assert animals.delete(7) == 0


class TestLookups:

    def test_colors_and_sexes(self, animals):
        assert animals.get_colors(sort=True) == [
            "Black", "Black/Tan", "Black/White", "Brown/White",
            "Orange Tabby", "Silver Tabby", "Tan", "Tricolor", "White",
        ]
        assert animals.get_sexes(sort=True) == ["Female", "Male", "Unknown"]

    def test_breeds_with_species(self, seeded_db):
        breeds = BreedService(seeded_db).find(
            {"species_id": 2, "name": "%mix%"}, order_by="name", include_species=True
        )

        assert [b.name for b in breeds] == [
            "Beagle Mix", "Chihuahua Shorthair Mix", "Labrador Retriever Mix", "Pit Bull Mix",
        ]
        assert all(b.species.name == "Dog" for b in breeds)

    def test_breed_requires_existing_species(self, seeded_db):
        assert BreedService(seeded_db).create({"name": "Unicorn", "species_id": 42}) is None

    def test_outcome_types_and_subtypes(self, seeded_db):
        outcomes = OutcomeService(seeded_db)

        assert [o.name for o in outcomes.find_types()] == [
            "Adoption", "Euthanasia", "Return to Owner", "Transfer",
        ]
        assert [o.name for o in outcomes.find_subtypes()] == [
            "Foster", "Partner", "SCRP", "Suffering",
        ]

    def test_species_single_criteria(self, seeded_db):
        species = SpeciesService(seeded_db).find({"name": "Dog"}, order_by="id")

        assert [(s.id, s.name) for s in species] == [(2, "Dog")]
