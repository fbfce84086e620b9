"""
services/animal_service.py
---------------------------
Business logic for animals: CRUD with eager-loading of related records,
lookup lists for the screens, and the tabular display of animal pages.
"""

from typing import Any, Sequence

from models.animal import Animal, AnimalSex
from repositories.animal_repo import AnimalRepository
from repositories.errors import RegistryError
from repositories.filters import SEARCH_EMPTY
from services.base_service import EntityService
from utils.animal_format import (
    transform_dob_and_age,
    transform_location,
    transform_outcomes,
    transform_sex_neutered,
    transform_type_breed_color,
)
from utils.display import DisplayColumn, display_header, display_record, display_table
from utils.logger import get_logger

logger = get_logger(__name__)


class AnimalService(EntityService):
    """
    Handles all business logic related to registered animals.

    Related records are loaded on demand through the include_species,
    include_breed and include_outcome flags of `find`.
    """

    MODEL = Animal
    REPOSITORY = AnimalRepository

    DISPLAY_COLUMNS = [
        DisplayColumn("ID", "id", align="right"),
        DisplayColumn("Legacy ID", "legacy_id", align="center", default=SEARCH_EMPTY),
        DisplayColumn("Name", "name", default=SEARCH_EMPTY),
        DisplayColumn(
            "Type / Breed / Color",
            ["species.name", "breed.name", "color"],
            transform_type_breed_color,
        ),
        DisplayColumn("DoB / Age", "date_of_birth", transform_dob_and_age),
        DisplayColumn("Sex", ["sex", "neutered"], transform_sex_neutered, align="center"),
        DisplayColumn(
            "Outcome",
            ["outcome_type.name", "outcome_subtype.name"],
            transform_outcomes,
            align="center",
            default=SEARCH_EMPTY,
        ),
        DisplayColumn(
            "Location",
            ["location_lat", "location_long"],
            transform_location,
            default=SEARCH_EMPTY,
        ),
    ]

    def _joins(
        self,
        include_species: bool = False,
        include_breed: bool = False,
        include_outcome: bool = False,
        **include: bool,
    ):
        joins = super()._joins(**include)
        return joins + self.repo.joins_for(include_species, include_breed, include_outcome)

    def _prepare(self, model: Animal) -> Animal:
        if model.sex not in AnimalSex.ALL:
            model.sex = AnimalSex.UNKNOWN
        return model

    # ── Lookup lists ──────────────────────────────────────

    def _distinct(self, field: str, sort: bool, throw_on_error: bool) -> list:
        try:
            values = self.repo.get_distinct(field)
        except RegistryError as e:
            logger.error(f"Failed to list animal {field} values: {e}")
            if throw_on_error:
                raise
            return []
        return sorted(values) if sort else values

    def get_colors(self, sort: bool = False, throw_on_error: bool = False) -> list[str]:
        """Every color present in the animals table."""
        return self._distinct("color", sort, throw_on_error)

    def get_sexes(self, sort: bool = False, throw_on_error: bool = False) -> list[str]:
        """Every sex value present in the animals table."""
        return self._distinct("sex", sort, throw_on_error)

    # ── Display ───────────────────────────────────────────

    def display_header(self) -> list[str]:
        return display_header(self.DISPLAY_COLUMNS)

    def display_record(self, animal: Any, raw: bool = False) -> list:
        return display_record(animal, self.DISPLAY_COLUMNS, raw)

    def display_table(self, animals: Sequence[Any], include_header: bool = True, raw: bool = False):
        return display_table(animals, self.DISPLAY_COLUMNS, include_header, raw)
