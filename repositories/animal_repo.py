"""
repositories/animal_repo.py
----------------------------
Data access layer for animals.
All SQL queries related to the `animals` table live here, including the
joins that load species, breed and outcomes alongside each animal.
"""

import sqlite3
from datetime import date
from typing import Any, Sequence

from models.animal import Animal
from models.breed import Breed
from models.outcome import Outcome
from models.species import Species
from repositories.base_repo import BaseRepository, Join


def _none_if_blank(value: Any) -> Any:
    return None if value == "" else value


class AnimalRepository(BaseRepository):
    """Repository for CRUD operations on the animals table."""

    TABLE = "animals"
    ALIAS = "a"
    COLUMNS = (
        "legacy_id", "name", "species_id", "breed_id", "color", "sex",
        "neutered", "date_of_birth", "location_lat", "location_long",
        "outcome_type_id", "outcome_subtype_id",
    )

    SPECIES = Join("s", "species", "s.id = a.species_id", ("id", "name"))
    BREED = Join("br", "breeds", "br.id = a.breed_id", ("id", "name", "species_id"))
    OUTCOME_TYPE = Join("ot", "outcomes", "ot.id = a.outcome_type_id", ("id", "name", "is_subtype"))
    OUTCOME_SUBTYPE = Join("st", "outcomes", "st.id = a.outcome_subtype_id", ("id", "name", "is_subtype"))

    def joins_for(
        self,
        include_species: bool = False,
        include_breed: bool = False,
        include_outcome: bool = False,
    ) -> list[Join]:
        """Translate the include flags into the joins to perform."""
        joins = []
        if include_species:
            joins.append(self.SPECIES)
        if include_breed:
            joins.append(self.BREED)
        if include_outcome:
            joins.extend([self.OUTCOME_TYPE, self.OUTCOME_SUBTYPE])
        return joins

    # ── Row mapping ───────────────────────────────────────

    def _field_to_db(self, field: str, value: Any) -> Any:
        if field == "neutered":
            return int(bool(value))
        if field == "date_of_birth" and isinstance(value, date):
            return value.isoformat()
        return value

    def _row_to_model(self, row: sqlite3.Row, joins: Sequence[Join] = ()) -> Animal:
        dob = row["date_of_birth"]
        lat = row["location_lat"]
        lng = row["location_long"]
        animal = Animal(
            id=row["id"],
            legacy_id=_none_if_blank(row["legacy_id"]),
            name=row["name"],
            species_id=row["species_id"],
            breed_id=row["breed_id"],
            color=row["color"],
            sex=row["sex"],
            neutered=bool(row["neutered"]),
            date_of_birth=date.fromisoformat(dob[:10]) if dob else None,
            location_lat=float(lat) if lat not in (None, "") else None,
            location_long=float(lng) if lng not in (None, "") else None,
            outcome_type_id=row["outcome_type_id"],
            outcome_subtype_id=row["outcome_subtype_id"],
        )

        if self.SPECIES in joins:
            related = self.SPECIES.extract(row)
            animal.species = Species(**related) if related else None
        if self.BREED in joins:
            related = self.BREED.extract(row)
            animal.breed = Breed(**related) if related else None
        if self.OUTCOME_TYPE in joins:
            related = self.OUTCOME_TYPE.extract(row)
            if related:
                related["is_subtype"] = bool(related["is_subtype"])
                animal.outcome_type = Outcome(**related)
        if self.OUTCOME_SUBTYPE in joins:
            related = self.OUTCOME_SUBTYPE.extract(row)
            if related:
                related["is_subtype"] = bool(related["is_subtype"])
                animal.outcome_subtype = Outcome(**related)
        return animal

    # ── Aggregates ────────────────────────────────────────

    def get_distinct(self, field: str) -> list:
        """
        Distinct non-empty values of a column, in storage order.

        Raises:
            ValueError: If the field is not a column of the table.
        """
        if field not in self.COLUMNS:
            raise ValueError(f"Unknown {self.TABLE} field: {field}")
        sql = (
            f"SELECT {field} FROM animals "
            f"WHERE {field} IS NOT NULL AND {field} != '' "
            f"GROUP BY {field};"
        )
        return [r[0] for r in self._select(sql, ())]
