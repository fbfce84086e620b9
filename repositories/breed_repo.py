"""
repositories/breed_repo.py
---------------------------
Data access layer for breeds.
"""

import sqlite3
from typing import Sequence

from models.breed import Breed
from models.species import Species
from repositories.base_repo import BaseRepository, Join


class BreedRepository(BaseRepository):
    """Repository for CRUD operations on the breeds table."""

    TABLE = "breeds"
    ALIAS = "b"
    COLUMNS = ("name", "species_id")

    SPECIES = Join("s", "species", "s.id = b.species_id", ("id", "name"))

    def _row_to_model(self, row: sqlite3.Row, joins: Sequence[Join] = ()) -> Breed:
        breed = Breed(id=row["id"], name=row["name"], species_id=row["species_id"])
        if self.SPECIES in joins:
            related = self.SPECIES.extract(row)
            breed.species = Species(**related) if related else None
        return breed
