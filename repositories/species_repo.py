"""
repositories/species_repo.py
-----------------------------
Data access layer for species.
"""

import sqlite3
from typing import Sequence

from models.species import Species
from repositories.base_repo import BaseRepository, Join


class SpeciesRepository(BaseRepository):
    """Repository for CRUD operations on the species table."""

    TABLE = "species"
    ALIAS = "s"
    COLUMNS = ("name",)

    def _row_to_model(self, row: sqlite3.Row, joins: Sequence[Join] = ()) -> Species:
        return Species(id=row["id"], name=row["name"])
