"""
models/breed.py
---------------
Domain model for breeds. Every breed belongs to exactly one species.
"""

from dataclasses import dataclass
from typing import Optional

from models.species import Species


@dataclass
class Breed:
    """
    Represents a breed of a given species.

    Attributes:
        name: Breed name, e.g. "Labrador Retriever Mix".
        species_id: Foreign key to the species table.
        id: Database primary key (None for new records).
        species: The related Species when eagerly loaded.
    """
    name: str
    species_id: int
    id: Optional[int] = None
    species: Optional[Species] = None

    def __str__(self) -> str:
        return self.name
