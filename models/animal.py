"""
models/animal.py
----------------
Domain model for animals registered in the shelter.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.breed import Breed
from models.outcome import Outcome
from models.species import Species


class AnimalSex:
    """Allowed values for `Animal.sex`."""
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"

    ALL = (MALE, FEMALE, UNKNOWN)


@dataclass
class Animal:
    """
    Represents a single animal.

    Attributes:
        species_id: Foreign key to the species table (required).
        name: Optional animal name.
        legacy_id: Identifier carried over from the seed source.
        breed_id: Optional foreign key to the breeds table.
        color: Free text color description.
        sex: One of AnimalSex.ALL.
        neutered: Whether the animal has been neutered/spayed.
        date_of_birth: Date of birth, if known.
        location_lat: Latitude of the animal's location.
        location_long: Longitude of the animal's location.
        outcome_type_id: Outcome row with is_subtype = False.
        outcome_subtype_id: Outcome row with is_subtype = True.
        id: Database primary key (None for new records).
        species, breed, outcome_type, outcome_subtype: Related
            records, populated only when eagerly loaded.
    """
    species_id: int
    name: Optional[str] = None
    legacy_id: Optional[str] = None
    breed_id: Optional[int] = None
    color: Optional[str] = None
    sex: str = AnimalSex.UNKNOWN
    neutered: bool = False
    date_of_birth: Optional[date] = None
    location_lat: Optional[float] = None
    location_long: Optional[float] = None
    outcome_type_id: Optional[int] = None
    outcome_subtype_id: Optional[int] = None
    id: Optional[int] = None
    species: Optional[Species] = None
    breed: Optional[Breed] = None
    outcome_type: Optional[Outcome] = None
    outcome_subtype: Optional[Outcome] = None

    def has_location(self) -> bool:
        """Returns True when both coordinates are known."""
        return self.location_lat is not None and self.location_long is not None

    def __str__(self) -> str:
        return f"#{self.id} {self.name or '<no name>'} ({self.sex})"
