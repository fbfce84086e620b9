"""
models/species.py
-----------------
Domain model for animal species (Dog, Cat, ...).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Species:
    """
    Represents a species of animal handled by the shelter.

    Attributes:
        name: Display name, e.g. "Dog".
        id: Database primary key (None for new records).
    """
    name: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.name
