"""
services/species_service.py
----------------------------
CRUD operations for species.
"""

from models.species import Species
from repositories.species_repo import SpeciesRepository
from services.base_service import EntityService


class SpeciesService(EntityService):
    MODEL = Species
    REPOSITORY = SpeciesRepository
