"""
services/breed_service.py
--------------------------
CRUD operations for breeds, with optional species eager-loading.
"""

from models.breed import Breed
from repositories.breed_repo import BreedRepository
from services.base_service import EntityService


class BreedService(EntityService):
    MODEL = Breed
    REPOSITORY = BreedRepository

    def _joins(self, include_species: bool = False, **include: bool):
        joins = super()._joins(**include)
        if include_species:
            joins.append(self.repo.SPECIES)
        return joins
