"""
services/outcome_service.py
----------------------------
CRUD operations for outcome types and subtypes.
"""

from models.outcome import Outcome
from repositories.outcome_repo import OutcomeRepository
from services.base_service import EntityService


class OutcomeService(EntityService):
    MODEL = Outcome
    REPOSITORY = OutcomeRepository

    def find_types(self, name_filter=None):
        """Outcome types (not subtypes) ordered by name, optionally filtered by name."""
        return self.find({"is_subtype": False, "name": name_filter}, order_by="name") or []

    def find_subtypes(self, name_filter=None):
        """Outcome subtypes ordered by name, optionally filtered by name."""
        return self.find({"is_subtype": True, "name": name_filter}, order_by="name") or []
