"""
screens/breed_screen.py
-----------------------
Prompt sequence for adding a breed.
"""

from typing import Optional

import inquirer

from screens.prompts import not_empty
from services.species_service import SpeciesService


class BreedScreen:

    def __init__(self, species_service: SpeciesService):
        self.species_service = species_service

    def species_choices(self, _answers=None) -> list:
        return [(s.name, s.id) for s in (self.species_service.find(order_by="name") or [])]

    def show_add(self) -> Optional[dict]:
        """Collect species and name of a new breed. None when cancelled."""
        print("\nPlease enter the following details to add a new breed:")
        answers = inquirer.prompt([
            inquirer.List("species_id", message="What species?", choices=self.species_choices),
            inquirer.Text("name", message="Breed Name?", validate=not_empty("Should enter a breed name.")),
        ])
        if not answers:
            return None
        return {"species_id": answers["species_id"], "name": answers["name"].strip()}
