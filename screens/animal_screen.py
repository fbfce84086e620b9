"""
screens/animal_screen.py
------------------------
Prompt sequences for animals: the add/update form, the paginated list
navigation menu, and its update, delete and filter sub-screens.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

import inquirer

from models.animal import Animal, AnimalSex
from screens.prompts import (
    not_empty,
    optional_date,
    optional_number,
    to_date,
    to_number,
    to_page,
)
from services.animal_service import AnimalService
from services.breed_service import BreedService
from services.outcome_service import OutcomeService
from services.species_service import SpeciesService

NEW_BREED = 0
NO_VALUE = 0
OTHER_COLOR = ""


class NavOption:
    FIRST = "first"
    PREV = "prev"
    NEXT = "next"
    LAST = "last"
    GOTO = "goto"
    EXIT = "exit"
    UPDATE = "update"
    DELETE_PAGE = "delete_page"
    REFRESH = "refresh"
    FILTER = "filter"


class FilterOption:
    BY_ID = "id"
    BY_LEGACY_ID = "legacy_id"
    BY_NAME = "name"
    BY_COLOR = "color"
    BY_SEX = "sex"
    BY_SPECIES = "species_id"
    BY_BREED = "breed_id"
    RESET = "reset"
    EXIT = "exit"

    TEXT_FIELDS = (BY_ID, BY_LEGACY_ID, BY_NAME, BY_COLOR)
    FIELDS = (BY_ID, BY_LEGACY_ID, BY_NAME, BY_COLOR, BY_SEX, BY_SPECIES, BY_BREED)

    LABELS = {
        BY_ID: "ID",
        BY_LEGACY_ID: "Legacy ID",
        BY_NAME: "Name",
        BY_COLOR: "Color",
        BY_SEX: "Sex",
        BY_SPECIES: "Species",
        BY_BREED: "Species and Breed",
    }


@dataclass
class ListNavigation:
    """
    Paging state of the animal list.

    `page` is zero-based and always kept within [0, max_pages - 1]
    (0 when there is nothing to show).
    """
    limit: int = 10
    page: int = 0
    count: int = 0
    nav_option: str = NavOption.NEXT
    filter: Optional[dict] = None
    max_pages: int = field(default=0, init=False)

    def update_count(self, count: int) -> None:
        self.count = count
        self.max_pages = math.ceil(count / self.limit) if self.limit else 0

    def clamp(self, page: int) -> int:
        return min(max(page, 0), max(self.max_pages - 1, 0))

    def apply(self, option: str, page: Optional[int] = None, new_filter: Any = None) -> None:
        """
        Move according to a navigation option.

        Args:
            option: NavOption value.
            page: One-based page number for GOTO.
            new_filter: Replacement filter for FILTER.
        """
        self.nav_option = option
        if option == NavOption.FIRST:
            self.page = 0
        elif option == NavOption.LAST:
            self.page = self.clamp(self.max_pages - 1)
        elif option in (NavOption.PREV, NavOption.NEXT):
            step = -1 if option == NavOption.PREV else 1
            self.page = self.clamp(self.page + step)
        elif option == NavOption.GOTO and page is not None:
            self.page = self.clamp(page - 1)
        elif option == NavOption.FILTER:
            self.filter = new_filter or None
            self.page = 0

    def first_record(self, shown: int) -> int:
        return self.page * self.limit + (1 if shown else 0)

    def last_record(self, shown: int) -> int:
        return self.page * self.limit + shown


# ── Answer post-processing ────────────────────────────────

def build_animal_data(answers: dict, record: Optional[Animal] = None) -> Optional[dict]:
    """
    Turn the add/update form answers into animal fields.

    Returns:
        The field mapping (with `id` and `legacy_id` for updates, and
        `breed_name` when a new breed was requested), or None when the
        user did not confirm.
    """
    if not answers or not answers.get("confirm"):
        return None

    color = answers.get("color")
    if color == OTHER_COLOR:
        color = answers.get("color_other", "")
    location = bool(answers.get("location_available"))
    outcomes = bool(answers.get("outcomes_available"))
    outcome_type_id = answers.get("outcome_type_id") if outcomes else None
    outcome_subtype_id = answers.get("outcome_subtype_id") if outcome_type_id else None

    data = {
        "species_id": answers["species_id"],
        "breed_id": answers.get("breed_id") or None,
        "name": answers["name"].strip(),
        "color": (color or "").strip() or None,
        "sex": answers.get("sex") or AnimalSex.UNKNOWN,
        "neutered": bool(answers.get("neutered")),
        "date_of_birth": to_date(answers.get("date_of_birth")),
        "location_lat": to_number(answers.get("location_lat")) if location else None,
        "location_long": to_number(answers.get("location_long")) if location else None,
        "outcome_type_id": outcome_type_id or None,
        "outcome_subtype_id": outcome_subtype_id or None,
    }
    if answers.get("breed_id") == NEW_BREED:
        data["breed_name"] = answers.get("breed_name", "").strip()
    if record is not None:
        data["id"] = record.id
        data["legacy_id"] = record.legacy_id
    return data


def build_filter(answers: Optional[dict], current: Optional[dict]) -> Optional[dict]:
    """
    Turn the filter screen answers into the new active filter.
    EXIT (or a cancelled prompt) keeps the current filter; RESET or an
    empty value clears it.
    """
    if not answers or answers["filter_option"] == FilterOption.EXIT:
        return current

    option = answers["filter_option"]
    if option == FilterOption.RESET:
        return None
    if option == FilterOption.BY_SPECIES:
        species_id = answers.get("species_id")
        return {FilterOption.BY_SPECIES: species_id} if species_id else None
    if option == FilterOption.BY_BREED:
        breed_id = answers.get("breed_id")
        if not breed_id:
            return None
        return {FilterOption.BY_SPECIES: answers.get("species_id"), FilterOption.BY_BREED: breed_id}
    if option == FilterOption.BY_SEX:
        sex = answers.get("sex")
        return {FilterOption.BY_SEX: sex} if sex else None

    value = (answers.get("filter_value") or "").strip()
    return {option: value} if value else None


def describe_animal(animal: Animal) -> str:
    legacy = f" - {animal.legacy_id}" if animal.legacy_id else ""
    species = animal.species.name if animal.species else "?"
    breed = animal.breed.name if animal.breed else "?"
    return f"{animal.id}{legacy} - {animal.name or '<no name>'} ({species}: {breed})"


class AnimalScreen:
    """Screens used to register and manage animals."""

    def __init__(
        self,
        animal_service: AnimalService,
        breed_service: BreedService,
        species_service: SpeciesService,
        outcome_service: OutcomeService,
    ):
        self.animal_service = animal_service
        self.breed_service = breed_service
        self.species_service = species_service
        self.outcome_service = outcome_service

    # ── Choice lists ──────────────────────────────────────

    def species_choices(self, _answers=None) -> list:
        return [(s.name, s.id) for s in (self.species_service.find(order_by="name") or [])]

    def breed_choices(self, answers: dict) -> list:
        search = (answers.get("breed_search") or "").strip()
        breeds = self.breed_service.find(
            {"species_id": answers.get("species_id"), "name": f"%{search}%" if search else None},
            order_by="name",
        ) or []
        return [(b.name, b.id) for b in breeds]

    def sex_choices(self, _answers=None) -> list:
        known = set(self.animal_service.get_sexes())
        return sorted(known | set(AnimalSex.ALL))

    # ── Add / Update ──────────────────────────────────────

    def show_add_update(self, record: Optional[Animal] = None) -> Optional[dict]:
        """
        Display the add or update form. When `record` is given the form
        is pre-filled and worded for an update.

        Returns:
            Animal fields (see build_animal_data) or None when cancelled.
        """
        colors = self.animal_service.get_colors(sort=True)
        verb = "update" if record else "create"

        print(f"\nPlease enter the following details to {'update an' if record else 'register a new'} animal:")
        questions = [
            inquirer.List(
                "species_id",
                message="What species?",
                choices=self.species_choices,
                default=record.species_id if record else None,
            ),
            inquirer.Text("breed_search", message="Search breeds by name (blank lists all)?"),
            inquirer.List(
                "breed_id",
                message="Type of breed?",
                choices=lambda answers: [("Add New Breed...", NEW_BREED)] + self.breed_choices(answers),
                default=record.breed_id if record else None,
                carousel=False,
            ),
            inquirer.Text(
                "breed_name",
                message="New Breed Name?",
                validate=not_empty("Should enter a breed name."),
                ignore=lambda answers: answers["breed_id"] != NEW_BREED,
            ),
            inquirer.Text(
                "name",
                message="Animal Name?",
                default=record.name if record and record.name else None,
                validate=not_empty("Should enter an animal name."),
            ),
            inquirer.List(
                "color",
                message="Color?",
                choices=[("Other...", OTHER_COLOR)] + [(c, c) for c in colors],
                default=record.color if record and record.color in colors else OTHER_COLOR,
                carousel=False,
            ),
            inquirer.Text(
                "color_other",
                message="Color description?",
                default=record.color if record and record.color else None,
                ignore=lambda answers: answers["color"] != OTHER_COLOR,
            ),
            inquirer.List(
                "sex",
                message="Sex?",
                choices=self.sex_choices,
                default=record.sex if record else AnimalSex.UNKNOWN,
            ),
            inquirer.Confirm(
                "neutered",
                message="Has the animal been neutered?",
                default=record.neutered if record else False,
            ),
            inquirer.Text(
                "date_of_birth",
                message="Date of Birth (YYYY-MM-DD)?",
                default=record.date_of_birth.isoformat() if record and record.date_of_birth else None,
                validate=optional_date,
            ),
            inquirer.Confirm(
                "location_available",
                message="Do you have the animal's location (latitude and longitude)?",
                default=bool(record and (record.location_lat is not None or record.location_long is not None)),
            ),
            inquirer.Text(
                "location_lat",
                message="Location Latitude?",
                default=str(record.location_lat) if record and record.location_lat is not None else None,
                validate=optional_number,
                ignore=lambda answers: not answers["location_available"],
            ),
            inquirer.Text(
                "location_long",
                message="Location Longitude?",
                default=str(record.location_long) if record and record.location_long is not None else None,
                validate=optional_number,
                ignore=lambda answers: not answers["location_available"],
            ),
            inquirer.Confirm(
                "outcomes_available",
                message="Are there any outcomes to set for this animal?",
                default=bool(record and (record.outcome_type_id or record.outcome_subtype_id)),
            ),
            inquirer.List(
                "outcome_type_id",
                message="Outcome Type?",
                choices=lambda _answers: [("No Outcome Type", NO_VALUE)]
                + [(o.name, o.id) for o in self.outcome_service.find_types()],
                default=record.outcome_type_id if record and record.outcome_type_id else NO_VALUE,
                ignore=lambda answers: not answers["outcomes_available"],
                carousel=False,
            ),
            inquirer.List(
                "outcome_subtype_id",
                message="Outcome Subtype?",
                choices=lambda _answers: [("No Outcome Subtype", NO_VALUE)]
                + [(o.name, o.id) for o in self.outcome_service.find_subtypes()],
                default=record.outcome_subtype_id if record and record.outcome_subtype_id else NO_VALUE,
                ignore=lambda answers: not (answers["outcomes_available"] and answers.get("outcome_type_id")),
                carousel=False,
            ),
            inquirer.List(
                "confirm",
                message=f"Are you sure you want to {verb} this animal?",
                choices=[
                    (f"Yes, {verb.title()}", True),
                    (f"No, Cancel {'Update' if record else 'Creation'}", False),
                ],
                default=True,
            ),
        ]
        return build_animal_data(inquirer.prompt(questions), record)

    # ── List navigation ───────────────────────────────────

    def nav_choices(self, nav: ListNavigation, records: list, show_refresh: bool) -> list:
        choices = []
        if nav.page > 0:
            choices.append(("⏮  First Page", NavOption.FIRST))
            choices.append(("⏴  Prev Page", NavOption.PREV))
        if nav.page < nav.max_pages - 1:
            choices.append(("⏵  Next Page", NavOption.NEXT))
            choices.append(("⏭  Last Page", NavOption.LAST))
        if show_refresh:
            choices.append(("⭮  Refresh Page", NavOption.REFRESH))
        choices.append((f"✱  {'Update' if nav.filter else 'Setup'} Filter...", NavOption.FILTER))
        if nav.max_pages > 1:
            choices.append(("↷  Go To Page", NavOption.GOTO))
        if records:
            choices.append(("✎  Update Animal from Page...", NavOption.UPDATE))
            choices.append(("⨉  Delete Animal(s) from Page...", NavOption.DELETE_PAGE))
        choices.append(("←  Back to Main Menu", NavOption.EXIT))
        return choices

    def show_list_navigation(self, nav: ListNavigation, records: list, show_refresh: bool) -> dict:
        """
        Display the navigation menu below a page of animals.

        Returns:
            {"nav_option": ..., "page": one-based page for GOTO,
             "update": animal fields, "delete": ids, "filter": new filter}
        """
        choices = self.nav_choices(nav, records, show_refresh)
        option_values = [value for _label, value in choices]
        header = (
            f"Page {nav.page + 1}: {'Filtered ' if nav.filter else ''}Record(s) "
            f"{nav.first_record(len(records))} - {nav.last_record(len(records))} of {nav.count}"
        )
        answers = inquirer.prompt([
            inquirer.List(
                "nav_option",
                message=f"{header} - Select an option",
                choices=choices,
                default=nav.nav_option if nav.nav_option in option_values else None,
                carousel=False,
            ),
            inquirer.Text(
                "page",
                message=f"Which Page (1 to {nav.max_pages})?",
                ignore=lambda answers: answers["nav_option"] != NavOption.GOTO,
            ),
        ])
        if not answers:
            return {"nav_option": NavOption.EXIT}

        response = {"nav_option": answers["nav_option"]}
        if response["nav_option"] == NavOption.GOTO:
            response["page"] = to_page(answers.get("page"), nav.page)
        elif response["nav_option"] == NavOption.UPDATE:
            selected = self.show_update_list(records)
            response["update"] = self.show_add_update(selected) if selected else None
        elif response["nav_option"] == NavOption.DELETE_PAGE:
            response["delete"] = self.show_delete_list(records)
        elif response["nav_option"] == NavOption.FILTER:
            response["filter"] = self.show_filter_options(nav.filter)
        return response

    def show_update_list(self, records: list) -> Optional[Animal]:
        """Pick one animal of the page. None when nothing was picked."""
        answers = inquirer.prompt([
            inquirer.List(
                "update",
                message="Select which animal you wish to update",
                choices=[("No Animal", NO_VALUE)] + [(describe_animal(a), a.id) for a in records],
                carousel=False,
            )
        ])
        if not answers:
            return None
        return next((a for a in records if a.id == answers["update"]), None)

    def show_delete_list(self, records: list) -> Optional[list[int]]:
        """
        Pick animals of the page to delete, then confirm.

        Returns:
            The ids to delete, or None when nothing was picked or the
            deletion was not confirmed.
        """
        answers = inquirer.prompt([
            inquirer.Checkbox(
                "delete",
                message="Select which animal(s) you wish to delete",
                choices=[(describe_animal(a), a.id) for a in records],
            ),
            inquirer.Confirm(
                "delete_confirm",
                message="Are you sure you want to delete the selected animal(s)?",
                default=False,
                ignore=lambda answers: not answers["delete"],
            ),
        ])
        if not answers or not answers["delete"] or not answers.get("delete_confirm"):
            return None
        return list(answers["delete"])

    # ── Filter ────────────────────────────────────────────

    def show_filter_options(self, current: Optional[dict]) -> Optional[dict]:
        """
        Let the user pick a single filter. Text filters accept "%text%"
        for substring matches and "<empty>" / "<null>" for blank values.

        Returns:
            The new filter, None for no filter.
        """
        choices = []
        for option in FilterOption.FIELDS:
            active = " (active)" if current and current.get(option) is not None else ""
            choices.append((f"✱  Filter by {FilterOption.LABELS[option]}{active}", option))

        default_option = None
        if current:
            if current.get(FilterOption.BY_BREED):
                default_option = FilterOption.BY_BREED
            elif current.get(FilterOption.BY_SPECIES):
                default_option = FilterOption.BY_SPECIES
            else:
                default_option = next(iter(current))
            choices.append(("⊝  Reset Filter", FilterOption.RESET))
        choices.append(("←  Back to List (no changes)", FilterOption.EXIT))

        current = current or {}
        answers = inquirer.prompt([
            inquirer.List(
                "filter_option",
                message="Filter options (only one can be active at a time)",
                choices=choices,
                default=default_option,
                carousel=False,
            ),
            inquirer.Text(
                "filter_value",
                message=lambda answers: f"Enter the value to filter by {FilterOption.LABELS[answers['filter_option']]}",
                default=lambda answers: current.get(answers["filter_option"]),
                ignore=lambda answers: answers["filter_option"] not in FilterOption.TEXT_FIELDS,
            ),
            inquirer.List(
                "sex",
                message="Sex?",
                choices=lambda _answers: [("No Sex", NO_VALUE)] + [(s, s) for s in self.sex_choices()],
                default=current.get(FilterOption.BY_SEX, NO_VALUE),
                ignore=lambda answers: answers["filter_option"] != FilterOption.BY_SEX,
            ),
            inquirer.List(
                "species_id",
                message="What species?",
                choices=lambda _answers: [("No Species", NO_VALUE)] + self.species_choices(),
                default=current.get(FilterOption.BY_SPECIES, NO_VALUE),
                ignore=lambda answers: answers["filter_option"] not in (FilterOption.BY_SPECIES, FilterOption.BY_BREED),
            ),
            inquirer.List(
                "breed_id",
                message="What Breed?",
                choices=lambda answers: [("No Breed", NO_VALUE)] + self.breed_choices(answers),
                default=current.get(FilterOption.BY_BREED, NO_VALUE),
                ignore=lambda answers: not (
                    answers["filter_option"] == FilterOption.BY_BREED and answers.get("species_id")
                ),
                carousel=False,
            ),
        ])
        return build_filter(answers, current or None)
