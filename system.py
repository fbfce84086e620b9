"""
system.py
---------
The interactive loop: login, main menu dispatch, and the handlers that
connect screens to services.
"""

import os
from typing import Optional

from config import PAGE_SIZE
from db.connection import Database
from models.user import User
from screens.animal_screen import AnimalScreen, ListNavigation, NavOption
from screens.breed_screen import BreedScreen
from screens.main_menu_screen import MainMenuScreen, MenuOption
from screens.user_screen import UserScreen
from security.auth import login_required
from services.animal_service import AnimalService
from services.breed_service import BreedService
from services.outcome_service import OutcomeService
from services.species_service import SpeciesService
from services.user_service import UserService
from utils.display import Alert
from utils.logger import get_logger

logger = get_logger(__name__)


class System:
    """
    One interactive session over an open database.

    Workflow:
        1. Ask for credentials once; a failed login ends the session.
        2. Show the main menu and dispatch the selected option.
        3. Repeat until the user logs off.
    """

    def __init__(self, db: Database, page_size: int = PAGE_SIZE):
        self.db = db
        self.page_size = page_size
        self.user: Optional[User] = None

        self.animal_service = AnimalService(db)
        self.breed_service = BreedService(db)
        self.species_service = SpeciesService(db)
        self.outcome_service = OutcomeService(db)
        self.user_service = UserService(db)

        self.animal_screen = AnimalScreen(
            self.animal_service, self.breed_service, self.species_service, self.outcome_service
        )
        self.breed_screen = BreedScreen(self.species_service)

    # ── Session ───────────────────────────────────────────

    def login(self) -> bool:
        credentials = UserScreen.show_login()
        if credentials is None:
            return False
        self.user = self.user_service.authenticate(credentials["username"], credentials["password"])
        if self.user is None:
            Alert.error("Failed to authenticate with specified username and password.")
            return False
        return True

    def start(self, non_persistent: bool = False) -> None:
        """
        Run the main menu.

        Args:
            non_persistent: Handle a single menu option instead of looping.
        """
        if self.user is None and not self.login():
            return

        while self.user is not None:
            option = MainMenuScreen.show()
            logger.info(f"Main menu option selected: {option}")

            if option == MenuOption.ANIMAL_ADD:
                self.handle_animal_add()
            elif option == MenuOption.ANIMAL_LIST:
                self.handle_animal_list()
            elif option == MenuOption.BREED_ADD:
                self.handle_breed_add()
            elif option == MenuOption.USER_ADD:
                self.handle_user_add()
            elif option == MenuOption.CLEAR_SCREEN:
                os.system("cls" if os.name == "nt" else "clear")
            elif option == MenuOption.EXIT:
                self.logoff()

            if non_persistent:
                break

    def logoff(self) -> None:
        logger.info(f"User {self.user.username if self.user else '?'} logged off")
        self.user = None
        Alert.info("Thanks for using Animal Shelter Registry. Good bye!", "Logged Off")

    # ── Handlers ──────────────────────────────────────────

    def _resolve_new_breed(self, data: dict) -> bool:
        """
        Create the breed requested through "Add New Breed..." and point
        the animal data at it. Returns False when the breed could not be created.
        """
        breed_name = data.pop("breed_name", None)
        if not breed_name:
            return True
        breed = self.breed_service.create({"name": breed_name, "species_id": data["species_id"]})
        if breed is None:
            return False
        data["breed_id"] = breed.id
        return True

    @login_required
    def handle_animal_add(self) -> None:
        """Collect the data of a new animal and register it."""
        if not self.species_service.find(limit=1):
            Alert.warn("There are no species registered yet. Run the database setup first.")
            return

        data = self.animal_screen.show_add_update()
        if data is None:
            Alert.info("Animal registration was cancelled by the user.")
            return

        if not self._resolve_new_breed(data):
            Alert.error("There was a problem adding the new breed. Please try again later.")
            return

        animal = self.animal_service.create(data, include_species=True)
        if animal:
            species = animal.species.name.lower() if animal.species else "animal"
            Alert.success(f"New {species} ({animal.name}) has been successfully registered.")
        else:
            Alert.error("There was a problem registering the animal. Please try again later.")

    def _handle_update(self, data: Optional[dict]) -> None:
        if not data:
            Alert.info("No animal was selected for update, or the user cancelled the operation.")
            return
        if not self._resolve_new_breed(data):
            Alert.error("There was a problem adding the new breed. Please try again later.")
            return
        if self.animal_service.update(data):
            Alert.success(
                "Successfully updated the selected animal. Use the Refresh Page option "
                "or keep navigating the list to get updated results."
            )
        else:
            Alert.error("There was a problem updating the selected animal. Please try again.")

    def _handle_delete(self, ids: Optional[list]) -> None:
        if not ids:
            Alert.info("No animals were selected for deletion, or the user cancelled the operation.")
            return
        deleted = self.animal_service.delete(ids)
        if deleted:
            Alert.success(
                f"Successfully deleted {deleted} animal(s). Use the Refresh Page option "
                f"or keep navigating the list to get updated results."
            )
        else:
            Alert.error("There was a problem deleting the selected animal(s). Please try again.")

    @login_required
    def handle_animal_list(self) -> None:
        """Paginated animal list with filter, update and delete options."""
        nav = ListNavigation(limit=self.page_size)

        while True:
            result = self.animal_service.find(
                nav.filter,
                page=nav.page,
                limit=nav.limit,
                include_count=True,
                include_species=True,
                include_breed=True,
                include_outcome=True,
            )
            if result is None:
                Alert.error("There was a problem loading the animals. Please try again later.")
                return

            nav.update_count(result.count)
            if nav.page != nav.clamp(nav.page):
                nav.page = nav.clamp(nav.page)
                continue
            if not nav.filter and not nav.count:
                Alert.warn("It seems there are no animals in the database at this moment.")
                return

            refresh_table = nav.nav_option not in (NavOption.DELETE_PAGE, NavOption.UPDATE)
            if refresh_table:
                print()
                print(self.animal_service.display_table(result.items, include_header=True))

            response = self.animal_screen.show_list_navigation(nav, result.items, not refresh_table)
            option = response["nav_option"]

            if option == NavOption.EXIT:
                return
            if option == NavOption.UPDATE:
                nav.nav_option = option
                self._handle_update(response.get("update"))
            elif option == NavOption.DELETE_PAGE:
                nav.nav_option = option
                self._handle_delete(response.get("delete"))
            else:
                nav.apply(option, page=response.get("page"), new_filter=response.get("filter"))

    @login_required
    def handle_breed_add(self) -> None:
        """Collect and create a new breed."""
        if not self.species_service.find(limit=1):
            Alert.warn("There are no species registered yet. Run the database setup first.")
            return

        data = self.breed_screen.show_add()
        if data is None:
            Alert.info("Breed creation was cancelled by the user.")
            return
        breed = self.breed_service.create(data, include_species=True)
        if breed:
            Alert.success(f"New breed ({breed.name}) has been added.")
        else:
            Alert.error("There was a problem adding the new breed. Please try again later.")

    @login_required
    def handle_user_add(self) -> None:
        """Collect and create a new user account."""
        data = UserScreen.create_user_account()
        if data is None:
            Alert.info("User creation was cancelled by the user.")
            return
        user = self.user_service.create(data)
        if user:
            Alert.success(f"New user ({user.username}) has been added.")
        else:
            Alert.error("There was a problem adding the new user. Please try again later.")
