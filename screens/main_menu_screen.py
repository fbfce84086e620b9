"""
screens/main_menu_screen.py
---------------------------
The main menu shown after login.
"""

from typing import Optional

import inquirer


class MenuOption:
    ANIMAL_ADD = "animal_add"
    ANIMAL_LIST = "animal_list"
    BREED_ADD = "breed_add"
    USER_ADD = "user_add"
    CLEAR_SCREEN = "clear_screen"
    EXIT = "exit"


class MainMenuScreen:

    CHOICES = [
        ("+ Register Animal", MenuOption.ANIMAL_ADD),
        ("≣ Manage Animals", MenuOption.ANIMAL_LIST),
        ("+ Add New Breed", MenuOption.BREED_ADD),
        ("+ Add New User", MenuOption.USER_ADD),
        ("⌧ Clear Screen", MenuOption.CLEAR_SCREEN),
        ("⭙ Logoff", MenuOption.EXIT),
    ]

    @classmethod
    def show(cls) -> Optional[str]:
        """Returns the selected MenuOption; Ctrl-C counts as Logoff."""
        print()
        answers = inquirer.prompt([
            inquirer.List(
                "option",
                message="Animal Shelter Main Menu - Select an option from below",
                choices=cls.CHOICES,
                carousel=False,
            )
        ])
        return answers["option"] if answers else MenuOption.EXIT
