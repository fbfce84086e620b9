"""
screens/user_screen.py
----------------------
Login and account creation prompts.
"""

from typing import Optional

import inquirer

from screens.prompts import not_empty


def _credentials_questions() -> list:
    return [
        inquirer.Text("username", message="Username?", validate=not_empty("Should enter a username.")),
        inquirer.Password("password", message="Password?", echo="*", validate=not_empty("Should enter a password.")),
    ]


class UserScreen:

    @staticmethod
    def show_login() -> Optional[dict]:
        """Ask for username and password. None when cancelled."""
        print("\nPlease enter your username and password to login:")
        answers = inquirer.prompt(_credentials_questions())
        if not answers:
            return None
        return {"username": answers["username"].strip(), "password": answers["password"]}

    @staticmethod
    def create_user_account() -> Optional[dict]:
        """Collect the data of a new (non-admin) user. None when cancelled."""
        print("\nEnter username and password to create account:")
        questions = _credentials_questions() + [
            inquirer.Confirm("is_admin", message="Grant administrator rights?", default=False),
        ]
        answers = inquirer.prompt(questions)
        if not answers:
            return None
        return {
            "username": answers["username"].strip(),
            "password": answers["password"],
            "is_admin": bool(answers["is_admin"]),
        }
