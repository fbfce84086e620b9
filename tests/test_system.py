import pytest

from models.user import User
from screens.animal_screen import NavOption
from screens.main_menu_screen import MainMenuScreen, MenuOption
from screens.user_screen import UserScreen
from services.user_service import UserService
from system import System


@pytest.fixture
def system(seeded_db):
    system = System(seeded_db, page_size=5)
    system.user_service = UserService(seeded_db, encrypt_passwords=False)
    system.user_service.create({"username": "admin", "password": "secret", "is_admin": True})
    return system


@pytest.fixture
def logged_in(system):
    system.user = User(username="admin", is_admin=True, id=1)
    return system


def scripted(responses, seen=None):
    """Fake list navigation that replays responses and records each page shown."""
    responses = iter(responses)

    def show(nav, records, show_refresh):
        if seen is not None:
            seen.append((nav.page, nav.count, [a.id for a in records]))
        return next(responses)

    return show


class TestSession:

    def test_login(self, system, monkeypatch):
        monkeypatch.setattr(UserScreen, "show_login", staticmethod(lambda: {"username": "admin", "password": "secret"}))

        assert system.login() is True
        assert system.user.username == "admin"
        assert system.user.password is None

    def test_failed_login_ends_session(self, system, monkeypatch, capsys):
        monkeypatch.setattr(UserScreen, "show_login", staticmethod(lambda: {"username": "admin", "password": "nope"}))
        monkeypatch.setattr(MainMenuScreen, "show", classmethod(lambda cls: pytest.fail("menu shown")))

        system.start()

        assert system.user is None
        assert "Failed to authenticate" in capsys.readouterr().out

    def test_logoff_from_menu(self, logged_in, monkeypatch):
        monkeypatch.setattr(MainMenuScreen, "show", classmethod(lambda cls: MenuOption.EXIT))

        logged_in.start()

        assert logged_in.user is None

    def test_handlers_require_login(self, system, capsys):
        assert system.handle_animal_add() is None
        assert system.handle_animal_list() is None

        assert "must be logged in" in capsys.readouterr().out


class TestAnimalHandlers:

    def test_add_animal_with_new_breed(self, logged_in, monkeypatch, capsys):
        data = {"species_id": 1, "breed_id": None, "breed_name": "Maine Coon", "name": "Tom", "sex": "Male"}
        monkeypatch.setattr(logged_in.animal_screen, "show_add_update", lambda record=None: dict(data))

        logged_in.handle_animal_add()

        tom = logged_in.animal_service.find({"name": "Tom"}, include_breed=True)[0]
        assert tom.breed.name == "Maine Coon"
        assert tom.breed.species_id == 1
        assert "New cat (Tom)" in capsys.readouterr().out

    def test_cancelled_add(self, logged_in, monkeypatch, capsys):
        monkeypatch.setattr(logged_in.animal_screen, "show_add_update", lambda record=None: None)

        logged_in.handle_animal_add()

        assert len(logged_in.animal_service.find()) == 10
        assert "cancelled" in capsys.readouterr().out

    def test_list_pages_and_filters(self, logged_in, monkeypatch):
        seen = []
        monkeypatch.setattr(
            logged_in.animal_screen,
            "show_list_navigation",
            scripted(
                [
                    {"nav_option": NavOption.NEXT},
                    {"nav_option": NavOption.FILTER, "filter": {"name": "%a%"}},
                    {"nav_option": NavOption.EXIT},
                ],
                seen,
            ),
        )

        logged_in.handle_animal_list()

        assert seen[0] == (0, 10, [1, 2, 3, 4, 5])
        assert seen[1] == (1, 10, [6, 7, 8, 9, 10])
        assert seen[2] == (0, 4, [3, 4, 7, 8])

    def test_delete_from_list(self, logged_in, monkeypatch):
        monkeypatch.setattr(
            logged_in.animal_screen,
            "show_list_navigation",
            scripted([
                {"nav_option": NavOption.DELETE_PAGE, "delete": [1, 2]},
                {"nav_option": NavOption.EXIT},
            ]),
        )

        logged_in.handle_animal_list()

        assert logged_in.animal_service.find({"id": [1, 2]}) == []

    def test_update_from_list(self, logged_in, monkeypatch):
        monkeypatch.setattr(
            logged_in.animal_screen,
            "show_list_navigation",
            scripted([
                {"nav_option": NavOption.UPDATE, "update": {"id": 3, "name": "Maximus"}},
                {"nav_option": NavOption.EXIT},
            ]),
        )

        logged_in.handle_animal_list()

        assert logged_in.animal_service.find({"id": 3})[0].name == "Maximus"

    def test_page_clamped_after_deleting_last_page(self, logged_in, monkeypatch):
        seen = []
        monkeypatch.setattr(
            logged_in.animal_screen,
            "show_list_navigation",
            scripted(
                [
                    {"nav_option": NavOption.LAST},
                    {"nav_option": NavOption.DELETE_PAGE, "delete": [6, 7, 8, 9, 10]},
                    {"nav_option": NavOption.EXIT},
                ],
                seen,
            ),
        )

        logged_in.handle_animal_list()

        assert seen[-1] == (0, 5, [1, 2, 3, 4, 5])

    def test_empty_list_warns(self, db, monkeypatch, capsys):
        system = System(db)
        system.user = User(username="admin")

        system.handle_animal_list()

        assert "no animals" in capsys.readouterr().out


class TestOtherHandlers:

    def test_add_breed(self, logged_in, monkeypatch):
        monkeypatch.setattr(logged_in.breed_screen, "show_add", lambda: {"species_id": 2, "name": "Poodle"})

        logged_in.handle_breed_add()

        assert [b.name for b in logged_in.breed_service.find({"name": "Poodle"})] == ["Poodle"]

    def test_add_user(self, logged_in, monkeypatch):
        monkeypatch.setattr(
            UserScreen,
            "create_user_account",
            staticmethod(lambda: {"username": "clerk", "password": "pw", "is_admin": False}),
        )

        logged_in.handle_user_add()

        assert logged_in.user_service.authenticate("clerk", "pw").username == "clerk"
