"""Tests for GameViewModel observers and operations."""

import httpx
import pydantic
import pytest

from codebreaker.api_client import ApiClient, Configuration
from codebreaker.exceptions import BadRequestException, NotFoundException
from codebreaker.service.codebreaker_service import CodebreakerService
from codebreaker.viewmodel import GameViewModel


@pytest.fixture
def view_model(api_client) -> GameViewModel:
    return GameViewModel(CodebreakerService(api_client))


@pytest.fixture
def events(view_model) -> dict[str, list]:
    """Values delivered to each kind of observer, in order."""
    seen: dict[str, list] = {"game": [], "guess": [], "solved": [], "error": []}
    view_model.register_game_observer(seen["game"].append)
    view_model.register_guess_observer(seen["guess"].append)
    view_model.register_solved_observer(seen["solved"].append)
    view_model.register_error_observer(seen["error"].append)
    return seen


def answering(response: httpx.Response) -> ApiClient:
    """Client whose every request gets ``response``."""
    transport = httpx.MockTransport(lambda request: response)
    return ApiClient(Configuration(base_url="http://testserver", initial_delay=0), transport=transport)


class TestStartGame:
    async def test_publishes_game_and_solved(self, view_model, events):
        await view_model.start_game("ABCDEF", 4)
        assert view_model.game.id == "game1"
        assert events["game"] == [view_model.game]
        assert events["solved"] == [False]
        assert events["error"] == []

    async def test_late_observer_gets_current_game(self, view_model):
        await view_model.start_game("ABCDEF", 4)
        seen = []
        view_model.register_game_observer(seen.append)
        assert seen == [view_model.game]

    async def test_invalid_settings_reported(self, view_model, events, fake_service):
        await view_model.start_game("", 4)
        assert view_model.game is None
        assert isinstance(events["error"][0], ValueError)
        assert fake_service.requests == []


class TestSubmitGuess:
    async def test_appends_scored_guess(self, view_model, events):
        await view_model.start_game("ABCDEF", 4)
        await view_model.submit_guess("ABCE")

        guess = view_model.guess
        assert (guess.exact_matches, guess.near_matches) == (3, 0)
        assert events["guess"] == [guess]
        assert view_model.game.guesses == [guess]
        assert view_model.solved is False

    async def test_solving_guess_reloads_game(self, view_model, events, fake_service):
        await view_model.start_game("ABCDEF", 4)
        await view_model.submit_guess("ABCD")

        assert view_model.solved is True
        assert events["solved"] == [False, True]
        assert view_model.game.text == "ABCD"
        assert len(view_model.game.guesses) == 1
        assert [r.method for r in fake_service.requests] == ["POST", "POST", "GET"]

    async def test_solving_guess_with_malformed_reload(
        self, view_model, events, fake_service, monkeypatch
    ):
        await view_model.start_game("ABCDEF", 4)
        submit = fake_service._submit_guess

        def submit_and_corrupt(game, body):
            response = submit(game, body)
            del game["pool"]
            return response

        monkeypatch.setattr(fake_service, "_submit_guess", submit_and_corrupt)
        await view_model.submit_guess("ABCD")

        assert view_model.guess.solution is True
        assert isinstance(events["error"][0], pydantic.ValidationError)
        assert view_model.solved is False

    async def test_rejected_guess(self, view_model, events):
        await view_model.start_game("ABCDEF", 4)
        await view_model.submit_guess("ZZZZ")
        assert isinstance(view_model.error, BadRequestException)
        assert events["guess"] == []

    async def test_without_game(self, view_model, events):
        await view_model.submit_guess("ABCD")
        assert str(view_model.error) == "No game in progress"


class TestOtherOperations:
    async def test_get_game(self, view_model, api_client):
        other = GameViewModel(CodebreakerService(api_client))
        await other.start_game("ABCDEF", 4)

        await view_model.get_game(other.game.id)
        assert view_model.game == other.game

    async def test_malformed_game_reported(self):
        client = answering(httpx.Response(200, json={"id": "g1"}))
        view_model = GameViewModel(CodebreakerService(client))
        errors = []
        view_model.register_error_observer(errors.append)

        await view_model.get_game("g1")
        await client.close()

        assert isinstance(errors[0], pydantic.ValidationError)
        assert view_model.game is None

    async def test_non_json_game_reported(self):
        client = answering(httpx.Response(200, text="<html>"))
        view_model = GameViewModel(CodebreakerService(client))

        await view_model.get_game("g1")
        await client.close()

        assert isinstance(view_model.error, ValueError)

    async def test_get_unknown_game(self, view_model, events):
        await view_model.get_game("missing")
        assert isinstance(events["error"][0], NotFoundException)
        assert view_model.game is None

    async def test_get_guess(self, view_model):
        await view_model.start_game("ABCDEF", 4)
        await view_model.submit_guess("FEDC")
        submitted = view_model.guess

        await view_model.submit_guess("ABCE")
        await view_model.get_guess(submitted.id)
        assert view_model.guess == submitted

    async def test_delete_current_game(self, view_model, events, fake_service):
        await view_model.start_game("ABCDEF", 4)
        await view_model.delete_game()
        assert view_model.game is None
        assert events["game"][-1] is None
        assert fake_service.games == {}

    async def test_delete_other_game_keeps_current(self, view_model, api_client, fake_service):
        other = GameViewModel(CodebreakerService(api_client))
        await other.start_game("ABCDEF", 4)
        await view_model.start_game("ABCDEF", 4)

        await view_model.delete_game(other.game.id)
        assert view_model.game is not None
        assert list(fake_service.games) == [view_model.game.id]

    async def test_delete_without_game(self, view_model):
        await view_model.delete_game()
        assert isinstance(view_model.error, ValueError)

    async def test_shutdown(self, view_model, api_client):
        await view_model.start_game("ABCDEF", 4)
        await view_model.shutdown()
        assert api_client.is_closed


def test_get_instance_shares_service(monkeypatch):
    monkeypatch.delenv("CODEBREAKER_BASE_URL", raising=False)
    view_model = GameViewModel.get_instance()
    assert view_model is GameViewModel.get_instance()
    assert view_model.service is CodebreakerService.get_instance()
