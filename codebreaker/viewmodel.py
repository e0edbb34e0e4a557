"""Observable game state between a user interface and the service.

:class:`GameViewModel` keeps the current game, the latest guess, the solved
flag and the last error. Interfaces register observers and call the
operations; failures are reported to error observers instead of raised.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from .exceptions import ApiException
from .model import Game, Guess
from .service.codebreaker_service import CodebreakerService

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class _Observable(Generic[T]):
    """A value plus the callbacks interested in it."""

    def __init__(self) -> None:
        self.value: T | None = None
        self._observers: list[Callable[[T | None], None]] = []

    def register(self, observer: Callable[[T | None], None]) -> None:
        self._observers.append(observer)
        if self.value is not None:
            observer(self.value)

    def set(self, value: T | None) -> T | None:
        self.value = value
        for observer in list(self._observers):
            observer(value)
        return value


class GameViewModel:
    """Coordinates the user interface and :class:`CodebreakerService`."""

    _instance: GameViewModel | None = None

    def __init__(self, service: CodebreakerService | None = None) -> None:
        self.service = service or CodebreakerService.get_instance()
        self._game: _Observable[Game] = _Observable()
        self._guess: _Observable[Guess] = _Observable()
        self._solved: _Observable[bool] = _Observable()
        self._error: _Observable[Exception] = _Observable()

    @classmethod
    def get_instance(cls) -> GameViewModel:
        """Return the shared view model, backed by the shared service."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def game(self) -> Game | None:
        return self._game.value

    @property
    def guess(self) -> Guess | None:
        return self._guess.value

    @property
    def solved(self) -> bool | None:
        return self._solved.value

    @property
    def error(self) -> Exception | None:
        return self._error.value

    async def start_game(self, pool: str, length: int) -> None:
        """Start a game; observers receive the new game and its solved state."""
        try:
            game = Game.builder().pool(pool).length(length).build()
            started = await self.service.start_game(game)
        except (ApiException, ValueError) as e:
            self._log_error(e)
            return
        self._set_game(started)

    async def get_game(self, game_id: str) -> None:
        """Load an existing game and publish it with its solved state."""
        try:
            game = await self.service.get_game(game_id)
        except (ApiException, ValueError) as e:
            self._log_error(e)
            return
        self._set_game(game)

    async def delete_game(self, game_id: str | None = None) -> None:
        """Delete a game by id, or the current game when no id is given.

        Deleting the current game clears it and notifies game observers.
        """
        clear_current = game_id is None
        try:
            if game_id is None:
                game_id = self._current_game().id
            await self.service.delete_game(game_id)
        except (ApiException, ValueError) as e:
            self._log_error(e)
            return
        if clear_current:
            self._game.set(None)

    async def submit_guess(self, text: str) -> None:
        """Submit a guess for the current game.

        A solving guess reloads the whole game; any other guess is appended
        to the current game's guesses.
        """
        try:
            game = self._current_game()
            guess = Guess.builder().text(text).build()
            scored = await self.service.submit_guess(game, guess)
        except (ApiException, ValueError) as e:
            self._log_error(e)
            return

        self._guess.set(scored)
        if scored.solution:
            await self.get_game(game.id)
        else:
            guesses = [*(game.guesses or []), scored]
            self._set_game(game.model_copy(update={"guesses": guesses}))

    async def get_guess(self, guess_id: str) -> None:
        """Load a guess of the current game and publish it."""
        try:
            guess = await self.service.get_guess(self._current_game().id, guess_id)
        except (ApiException, ValueError) as e:
            self._log_error(e)
            return
        self._guess.set(guess)

    async def shutdown(self) -> None:
        await self.service.shutdown()

    def register_game_observer(self, observer: Callable[[Game | None], None]) -> None:
        """Call ``observer`` on every game change, and now if a game is loaded."""
        self._game.register(observer)

    def register_guess_observer(self, observer: Callable[[Guess | None], None]) -> None:
        self._guess.register(observer)

    def register_solved_observer(self, observer: Callable[[bool | None], None]) -> None:
        self._solved.register(observer)

    def register_error_observer(self, observer: Callable[[Exception | None], None]) -> None:
        self._error.register(observer)

    def _current_game(self) -> Game:
        game = self._game.value
        if game is None or game.id is None:
            raise ValueError("No game in progress")
        return game

    def _set_game(self, game: Game) -> None:
        self._game.set(game)
        self._solved.set(bool(game.solved))

    def _log_error(self, error: Exception) -> None:
        LOGGER.warning("Codebreaker request failed: %s", error)
        self._error.set(error)
