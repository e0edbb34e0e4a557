"""Codebreaker backend access built on the generated API classes."""

from __future__ import annotations

from codebreaker.api_client import ApiClient, Configuration
from codebreaker.model import Game, Guess
from codebreaker.service.games_api import DEFAULT_BASE_URL, GamesApi
from codebreaker.service.guesses_api import GuessesApi


class CodebreakerService:
    """Asynchronous operations for creating, retrieving and deleting games,
    and for submitting and retrieving guesses.

    Every operation is a coroutine; callers compose and await them without
    blocking the event loop. Most code should share the instance returned by
    :meth:`get_instance`.
    """

    _instance: CodebreakerService | None = None

    def __init__(self, api_client: ApiClient | None = None) -> None:
        if api_client is None:
            api_client = ApiClient(Configuration.from_env(default_base_url=DEFAULT_BASE_URL))
        self.api_client = api_client
        self.games = GamesApi(api_client)
        self.guesses = GuessesApi(api_client)

    @classmethod
    def get_instance(cls) -> CodebreakerService:
        """Return the shared service, creating it from the environment."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    async def start_game(self, game: Game) -> Game:
        """Start a game with the pool and length of ``game``.

        Returns the created game, including its id.
        """
        return await self.games.start_game(game)

    async def get_game(self, game_id: str) -> Game:
        """Return the full game state, including guesses made so far."""
        return await self.games.get_game(game_id)

    async def delete_game(self, game_id: str) -> None:
        await self.games.delete_game(game_id)

    async def submit_guess(self, game: Game, guess: Guess) -> Guess:
        """Submit ``guess`` against ``game`` and return it scored."""
        if game.id is None:
            raise ValueError("Cannot submit a guess for a game that has not been started")
        return await self.guesses.submit_guess(game.id, guess)

    async def get_guess(self, game_id: str, guess_id: str) -> Guess:
        return await self.guesses.get_guess(game_id, guess_id)

    async def shutdown(self) -> None:
        """Release the HTTP connections. The shared instance is reset."""
        await self.api_client.close()
        if CodebreakerService._instance is self:
            CodebreakerService._instance = None
