# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY

from __future__ import annotations

from codebreaker.api_client import ApiClient, Configuration
from codebreaker.model.guess import Guess

DEFAULT_BASE_URL = "http://localhost:8080/codebreaker"


class GuessesApi:
    """Guesses submitted against a game."""

    def __init__(self, api_client: ApiClient | None = None) -> None:
        if api_client is None:
            api_client = ApiClient(Configuration.from_env(default_base_url=DEFAULT_BASE_URL))
        self.api_client = api_client

    async def submit_guess(
        self,
        game_id: str,
        guess: Guess,
    ) -> Guess:
        """Submit a guess.

        ``POST /games/{gameId}/guesses``

        Args:
            game_id: Unique identifier of the game.
            guess: Guess to send.
        """
        response = await self.api_client.call_api(
            "post",
            "/games/{gameId}/guesses",
            path_params={
                "gameId": game_id,
            },
            json=guess.to_request_body(),
        )
        return Guess.model_validate(response.json())

    async def get_guess(
        self,
        game_id: str,
        guess_id: str,
    ) -> Guess:
        """Get a guess.

        ``GET /games/{gameId}/guesses/{guessId}``

        Args:
            game_id: Unique identifier of the game.
            guess_id: Unique identifier of the guess.
        """
        response = await self.api_client.call_api(
            "get",
            "/games/{gameId}/guesses/{guessId}",
            path_params={
                "gameId": game_id,
                "guessId": guess_id,
            },
        )
        return Guess.model_validate(response.json())
