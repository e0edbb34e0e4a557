# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY

from __future__ import annotations

from codebreaker.api_client import ApiClient, Configuration
from codebreaker.model.game import Game

DEFAULT_BASE_URL = "http://localhost:8080/codebreaker"


class GamesApi:
    """Game lifecycle."""

    def __init__(self, api_client: ApiClient | None = None) -> None:
        if api_client is None:
            api_client = ApiClient(Configuration.from_env(default_base_url=DEFAULT_BASE_URL))
        self.api_client = api_client

    async def start_game(
        self,
        game: Game,
    ) -> Game:
        """Start a new game.

        ``POST /games``

        Args:
            game: Game to send.
        """
        response = await self.api_client.call_api(
            "post",
            "/games",
            json=game.to_request_body(),
        )
        return Game.model_validate(response.json())

    async def get_game(
        self,
        game_id: str,
    ) -> Game:
        """Get a game.

        ``GET /games/{gameId}``

        Args:
            game_id: Unique identifier of the game.
        """
        response = await self.api_client.call_api(
            "get",
            "/games/{gameId}",
            path_params={
                "gameId": game_id,
            },
        )
        return Game.model_validate(response.json())

    async def delete_game(
        self,
        game_id: str,
    ) -> None:
        """Delete a game.

        ``DELETE /games/{gameId}``

        Args:
            game_id: Unique identifier of the game.
        """
        await self.api_client.call_api(
            "delete",
            "/games/{gameId}",
            path_params={
                "gameId": game_id,
            },
        )
