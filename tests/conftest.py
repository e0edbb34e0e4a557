"""Shared fixtures for the Codebreaker client and generator tests.

Unit tests talk to :class:`FakeCodebreaker` through ``httpx.MockTransport``.
Integration tests need a live service at CODEBREAKER_TEST_URL and are
skipped when it cannot be reached.
"""

from __future__ import annotations

import itertools
import json
import os
from typing import Any

import httpx
import pytest

from codebreaker.api_client import ApiClient, Configuration
from codebreaker.service.codebreaker_service import CodebreakerService
from codebreaker.viewmodel import GameViewModel
from codebreaker_codegen.config import GeneratorConfig
from codebreaker_codegen.context_builder import build_context
from codebreaker_codegen.loader import SPEC_PATH, load_spec

TEST_BASE_URL = "http://testserver/codebreaker"

CODEBREAKER_TEST_URL = os.environ.get(
    "CODEBREAKER_TEST_URL", "http://localhost:8080/codebreaker"
)


# ---------------------------------------------------------------------------
# In-memory service
# ---------------------------------------------------------------------------

class FakeCodebreaker:
    """Scores guesses against a fixed secret, like the real service."""

    CREATED = "2026-02-19T17:04:05Z"

    def __init__(self, secret: str = "ABCD") -> None:
        self.secret = secret
        self.games: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/codebreaker"):
            path = path[len("/codebreaker"):]
        parts = [p for p in path.split("/") if p]
        method = request.method

        if parts == ["games"] and method == "POST":
            return self._start_game(json.loads(request.content))
        if len(parts) < 2 or parts[0] != "games":
            return httpx.Response(404)

        game = self.games.get(parts[1])
        if game is None:
            return httpx.Response(404, json={"message": "No game with this id"})
        if len(parts) == 2 and method == "GET":
            return httpx.Response(200, json=game)
        if len(parts) == 2 and method == "DELETE":
            del self.games[parts[1]]
            return httpx.Response(204)
        if parts[2:] == ["guesses"] and method == "POST":
            return self._submit_guess(game, json.loads(request.content))
        if len(parts) == 4 and parts[2] == "guesses" and method == "GET":
            for guess in game["guesses"]:
                if guess["id"] == parts[3]:
                    return httpx.Response(200, json=guess)
        return httpx.Response(404)

    def _start_game(self, body: dict[str, Any]) -> httpx.Response:
        pool = body.get("pool", "")
        length = body.get("length", 0)
        if not pool or not 1 <= length <= 20:
            return httpx.Response(400, json={"message": "Invalid pool or length"})
        game_id = f"game{next(self._ids)}"
        self.games[game_id] = {
            "id": game_id,
            "created": self.CREATED,
            "pool": pool,
            "length": length,
            "solved": False,
            "text": None,
            "guesses": [],
        }
        return httpx.Response(201, json=self.games[game_id])

    def _submit_guess(self, game: dict[str, Any], body: dict[str, Any]) -> httpx.Response:
        text = body.get("text", "")
        if game["solved"]:
            return httpx.Response(409, json={"message": "Game already solved"})
        if len(text) != game["length"] or any(c not in game["pool"] for c in text):
            return httpx.Response(400, json={"message": "Invalid guess"})

        exact = sum(1 for a, b in zip(text, self.secret) if a == b)
        common = sum(min(text.count(c), self.secret.count(c)) for c in set(text))
        guess = {
            "id": f"{game['id']}-guess{len(game['guesses']) + 1}",
            "created": self.CREATED,
            "text": text,
            "exactMatches": exact,
            "nearMatches": common - exact,
            "solution": text == self.secret,
        }
        game["guesses"].append(guess)
        if guess["solution"]:
            game["solved"] = True
            game["text"] = self.secret
        return httpx.Response(201, json=guess)


@pytest.fixture
def fake_service() -> FakeCodebreaker:
    return FakeCodebreaker()


@pytest.fixture
async def api_client(fake_service):
    """ApiClient routed to the in-memory service, without retry delays."""
    client = ApiClient(
        Configuration(base_url=TEST_BASE_URL, initial_delay=0),
        transport=httpx.MockTransport(fake_service.handler),
    )
    yield client
    await client.close()


@pytest.fixture(autouse=True)
def reset_shared_instances(monkeypatch):
    """Each test starts without a shared service or view model."""
    monkeypatch.setattr(CodebreakerService, "_instance", None)
    monkeypatch.setattr(GameViewModel, "_instance", None)


# ---------------------------------------------------------------------------
# Generator inputs
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def spec() -> dict[str, Any]:
    return load_spec()


@pytest.fixture(scope="session")
def generator_config() -> GeneratorConfig:
    return GeneratorConfig(input_spec=SPEC_PATH)


@pytest.fixture(scope="session")
def context(spec, generator_config) -> dict[str, Any]:
    return build_context(spec, generator_config)


# ---------------------------------------------------------------------------
# Live service: skip integration tests when it is unreachable
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def codebreaker_available():
    """Skip integration tests if no service answers at CODEBREAKER_TEST_URL."""
    try:
        httpx.get(CODEBREAKER_TEST_URL, timeout=5)
    except httpx.RequestError:
        pytest.skip(f"Codebreaker not reachable at {CODEBREAKER_TEST_URL}")


@pytest.fixture
async def live_client(codebreaker_available):
    client = ApiClient(Configuration(base_url=CODEBREAKER_TEST_URL, max_retries=1))
    yield client
    await client.close()
