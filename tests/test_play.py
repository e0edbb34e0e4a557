"""Tests for the interactive ``python -m codebreaker`` client."""

import logging

import httpx
import pytest

from codebreaker.__main__ import build_parser, format_guess, play
from codebreaker.logconfig import configure_logging
from codebreaker.model import Guess
from codebreaker.palette import Palette


def scripted(*lines):
    """read_line replacement that answers prompts from a script, then EOF."""
    pending = list(lines)

    def read_line(prompt: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read_line


@pytest.fixture(autouse=True)
def default_environment(monkeypatch):
    for name in ("BASE_URL", "TIMEOUT", "MAX_RETRIES", "RETRY_DELAY", "LOG_HTTP"):
        monkeypatch.delenv(f"CODEBREAKER_{name}", raising=False)


class TestPlay:
    """Test complete games against the in-memory service."""

    async def test_solves_game(self, fake_service, capsys):
        args = build_parser().parse_args([])
        transport = httpx.MockTransport(fake_service.handler)

        assert await play(args, transport, scripted("ABCE", "ABCD")) == 0

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "Game game1: 4 characters from A B C D E F",
            "ABCE  exact=3 near=0  (A B C E)",
            "ABCD  exact=4 near=0  (A B C D)",
            "Solved in 2 guesses.",
        ]
        assert str(fake_service.requests[0].url) == "http://localhost:8080/codebreaker/games"

    async def test_rejects_malformed_input_locally(self, fake_service, capsys):
        args = build_parser().parse_args([])
        transport = httpx.MockTransport(fake_service.handler)

        assert await play(args, transport, scripted("AB", "ABCZ", "ABCD")) == 0

        err = capsys.readouterr().err
        assert err.count("A guess is 4 characters from ABCDEF.") == 2
        assert len(fake_service.games["game1"]["guesses"]) == 1

    async def test_end_of_input(self, fake_service):
        args = build_parser().parse_args([])
        transport = httpx.MockTransport(fake_service.handler)
        assert await play(args, transport, scripted("ABCE")) == 1

    async def test_start_failure(self, capsys):
        args = build_parser().parse_args(["--base-url", "http://down.test/codebreaker"])
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        assert await play(args, transport, scripted()) == 1
        assert "error: HTTP 503" in capsys.readouterr().err

    async def test_names_and_base_url(self, fake_service, capsys):
        args = build_parser().parse_args(
            [
                "--pool", "RGBY",
                "--length", "2",
                "--names", "Red, Green, Blue, Yellow",
                "--base-url", "http://example.test/codebreaker",
            ]
        )
        fake_service.secret = "RG"
        transport = httpx.MockTransport(fake_service.handler)

        assert await play(args, transport, scripted("RG")) == 0
        out = capsys.readouterr().out
        assert "2 characters from Red Green Blue Yellow" in out
        assert "(Red Green)" in out
        assert fake_service.requests[0].url.host == "example.test"

    async def test_solution_ends_game_when_reload_fails(self, fake_service, monkeypatch, capsys):
        args = build_parser().parse_args([])
        transport = httpx.MockTransport(fake_service.handler)
        submit = fake_service._submit_guess

        def submit_and_forget(game, body):
            response = submit(game, body)
            del fake_service.games[game["id"]]
            return response

        monkeypatch.setattr(fake_service, "_submit_guess", submit_and_forget)

        assert await play(args, transport, scripted("ABCD", "ABCD")) == 0

        captured = capsys.readouterr()
        assert captured.out.splitlines()[-1] == "Solved in 1 guesses."
        assert "error: HTTP 404" in captured.err
        assert [r.method for r in fake_service.requests] == ["POST", "POST", "GET"]


class TestHelpers:
    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert (args.pool, args.length, args.names, args.base_url, args.log_http) == (
            "ABCDEF", 4, "", None, False,
        )

    def test_format_guess(self):
        guess = Guess(text="AB", exact_matches=1, near_matches=1)
        assert format_guess(guess, Palette.from_settings("AB", "Amber,Blue")) == (
            "AB  exact=1 near=1  (Amber Blue)"
        )

    def test_configure_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        try:
            configure_logging("DEBUG")
            assert root.level == logging.DEBUG
            assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in handlers:
                root.addHandler(handler)
            root.setLevel(level)
