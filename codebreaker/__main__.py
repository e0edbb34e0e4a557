"""Entry point: python -m codebreaker

Starts a game against the Codebreaker service and scores guesses read from
stdin until the code is broken.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import sys
from typing import Callable

import httpx

from .api_client import ApiClient, Configuration
from .logconfig import configure_logging
from .model import Guess
from .palette import Palette
from .service.codebreaker_service import CodebreakerService
from .service.games_api import DEFAULT_BASE_URL
from .viewmodel import GameViewModel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codebreaker",
        description="Play Codebreaker against the remote service.",
    )
    parser.add_argument("--pool", default="ABCDEF", help="Characters the code is drawn from")
    parser.add_argument("--length", type=int, default=4, help="Length of the secret code")
    parser.add_argument(
        "--names",
        default="",
        help="Comma-separated display names for the pool characters",
    )
    parser.add_argument("--base-url", help="Service URL (default: CODEBREAKER_BASE_URL)")
    parser.add_argument("--log-http", action="store_true", help="Log every request and response")
    return parser


def format_guess(guess: Guess, palette: Palette) -> str:
    return (
        f"{guess.text}  exact={guess.exact_matches} near={guess.near_matches}"
        f"  ({palette.describe(guess.text)})"
    )


async def play(
    args: argparse.Namespace,
    transport: httpx.AsyncBaseTransport | None = None,
    read_line: Callable[[str], str] = input,
) -> int:
    """Run one game. Returns 0 when the code is broken, 1 otherwise."""
    configuration = Configuration.from_env(default_base_url=DEFAULT_BASE_URL)
    if args.base_url:
        configuration = replace(configuration, base_url=args.base_url)
    if args.log_http:
        configuration = replace(configuration, log_http=True)
    palette = Palette.from_settings(args.pool, args.names)

    def on_guess(guess: Guess | None) -> None:
        if guess is not None:
            print(format_guess(guess, palette))

    def on_error(error: Exception | None) -> None:
        print(f"error: {error}", file=sys.stderr)

    async with ApiClient(configuration, transport=transport) as api_client:
        view_model = GameViewModel(CodebreakerService(api_client))
        view_model.register_guess_observer(on_guess)
        view_model.register_error_observer(on_error)

        await view_model.start_game(args.pool, args.length)
        game = view_model.game
        if game is None:
            return 1
        print(f"Game {game.id}: {game.length} characters from {palette.describe(game.pool)}")

        while not view_model.solved:
            try:
                text = (await asyncio.to_thread(read_line, "guess> ")).strip()
            except EOFError:
                return 1
            if len(text) != game.length or any(c not in game.pool for c in text):
                print(f"A guess is {game.length} characters from {game.pool}.", file=sys.stderr)
                continue
            await view_model.submit_guess(text)
            # The solving guess still ends the game when the reload fails.
            if view_model.guess is not None and view_model.guess.solution:
                break

        guesses = len(view_model.game.guesses or []) if view_model.game else 0
        if not view_model.solved:
            guesses += 1
        print(f"Solved in {guesses} guesses.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("INFO" if args.log_http else "WARNING")
    try:
        return asyncio.run(play(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
