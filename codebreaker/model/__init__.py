# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY
"""Models of the Codebreaker API."""

from .game import Game, GameBuilder
from .guess import Guess, GuessBuilder

__all__ = [
    "Game",
    "GameBuilder",
    "Guess",
    "GuessBuilder",
]
