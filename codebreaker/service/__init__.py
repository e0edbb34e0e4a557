# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY
"""Operations of the Codebreaker API."""

from .games_api import GamesApi
from .guesses_api import GuessesApi

__all__ = [
    "GamesApi",
    "GuessesApi",
]
