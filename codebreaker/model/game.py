# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .guess import Guess


class Game(BaseModel):
    """A Codebreaker game."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    READ_ONLY_FIELDS: ClassVar[frozenset[str]] = frozenset({"created", "guesses", "id", "solved", "text"})

    id: str | None = Field(
        default=None,
        description="Unique identifier of the game.",
    )
    created: datetime | None = Field(
        default=None,
        description="When the game was started.",
    )
    pool: str = Field(
        min_length=1,
        description="Characters the secret code is drawn from.",
    )
    length: int = Field(
        ge=1,
        le=20,
        description="Length of the secret code.",
    )
    solved: bool | None = Field(
        default=None,
        description="Whether a guess has matched the secret code.",
    )
    text: str | None = Field(
        default=None,
        description="The secret code, revealed once the game is solved.",
    )
    guesses: list[Guess] | None = Field(
        default=None,
        description="Guesses submitted so far, oldest first.",
    )

    def to_request_body(self) -> dict[str, Any]:
        """Serialize for a request, dropping read-only and unset fields."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=set(self.READ_ONLY_FIELDS),
        )

    @classmethod
    def builder(cls) -> GameBuilder:
        """Return an empty fluent builder."""
        return GameBuilder()

    def to_builder(self) -> GameBuilder:
        """Return a builder pre-populated with this instance's values."""
        return GameBuilder(**self.model_dump(exclude_none=True))


class GameBuilder:
    """Fluent builder for :class:`Game`."""

    def __init__(self, **values: Any) -> None:
        self._values: dict[str, Any] = values

    def id(self, id: str | None) -> GameBuilder:
        self._values["id"] = id
        return self

    def created(self, created: datetime | None) -> GameBuilder:
        self._values["created"] = created
        return self

    def pool(self, pool: str) -> GameBuilder:
        self._values["pool"] = pool
        return self

    def length(self, length: int) -> GameBuilder:
        self._values["length"] = length
        return self

    def solved(self, solved: bool | None) -> GameBuilder:
        self._values["solved"] = solved
        return self

    def text(self, text: str | None) -> GameBuilder:
        self._values["text"] = text
        return self

    def guesses(self, guesses: list[Guess] | None) -> GameBuilder:
        self._values["guesses"] = guesses
        return self

    def build(self) -> Game:
        """Validate the collected values and return the model."""
        return Game(**self._values)
