# AUTO-GENERATED FROM openapi.yaml (Codebreaker 1.0.0) - DO NOT EDIT MANUALLY

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Guess(BaseModel):
    """A guess submitted against a game."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    READ_ONLY_FIELDS: ClassVar[frozenset[str]] = frozenset({"created", "exact_matches", "id", "near_matches", "solution"})

    id: str | None = Field(
        default=None,
        description="Unique identifier of the guess.",
    )
    created: datetime | None = Field(
        default=None,
        description="When the guess was submitted.",
    )
    text: str = Field(
        min_length=1,
        description="Guessed code.",
    )
    exact_matches: int | None = Field(
        default=None,
        alias="exactMatches",
        ge=0,
        description="Characters in the correct position.",
    )
    near_matches: int | None = Field(
        default=None,
        alias="nearMatches",
        ge=0,
        description="Characters in the code but in the wrong position.",
    )
    solution: bool | None = Field(
        default=None,
        description="Whether this guess matches the secret code.",
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
    def builder(cls) -> GuessBuilder:
        """Return an empty fluent builder."""
        return GuessBuilder()

    def to_builder(self) -> GuessBuilder:
        """Return a builder pre-populated with this instance's values."""
        return GuessBuilder(**self.model_dump(exclude_none=True))


class GuessBuilder:
    """Fluent builder for :class:`Guess`."""

    def __init__(self, **values: Any) -> None:
        self._values: dict[str, Any] = values

    def id(self, id: str | None) -> GuessBuilder:
        self._values["id"] = id
        return self

    def created(self, created: datetime | None) -> GuessBuilder:
        self._values["created"] = created
        return self

    def text(self, text: str) -> GuessBuilder:
        self._values["text"] = text
        return self

    def exact_matches(self, exact_matches: int | None) -> GuessBuilder:
        self._values["exact_matches"] = exact_matches
        return self

    def near_matches(self, near_matches: int | None) -> GuessBuilder:
        self._values["near_matches"] = near_matches
        return self

    def solution(self, solution: bool | None) -> GuessBuilder:
        self._values["solution"] = solution
        return self

    def build(self) -> Guess:
        """Validate the collected values and return the model."""
        return Guess(**self._values)
