"""Display names and style classes for the characters of a code pool."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, Iterator

_LIST_DELIMITER = re.compile(r"\s*,\s*")


@dataclass(frozen=True)
class Symbol:
    """One pool character with its presentation."""

    character: str
    name: str
    style_class: str | None = None

    @property
    def mnemonic(self) -> str:
        """Label whose first character is the keyboard mnemonic, e.g. ``_Red``."""
        return f"_{self.name[:1]}"


def split_list(value: str) -> list[str]:
    """Split a comma-separated setting, skipping empty items."""
    return [item for item in _LIST_DELIMITER.split(value.strip()) if item]


class Palette:
    """Ordered lookup from pool characters to :class:`Symbol`."""

    def __init__(self, symbols: Iterable[Symbol]) -> None:
        self._symbols = {symbol.character: symbol for symbol in symbols}

    @classmethod
    def from_settings(cls, pool: str, names: str = "", style_classes: str = "") -> Palette:
        """Pair pool characters with comma-separated names and style classes.

        A list that is given limits the palette to its length. Without names,
        each character names itself.
        """
        characters = list(pool)
        name_list = split_list(names)
        class_list = split_list(style_classes)

        size = len(characters)
        if name_list:
            size = min(size, len(name_list))
        if class_list:
            size = min(size, len(class_list))

        return cls(
            Symbol(
                character=characters[i],
                name=name_list[i] if name_list else characters[i],
                style_class=class_list[i] if class_list else None,
            )
            for i in range(size)
        )

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, character: object) -> bool:
        return character in self._symbols

    def name(self, character: str) -> str:
        symbol = self._symbols.get(character)
        return symbol.name if symbol else character

    def style_class(self, character: str) -> str | None:
        symbol = self._symbols.get(character)
        return symbol.style_class if symbol else None

    def describe(self, text: str) -> str:
        """Names of the characters in ``text``, space-separated."""
        return " ".join(self.name(character) for character in text)
