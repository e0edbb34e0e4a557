"""Python names for OpenAPI operations, schemas, tags and properties.

Operation methods use the operationId in snake_case. Operations without one
are named {verb}_{resources} from the HTTP method and the path. A resource
scoped by a following {param} is singular; the last resource is plural for
listings and singular otherwise:

  operationId startGame                  -> start_game
  GET    /games                          -> list_games
  POST   /games                          -> create_game
  GET    /games/{gameId}                 -> get_game
  DELETE /games/{gameId}                 -> delete_game
  GET    /games/{gameId}/guesses         -> list_game_guesses
  POST   /games/{gameId}/guesses         -> create_game_guess
  GET    /games/{gameId}/guesses/{id}    -> get_game_guess
"""

from __future__ import annotations

import keyword
import re

_VERBS: dict[str, str] = {
    "get": "get",
    "post": "create",
    "put": "update",
    "patch": "update",
    "delete": "delete",
}

_IRREGULAR_PLURALS: dict[str, str] = {
    "guess": "guesses",
    "match": "matches",
}

_IRREGULAR_SINGULARS = {plural: word for word, plural in _IRREGULAR_PLURALS.items()}

# Names that would shadow BaseModel attributes, builder methods or `self`.
_RESERVED = {
    "build",
    "builder",
    "construct",
    "copy",
    "dict",
    "fields",
    "json",
    "schema",
    "self",
    "to_builder",
    "to_request_body",
    "validate",
}

_API_PREFIX = re.compile(r"^/api(/v\d+)?(?=/|$)")


def singular(word: str) -> str:
    if word in _IRREGULAR_SINGULARS:
        return _IRREGULAR_SINGULARS[word]
    if word.endswith("ies"):
        return f"{word[:-3]}y"
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def plural(word: str) -> str:
    word = singular(word)
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word.endswith("y") and word[-2:-1] not in ("a", "e", "o", "u"):
        return f"{word[:-1]}ies"
    return f"{word}s"


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def _sanitize_segment(segment: str) -> str:
    """Lowercase, underscore-separated form of an arbitrary name."""
    name = re.sub(r"[.\- ]", "_", camel_to_snake(segment))
    name = re.sub(r"[^a-z0-9_]", "", name)
    return re.sub(r"_+", "_", name).strip("_")


def to_identifier(name: str) -> str:
    """Snake-case identifier that is safe as a field, argument or method name."""
    ident = _sanitize_segment(name) or "value"
    if ident[0].isdigit():
        ident = f"field_{ident}"
    if keyword.iskeyword(ident) or ident in _RESERVED:
        ident += "_"
    return ident


def to_class_name(name: str) -> str:
    """PascalCase class name for a schema or tag."""
    words = re.split(r"[^0-9A-Za-z]+", name)
    class_name = "".join(word[:1].upper() + word[1:] for word in words if word)
    if not class_name:
        return "Model"
    if class_name[0].isdigit():
        class_name = f"Model{class_name}"
    return class_name


def to_module_name(class_name: str) -> str:
    """Module name for a generated class (Game -> game, GamesApi -> games_api)."""
    return to_identifier(class_name)


def api_class_name(tag: str) -> str:
    """Class name of the API that groups operations with this tag."""
    return f"{to_class_name(tag)}Api"


def _path_segments(path: str) -> list[str]:
    """Non-empty path segments after an optional /api or /api/vN prefix."""
    return [s for s in _API_PREFIX.sub("", path).split("/") if s]


def _is_param(segment: str) -> bool:
    return segment.startswith("{")


def path_resource(path: str) -> str | None:
    """First literal segment of a path, used to group untagged operations."""
    for segment in _path_segments(path):
        if not _is_param(segment):
            return _sanitize_segment(segment)
    return None


def build_operation_name(method: str, path: str, operation_id: str | None = None) -> str:
    """Method name from the operationId, or from HTTP method and path."""
    if operation_id:
        return to_identifier(operation_id)

    method = method.lower()
    segments = _path_segments(path)
    on_item = bool(segments) and _is_param(segments[-1])
    verb = "list" if method == "get" and not on_item else _VERBS.get(method, method)

    literal = [i for i, segment in enumerate(segments) if not _is_param(segment)]
    if not literal:
        return to_identifier(f"{verb}_root")

    words = []
    for i in literal:
        word = _sanitize_segment(segments[i])
        if i != literal[-1]:
            scoped = i + 1 < len(segments) and _is_param(segments[i + 1])
            words.append(singular(word) if scoped else word)
        elif verb == "list":
            words.append(plural(word))
        elif on_item or method == "post":
            words.append(singular(word))
        else:
            words.append(word)
    return to_identifier("_".join([verb, *words]))
