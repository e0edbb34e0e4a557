"""Load and parse the Codebreaker OpenAPI document.

Reads spec/openapi.yaml (JSON works too) and extracts paths, schemas and
servers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import SpecLoadError

SPEC_PATH = Path(__file__).parent.parent / "spec" / "openapi.yaml"


def load_spec(path: Path | str | None = None) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    spec_file = Path(path or SPEC_PATH)
    if not spec_file.exists():
        raise SpecLoadError("File not found", str(spec_file))

    try:
        with spec_file.open(encoding="utf-8") as f:
            spec = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SpecLoadError(f"Invalid YAML syntax: {e}", str(spec_file)) from e

    if not isinstance(spec, dict):
        raise SpecLoadError("Document is not a mapping", str(spec_file))

    version = str(spec.get("openapi", ""))
    if not version.startswith("3."):
        raise SpecLoadError(
            f"Unsupported OpenAPI version: {version or 'missing'}", str(spec_file)
        )
    if not isinstance(spec.get("paths"), dict):
        raise SpecLoadError("Document has no paths", str(spec_file))
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    return spec.get("paths", {})


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    return spec.get("components", {}).get("schemas", {})


def get_default_server_url(spec: dict[str, Any]) -> str:
    """Return the first server URL, or an empty string."""
    servers = spec.get("servers") or []
    if not servers:
        return ""
    return str(servers[0].get("url", "")).rstrip("/")


def ref_name(ref: str) -> str:
    """Return the last segment of a $ref pointer."""
    return ref.rsplit("/", 1)[-1]


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the document."""
    if not ref.startswith("#/"):
        raise SpecLoadError(f"Only local references are supported: {ref}")
    node: Any = spec
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        try:
            node = node[part]
        except (KeyError, TypeError) as e:
            raise SpecLoadError(f"Unresolvable reference: {ref}") from e
    return node
