"""Generator configuration.

Loaded from codegen.yaml and validated with Pydantic. Relative paths in the
file resolve against the directory that holds it.
"""

from __future__ import annotations

import keyword
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
import yaml

from .errors import ConfigError

CONFIG_PATH = Path(__file__).parent.parent / "codegen.yaml"

_PATH_FIELDS = ("input_spec", "output_dir", "tests_dir")


class GeneratorConfig(BaseModel):
    """Options consumed by the code generator."""

    model_config = ConfigDict(extra="forbid")

    input_spec: Path = Path("spec/openapi.yaml")
    output_dir: Path = Path(".")
    tests_dir: Path = Path("tests/generated")
    library: Literal["httpx"] = "httpx"

    api_package: str = "codebreaker.service"
    model_package: str = "codebreaker.model"
    invoker_package: str = "codebreaker"

    use_records: bool = True
    generate_builders: bool = True
    date_library: Literal["datetime", "string"] = "datetime"

    generate_models: bool = True
    generate_apis: bool = True
    generate_model_tests: bool = False
    generate_api_tests: bool = False

    @field_validator("api_package", "model_package", "invoker_package")
    @classmethod
    def _check_package(cls, value: str) -> str:
        parts = value.split(".")
        if not all(part.isidentifier() and not keyword.iskeyword(part) for part in parts):
            raise ValueError(f"{value!r} is not a dotted Python module path")
        return value

    def resolve_paths(self, base_dir: Path) -> GeneratorConfig:
        """Return a copy with relative paths anchored at base_dir."""
        updates = {}
        for name in _PATH_FIELDS:
            path = getattr(self, name)
            if not path.is_absolute():
                updates[name] = base_dir / path
        return self.model_copy(update=updates)


def package_dir(root: Path, package: str) -> Path:
    """Directory of a dotted package below root."""
    return root.joinpath(*package.split("."))


def format_validation_error(error: ValidationError) -> str:
    """Flatten a Pydantic error into one readable line."""
    messages = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(messages)


def load_config(path: Path | str | None = None) -> GeneratorConfig:
    """Load codegen.yaml and resolve its paths."""
    config_file = Path(path or CONFIG_PATH)
    if not config_file.exists():
        raise ConfigError("File not found", str(config_file))

    try:
        with config_file.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}", str(config_file)) from e

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration is not a mapping", str(config_file))

    try:
        config = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(format_validation_error(e), str(config_file)) from e
    return config.resolve_paths(config_file.parent.resolve())
