"""Errors raised while loading inputs for code generation."""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for generator failures."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.file_path:
            return f"{self.file_path}: {self.message}"
        return self.message


class SpecLoadError(CodegenError):
    """Raised when the OpenAPI document is missing or malformed."""


class ConfigError(CodegenError):
    """Raised when the generator configuration is missing or invalid."""
