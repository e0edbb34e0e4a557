"""Typed async client for the Codebreaker service.

The ``model`` and ``service`` packages are generated from spec/openapi.yaml
by ``python -m codebreaker_codegen``; the rest is written by hand.
"""

from .api_client import ApiClient, Configuration
from .exceptions import (
    ApiConnectionError,
    ApiException,
    BadRequestException,
    ConflictException,
    NotFoundException,
    ServiceException,
)

__version__ = "1.0.0"

__all__ = [
    "ApiClient",
    "ApiConnectionError",
    "ApiException",
    "BadRequestException",
    "Configuration",
    "ConflictException",
    "NotFoundException",
    "ServiceException",
]
