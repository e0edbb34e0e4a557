"""Errors raised by the Codebreaker client."""

from __future__ import annotations

from http import HTTPStatus

import httpx


class ApiException(Exception):
    """The service answered with a non-success status."""

    def __init__(
        self,
        status: int | None = None,
        reason: str | None = None,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status = status
        self.reason = reason
        self.body = body
        self.headers = headers or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.status is None:
            return self.reason or "Request failed"
        message = f"HTTP {self.status} {self.reason or ''}".rstrip()
        if self.body:
            message += f": {self.body}"
        return message

    @classmethod
    def from_response(cls, response: httpx.Response) -> ApiException:
        """Build the most specific exception for a failed response."""
        status = response.status_code
        exc_class = _STATUS_EXCEPTIONS.get(status)
        if exc_class is None:
            exc_class = ServiceException if status >= HTTPStatus.INTERNAL_SERVER_ERROR else ApiException
        return exc_class(
            status=status,
            reason=response.reason_phrase,
            body=response.text,
            headers=dict(response.headers),
        )


class BadRequestException(ApiException):
    """400: the request was rejected, e.g. an invalid pool or guess."""


class NotFoundException(ApiException):
    """404: no game or guess with the requested id."""


class ConflictException(ApiException):
    """409: the request conflicts with the game state, e.g. already solved."""


class ServiceException(ApiException):
    """5xx: the service failed to handle the request."""


class ApiConnectionError(ApiException):
    """The service could not be reached."""

    def __init__(self, message: str) -> None:
        super().__init__(reason=message)


_STATUS_EXCEPTIONS: dict[int, type[ApiException]] = {
    HTTPStatus.BAD_REQUEST: BadRequestException,
    HTTPStatus.NOT_FOUND: NotFoundException,
    HTTPStatus.CONFLICT: ConflictException,
}
