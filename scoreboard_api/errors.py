"""Application errors and their mapping to HTTP problem details."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from http import HTTPStatus


class AppError(Exception):
    """Base class for errors raised by the application."""

    default_message = "application error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidRefreshTokenError(AppError):
    default_message = "invalid refresh token"


class ProviderNotFoundError(AppError):
    default_message = "provider not found"


class InvalidExchangeTokenError(AppError):
    default_message = "invalid exchange token"


class InvalidCallbackInfoError(AppError):
    default_message = "invalid callback info"


class PermissionDeniedError(AppError):
    default_message = "permission denied"


@dataclass(frozen=True)
class Problem:
    """An HTTP problem detail document."""

    title: str
    status: int
    detail: str
    type: str = "about:blank"

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type,
            "title": self.title,
            "status": self.status,
            "detail": self.detail,
        }


def _problem(status: HTTPStatus) -> Callable[[str], Problem]:
    def build(detail: str) -> Problem:
        return Problem(title=status.phrase, status=int(status), detail=detail)

    return build


_not_found = _problem(HTTPStatus.NOT_FOUND)
_validation = _problem(HTTPStatus.BAD_REQUEST)
_forbidden = _problem(HTTPStatus.FORBIDDEN)

_MAPPING: tuple[tuple[type[BaseException], Callable[[str], Problem], str], ...] = (
    (InvalidRefreshTokenError, _not_found, "refresh token not found"),
    (ProviderNotFoundError, _not_found, "provider not found"),
    (InvalidExchangeTokenError, _validation, "invalid exchange token"),
    (InvalidCallbackInfoError, _validation, "invalid callback info"),
    (PermissionDeniedError, _forbidden, "permission denied"),
)


def _error_chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__


def error_handler(err: BaseException) -> Problem | None:
    """Map an error, or any error it was raised from, to a problem.

    Returns None when the error has no application-specific mapping.
    """
    for candidate in _error_chain(err):
        for error_type, build, detail in _MAPPING:
            if isinstance(candidate, error_type):
                return build(detail)
    return None