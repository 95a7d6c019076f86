import pytest

from scoreboard_api.errors import (
    AppError,
    InvalidCallbackInfoError,
    InvalidExchangeTokenError,
    InvalidRefreshTokenError,
    PermissionDeniedError,
    Problem,
    ProviderNotFoundError,
    error_handler,
)


@pytest.mark.parametrize(
    "error, status, detail",
    [
        (InvalidRefreshTokenError(), 404, "refresh token not found"),
        (ProviderNotFoundError(), 404, "provider not found"),
        (InvalidExchangeTokenError(), 400, "invalid exchange token"),
        (InvalidCallbackInfoError(), 400, "invalid callback info"),
        (PermissionDeniedError(), 403, "permission denied"),
    ],
)
def test_known_errors_map_to_problems(error, status, detail):
    problem = error_handler(error)
    assert problem.status == status
    assert problem.detail == detail


def test_default_messages():
    assert str(InvalidRefreshTokenError()) == "invalid refresh token"
    assert str(PermissionDeniedError()) == "permission denied"
    assert str(ProviderNotFoundError("custom")) == "custom"


def test_wrapped_error_is_found_through_cause():
    try:
        try:
            raise PermissionDeniedError()
        except PermissionDeniedError as inner:
            raise RuntimeError("outer") from inner
    except RuntimeError as outer:
        problem = error_handler(outer)
    assert problem.status == 403
    assert problem.detail == "permission denied"


def test_unknown_error_has_no_mapping():
    assert error_handler(ValueError("boom")) is None
    assert error_handler(AppError()) is None


def test_problem_to_dict_round_trip():
    problem = error_handler(InvalidExchangeTokenError())
    data = problem.to_dict()
    assert Problem(**data) == problem
    assert data["type"] == "about:blank"