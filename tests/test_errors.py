import pytest

from rpiforecast.common.enums import FailureKind
from rpiforecast.weather.errors import (
    HTTP_ERROR_MAP,
    AuthenticationError,
    ClientError,
    DecodeError,
    DecodeErrorReason,
    HttpStatusError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    WeatherAPIError,
)


def test_weather_api_error_str() -> None:
    err = WeatherAPIError(code=404, message="Not Found")
    assert str(err) == "[404] Not Found"
    assert err.message == "Not Found"
    assert err.kind is FailureKind.NETWORK


@pytest.mark.parametrize(
    "code, expected_type",
    [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (400, ClientError),
        (500, ServerError),
        (503, ServerError),
        (302, HttpStatusError),
    ],
)
def test_from_status_creates_expected_error(
    code: int, expected_type: type[HttpStatusError]
) -> None:
    err = HttpStatusError.from_status(code, "test error")
    assert type(err) is expected_type
    assert err.code == code
    assert err.message == "test error"
    assert err.kind is FailureKind.NETWORK


def test_from_status_message_fallbacks() -> None:
    assert HttpStatusError.from_status(429).message == HTTP_ERROR_MAP[429]
    assert HttpStatusError.from_status(418).message == "HTTP 418"


def test_http_status_flags() -> None:
    assert HttpStatusError.from_status(404).is_client_error
    assert not HttpStatusError.from_status(404).is_server_error
    assert HttpStatusError.from_status(502).is_server_error


def test_network_error_wraps_exception() -> None:
    try:
        raise ConnectionError("BOOM")
    except ConnectionError as e:
        err = NetworkError(message="Connection error", original_error=e)
        assert str(err) == "[0] Connection error"
        assert err.original_error is e
        assert err.kind is FailureKind.NETWORK


def test_decode_error_wraps_exception() -> None:
    try:
        raise ValueError("bad parse")
    except ValueError as e:
        err = DecodeError(DecodeErrorReason.MALFORMED, "Parse error", original_error=e)
        assert str(err) == "[0] Parse error"
        assert err.reason is DecodeErrorReason.MALFORMED
        assert err.kind is FailureKind.DECODE
        assert isinstance(err, WeatherAPIError)
