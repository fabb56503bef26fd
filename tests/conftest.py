import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from rpiforecast.settings.user import WeatherSettings
from rpiforecast.weather.collection import ForecastCollection
from rpiforecast.weather.fetcher import PollingFetcher

DATA_DIR = Path(__file__).parent / "data"


class RecordingDispatcher:
    """Collects request jobs instead of running them on threads.

    Tests run the jobs explicitly, in whatever order the scenario needs,
    to reproduce late and out-of-order replies deterministically.
    """

    def __init__(self) -> None:
        self.jobs: list[Callable[[], None]] = []

    def __call__(self, job: Callable[[], None]) -> None:
        self.jobs.append(job)

    def run(self, index: int) -> None:
        self.jobs[index]()

    def run_all(self) -> None:
        for job in list(self.jobs):
            job()


def make_response(
    status_code: int = 200,
    payload: Any = None,
    content: bytes | None = None,
    reason: str = "OK",
) -> Mock:
    """Build a fake requests.Response."""
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    if content is None:
        content = json.dumps(payload).encode("utf-8") if payload is not None else b""
    resp.content = content
    resp.text = content.decode("utf-8", errors="replace")
    if payload is not None:
        resp.json.return_value = payload
    else:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    return resp


@pytest.fixture
def sample_body() -> bytes:
    return (DATA_DIR / "forecast_sample.json").read_bytes()


@pytest.fixture
def sample_payload(sample_body: bytes) -> dict[str, Any]:
    return json.loads(sample_body)


@pytest.fixture
def weather_settings() -> WeatherSettings:
    return WeatherSettings(
        api_key="fake-api-key",
        lat=48.400002,
        lon=9.983333,
        refresh_minutes=10,
        request_timeout=5,
    )


@pytest.fixture
def collection() -> ForecastCollection:
    return ForecastCollection()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def session() -> Mock:
    return Mock()


@pytest.fixture
def fetcher(
    collection: ForecastCollection,
    weather_settings: WeatherSettings,
    session: Mock,
    dispatcher: RecordingDispatcher,
) -> PollingFetcher:
    return PollingFetcher(collection, weather_settings, session=session, dispatch=dispatcher)


@pytest.fixture
def response_factory() -> Callable[..., Mock]:
    return make_response


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Drop the handlers configure_logging installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler, logging.NullHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
