from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest

from rpiforecast.common.enums import FailureKind
from rpiforecast.display import ConsoleForecastView, ForecastView, MockView
from rpiforecast.weather.collection import ForecastCollection
from rpiforecast.weather.decoder import decode_forecast
from rpiforecast.weather.fetcher import PollingFetcher


@pytest.fixture
def output() -> list[str]:
    return []


@pytest.fixture
def view(output: list[str]) -> ConsoleForecastView:
    # Literal formats keep the output independent of the local timezone
    return ConsoleForecastView(echo=output.append, time_format="T", date_format="D")


@pytest.fixture
def sample_collection(sample_body: bytes) -> ForecastCollection:
    return ForecastCollection(decode_forecast(sample_body))


def test_views_satisfy_protocol(view: ConsoleForecastView) -> None:
    assert isinstance(view, ForecastView)
    assert isinstance(MockView(), ForecastView)


def test_render_forecast(view: ConsoleForecastView, sample_collection: ForecastCollection) -> None:
    lines = view.render_forecast(sample_collection).splitlines()

    assert lines[0] == "Ulm - D"
    assert lines[1] == "Now: 4°C broken clouds, wind 3.6 m/s, rain chance 12%"
    assert len(lines) == 5
    assert lines[2] == "  T  6°C (6°C/6°C)  Rain  64%  rain 1.3 mm"
    assert lines[3].startswith("  T  2°C (2°C/2°C)  Snow  80%  snow 0.")
    assert lines[4] == "  T  0°C (0°C/0°C)  Clear"


def test_slot_count_limits_slices(output: list[str], sample_collection: ForecastCollection) -> None:
    view = ConsoleForecastView(echo=output.append, slot_count=1, time_format="T", date_format="D")

    view.show_forecast(sample_collection)

    assert len(output) == 1
    assert len(output[0].splitlines()) == 3


def test_empty_collection(view: ConsoleForecastView, output: list[str]) -> None:
    view.show_forecast(ForecastCollection())
    assert output == ["No forecast data yet"]


def test_show_error(view: ConsoleForecastView, output: list[str]) -> None:
    view.show_error(FailureKind.DECODE, "Response is not valid JSON")
    assert output == [
        "Weather update failed (decode): Response is not valid JSON - showing last forecast"
    ]


def test_attach_follows_fetcher(
    view: ConsoleForecastView,
    output: list[str],
    fetcher: PollingFetcher,
    session: Mock,
    dispatcher: Any,
    sample_body: bytes,
    response_factory: Callable[..., Mock],
) -> None:
    view.attach(fetcher)
    session.get.side_effect = [
        response_factory(content=sample_body),
        response_factory(401, content=b"", reason="Unauthorized"),
    ]

    fetcher.tick()
    dispatcher.run(0)
    fetcher.tick()
    dispatcher.run(1)

    assert len(output) == 2
    assert output[0].startswith("Ulm - D")
    assert output[1] == (
        "Weather update failed (network): Invalid or missing API key - showing last forecast"
    )


def test_mock_view_records_calls(sample_collection: ForecastCollection) -> None:
    view = MockView()
    view.show_forecast(sample_collection)
    view.show_error(FailureKind.NETWORK, "offline")

    assert view.forecast_calls == [4]
    assert view.error_calls == [(FailureKind.NETWORK, "offline")]

    view.reset_call_history()
    assert view.forecast_calls == []
    assert view.error_calls == []


def test_render_survives_out_of_range_timestamp(view: ConsoleForecastView) -> None:
    collection = ForecastCollection(decode_forecast(b'{"list": [{"dt": 99999999999999999}]}'))
    assert view.render_forecast(collection).splitlines()[0] == "D"
