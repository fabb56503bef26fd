"""Decoder for OpenWeather 2.5 /forecast response bodies."""

from __future__ import annotations

import json
import logging
from typing import Any, Final

from rpiforecast.weather.errors import DecodeError, DecodeErrorReason
from rpiforecast.weather.models import CityBlock, ForecastRecord, ForecastSlice

logger: Final = logging.getLogger(__name__)


def decode_forecast(body: bytes | str) -> list[ForecastRecord]:
    """Turn a forecast response body into an ordered list of records.

    Only the batch shape is enforced: the body must be a JSON object with a
    ``list`` array. Everything else is best effort; missing or unusable
    fields become zero values and a missing ``city.name`` becomes "".

    The first decoded slice is the current-conditions record, the rest are
    future slices, all in array order.

    Args:
        body: Raw response body (UTF-8 JSON)

    Returns:
        Records in the order they appear in ``list``

    Raises:
        DecodeError: MALFORMED if the body is not JSON, MISSING_LIST if the
            top-level ``list`` array is absent
    """
    try:
        raw: Any = json.loads(body)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodeError(
            DecodeErrorReason.MALFORMED, f"Malformed JSON: {exc}", exc
        ) from exc

    if not isinstance(raw, dict):
        raise DecodeError(
            DecodeErrorReason.MISSING_LIST,
            f"Expected a JSON object, got {type(raw).__name__}",
        )

    items = raw.get("list")
    if not isinstance(items, list):
        raise DecodeError(
            DecodeErrorReason.MISSING_LIST, "Response has no 'list' array"
        )

    city_name = _city_name(raw.get("city"))

    records: list[ForecastRecord] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("Skipping forecast entry %d: expected object, got %s", index, type(item).__name__)
            continue
        slice_ = ForecastSlice.model_validate(item)
        records.append(slice_.to_record(city_name, is_current=not records))

    logger.debug("Decoded %d forecast records for '%s'", len(records), city_name)
    return records


def _city_name(city: Any) -> str:
    if not isinstance(city, dict) or "name" not in city:
        logger.warning("Forecast response has no city name; using an empty one")
        return ""
    return CityBlock.model_validate(city).name
