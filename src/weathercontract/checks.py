# independent assertion strategies over a CapturedResponse
# each check raises a ContractViolation subclass, SoftAssertions collects them
# so one scenario reports every failing check, not only the first

from __future__ import annotations
import json
import logging
from typing import Any, List, Optional
from .errors import (
    ContractViolation,
    FormatMismatchError,
    MalformedPayloadError,
    MultipleFailuresError,
    StatusMismatchError,
    TemperatureOutOfRangeError,
)
from .models import CapturedResponse, ErrorPayload, Main, WeatherRecord

logger = logging.getLogger(__name__)


def assert_status(resp: CapturedResponse, expected: int) -> None:
    if resp.status_code != expected:
        raise StatusMismatchError(expected=expected, actual=resp.status_code, raw_body=resp.raw_body)


def _load_json(resp: CapturedResponse) -> Any:
    try:
        return json.loads(resp.raw_body)
    except ValueError as exc:
        raise MalformedPayloadError(f"invalid JSON ({exc})", resp.raw_body) from exc


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_weather_record(resp: CapturedResponse) -> WeatherRecord:
    # shape: {"main": {"temp": 21.3, ...}, "name": "...", "weather": [{"description": "..."}]}
    data = _load_json(resp)
    if not isinstance(data, dict) or not isinstance(data.get("main"), dict):
        raise MalformedPayloadError("missing 'main' object", resp.raw_body)

    main = data["main"]
    temp = _number(main.get("temp"))
    if temp is None:
        raise MalformedPayloadError(f"'main.temp' is not a number (got {main.get('temp')!r})", resp.raw_body)

    description = None
    weather = data.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        description = weather[0].get("description")

    return WeatherRecord(main=Main(temp=temp), name=data.get("name"), description=description)


def assert_parsable(resp: CapturedResponse) -> WeatherRecord:
    record = parse_weather_record(resp)
    resp.parsed_body = record
    return record


def _place(record: WeatherRecord) -> str:
    # "Sremska Mitrovica, broken clouds" when the payload carries them
    parts = [p for p in (record.name, record.description) if p]
    return f" at {', '.join(parts)}" if parts else ""


def assert_temperature_in_range(resp: CapturedResponse, low: float, high: float, scale: str = "") -> None:
    record = resp.parsed_body if resp.parsed_body is not None else assert_parsable(resp)
    temp = record.main.temp
    unit = f" in {scale}" if scale else ""
    where = _place(record)

    # exclusive on both ends, written as inclusion so NaN fails
    if not temp > low:
        raise TemperatureOutOfRangeError(
            f"Temperature does not look good{unit}{where} (it's too low: {temp}, expected > {low}), "
            "is it end of the world or conversion does not work?",
            temp=temp, low=low, high=high,
        )
    if not temp < high:
        raise TemperatureOutOfRangeError(
            f"Temperature does not look good{unit}{where} (it's too high: {temp}, expected < {high}), "
            "is it end of the world or conversion does not work?",
            temp=temp, low=low, high=high,
        )


def assert_body_starts_with(resp: CapturedResponse, prefix: str) -> None:
    if not resp.raw_body.startswith(prefix):
        raise FormatMismatchError(prefix=prefix, raw_body=resp.raw_body)


def assert_error_payload(resp: CapturedResponse) -> ErrorPayload:
    # error bodies look like {"cod": "400", "message": "wrong latitude"}
    data = _load_json(resp)
    if not isinstance(data, dict) or "cod" not in data:
        raise MalformedPayloadError("error body has no 'cod'", resp.raw_body)
    message = data.get("message")
    if not isinstance(message, str) or not message.strip():
        raise MalformedPayloadError("error body has no 'message'", resp.raw_body)
    return ErrorPayload(cod=str(data["cod"]), message=message)


class SoftAssertions:
    """Runs several checks without short-circuiting.

    Use ``check`` to call an assertion; ContractViolations are recorded and
    everything else propagates. On exit a single failure is re-raised as is,
    several are wrapped in MultipleFailuresError.
    """

    def __init__(self) -> None:
        self.failures: List[ContractViolation] = []

    def check(self, func, *args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except ContractViolation as exc:
            logger.debug("check %s failed: %s", getattr(func, "__name__", func), exc)
            self.failures.append(exc)
            return None

    def __enter__(self) -> "SoftAssertions":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            return False
        if len(self.failures) == 1:
            raise self.failures[0]
        if self.failures:
            raise MultipleFailuresError(self.failures)
        return False
