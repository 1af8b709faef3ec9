# value objects shared by the builder, executor, checks and runner
# everything a scenario needs is fixed before execution and never mutated

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

DEFAULT_TIMEOUT = 30.0

STANDARD = "standard"
METRIC = "metric"
IMPERIAL = "imperial"
UNITS = (STANDARD, METRIC, IMPERIAL)

XML = "xml"
HTML = "html"

# exclusive bounds, anything outside means the conversion is broken
TEMPERATURE_BOUNDS: Dict[str, Tuple[float, float]] = {
    STANDARD: (193, 353),
    METRIC: (-85, 85),
    IMPERIAL: (-112, 176),
}

SCALE_NAMES = {
    STANDARD: "Kelvins",
    METRIC: "Celsius",
    IMPERIAL: "Fahrenheit",
}

BODY_PREFIXES = {
    XML: "<?xml version=",
    HTML: "<!DOCTYPE html>\n<html lang",
}


class _ConfiguredToken:
    # marker for "send the token from EndpointConfig"
    def __repr__(self) -> str:
        return "CONFIGURED_TOKEN"


CONFIGURED_TOKEN = _ConfiguredToken()


@dataclass(frozen=True)
class EndpointConfig:
    base_url: str
    token: str
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # keep the token out of tracebacks and logs
        return f"EndpointConfig(base_url={self.base_url!r}, token='***', timeout={self.timeout!r})"


@dataclass(frozen=True)
class RequestCase:
    # lat/lon are usually floats, but anything is passed through so the
    # remote API's own validation gets exercised
    lat: Any
    lon: Any
    expected_status: int = 200
    # CONFIGURED_TOKEN -> config token, str -> override, None -> appid omitted
    token: Union[str, None, _ConfiguredToken] = CONFIGURED_TOKEN
    units: Optional[str] = None
    lang: Optional[str] = None
    mode: Optional[str] = None


@dataclass(frozen=True)
class Main:
    temp: float


@dataclass(frozen=True)
class WeatherRecord:
    main: Main
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ErrorPayload:
    cod: str
    message: str


@dataclass
class CapturedResponse:
    status_code: int
    raw_body: str
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed: float = 0.0
    # filled in by checks.assert_parsable
    parsed_body: Optional[WeatherRecord] = None


@dataclass(frozen=True)
class Scenario:
    name: str
    family: str
    case: RequestCase
    parse_body: bool = False
    error_payload: bool = False
    temperature_bounds: Optional[Tuple[float, float]] = None
    body_prefix: Optional[str] = None


@dataclass
class ScenarioResult:
    scenario: Scenario
    passed: bool
    failures: List[str] = field(default_factory=list)
    status_code: Optional[int] = None
