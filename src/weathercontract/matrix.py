# the case matrix: declarative tables of scenarios, one generic runner consumes them
# expected 400s are observed API behaviour, the harness does no geographic validation itself

from __future__ import annotations
from typing import Dict, Iterable, List, Tuple
from .models import (
    BODY_PREFIXES,
    HTML,
    METRIC,
    RequestCase,
    Scenario,
    TEMPERATURE_BOUNDS,
    UNITS,
    XML,
)

COORDINATES = "coordinates"
TOKEN = "token"
UNITS_FAMILY = "units"
LANGUAGE = "language"
MODE = "mode"
FAMILIES = (COORDINATES, TOKEN, UNITS_FAMILY, LANGUAGE, MODE)

# reference location for the non-coordinate families
REF_LAT, REF_LON = 44.9855, 19.6214

VALID_COORDINATES: List[Tuple[float, float]] = [
    (44.9855, 19.6214),
    (0, 0),
]

OUT_OF_RANGE_COORDINATES: List[Tuple[float, float]] = [
    (600, 44.9855),
    (19.6214, 485),
    (500, 500),
]

# label -> token; None means appid is not sent at all
INVALID_TOKENS: Dict[str, object] = {
    "invalid": "invalid",
    "empty": "",
    "0000": "0000",
    "minus-1": "-1",
    "percent-12": "%12",
    "absent": None,
}

LANGUAGES = ("hr", "sr")
RESPONSE_MODES = (XML, HTML)


def _coord_label(lat, lon) -> str:
    return f"{lat:g}-{lon:g}"


def coordinate_scenarios() -> List[Scenario]:
    rows = [
        Scenario(
            name=f"coordinates-{_coord_label(lat, lon)}",
            family=COORDINATES,
            case=RequestCase(lat=lat, lon=lon, units=METRIC, expected_status=200),
            parse_body=True,
        )
        for lat, lon in VALID_COORDINATES
    ]
    rows += [
        Scenario(
            name=f"coordinates-{_coord_label(lat, lon)}",
            family=COORDINATES,
            case=RequestCase(lat=lat, lon=lon, units=METRIC, expected_status=400),
            error_payload=True,
        )
        for lat, lon in OUT_OF_RANGE_COORDINATES
    ]
    return rows


def token_scenarios() -> List[Scenario]:
    return [
        Scenario(
            name=f"token-{label}",
            family=TOKEN,
            case=RequestCase(lat=REF_LAT, lon=REF_LON, token=token, units=METRIC, expected_status=401),
        )
        for label, token in INVALID_TOKENS.items()
    ]


def units_scenarios() -> List[Scenario]:
    return [
        Scenario(
            name=f"units-{units}",
            family=UNITS_FAMILY,
            # units cases pin 44.985, not 44.9855
            case=RequestCase(lat=44.985, lon=REF_LON, units=units, expected_status=200),
            parse_body=True,
            temperature_bounds=TEMPERATURE_BOUNDS[units],
        )
        for units in UNITS
    ]


def language_scenarios() -> List[Scenario]:
    return [
        Scenario(
            name=f"language-{lang}",
            family=LANGUAGE,
            case=RequestCase(lat=REF_LAT, lon=REF_LON, units=METRIC, lang=lang, expected_status=200),
        )
        for lang in LANGUAGES
    ]


def mode_scenarios() -> List[Scenario]:
    return [
        Scenario(
            name=f"mode-{mode}",
            family=MODE,
            case=RequestCase(lat=REF_LAT, lon=REF_LON, units=METRIC, mode=mode, expected_status=200),
            body_prefix=BODY_PREFIXES[mode],
        )
        for mode in RESPONSE_MODES
    ]


_BUILDERS = {
    COORDINATES: coordinate_scenarios,
    TOKEN: token_scenarios,
    UNITS_FAMILY: units_scenarios,
    LANGUAGE: language_scenarios,
    MODE: mode_scenarios,
}


def all_scenarios(families: Iterable[str] | None = None) -> List[Scenario]:
    selected = FAMILIES if families is None else tuple(families)
    unknown = [f for f in selected if f not in _BUILDERS]
    if unknown:
        raise ValueError(f"Unknown scenario families: {', '.join(unknown)}")

    scenarios: List[Scenario] = []
    for family in FAMILIES:
        if family in selected:
            scenarios.extend(_BUILDERS[family]())
    return scenarios
