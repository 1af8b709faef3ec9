# turns a RequestCase into an unprepared GET request
# pure and side-effect free, the client decides how and when it is sent

from __future__ import annotations
from typing import Any, List, Tuple
import requests
from .models import CONFIGURED_TOKEN, EndpointConfig, RequestCase

WEATHER_PATH = "weather"


def _param(value: Any) -> Any:
    # numbers go out via str() so 0 stays "0" and 44.9855 stays "44.9855"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def query_params(case: RequestCase, config: EndpointConfig) -> List[Tuple[str, Any]]:
    token = config.token if case.token is CONFIGURED_TOKEN else case.token

    # fixed order: lat, lon, appid, units, lang, mode
    ordered = [
        ("lat", case.lat),
        ("lon", case.lon),
        ("appid", token),
        ("units", case.units),
        ("lang", case.lang),
        ("mode", case.mode),
    ]
    # absent parameters are left out entirely, never sent as empty
    return [(name, _param(value)) for name, value in ordered if value is not None]


def build_request(case: RequestCase, config: EndpointConfig) -> requests.Request:
    url = f"{config.base_url}/{WEATHER_PATH}"
    return requests.Request("GET", url, params=query_params(case, config))
