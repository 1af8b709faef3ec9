# shared fixtures; unit tests never hit the network, HTTP is stubbed with `responses`

import json
from pathlib import Path
import pytest
from weathercontract.client import WeatherAPIClient
from weathercontract.models import CapturedResponse, EndpointConfig

DATA_DIR = Path(__file__).parent / "data"
BASE_URL = "https://api.test/data/2.5"
WEATHER_URL = f"{BASE_URL}/weather"
TOKEN = "secret-token"

XML_BODY = '<?xml version="1.0" encoding="UTF-8"?>\n<current><city id="3190342"/></current>'
HTML_BODY = '<!DOCTYPE html>\n<html lang="en">\n<head><meta charset="utf-8"></head></html>'


def load_text(name: str) -> str:
    return (DATA_DIR / name).read_text()


def load_json(name: str) -> dict:
    return json.loads(load_text(name))


@pytest.fixture
def config() -> EndpointConfig:
    return EndpointConfig(base_url=BASE_URL, token=TOKEN, timeout=5.0)


@pytest.fixture
def client(config):
    with WeatherAPIClient(config) as c:
        yield c


@pytest.fixture
def weather_body() -> str:
    return load_text("current_metric.json")


def captured(body: str, status: int = 200) -> CapturedResponse:
    return CapturedResponse(status_code=status, raw_body=body, url=WEATHER_URL)
