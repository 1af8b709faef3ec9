# executor tests, HTTP stubbed with `responses` so nothing leaves the machine

import threading
import pytest
import requests
import responses
from weathercontract.client import WeatherAPIClient, redact
from weathercontract.errors import TransportError
from weathercontract.models import EndpointConfig, RequestCase
from weathercontract.request import build_request
from conftest import TOKEN, WEATHER_URL


@responses.activate
def test_execute_captures_response(client, config, weather_body):
    responses.add(responses.GET, WEATHER_URL, body=weather_body, status=200,
                  content_type="application/json")

    resp = client.execute(build_request(RequestCase(lat=44.9855, lon=19.6214, units="metric"), config))

    assert resp.status_code == 200
    assert resp.raw_body == weather_body
    assert resp.headers["Content-Type"] == "application/json"
    assert resp.parsed_body is None
    # exactly one call per request, no retries
    assert len(responses.calls) == 1


@responses.activate
def test_error_status_is_captured_not_raised(client, config):
    responses.add(responses.GET, WEATHER_URL, json={"cod": 401, "message": "Invalid API key."}, status=401)

    resp = client.execute(build_request(RequestCase(lat=1, lon=2, token="invalid"), config))

    assert resp.status_code == 401
    assert "Invalid API key" in resp.raw_body


@responses.activate
def test_token_is_redacted_from_captured_url(client, config):
    responses.add(responses.GET, WEATHER_URL, json={}, status=200)

    resp = client.execute(build_request(RequestCase(lat=1, lon=2), config))

    assert TOKEN not in resp.url
    assert "appid=***" in resp.url
    # but the real request did carry it
    assert f"appid={TOKEN}" in responses.calls[0].request.url


@responses.activate
def test_connection_failure_becomes_transport_error(client, config):
    responses.add(responses.GET, WEATHER_URL, body=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TransportError) as excinfo:
        client.execute(build_request(RequestCase(lat=1, lon=2), config))
    assert TOKEN not in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)
    assert len(responses.calls) == 1


@responses.activate
def test_timeout_becomes_transport_error(client, config):
    responses.add(responses.GET, WEATHER_URL, body=requests.exceptions.Timeout("read timed out"))

    with pytest.raises(TransportError, match="read timed out"):
        client.execute(build_request(RequestCase(lat=1, lon=2), config))


def test_timeout_comes_from_config(client, config):
    assert client.timeout == config.timeout == 5.0


def test_one_session_per_thread(client):
    sessions = []

    def grab():
        sessions.append(client._session())

    threads = [threading.Thread(target=grab) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len({id(s) for s in sessions}) == 3
    # same thread keeps its session
    assert client._session() is client._session()


def test_redact():
    assert redact("https://x/weather?lat=1&appid=abc&units=metric") == "https://x/weather?lat=1&appid=***&units=metric"
    assert redact("https://x/weather?lat=1") == "https://x/weather?lat=1"


def test_unpreparable_url_becomes_transport_error():
    # EndpointConfig built by hand skips load_config's URL check
    cfg = EndpointConfig(base_url="api.openweathermap.org/data/2.5", token=TOKEN)
    with WeatherAPIClient(cfg) as c:
        with pytest.raises(TransportError) as excinfo:
            c.execute(build_request(RequestCase(lat=1, lon=2), cfg))
    assert isinstance(excinfo.value.__cause__, requests.exceptions.MissingSchema)
    assert TOKEN not in str(excinfo.value)
