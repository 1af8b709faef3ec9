# orchestration: build -> execute -> validate for one scenario, and a
# thread pool coordinator that runs any list of scenarios independently

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List
from .checks import (
    SoftAssertions,
    assert_body_starts_with,
    assert_error_payload,
    assert_parsable,
    assert_status,
    assert_temperature_in_range,
)
from .client import WeatherAPIClient
from .errors import ContractViolation, MultipleFailuresError, TransportError
from .models import CapturedResponse, SCALE_NAMES, Scenario, ScenarioResult
from .request import build_request

logger = logging.getLogger(__name__)


def check_response(resp: CapturedResponse, scenario: Scenario) -> None:
    """Apply every check the scenario asks for, reporting all failures together."""
    case = scenario.case
    with SoftAssertions() as soft:
        soft.check(assert_status, resp, case.expected_status)
        if scenario.parse_body:
            record = soft.check(assert_parsable, resp)
            if record is not None and scenario.temperature_bounds is not None:
                low, high = scenario.temperature_bounds
                soft.check(assert_temperature_in_range, resp, low, high, SCALE_NAMES.get(case.units or "", ""))
        if scenario.error_payload:
            soft.check(assert_error_payload, resp)
        if scenario.body_prefix is not None:
            soft.check(assert_body_starts_with, resp, scenario.body_prefix)


def execute_scenario(client: WeatherAPIClient, scenario: Scenario) -> CapturedResponse:
    request = build_request(scenario.case, client.config)
    return client.execute(request)


# keeping this small makes it ideal as the function we submit to the thread pool
def run_scenario(client: WeatherAPIClient, scenario: Scenario) -> ScenarioResult:
    try:
        resp = execute_scenario(client, scenario)
    except TransportError as exc:
        logger.warning("%s: transport failure: %s", scenario.name, exc)
        return ScenarioResult(scenario=scenario, passed=False, failures=[str(exc)])

    try:
        check_response(resp, scenario)
    except MultipleFailuresError as exc:
        return ScenarioResult(
            scenario=scenario,
            passed=False,
            failures=[str(f) for f in exc.failures],
            status_code=resp.status_code,
        )
    except ContractViolation as exc:
        return ScenarioResult(scenario=scenario, passed=False, failures=[str(exc)], status_code=resp.status_code)

    return ScenarioResult(scenario=scenario, passed=True, status_code=resp.status_code)


def run_matrix(client: WeatherAPIClient, scenarios: List[Scenario], max_workers: int = 4) -> List[ScenarioResult]:
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1 (got {max_workers})")

    # pool.map keeps matrix order so output is deterministic
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda s: run_scenario(client, s), scenarios))
