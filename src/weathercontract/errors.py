# error taxonomy for the harness
# harness problems (config, network) derive from HarnessError,
# contract violations derive from AssertionError so pytest reports them as failures

from __future__ import annotations
from typing import List

SNIPPET_LEN = 300


def snippet(body: str | None) -> str:
    # short body excerpt to speed up triage
    return (body or "")[:SNIPPET_LEN]


class HarnessError(RuntimeError):
    pass


class ConfigurationError(HarnessError):
    # fatal, aborts the whole run
    pass


class TransportError(HarnessError):
    # DNS, refused connection, timeout; scoped to one scenario, never retried
    pass


class ContractViolation(AssertionError):
    pass


class StatusMismatchError(ContractViolation):
    def __init__(self, expected: int, actual: int, raw_body: str = ""):
        self.expected = expected
        self.actual = actual
        self.raw_body = raw_body
        super().__init__(
            f"Response status code does not match: expected {expected}, got {actual}. "
            f"Body: {snippet(raw_body)}"
        )


class MalformedPayloadError(ContractViolation):
    def __init__(self, reason: str, raw_body: str):
        self.reason = reason
        self.raw_body = raw_body
        super().__init__(f"Malformed payload: {reason}. Body: {snippet(raw_body)}")


class TemperatureOutOfRangeError(ContractViolation):
    def __init__(self, message: str, temp: float, low: float, high: float):
        self.temp = temp
        self.low = low
        self.high = high
        super().__init__(message)


class FormatMismatchError(ContractViolation):
    def __init__(self, prefix: str, raw_body: str):
        self.prefix = prefix
        self.raw_body = raw_body
        super().__init__(f"Not valid format (expected body to start with {prefix!r}). Body: {snippet(raw_body)}")


class MultipleFailuresError(ContractViolation):
    def __init__(self, failures: List[AssertionError]):
        self.failures = list(failures)
        lines = [f"{len(self.failures)} checks failed:"]
        lines += [f"  - {f}" for f in self.failures]
        super().__init__("\n".join(lines))
