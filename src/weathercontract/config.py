# endpoint settings, resolved once at startup and passed around explicitly
# in CI the variables are injected by the runner, locally they come from .env

from __future__ import annotations
import math
import os
from typing import Mapping
from urllib.parse import urlsplit
from dotenv import load_dotenv
from .errors import ConfigurationError
from .models import EndpointConfig, DEFAULT_TIMEOUT

load_dotenv()

BASE_URL_VAR = "API_BASE_URL"
TOKEN_VAR = "API_TOKEN"
TIMEOUT_VAR = "API_TIMEOUT"


def _check_base_url(base_url: str) -> None:
    # requests refuses scheme-less URLs, fail here instead of on the first call
    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(
            f"{BASE_URL_VAR} must be an absolute http(s) URL, e.g. https://api.example.org/data/2.5 (got {base_url!r})"
        )


def load_config(environ: Mapping[str, str] | None = None) -> EndpointConfig:
    env = os.environ if environ is None else environ

    base_url = (env.get(BASE_URL_VAR) or "").strip()
    token = (env.get(TOKEN_VAR) or "").strip()

    # report every missing setting at once instead of one per run
    missing = [name for name, value in ((BASE_URL_VAR, base_url), (TOKEN_VAR, token)) if not value]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
    _check_base_url(base_url)

    raw_timeout = (env.get(TIMEOUT_VAR) or "").strip()
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"{TIMEOUT_VAR} must be a number (got {raw_timeout!r})") from exc
        if not (math.isfinite(timeout) and timeout > 0):
            raise ConfigurationError(f"{TIMEOUT_VAR} must be positive (got {raw_timeout!r})")

    return EndpointConfig(base_url=base_url.rstrip("/"), token=token, timeout=timeout)
