# OOP boundary for external i/o
# one synchronous call per request: no retries, no caching, one response out
# each worker thread lazily gets its own session, the client itself holds no per-call state

from __future__ import annotations
import logging
import re
import threading
import time
from typing import List
import requests
from requests.adapters import HTTPAdapter
from . import __version__
from .errors import TransportError
from .models import CapturedResponse, EndpointConfig

logger = logging.getLogger(__name__)

_APPID_RE = re.compile(r"(appid=)[^&]*")


def redact(url: str) -> str:
    # never let the token reach the logs
    return _APPID_RE.sub(r"\1***", url or "")


class WeatherAPIClient:
    def __init__(
        self,
        config: EndpointConfig,
        user_agent: str = f"weather-contract/{__version__}",
    ):
        self.config = config
        self.timeout = config.timeout
        self.user_agent = user_agent

        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        # a transient failure must surface as a failed case, so nothing is retried
        adapter = HTTPAdapter(max_retries=0)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
            with self._lock:
                self._sessions.append(sess)
        return sess

    def execute(self, request: requests.Request) -> CapturedResponse:
        session = self._session()
        safe_url = redact(request.url)
        try:
            # preparing can already fail (bad scheme, invalid host)
            prepared = session.prepare_request(request)
            safe_url = redact(prepared.url)
            logger.debug("GET %s", safe_url)
            started = time.monotonic()
            resp = session.send(prepared, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request error for {safe_url}: {redact(str(exc))}") from exc
        elapsed = time.monotonic() - started

        logger.debug("HTTP %s from %s in %.3fs", resp.status_code, safe_url, elapsed)
        return CapturedResponse(
            status_code=resp.status_code,
            raw_body=resp.text or "",
            headers=dict(resp.headers),
            url=safe_url,
            elapsed=elapsed,
        )

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for s in sessions:
            s.close()

    def __enter__(self) -> "WeatherAPIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
