# This file provides the HTTP helpers behind the performance smoke scripts.
# It exists so scripts can time repeated calls against a running exchange without duplicating client code.
# Transport errors are retried a bounded number of times; unexpected status codes are reported as errors.

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TextIO

import requests

logger = logging.getLogger(__name__)

DEFAULT_EXCHANGE_URL = "http://localhost:8000/api/v1"


class ExchangeRequestError(RuntimeError):
    """Raised when the exchange responds with an unexpected status or cannot be reached."""


def exchange_url() -> str:
    return os.getenv("HZN_EXCHANGE_URL", DEFAULT_EXCHANGE_URL).rstrip("/")


def is_verbose() -> bool:
    return os.getenv("VERBOSE", "").strip().lower() in {"1", "true", "yes", "y", "on"}


class ExchangeClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int = 10,
        max_retries: int = 3,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        url_suffix: str,
        *,
        good_codes: Iterable[int] = (200,),
        json_body: Any | None = None,
    ) -> requests.Response:
        url = f"{self.base_url}/{url_suffix.lstrip('/')}"
        accepted = set(good_codes)

        last_error: requests.RequestException | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.request(
                    method,
                    url,
                    json=json_body,
                    timeout=self.timeout_seconds,
                )
            except (requests.ConnectionError, requests.Timeout) as exc:
                last_error = exc
                logger.warning("Transport error on %s %s (attempt %d): %s", method, url, attempt, exc)
                continue

            if response.status_code not in accepted:
                raise ExchangeRequestError(
                    f"{method} {url} returned {response.status_code}, expected one of {sorted(accepted)}"
                )
            return response

        raise ExchangeRequestError(
            f"{method} {url} failed after {self.max_retries} attempts: {last_error}"
        )

    def get(self, url_suffix: str, *, good_codes: Iterable[int] = (200,)) -> requests.Response:
        return self.request("GET", url_suffix, good_codes=good_codes)

    def patch(
        self, url_suffix: str, json_body: Any, *, good_codes: Iterable[int] = (200,)
    ) -> requests.Response:
        return self.request("PATCH", url_suffix, good_codes=good_codes, json_body=json_body)


@dataclass(frozen=True)
class TimingResult:
    num_ops: int
    total_seconds: float

    @property
    def avg_seconds(self) -> float:
        if self.num_ops == 0:
            return 0.0
        return self.total_seconds / self.num_ops

    def summary(self) -> str:
        return (
            f"Total time: {self.total_seconds:f} s, num ops={self.num_ops}, "
            f"avg={self.avg_seconds:f} s/op"
        )


def run_smalltest(
    client: ExchangeClient,
    *,
    num_times: int,
    url_suffix: str = "admin/status",
    verbose: bool = False,
    out: TextIO | None = None,
) -> TimingResult:
    """GET `url_suffix` `num_times` times and report the elapsed time."""

    stream = out or sys.stdout
    stream.write("Starting smalltest...\n")
    started = time.perf_counter()
    for _ in range(num_times):
        response = client.get(url_suffix)
        if verbose:
            stream.write(f"httpCode={response.status_code}\n")
        else:
            stream.write(".")
    result = TimingResult(num_ops=num_times, total_seconds=time.perf_counter() - started)
    stream.write(f"\n{result.summary()}\n")
    return result
