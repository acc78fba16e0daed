"""Past/future emissions pipelines.

One submission = adapter (sync) -> one upstream call (async) -> normaliser
(sync). The two pipelines share nothing but the query shape and the result
contract; each owns its HTTP client. Nothing is cached or retried.
"""

import time
from typing import Optional

import httpx

from flight_emissions.errors import EmissionsError
from flight_emissions.future.adapter import build_future_request
from flight_emissions.future.client import FutureEmissionsClient
from flight_emissions.future.transform import normalize_future
from flight_emissions.obs.context import pipeline_var
from flight_emissions.obs.logger import log_event
from flight_emissions.obs.metrics import inc_counter, record_timing
from flight_emissions.past.adapter import build_past_request
from flight_emissions.past.client import PastEmissionsClient, default_timeout
from flight_emissions.past.transform import normalize_past
from flight_emissions.types import (
    FutureEmissionsResult,
    FutureItineraryQuery,
    PastEmissionsResult,
    PastItineraryQuery,
)


class EmissionsService:
    def __init__(self, past_client: PastEmissionsClient, future_client: FutureEmissionsClient):
        self.past_client = past_client
        self.future_client = future_client

    async def estimate_past(self, query: PastItineraryQuery) -> PastEmissionsResult:
        token = pipeline_var.set("past")
        start = time.monotonic()
        try:
            request = build_past_request(query)
            raw = await self.past_client.calculate_emissions(request)
            result = normalize_past(raw, query)
        except EmissionsError as e:
            self._record("past", start, type(e).__name__, e.message)
            raise
        else:
            self._record("past", start, "ok")
            return result
        finally:
            pipeline_var.reset(token)

    async def estimate_future(self, query: FutureItineraryQuery) -> FutureEmissionsResult:
        token = pipeline_var.set("future")
        start = time.monotonic()
        try:
            request = build_future_request(query)
            entry = await self.future_client.compute_flight_emissions(request)
            result = normalize_future(entry, query)
        except EmissionsError as e:
            self._record("future", start, type(e).__name__, e.message)
            raise
        else:
            self._record("future", start, "ok")
            return result
        finally:
            pipeline_var.reset(token)

    def _record(self, pipeline: str, start: float, outcome: str, error: Optional[str] = None) -> None:
        elapsed_ms = (time.monotonic() - start) * 1000.0
        labels = {"pipeline": pipeline, "outcome": outcome}
        inc_counter("submissions_total", labels)
        record_timing("submission_latency_ms", elapsed_ms, {"pipeline": pipeline})
        if error is None:
            log_event("submission_completed", ms_total=round(elapsed_ms, 2))
        else:
            log_event("submission_failed", level="WARNING", outcome=outcome, error=error,
                      ms_total=round(elapsed_ms, 2))

    async def aclose(self) -> None:
        await self.past_client.aclose()
        await self.future_client.aclose()


def create_service(past_http: Optional[httpx.AsyncClient] = None,
                   future_http: Optional[httpx.AsyncClient] = None) -> EmissionsService:
    """Build both pipelines from settings, each with its own HTTP client."""
    return EmissionsService(
        past_client=PastEmissionsClient(
            http=past_http or httpx.AsyncClient(http2=True, timeout=default_timeout())
        ),
        future_client=FutureEmissionsClient(
            http=future_http or httpx.AsyncClient(http2=True, timeout=default_timeout())
        ),
    )
