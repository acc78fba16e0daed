import time
from typing import Any, Dict, Optional

import httpx

from flight_emissions.config import settings
from flight_emissions.errors import ConfigurationError, TransportError, UpstreamError
from flight_emissions.obs.logger import log_event
from flight_emissions.past.client import default_timeout

FALLBACK_MESSAGE = "Failed to get flight emissions data"
EMPTY_MESSAGE = "No flight emissions data returned from the API"


def _upstream_message(response: httpx.Response) -> str:
    # Google APIs answer {"error": {"code": ..., "message": ..., "status": ...}}
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_MESSAGE
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return FALLBACK_MESSAGE


class FutureEmissionsClient:
    """Travel Impact Model client for scheduled (future) flights."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 http: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key if api_key is not None else settings.TRAVEL_IMPACT_API_KEY
        self.base_url = (base_url if base_url is not None else settings.TRAVEL_IMPACT_API_URL).rstrip("/")
        self._http = http or httpx.AsyncClient(http2=True, timeout=default_timeout())

    def _require_config(self) -> None:
        if not (self.api_key or "").strip():
            raise ConfigurationError(
                "Travel Impact Model API key is not configured. "
                "Please set TRAVEL_IMPACT_API_KEY in your environment variables."
            )
        if not self.base_url:
            raise ConfigurationError(
                "Travel Impact Model API URL is not configured. "
                "Please set TRAVEL_IMPACT_API_URL in your environment variables."
            )

    async def compute_flight_emissions(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """POST one flight and return the first ``flightEmissions`` entry."""
        self._require_config()
        url = f"{self.base_url}/flights:computeFlightEmissions"
        log_event("upstream_request", pipeline="future", url=url, key=self.api_key)
        if self._http.is_closed:
            log_event("upstream_unreachable", level="ERROR", pipeline="future", error="client closed")
            raise TransportError()
        start = time.monotonic()
        try:
            r = await self._http.post(
                url,
                params={"key": self.api_key},
                json=request,
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as e:
            log_event("upstream_unreachable", level="ERROR", pipeline="future",
                      error=type(e).__name__)
            raise TransportError() from e

        log_event("upstream_response", pipeline="future", status=r.status_code,
                  ms_total=round((time.monotonic() - start) * 1000.0, 2))
        if not r.is_success:
            message = _upstream_message(r)
            log_event("upstream_error", level="ERROR", pipeline="future",
                      status=r.status_code, error=message)
            raise UpstreamError(message)

        try:
            body = r.json()
        except ValueError as e:
            raise UpstreamError(FALLBACK_MESSAGE) from e

        # modelVersion and any entries past the first are ignored
        emissions = body.get("flightEmissions") if isinstance(body, dict) else None
        if not emissions:
            raise UpstreamError(EMPTY_MESSAGE)
        return emissions[0]

    async def aclose(self) -> None:
        await self._http.aclose()
