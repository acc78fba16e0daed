import time
from typing import Any, Dict, Optional

import httpx

from flight_emissions.config import settings
from flight_emissions.errors import TransportError, UpstreamError
from flight_emissions.obs.logger import log_event

FALLBACK_MESSAGE = "Failed to calculate emissions"


def default_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        connect=settings.HTTP_CONNECT_TIMEOUT,
        read=settings.HTTP_READ_TIMEOUT,
        write=settings.HTTP_READ_TIMEOUT,
        pool=12.0,
    )


def _upstream_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_MESSAGE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return FALLBACK_MESSAGE


class PastEmissionsClient:
    """POSTs adapted requests to the past-flights calculate-emissions endpoint."""

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 http: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url if base_url is not None else settings.PAST_EMISSIONS_API_URL).rstrip("/")
        self.token = token if token is not None else settings.PAST_EMISSIONS_API_TOKEN
        # Persistent HTTP client with HTTP/2 and sensible timeouts
        self._http = http or httpx.AsyncClient(http2=True, timeout=default_timeout())

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def calculate_emissions(self, request: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/calculate-emissions"
        log_event("upstream_request", pipeline="past", url=url, route=request.get("route"))
        if self._http.is_closed:
            log_event("upstream_unreachable", level="ERROR", pipeline="past", error="client closed")
            raise TransportError()
        start = time.monotonic()
        try:
            r = await self._http.post(url, json=request, headers=self._headers())
        except httpx.RequestError as e:
            log_event("upstream_unreachable", level="ERROR", pipeline="past",
                      error=f"{type(e).__name__}: {e}")
            raise TransportError() from e

        log_event("upstream_response", pipeline="past", status=r.status_code,
                  ms_total=round((time.monotonic() - start) * 1000.0, 2))
        if not r.is_success:
            message = _upstream_message(r)
            log_event("upstream_error", level="ERROR", pipeline="past",
                      status=r.status_code, error=message)
            raise UpstreamError(message)

        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError(FALLBACK_MESSAGE) from e

    async def aclose(self) -> None:
        await self._http.aclose()
