"""HTTP transport to the altitude backend and response parsing."""

import logging
import math
from typing import Any

import httpx

from satalt.models import QueryResult, ResultMeta, Sample
from satalt.query import QueryRequest

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to fetch altitude data"


class RequestFailed(Exception):
    """The backend answered, but not with a usable altitude series."""


class TransportError(Exception):
    """No response could be obtained (DNS, connection, timeout, ...)."""


def _finite(value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite altitude {value!r}")
    return number


def parse_result(payload: Any) -> QueryResult:
    """Map the backend's JSON body to a QueryResult.

    Raises:
        RequestFailed: Body is missing fields, has the wrong types, or carries a
            non-finite altitude (JSON NaN/Infinity).
    """
    try:
        meta = payload["meta"]
        return QueryResult(
            catalog_id=int(payload["norad_id"]),
            window_start=str(payload["start"]),
            window_end=str(payload["end"]),
            step_seconds=int(payload["step_seconds"]),
            samples=tuple(
                Sample(timestamp=str(p["t"]), altitude_km=_finite(p["alt_km"]))
                for p in payload["points"]
            ),
            metadata=ResultMeta(
                source_label=str(meta["tle_source"]),
                epoch_timestamp=str(meta["tle_epoch"]),
                reference_radius_km=float(meta["earth_radius_km"]),
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RequestFailed(f"Malformed altitude response: {e!r}") from e


def error_detail(response: httpx.Response) -> str:
    """Message for a non-2xx response: its JSON `detail`, else the generic text."""
    try:
        data = response.json()
    except ValueError:
        return GENERIC_FAILURE
    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    return GENERIC_FAILURE


class HttpTransport:
    """Executes QueryRequests against the configured backend.

    A client is opened per request so the transport is not tied to one event
    loop; the Streamlit script runs each submission on a fresh loop.

    Args:
        base_url: Backend root, e.g. "http://127.0.0.1:8000".
        timeout: Seconds before an unanswered request becomes a TransportError.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, request: QueryRequest) -> QueryResult:
        """GET the request and return the parsed series.

        Raises:
            RequestFailed: Non-2xx status, or a 2xx body that is not a series.
            TransportError: No usable response at all (connection, timeout,
                protocol or redirect failure).
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.get(
                    request.endpoint(self.base_url), params=request.params
                )
        except httpx.DecodingError as e:
            # A response arrived, but its body could not be decoded
            logger.warning(f"Altitude response body undecodable: {e}")
            raise RequestFailed(f"Malformed altitude response: {e}") from e
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            logger.warning(f"Altitude request transport failure: {message}")
            raise TransportError(message) from e

        if not resp.is_success:
            detail = error_detail(resp)
            logger.warning(f"Altitude request returned {resp.status_code}: {detail}")
            raise RequestFailed(detail)

        try:
            payload = resp.json()
        except ValueError as e:
            raise RequestFailed(f"Malformed altitude response: {e}") from e
        return parse_result(payload)
