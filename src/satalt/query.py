"""Build the altitude query from validated form values. No network I/O."""

from dataclasses import dataclass

import httpx

from satalt.models import QueryParameters
from satalt.timewindow import InvalidInput, normalize_local_time

ALTITUDE_PATH = "/altitude"


class InvalidNumber(InvalidInput):
    """Catalog id or step that is not an integer."""


@dataclass(frozen=True)
class QueryRequest:
    """Endpoint path + ordered query parameters (already stringified)."""

    path: str
    params: tuple[tuple[str, str], ...]

    @property
    def query_params(self) -> httpx.QueryParams:
        return httpx.QueryParams(self.params)

    def endpoint(self, base_url: str) -> str:
        """Absolute endpoint URL without the query; pass `params` alongside it."""
        return f"{base_url.rstrip('/')}{self.path}"

    def url(self, base_url: str) -> httpx.URL:
        return httpx.URL(self.endpoint(base_url), params=self.query_params)


def parse_int(value: str | int, field: str) -> int:
    """Parse an integer form field. Range is not checked here."""
    if isinstance(value, bool):
        raise InvalidNumber(f"{field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise InvalidNumber(f"{field} must be an integer, got {value!r}") from e


def parse_parameters(
    raw_catalog_id: str | int,
    raw_start: str,
    raw_end: str,
    raw_step: str | int,
    tz_name: str | None = None,
) -> QueryParameters:
    """Validate raw form values into QueryParameters.

    Only parseability is checked. start > end, a non-positive catalog id, and
    a step outside 1..3600 all go to the backend as typed.

    Raises:
        InvalidTimestamp: Either endpoint is not a valid local time.
        InvalidNumber: Catalog id or step is not an integer.
    """
    return QueryParameters(
        catalog_id=parse_int(raw_catalog_id, "NORAD ID"),
        window_start=normalize_local_time(raw_start, tz_name),
        window_end=normalize_local_time(raw_end, tz_name),
        step_seconds=parse_int(raw_step, "Step seconds"),
    )


def build_request(params: QueryParameters) -> QueryRequest:
    return QueryRequest(
        path=ALTITUDE_PATH,
        params=(
            ("n", str(params.catalog_id)),
            ("start", params.window_start),
            ("end", params.window_end),
            ("step_seconds", str(params.step_seconds)),
        ),
    )
