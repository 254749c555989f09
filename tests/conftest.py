"""
Shared fixtures for SatAlt tests.
"""
import asyncio

import httpx
import pytest

from satalt.client import RequestFailed
from satalt.models import QueryResult, ResultMeta, Sample


def make_payload(norad_id=25544, altitudes=(408.1, 409.3, 407.9, 410.0), step=60):
    """Backend success body with one point per altitude."""
    return {
        "norad_id": norad_id,
        "start": "2026-01-01T00:00:00Z",
        "end": "2026-01-01T06:00:00Z",
        "step_seconds": step,
        "points": [
            {"t": f"2026-01-01T00:0{i}:00Z", "alt_km": alt}
            for i, alt in enumerate(altitudes)
        ],
        "meta": {
            "tle_source": "celestrak",
            "tle_epoch": "2025-12-31T18:00:00Z",
            "earth_radius_km": 6378.137,
        },
    }


def make_result(norad_id=25544, altitudes=(400.0, 420.0, 410.0)):
    return QueryResult(
        catalog_id=norad_id,
        window_start="2026-01-01T00:00:00Z",
        window_end="2026-01-01T06:00:00Z",
        step_seconds=60,
        samples=tuple(
            Sample(timestamp=f"2026-01-01T00:0{i}:00Z", altitude_km=alt)
            for i, alt in enumerate(altitudes)
        ),
        metadata=ResultMeta(
            source_label="celestrak",
            epoch_timestamp="2025-12-31T18:00:00Z",
            reference_radius_km=6378.137,
        ),
    )


class FakeTransport:
    """Transport whose responses are resolved by the test, one future per request."""

    def __init__(self):
        self.requests = []
        self.futures = []

    async def fetch(self, request):
        fut = asyncio.get_running_loop().create_future()
        self.requests.append(request)
        self.futures.append(fut)
        return await fut

    def succeed(self, index, result):
        self.futures[index].set_result(result)

    def fail(self, index, message):
        self.futures[index].set_exception(RequestFailed(message))


class RecordingHandler:
    """httpx.MockTransport handler that records requests and returns a fixed response."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def fake_transport():
    return FakeTransport()
