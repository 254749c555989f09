"""Data model definitions: explicit boundaries between input, query, lifecycle, and display layers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class QueryParameters:
    """Parsed form input. Timestamps already normalized to UTC."""

    catalog_id: int  # NORAD catalog number
    window_start: str  # "YYYY-MM-DDTHH:MM:SSZ"
    window_end: str  # "YYYY-MM-DDTHH:MM:SSZ"
    step_seconds: int  # Sampling interval; range checked by the backend


@dataclass(frozen=True)
class Sample:
    """A single altitude observation."""

    timestamp: str  # UTC timestamp as returned by the backend
    altitude_km: float  # Altitude above the reference sphere (km)


@dataclass(frozen=True)
class ResultMeta:
    """Provenance of the element set used for propagation."""

    source_label: str  # Where the TLE came from ("celestrak", ...)
    epoch_timestamp: str  # TLE epoch
    reference_radius_km: float  # Earth radius subtracted to get altitude


@dataclass(frozen=True)
class QueryResult:
    """A fully received altitude series. The only payload of Succeeded."""

    catalog_id: int
    window_start: str
    window_end: str
    step_seconds: int
    samples: tuple[Sample, ...]  # In backend order
    metadata: ResultMeta


@dataclass(frozen=True)
class Statistics:
    """Summary of a sample series. Always derived, never stored on its own."""

    min: float
    max: float
    mean: float
    range: float


# --- Lifecycle states ---


@dataclass(frozen=True)
class Idle:
    """No query submitted yet."""


@dataclass(frozen=True)
class Pending:
    """A query is in flight. Only the response for attempt_id may resolve it."""

    attempt_id: int


@dataclass(frozen=True)
class Succeeded:
    result: QueryResult


@dataclass(frozen=True)
class Failed:
    message: str  # Human-readable, shown as-is


LifecycleState = Idle | Pending | Succeeded | Failed
