"""Single-query lifecycle: Idle → Pending → Succeeded | Failed.

At most one attempt is current. A new submission supersedes the pending one
by replacing its attempt id; the superseded request keeps running on the wire
but its resolution is dropped when it arrives.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable
from typing import Protocol

from satalt.client import RequestFailed, TransportError
from satalt.models import Failed, Idle, LifecycleState, Pending, QueryResult, Succeeded
from satalt.query import QueryRequest, build_request, parse_parameters
from satalt.timewindow import InvalidInput

logger = logging.getLogger(__name__)

Listener = Callable[[LifecycleState], None]


class Transport(Protocol):
    async def fetch(self, request: QueryRequest) -> QueryResult: ...


class RequestLifecycleController:
    """Owns the LifecycleState cell. Nothing else writes it.

    Must be driven from a single asyncio event loop: submit() schedules the
    request on the running loop and returns immediately.

    Args:
        transport: Anything with `async fetch(QueryRequest) -> QueryResult`
            raising RequestFailed / TransportError (see client.HttpTransport).
        tz_name: IANA zone for local input. None means the process zone.
    """

    def __init__(self, transport: Transport, tz_name: str | None = None) -> None:
        self._transport = transport
        self._tz_name = tz_name
        self._state: LifecycleState = Idle()
        self._attempt_ids = itertools.count(1)
        self._in_flight: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with each new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: LifecycleState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def submit(
        self,
        raw_catalog_id: str | int,
        raw_start: str,
        raw_end: str,
        raw_step: str | int,
    ) -> int | None:
        """Start a new attempt, superseding any pending one.

        Validation failures go straight to Failed without a request.

        Returns:
            The new attempt id, or None when the input was rejected locally.

        Raises:
            RuntimeError: Input was valid but no event loop is running.
        """
        try:
            params = parse_parameters(
                raw_catalog_id, raw_start, raw_end, raw_step, tz_name=self._tz_name
            )
        except InvalidInput as e:
            logger.info(f"Rejected query input: {e}")
            self._set_state(Failed(message=str(e)))
            return None

        loop = asyncio.get_running_loop()
        attempt_id = next(self._attempt_ids)
        request = build_request(params)
        self._set_state(Pending(attempt_id=attempt_id))
        logger.info(
            f"Attempt {attempt_id}: n={params.catalog_id} "
            f"{params.window_start}..{params.window_end} step={params.step_seconds}s"
        )

        task = loop.create_task(self._execute(attempt_id, request))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return attempt_id

    async def _execute(self, attempt_id: int, request: QueryRequest) -> None:
        try:
            result = await self._transport.fetch(request)
        except (RequestFailed, TransportError) as e:
            self._resolve(attempt_id, Failed(message=str(e)))
            return
        self._resolve(attempt_id, Succeeded(result=result))

    def _resolve(self, attempt_id: int, state: Failed | Succeeded) -> None:
        current = self._state
        if not isinstance(current, Pending) or current.attempt_id != attempt_id:
            logger.debug(f"Attempt {attempt_id} superseded; dropping {type(state).__name__}")
            return
        if isinstance(state, Succeeded):
            logger.info(f"Attempt {attempt_id} succeeded: {len(state.result.samples)} samples")
        else:
            logger.info(f"Attempt {attempt_id} failed: {state.message}")
        self._set_state(state)

    async def drain(self) -> None:
        """Wait until every attempt in flight, superseded or not, has resolved."""
        while True:
            pending = [t for t in self._in_flight if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending)
