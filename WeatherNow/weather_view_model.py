"""Weather view model - loading/loaded/errored state published to renderers."""
import asyncio
import logging
import math
from concurrent.futures import Executor
from dataclasses import dataclass, replace
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Callable, List, Optional, Set

from localization import Localizer
from weather_data import WeatherReading
from weather_provider import ErrorKind, Failure, FetchOutcome, Success, WeatherProviderBase


class ViewPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of what the weather screens should show."""
    is_loading: bool = False
    data: Optional[WeatherReading] = None
    has_error: bool = False
    error_kind: Optional[ErrorKind] = None  # None with has_error set: unrecognized failure
    error_message: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @property
    def phase(self) -> ViewPhase:
        # data survives a failed refresh, so the error wins over it
        if self.is_loading:
            return ViewPhase.LOADING
        if self.has_error:
            return ViewPhase.ERRORED
        if self.data is not None:
            return ViewPhase.LOADED
        return ViewPhase.IDLE


StateListener = Callable[[ViewState], None]


class WeatherViewModel:
    """
    Drives the weather screens from a provider.

    A fetch starts as soon as the view model is created (unless
    ``auto_load`` is off) and again on every ``load_data``/``refresh``.
    The provider runs on an executor thread; its outcome is applied and
    published on the event loop thread, so all state access must happen
    on that loop.

    Overlapping fetches are not de-duplicated: each call starts a new one
    and whichever finishes last overwrites the state. Pass
    ``drop_stale_results=True`` to ignore outcomes from fetches that a
    newer call has superseded.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        localizer: Optional[Localizer] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        executor: Optional[Executor] = None,
        auto_load: bool = True,
        drop_stale_results: bool = False,
        tz: tzinfo = timezone.utc
    ):
        """
        Initialize the view model.

        Args:
            provider: Weather provider to fetch from
            localizer: Source of the fallback error text and date names
            loop: Event loop to publish on (the running loop if omitted)
            executor: Executor for the blocking fetch (the loop default if omitted)
            auto_load: Start the first fetch immediately
            drop_stale_results: Discard outcomes of superseded fetches
            tz: Time zone used when rendering epoch timestamps
        """
        self.provider = provider
        self.localizer = localizer or Localizer()
        self.drop_stale_results = drop_stale_results
        self.tz = tz
        self._loop = loop
        self._executor = executor
        self._state = ViewState()
        self._listeners: List[StateListener] = []
        self._tasks: Set[asyncio.Task] = set()
        self._generation = 0
        self._closed = False

        if auto_load:
            self.load_data()

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def weather_data(self) -> Optional[WeatherReading]:
        return self._state.data

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def has_error(self) -> bool:
        return self._state.has_error

    @property
    def error_message(self) -> Optional[str]:
        return self._state.error_message

    @property
    def has_data(self) -> bool:
        return self._state.has_data

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Returns:
            A function that removes the callback again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: ViewState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logging.exception("State listener failed")

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def load_data(self) -> asyncio.Task:
        """
        Enter the loading state and start a fetch.

        Returns:
            The task running the fetch; it completes once the outcome is applied
        """
        if self._closed:
            raise RuntimeError("WeatherViewModel is closed")

        loop = self._get_loop()
        self._generation += 1
        generation = self._generation
        if self._tasks:
            logging.debug(f"Starting fetch #{generation} while {len(self._tasks)} still in flight")

        self._publish(replace(
            self._state,
            is_loading=True,
            has_error=False,
            error_kind=None,
            error_message=None,
        ))

        task = loop.create_task(self._run_fetch(generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def refresh(self) -> asyncio.Task:
        return self.load_data()

    def clear_error(self) -> None:
        if not self._state.has_error:
            return
        self._publish(replace(self._state, has_error=False, error_kind=None, error_message=None))

    async def _run_fetch(self, generation: int) -> None:
        loop = self._get_loop()
        logging.info(f"Fetching weather data (fetch #{generation})...")
        try:
            outcome = await loop.run_in_executor(self._executor, self.provider.fetch)
        except Exception as e:
            logging.exception(f"Unexpected error during fetch #{generation}: {e}")
            self._apply_unrecognized(generation)
            return
        self._apply(generation, outcome)

    def _is_superseded(self, generation: int) -> bool:
        if self._closed:
            return True
        if self.drop_stale_results and generation != self._generation:
            logging.info(f"Dropping result of fetch #{generation}, superseded by #{self._generation}")
            return True
        return False

    def _apply(self, generation: int, outcome: FetchOutcome) -> None:
        if self._is_superseded(generation):
            return

        if isinstance(outcome, Success):
            reading = outcome.reading
            logging.info(f"Weather fetch #{generation} successful: {reading.city} {reading.formatted_temp}")
            self._publish(ViewState(is_loading=False, data=reading))
        elif isinstance(outcome, Failure):
            logging.error(f"Weather fetch #{generation} failed: {outcome.message}")
            self._publish(replace(
                self._state,
                is_loading=False,
                has_error=True,
                error_kind=outcome.kind,
                error_message=outcome.message,
            ))
        else:
            logging.error(f"Weather fetch #{generation} returned {outcome!r}")
            self._apply_unrecognized(generation)

    def _apply_unrecognized(self, generation: int) -> None:
        if self._is_superseded(generation):
            return
        self._publish(replace(
            self._state,
            is_loading=False,
            has_error=True,
            error_kind=None,
            error_message=self.localizer.string("data_error"),
        ))

    @property
    def formatted_date(self) -> str:
        """
        Observation date for display.

        A purely numeric ``date_time`` is a unix timestamp and is rendered
        as a long date; anything else is already formatted and returned as is.
        """
        data = self._state.data
        if data is None:
            return ""

        value = data.date_time
        timestamp = _parse_timestamp(value)
        if timestamp is None:
            return value
        try:
            moment = datetime.fromtimestamp(timestamp, tz=self.tz)
        except (OverflowError, OSError, ValueError):
            logging.warning(f"Timestamp out of range: {value!r}")
            return value
        return self.localizer.format_long_date(moment)

    async def settle(self) -> ViewState:
        """Wait until no fetch is in flight, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        return self._state

    def close(self) -> None:
        """Stop publishing and cancel fetches still in flight."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()


def _parse_timestamp(value: str) -> Optional[float]:
    # whole-string numbers only: no padding, digit separators or nan/inf
    if not value or value != value.strip() or "_" in value:
        return None
    try:
        timestamp = float(value)
    except ValueError:
        return None
    if not math.isfinite(timestamp):
        return None
    return timestamp
