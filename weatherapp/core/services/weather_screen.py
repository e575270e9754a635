"""The single weather screen: location fix, fetch, cache and render."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..abstractions import Coordinate, NetworkStack, WeatherProvider, WeatherRecord
from ..cache import LastResultCache
from ..cancellation import CancellationToken
from ..connectivity import is_network_available
from ..errors import (
    HttpBadRequest,
    HttpError,
    HttpNotFound,
    InvalidPayload,
    NoNetwork,
    OperationCancelled,
    TransportFailure,
)
from ..location import LocationAcquirer
from ..presenter import Presenter, RenderedWeather


NO_INTERNET_NOTICE = "No internet connection."
MENU = ({"id": "refresh", "title": "Refresh"},)


@dataclass
class ScreenState:
    weather: Optional[RenderedWeather] = None
    progress_visible: bool = False
    notices: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "weather": self.weather.as_dict() if self.weather else None,
            "progress_visible": self.progress_visible,
            "notices": list(self.notices),
        }


class ScreenNotifier:
    """Shows notices on the screen; the rationale answer is preconfigured."""

    def __init__(self, state: ScreenState, *, accept_rationale: bool = False) -> None:
        self.state = state
        self.accept_rationale = accept_rationale
        self._log = logging.getLogger(self.__class__.__name__)

    def show_notice(self, message: str) -> None:
        self._log.info("Notice: %s", message)
        self.state.notices.append(message)

    def show_rationale(self, title: str, message: str) -> bool:
        self._log.info("%s: %s", title, message)
        self.state.notices.append(message)
        return self.accept_rationale

    def clear(self) -> None:
        self.state.notices.clear()


class WeatherScreen:
    """Composes the location fix and the weather fetch.

    A cycle is two awaited steps run in order: one fix, then at most one
    request for that fix. HTTP and transport failures are only logged; the
    user sees notices for permission, provider and network problems only.
    After :meth:`teardown` late results are dropped without touching the
    cache or the screen state.
    """

    def __init__(
        self,
        *,
        acquirer: LocationAcquirer,
        client: WeatherProvider,
        cache: LastResultCache,
        presenter: Presenter,
        network: NetworkStack,
        notifier: ScreenNotifier,
        units: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.acquirer = acquirer
        self.client = client
        self.cache = cache
        self.presenter = presenter
        self.network = network
        self.notifier = notifier
        self.state = notifier.state
        self.units = units
        self.token = CancellationToken()
        self.started = False
        self._log = logger or logging.getLogger(self.__class__.__name__)

    @property
    def menu(self):
        return MENU

    # Public API ---------------------------------------------------------
    async def start(self) -> ScreenState:
        self.started = True
        self.render_cached()
        await self._run_cycle()
        return self.state

    async def refresh(self) -> ScreenState:
        await self._run_cycle()
        return self.state

    def teardown(self) -> None:
        self.token.cancel()

    def render_cached(self) -> Optional[WeatherRecord]:
        record = self.cache.load()
        if record is not None:
            self._render(record)
        return record

    async def load_weather(self, coordinate: Coordinate) -> Optional[WeatherRecord]:
        self.token.raise_if_cancelled()
        try:
            self._require_network()
        except NoNetwork as exc:
            self._log.info("Skipping weather request: %s", exc)
            self.notifier.show_notice(NO_INTERNET_NOTICE)
            return None

        self._set_progress(True)
        try:
            record = await self.client.fetch_weather(coordinate, self.units)
        except HttpBadRequest:
            self._log.error("Error 400: Bad Connection")
            return None
        except HttpNotFound:
            self._log.error("Error 404: Not Found")
            return None
        except HttpError as exc:
            self._log.error("Error %s: Generic Error", exc.status_code)
            return None
        except (TransportFailure, InvalidPayload) as exc:
            self._log.error("Error: %s", exc)
            return None
        finally:
            self._set_progress(False)

        self.token.raise_if_cancelled()
        self.cache.save(record)
        self._log.info("Response Result: %s", record)
        self._render(record)
        return record

    # Helpers ------------------------------------------------------------
    async def _run_cycle(self) -> None:
        # Notices only describe the latest cycle.
        if not self.token.cancelled:
            self.notifier.clear()
        try:
            coordinate = await self.acquirer.acquire(self.token)
            if coordinate is None:
                return
            await self.load_weather(coordinate)
        except OperationCancelled:
            self._log.info("Screen torn down, dropping in-flight result")

    def _require_network(self) -> None:
        if not is_network_available(self.network):
            raise NoNetwork("no validated cellular, wifi or ethernet network")

    def _render(self, record: WeatherRecord) -> None:
        if self.token.cancelled:
            return
        self.state.weather = self.presenter.render(record)

    def _set_progress(self, visible: bool) -> None:
        if self.token.cancelled:
            return
        self.state.progress_visible = visible


__all__ = ["WeatherScreen", "ScreenState", "ScreenNotifier", "NO_INTERNET_NOTICE", "MENU"]
