"""
Station monitor runtime.

Holds the current display state and runs at most one fetch at a time:

    IDLE/READY/FAILED --refresh--> LOADING --success--> READY
                                           --failure--> FAILED

A refresh requested while LOADING is refused, not queued.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from collector.metar.errors import MetarError
from collector.metar_fetcher import MetarReading, fetch_metar
from config import StationConfig, get_station_config

from .models import MonitorSnapshot, MonitorState

logger = logging.getLogger("station_monitor")

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

FetchFn = Callable[[StationConfig], Awaitable[MetarReading]]


class StationMonitor:
    def __init__(
        self,
        config: Optional[StationConfig] = None,
        fetch: Optional[FetchFn] = None,
    ):
        self.config = config or get_station_config()
        self._fetch: FetchFn = fetch or fetch_metar
        self._snapshot = MonitorSnapshot(state=MonitorState.IDLE, station_id=self.config.icao_id)
        self._task: Optional[asyncio.Task] = None

    @property
    def snapshot(self) -> MonitorSnapshot:
        return self._snapshot

    @property
    def state(self) -> MonitorState:
        return self._snapshot.state

    def _set(self, state: MonitorState, **kwargs) -> None:
        # Single reference swap; readers see the old or the new snapshot.
        self._snapshot = MonitorSnapshot(state=state, station_id=self.config.icao_id, **kwargs)

    def _begin(self) -> bool:
        if self._snapshot.state == MonitorState.LOADING:
            logger.info(f"Refresh for {self.config.icao_id} refused: fetch already in flight")
            return False
        # Previous reading and error are dropped while loading.
        self._set(MonitorState.LOADING)
        return True

    async def refresh(self) -> bool:
        """
        Run one fetch cycle.

        Returns False (and does nothing) when a fetch is already in flight,
        True once the cycle has settled as READY or FAILED.
        """
        if not self._begin():
            return False
        await self._run_cycle()
        return True

    def start_refresh(self) -> bool:
        """
        Schedule a fetch cycle on the running loop.

        Returns False when a fetch is already in flight. The state is LOADING
        as soon as this returns True.
        """
        if not self._begin():
            return False
        self._task = asyncio.create_task(self._run_cycle())
        return True

    async def wait(self) -> None:
        """Wait for a scheduled cycle to settle."""
        if self._task is not None:
            await self._task

    async def _run_cycle(self) -> None:
        try:
            reading = await self._fetch(self.config)
        except asyncio.CancelledError:
            raise
        except MetarError as e:
            logger.error(f"Error fetching weather data for {self.config.icao_id}: {e}")
            self._set(MonitorState.FAILED, error=str(e) or UNKNOWN_ERROR_MESSAGE)
            return
        except Exception as e:
            logger.exception(f"Unexpected error fetching weather data for {self.config.icao_id}")
            self._set(MonitorState.FAILED, error=str(e) or UNKNOWN_ERROR_MESSAGE)
            return

        self._set(MonitorState.READY, reading=reading)
