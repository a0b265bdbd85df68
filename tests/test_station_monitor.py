import asyncio
from datetime import datetime, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from collector.metar.errors import MetarFetchError, TemperatureParseError
from collector.metar_fetcher import MetarReading
from config import StationConfig
from core.models import MonitorState
from core.station_monitor import StationMonitor
from core.views import render_text


CONFIG = StationConfig(icao_id="UAAA", name="Almaty International", metar_url="https://example.invalid/UAAA.TXT")
OBS_TIME = datetime(2024, 6, 25, 5, 0, tzinfo=timezone.utc)


def _reading(temp: int = 15, obs_time=OBS_TIME) -> MetarReading:
    return MetarReading(
        station_id="UAAA",
        temperature_c=temp,
        observation_time=obs_time,
        raw_metar="UAAA 250500Z 15004MPS 9999 BKN030 15/09 Q1015 NOSIG",
    )


def test_monitor_starts_idle_and_displays_loading():
    monitor = StationMonitor(CONFIG, fetch=None)

    assert monitor.state == MonitorState.IDLE
    assert monitor.snapshot.display_status == "loading"
    assert render_text(monitor.snapshot) == "Fetching Weather Data..."


def test_refresh_success_sets_ready_with_reading():
    async def fake_fetch(config):
        return _reading()

    monitor = StationMonitor(CONFIG, fetch=fake_fetch)
    accepted = asyncio.run(monitor.refresh())

    assert accepted is True
    assert monitor.state == MonitorState.READY
    snapshot = monitor.snapshot.to_dict()
    assert snapshot["status"] == "data"
    assert snapshot["temperature_c"] == 15
    assert snapshot["observation_time"] == "2024-06-25T05:00:00+00:00"
    assert snapshot["error"] is None


def test_refresh_fetch_error_sets_failed_with_message():
    async def fake_fetch(config):
        raise MetarFetchError("Failed to fetch: 500 Internal Server Error")

    monitor = StationMonitor(CONFIG, fetch=fake_fetch)
    asyncio.run(monitor.refresh())

    assert monitor.state == MonitorState.FAILED
    assert monitor.snapshot.reading is None
    assert monitor.snapshot.error == "Failed to fetch: 500 Internal Server Error"
    assert render_text(monitor.snapshot) == "Error\nFailed to fetch: 500 Internal Server Error"


def test_refresh_parse_error_is_not_partially_displayed():
    async def fake_fetch(config):
        raise TemperatureParseError("Could not parse temperature from the METAR data.")

    monitor = StationMonitor(CONFIG, fetch=fake_fetch)
    asyncio.run(monitor.refresh())

    assert monitor.snapshot.display_status == "error"
    assert monitor.snapshot.to_dict()["temperature_c"] is None


def test_refresh_unexpected_error_without_message_uses_fallback():
    async def fake_fetch(config):
        raise RuntimeError()

    monitor = StationMonitor(CONFIG, fetch=fake_fetch)
    asyncio.run(monitor.refresh())

    assert monitor.state == MonitorState.FAILED
    assert monitor.snapshot.error == "An unknown error occurred."


def test_refresh_is_refused_while_loading():
    calls = []

    async def scenario():
        release = asyncio.Event()

        async def slow_fetch(config):
            calls.append(config.icao_id)
            await release.wait()
            return _reading()

        monitor = StationMonitor(CONFIG, fetch=slow_fetch)
        first = asyncio.create_task(monitor.refresh())
        await asyncio.sleep(0)

        assert monitor.state == MonitorState.LOADING
        assert monitor.snapshot.can_refresh is False
        assert await monitor.refresh() is False
        assert monitor.start_refresh() is False

        release.set()
        assert await first is True
        return monitor

    monitor = asyncio.run(scenario())

    assert calls == ["UAAA"]
    assert monitor.state == MonitorState.READY


def test_refresh_allowed_again_after_failure_and_replaces_state():
    results = [MetarFetchError("Failed to fetch: 502 Bad Gateway"), _reading(temp=-5, obs_time=None)]

    async def fake_fetch(config):
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    monitor = StationMonitor(CONFIG, fetch=fake_fetch)

    async def scenario():
        await monitor.refresh()
        assert monitor.state == MonitorState.FAILED
        assert await monitor.refresh() is True

    asyncio.run(scenario())

    assert monitor.state == MonitorState.READY
    assert monitor.snapshot.error is None
    assert render_text(monitor.snapshot) == "Current Temperature at Station\nUAAA\n-5°C"


def test_start_refresh_schedules_cycle():
    async def fake_fetch(config):
        return _reading()

    async def scenario():
        monitor = StationMonitor(CONFIG, fetch=fake_fetch)
        assert monitor.start_refresh() is True
        assert monitor.state == MonitorState.LOADING
        await monitor.wait()
        return monitor

    monitor = asyncio.run(scenario())

    assert monitor.state == MonitorState.READY
    assert render_text(monitor.snapshot).endswith("Last updated: 2024-06-25 05:00 UTC")
