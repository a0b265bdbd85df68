# Load environment variables FIRST (before any other imports)
from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from core.station_monitor import StationMonitor
from core.views import LOADING_TEXT, RESULT_TITLE, format_observation_time, format_temperature

# Silence verbose loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logger = logging.getLogger("web_server")

app = FastAPI(title="Station Temperature")

# Templates
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

_monitor: Optional[StationMonitor] = None


def get_monitor() -> StationMonitor:
    """Process-wide monitor, created on first use from the environment config."""
    global _monitor
    if _monitor is None:
        _monitor = StationMonitor()
    return _monitor


@app.on_event("startup")
async def startup_event():
    """Kick off the initial load."""
    monitor = get_monitor()
    logger.info(f"Initial METAR load for {monitor.config.icao_id} ({monitor.config.request_url})")
    monitor.start_refresh()


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    snapshot = get_monitor().snapshot
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "snapshot": snapshot,
            "status": snapshot.display_status,
            "loading_text": LOADING_TEXT,
            "result_title": RESULT_TITLE,
            "temperature": format_temperature(snapshot.reading.temperature_c) if snapshot.reading else "",
            "last_updated": format_observation_time(snapshot),
        },
    )


@app.get("/api/temperature")
async def get_temperature():
    """Current display state: loading, error or data."""
    return get_monitor().snapshot.to_dict()


@app.post("/api/refresh")
async def refresh_temperature():
    """Start a fetch unless one is already in flight (409)."""
    monitor = get_monitor()
    if not monitor.start_refresh():
        return JSONResponse(
            status_code=409,
            content={"accepted": False, "error": "Refresh already in progress", **monitor.snapshot.to_dict()},
        )
    logger.info(f"Manual refresh triggered for {monitor.config.icao_id}")
    return JSONResponse(status_code=202, content={"accepted": True, **monitor.snapshot.to_dict()})


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S"
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
