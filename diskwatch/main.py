import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api import drives
from .dependencies import get_disk_monitor, get_settings
from .logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings = get_settings()
    setup_logging(settings)

    logging.info("diskwatch starting up...")
    logging.info(
        f"Default alert threshold: {settings.default_alert_threshold}%, "
        f"cooldown: {settings.alert_cooldown_seconds}s"
    )
    if settings.monitored_drives:
        logging.info(f"Monitored drives: {', '.join(settings.monitored_drives)}")
    else:
        logging.info("Monitoring all non-removable drives")

    disk_monitor = get_disk_monitor()
    await disk_monitor.start_monitoring()

    yield

    logging.info("diskwatch shutting down...")
    await disk_monitor.stop_monitoring()


app = FastAPI(
    title="diskwatch",
    description="Disk usage monitor with threshold alerts for desktop panels",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(drives.router)


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "diskwatch.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
