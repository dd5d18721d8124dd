from typing import List

from fastapi import APIRouter, Depends

from ..dependencies import get_disk_monitor
from ..models import DriveStatus, RefreshResult
from ..services.disk_monitor import DiskMonitorService

router = APIRouter(prefix="/api", tags=["drives"])


@router.get("/drives", response_model=List[DriveStatus])
async def get_drives(
    disk_monitor: DiskMonitorService = Depends(get_disk_monitor),
) -> List[DriveStatus]:
    """All monitored drives from the most recent refresh, in enumeration order."""
    return disk_monitor.get_drives()


@router.get("/drives/panel", response_model=List[DriveStatus])
async def get_panel_drives(
    disk_monitor: DiskMonitorService = Depends(get_disk_monitor),
) -> List[DriveStatus]:
    return disk_monitor.get_panel_drives()


@router.get("/monitoring")
async def get_monitoring_status(
    disk_monitor: DiskMonitorService = Depends(get_disk_monitor),
) -> dict:
    return disk_monitor.get_monitoring_status()


@router.post("/refresh", response_model=RefreshResult)
async def trigger_refresh(
    disk_monitor: DiskMonitorService = Depends(get_disk_monitor),
) -> RefreshResult:
    """
    Run a refresh cycle now and return its result.

    Waits for any tick already in progress. Alerts fired here are delivered
    exactly as they would be from the polling loop.
    """
    return await disk_monitor.refresh_async()
