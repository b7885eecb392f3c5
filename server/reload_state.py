"""
Table reload state management.
Tracks a background reload of the source tables so the API can report on it.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
import threading

from common.constants import *
from common.utils import setup_logging

logger = setup_logging(__name__, PATHS["app_log_file"])

SOURCES = ["collaborative", "content"]


class ReloadStatus(str, Enum):
    """Reload execution status."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ReloadStateManager:
    """
    Holds the state of the most recent table reload.
    Written from the background reload thread, read from API handlers.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.reload_id: Optional[str] = None
        self.status = ReloadStatus.IDLE
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.sources: Dict[str, str] = {name: "pending" for name in SOURCES}
        self.error_message: Optional[str] = None

    def try_start(self, reload_id: str) -> bool:
        """Begin a reload unless one is already running. Returns False if it is."""
        with self.lock:
            if self.status == ReloadStatus.RUNNING:
                return False
            self.reload_id = reload_id
            self.status = ReloadStatus.RUNNING
            self.start_time = datetime.now()
            self.end_time = None
            self.sources = {name: "pending" for name in SOURCES}
            self.error_message = None
            logger.info(f"Reload {reload_id} started")
            return True

    def mark_source(self, source: str, status: str) -> None:
        with self.lock:
            if source not in self.sources:
                logger.warning(f"Unknown source: {source}")
                return
            self.sources[source] = status

    def complete(self) -> None:
        with self.lock:
            self.status = ReloadStatus.COMPLETED
            self.end_time = datetime.now()
            logger.info(f"Reload {self.reload_id} completed")

    def fail(self, error_msg: str) -> None:
        with self.lock:
            # sources load in order, so the first one still pending is the one that broke
            for source, status in self.sources.items():
                if status == "pending":
                    self.sources[source] = "failed"
                    break
            self.status = ReloadStatus.FAILED
            self.end_time = datetime.now()
            self.error_message = error_msg
            logger.error(f"Reload {self.reload_id} failed: {error_msg}")

    def is_running(self) -> bool:
        with self.lock:
            return self.status == ReloadStatus.RUNNING

    def get_status(self) -> Dict[str, Any]:
        """Current reload status as a dictionary."""
        with self.lock:
            duration = 0
            if self.start_time:
                duration = int(((self.end_time or datetime.now()) - self.start_time).total_seconds())
            return {
                "reload_id": self.reload_id,
                "status": self.status.value,
                "sources": dict(self.sources),
                "duration_seconds": duration,
                "error_message": self.error_message,
            }
