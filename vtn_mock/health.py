"""
Liveness and readiness probes.
"""
from datetime import datetime, timezone
from typing import Dict, Any

import psutil

from .logging import get_logger

logger = get_logger()


class HealthChecker:
    """
    Health checker for the mock VTN.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (can the service handle traffic?)
    """

    def __init__(self, service_name: str = "mock-vtn", version: str = "0.1.0", store_sizes=None):
        """
        Args:
            service_name: Reported service name
            version: Reported version
            store_sizes: Optional callable returning {"events": n, "subscriptions": m}
        """
        self.service_name = service_name
        self.version = version
        self._store_sizes = store_sizes

    def _timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def liveness(self) -> Dict[str, Any]:
        return {
            "status": "ok",
            "service": self.service_name,
            "version": self.version,
            "timestamp": self._timestamp(),
        }

    def readiness(self) -> Dict[str, Any]:
        """
        Readiness check - disk and memory headroom plus store sizes.

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {
            "disk_space": self._check_disk_space(),
            "memory": self._check_memory(),
        }
        overall_status = "ready"
        if any(check["status"] == "error" for check in checks.values()):
            overall_status = "not_ready"

        result = {
            "status": overall_status,
            "service": self.service_name,
            "version": self.version,
            "timestamp": self._timestamp(),
            "checks": checks,
        }
        if self._store_sizes is not None:
            result["stores"] = self._store_sizes()
        return result

    def _check_disk_space(self, threshold_gb: float = 1.0) -> Dict[str, Any]:
        try:
            disk = psutil.disk_usage("/")
        except OSError as e:
            logger.warning("disk_health_check_failed", error=str(e))
            return {"status": "error", "error": str(e)}

        available_gb = disk.free / (1024**3)
        if available_gb < threshold_gb:
            status = "error"
        elif available_gb < threshold_gb * 2:
            status = "warning"
        else:
            status = "ok"

        return {
            "status": status,
            "available_gb": round(available_gb, 2),
            "total_gb": round(disk.total / (1024**3), 2),
            "used_percent": disk.percent,
        }

    def _check_memory(self, threshold_mb: float = 50.0) -> Dict[str, Any]:
        memory = psutil.virtual_memory()
        available_mb = memory.available / (1024**2)

        if available_mb < threshold_mb:
            status = "error"
        elif available_mb < threshold_mb * 2:
            status = "warning"
        else:
            status = "ok"

        return {
            "status": status,
            "available_mb": round(available_mb, 2),
            "total_mb": round(memory.total / (1024**2), 2),
            "used_percent": memory.percent,
        }
