"""Base service with request metrics shared by the external-facing services."""

import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from utils.logger import logger


class ServiceStatus(Enum):
    """Service status enumeration."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class ServiceMetrics:
    """Service metrics data structure."""

    service_name: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    average_response_time: float = 0.0
    last_request_time: Optional[datetime] = None
    status: ServiceStatus = ServiceStatus.UNKNOWN
    custom_metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        """Calculate success rate percentage."""
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service_name": self.service_name,
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": self.success_rate,
            "average_response_time": self.average_response_time,
            "last_request_time": self.last_request_time.isoformat()
            if self.last_request_time
            else None,
            "status": self.status.value,
            "custom_metrics": self.custom_metrics,
        }


class BaseService(ABC):
    """Base service class providing metrics tracking."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.metrics = ServiceMetrics(service_name=service_name)
        self._lock = threading.RLock()
        self._initialized = False

    @abstractmethod
    def initialize(self) -> bool:
        """Initialize the service.

        Returns:
            bool: True if initialization successful, False otherwise
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Report whether the service can currently be used."""

    def is_initialized(self) -> bool:
        return self._initialized

    def get_status(self) -> ServiceStatus:
        return self.metrics.status

    @contextmanager
    def track_request(self, operation_name: Optional[str] = None):
        """Context manager to track request metrics."""
        start_time = time.time()

        with self._lock:
            self.metrics.total_requests += 1
            self.metrics.last_request_time = datetime.now(timezone.utc)
            if operation_name:
                key = f"operation_{operation_name}"
                self.metrics.custom_metrics[key] = (
                    self.metrics.custom_metrics.get(key, 0) + 1
                )

        try:
            yield
        except Exception as e:
            with self._lock:
                self.metrics.failed_requests += 1
                self._update_average_response_time(time.time() - start_time)
                if self.metrics.success_rate < 80:
                    self.metrics.status = ServiceStatus.UNHEALTHY
                else:
                    self.metrics.status = ServiceStatus.DEGRADED
            logger.error(f"Request failed in {self.service_name}: {str(e)}")
            raise

        with self._lock:
            self.metrics.successful_requests += 1
            self._update_average_response_time(time.time() - start_time)
            if self.metrics.success_rate >= 95:
                self.metrics.status = ServiceStatus.HEALTHY
            elif self.metrics.success_rate >= 80:
                self.metrics.status = ServiceStatus.DEGRADED
            else:
                self.metrics.status = ServiceStatus.UNHEALTHY

    def _update_average_response_time(self, response_time: float) -> None:
        """Exponential moving average with alpha = 0.1."""
        if self.metrics.average_response_time == 0:
            self.metrics.average_response_time = response_time
        else:
            alpha = 0.1
            self.metrics.average_response_time = (
                alpha * response_time + (1 - alpha) * self.metrics.average_response_time
            )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.service_name})"
