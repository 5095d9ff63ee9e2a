"""Application metrics collection and monitoring for the Person Service API."""

import time
from collections import Counter as CounterType
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict

import psutil


@dataclass
class Metrics:
    """Application metrics collection."""

    # API Metrics
    api_requests_total: int = 0
    api_response_time_total: float = 0.0
    api_errors_by_endpoint: Dict[str, int] = field(default_factory=dict)

    # Store Metrics
    store_operations: CounterType[str] = field(default_factory=CounterType)
    store_failures: CounterType[str] = field(default_factory=CounterType)

    _lock: Lock = field(default_factory=Lock, init=False)


class MetricsCollector:
    """Collects and manages application metrics."""

    def __init__(self):
        self.metrics = Metrics()
        self.start_time = time.time()

    def record_api_request(self, endpoint: str, response_time: float, success: bool) -> None:
        """Record API request metrics."""
        with self.metrics._lock:
            self.metrics.api_requests_total += 1
            self.metrics.api_response_time_total += response_time

            if not success:
                self.metrics.api_errors_by_endpoint[endpoint] = (
                    self.metrics.api_errors_by_endpoint.get(endpoint, 0) + 1
                )

    def record_store_operation(self, operation: str, success: bool) -> None:
        """Record the outcome of one person store operation."""
        with self.metrics._lock:
            self.metrics.store_operations[operation] += 1
            if not success:
                self.metrics.store_failures[operation] += 1

    def get_system_metrics(self) -> Dict[str, Any]:
        """Get current system metrics."""
        memory = psutil.virtual_memory()
        process = psutil.Process()

        return {
            "cpu_percent": psutil.cpu_percent(),
            "memory_percent": memory.percent,
            "memory_available_bytes": memory.available,
            "process_rss_bytes": process.memory_info().rss,
            "uptime_seconds": time.time() - self.start_time,
        }

    def get_summary(self) -> Dict[str, Any]:
        """Get comprehensive metrics summary."""
        with self.metrics._lock:
            avg_response_time = (
                self.metrics.api_response_time_total / self.metrics.api_requests_total
                if self.metrics.api_requests_total
                else 0
            )

            return {
                "api_metrics": {
                    "requests_total": self.metrics.api_requests_total,
                    "average_response_time_ms": avg_response_time * 1000,
                    "errors_by_endpoint": dict(self.metrics.api_errors_by_endpoint),
                },
                "store_metrics": {
                    "operations": dict(self.metrics.store_operations),
                    "failures": dict(self.metrics.store_failures),
                },
                "system_metrics": self.get_system_metrics(),
            }

    def reset_metrics(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self.metrics._lock:
            self.metrics = Metrics()
            self.start_time = time.time()
