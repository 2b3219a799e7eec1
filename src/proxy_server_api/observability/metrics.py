# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Negotiation metrics for the proxy server API client.

This module provides:
1. NegotiationMetrics - In-process counters for protocol negotiation
2. PrometheusNegotiationMetrics - The same events exported through prometheus_client

Usage:
    metrics = NegotiationMetrics()

    # Record a failed REST probe
    metrics.record_probe(ApiProtocol.REST, succeeded=False)

    # Record the negotiated outcome
    metrics.record_negotiated(ApiProtocol.GRAPHQL, "1.2.0", duration=0.42)

    # Get stats for JSON serialization
    stats = metrics.get_stats()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from ..types.server import ApiProtocol

logger = logging.getLogger(__name__)

NEGOTIATION_DURATION_BUCKETS = [0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60, 300]


@dataclass
class NegotiationMetrics:
    """
    Counters describing how protocol negotiation went.

    Thread Safety:
        Updates are guarded by a threading.Lock so the stats can be read
        from a metrics thread while the event loop records into them.

    Example:
        >>> metrics = NegotiationMetrics()
        >>> metrics.record_probe(ApiProtocol.REST, succeeded=True)
        >>> metrics.probe_attempts
        1
    """

    probe_attempts: int = 0
    probe_failures: dict[str, int] = field(default_factory=dict)
    retry_rounds: int = 0
    negotiations_completed: int = 0
    selected_protocol: ApiProtocol | None = None
    server_version: str | None = None
    last_negotiation_duration: float | None = None

    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record_probe(self, api_protocol: ApiProtocol, succeeded: bool) -> None:
        with self._lock:
            self.probe_attempts += 1
            if not succeeded:
                key = api_protocol.value
                self.probe_failures[key] = self.probe_failures.get(key, 0) + 1

    def record_retry(self) -> None:
        with self._lock:
            self.retry_rounds += 1

    def record_negotiated(
        self,
        api_protocol: ApiProtocol,
        server_version: str,
        duration: float,
    ) -> None:
        with self._lock:
            self.negotiations_completed += 1
            self.selected_protocol = api_protocol
            self.server_version = server_version
            self.last_negotiation_duration = duration

    def get_stats(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot."""
        with self._lock:
            return {
                "probe_attempts": self.probe_attempts,
                "probe_failures": dict(self.probe_failures),
                "retry_rounds": self.retry_rounds,
                "negotiations_completed": self.negotiations_completed,
                "selected_protocol": (
                    self.selected_protocol.value if self.selected_protocol else None
                ),
                "server_version": self.server_version,
                "last_negotiation_duration": self.last_negotiation_duration,
            }

    def reset(self) -> None:
        with self._lock:
            self.probe_attempts = 0
            self.probe_failures = {}
            self.retry_rounds = 0
            self.negotiations_completed = 0
            self.selected_protocol = None
            self.server_version = None
            self.last_negotiation_duration = None


class PrometheusNegotiationMetrics(NegotiationMetrics):
    """
    NegotiationMetrics that also exports to Prometheus.

    Metrics:
        - proxy_api_version_probes_total: Counter of version probes by protocol and outcome
        - proxy_api_probe_retry_rounds_total: Counter of rounds where both probes failed
        - proxy_api_negotiation_duration_seconds: Histogram of time to negotiate
        - proxy_api_negotiated_protocol: Gauge, 1 for the selected protocol

    Usage:
        >>> prom_metrics = PrometheusNegotiationMetrics(registry=CollectorRegistry())
        >>> prom_metrics.record_probe(ApiProtocol.REST, succeeded=False)
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """
        Initialize Prometheus negotiation metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.
        """
        super().__init__()
        kwargs: dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry

        self.version_probes = Counter(
            "proxy_api_version_probes_total",
            "Server version probes",
            ["protocol", "outcome"],
            **kwargs,
        )
        self.retry_rounds_total = Counter(
            "proxy_api_probe_retry_rounds_total",
            "Probe rounds in which every protocol failed",
            **kwargs,
        )
        self.negotiation_duration = Histogram(
            "proxy_api_negotiation_duration_seconds",
            "Time from readiness to a negotiated protocol",
            buckets=NEGOTIATION_DURATION_BUCKETS,
            **kwargs,
        )
        self.negotiated_protocol = Gauge(
            "proxy_api_negotiated_protocol",
            "Negotiated protocol (1 = selected)",
            ["protocol"],
            **kwargs,
        )

        logger.info("Prometheus negotiation metrics initialized")

    def record_probe(self, api_protocol: ApiProtocol, succeeded: bool) -> None:
        super().record_probe(api_protocol, succeeded)
        self.version_probes.labels(
            protocol=api_protocol.value,
            outcome="success" if succeeded else "failure",
        ).inc()

    def record_retry(self) -> None:
        super().record_retry()
        self.retry_rounds_total.inc()

    def record_negotiated(
        self,
        api_protocol: ApiProtocol,
        server_version: str,
        duration: float,
    ) -> None:
        super().record_negotiated(api_protocol, server_version, duration)
        self.negotiation_duration.observe(duration)
        for candidate in ApiProtocol:
            self.negotiated_protocol.labels(protocol=candidate.value).set(
                1 if candidate is api_protocol else 0
            )


_prometheus_metrics: PrometheusNegotiationMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_negotiation_metrics() -> PrometheusNegotiationMetrics:
    """
    Get or create the Prometheus negotiation metrics singleton.

    Prometheus refuses duplicate registrations in the default registry, so
    every facade in the process shares one instance.
    """
    global _prometheus_metrics

    if _prometheus_metrics is None:
        with _prometheus_lock:
            if _prometheus_metrics is None:
                _prometheus_metrics = PrometheusNegotiationMetrics()

    return _prometheus_metrics


def reset_prometheus_negotiation_metrics() -> None:
    """Reset the Prometheus metrics singleton (mainly for testing)."""
    global _prometheus_metrics
    _prometheus_metrics = None


__all__ = [
    "NEGOTIATION_DURATION_BUCKETS",
    "NegotiationMetrics",
    "PrometheusNegotiationMetrics",
    "get_prometheus_negotiation_metrics",
    "reset_prometheus_negotiation_metrics",
]
