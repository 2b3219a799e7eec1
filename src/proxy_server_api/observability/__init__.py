# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for protocol negotiation.

Classes:
    NegotiationMetrics: In-process negotiation counters.
    PrometheusNegotiationMetrics: Negotiation counters exported to Prometheus.

Functions:
    get_prometheus_negotiation_metrics: Get or create the Prometheus metrics singleton.
    reset_prometheus_negotiation_metrics: Reset the Prometheus metrics singleton.
"""

from .metrics import (
    NEGOTIATION_DURATION_BUCKETS,
    NegotiationMetrics,
    PrometheusNegotiationMetrics,
    get_prometheus_negotiation_metrics,
    reset_prometheus_negotiation_metrics,
)

__all__ = [
    "NEGOTIATION_DURATION_BUCKETS",
    "NegotiationMetrics",
    "PrometheusNegotiationMetrics",
    "get_prometheus_negotiation_metrics",
    "reset_prometheus_negotiation_metrics",
]
