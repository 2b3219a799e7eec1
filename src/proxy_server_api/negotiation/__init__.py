# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol negotiation.

This module provides:
- VersionNegotiator: Probes the server and picks the REST or GraphQL client
- version_satisfies: The version-range compatibility check
- SERVER_REST_API_SUPPORTED: Servers in this range support the REST API
"""

from .negotiator import (
    DEFAULT_PROBE_RETRY_DELAY,
    ClientFactory,
    ProbeFailureCallback,
    VersionNegotiator,
)
from .versions import SERVER_REST_API_SUPPORTED, parse_version_range, version_satisfies

__all__ = [
    "DEFAULT_PROBE_RETRY_DELAY",
    "SERVER_REST_API_SUPPORTED",
    "ClientFactory",
    "ProbeFailureCallback",
    "VersionNegotiator",
    "parse_version_range",
    "version_satisfies",
]
