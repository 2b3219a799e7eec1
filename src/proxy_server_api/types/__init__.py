# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Type definitions for the proxy server API client.

Modules:
    server: Protocol tag and server payload types
    request: Request definitions for the REST-only send operation
"""

from .request import RequestDefinition, RequestOptions
from .server import (
    ActivationResult,
    ApiProtocol,
    NetworkInterfaces,
    ServerConfig,
    ServerInterceptor,
)

__all__ = [
    "ActivationResult",
    "ApiProtocol",
    "NetworkInterfaces",
    "RequestDefinition",
    "RequestOptions",
    "ServerConfig",
    "ServerInterceptor",
]
