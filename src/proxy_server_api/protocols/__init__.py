# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable components.

Available protocols:
- ApiClientProtocol: Capabilities shared by the REST and GraphQL clients
- RequestSenderProtocol: REST-only capability to send requests
- TokenStoreProtocol: Read interface of the shared token store
"""

from .client import ApiClientProtocol, RequestSenderProtocol
from .store import TokenStoreProtocol

__all__ = [
    "ApiClientProtocol",
    "RequestSenderProtocol",
    "TokenStoreProtocol",
]
