# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol clients for the locally running server.

Available clients:
- RestApiClient: REST API, newer servers only, can send requests
- GraphQLApiClient: GraphQL API, every server version

ApiClient is the closed union the negotiator chooses from.
"""

from .base import BaseApiClient
from .graphql import GraphQLApiClient
from .rest import RestApiClient

ApiClient = RestApiClient | GraphQLApiClient

__all__ = [
    "ApiClient",
    "BaseApiClient",
    "GraphQLApiClient",
    "RestApiClient",
]
