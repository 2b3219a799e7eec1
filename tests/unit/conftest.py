"""
Shared fixtures for the unit test suite.

FakeApiClient stands in for a protocol client: its version probe answers
from a script of results (strings, or exceptions to raise), and every call
is recorded so tests can assert on what reached the "network".
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from proxy_server_api.negotiation import VersionNegotiator
from proxy_server_api.readiness import ReadinessGate
from proxy_server_api.types.server import ActivationResult, ApiProtocol, ServerConfig

# ============================================================================
# Fakes
# ============================================================================


class FakeApiClient:
    """Scriptable stand-in for RestApiClient / GraphQLApiClient."""

    def __init__(
        self,
        api_protocol: ApiProtocol,
        auth_token: str | None = None,
        versions: list[Any] | None = None,
    ):
        self._api_protocol = api_protocol
        self.auth_token = auth_token
        self._versions = list(versions or [])
        self.version_calls = 0
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

        self.get_config = AsyncMock(
            return_value=ServerConfig(certificate_path="/tmp/ca.pem")
        )
        self.get_network_interfaces = AsyncMock(return_value={"lo": []})
        self.get_interceptors = AsyncMock(return_value=[])
        self.get_detailed_interceptor_metadata = AsyncMock(return_value=None)
        self.activate_interceptor = AsyncMock(
            return_value=ActivationResult(success=True, metadata={"ok": True})
        )
        self.trigger_server_update = AsyncMock(return_value=None)
        self.send_request = AsyncMock()

    @property
    def api_protocol(self) -> ApiProtocol:
        return self._api_protocol

    async def get_server_version(self) -> str:
        self.version_calls += 1
        self.calls.append(("get_server_version", ()))
        # The last scripted result repeats forever
        result = self._versions.pop(0) if len(self._versions) > 1 else self._versions[0]
        if isinstance(result, BaseException):
            raise result
        return result


class ClientRecorder:
    """Client factories that remember every client they build."""

    def __init__(self, rest_versions: list[Any], graphql_versions: list[Any]):
        self.rest_versions = rest_versions
        self.graphql_versions = graphql_versions
        self.rest_clients: list[FakeApiClient] = []
        self.graphql_clients: list[FakeApiClient] = []

    def rest(self, auth_token: str | None) -> FakeApiClient:
        client = FakeApiClient(ApiProtocol.REST, auth_token, self.rest_versions)
        self.rest_clients.append(client)
        return client

    def graphql(self, auth_token: str | None) -> FakeApiClient:
        client = FakeApiClient(ApiProtocol.GRAPHQL, auth_token, self.graphql_versions)
        self.graphql_clients.append(client)
        return client


async def no_sleep(delay: float) -> None:
    return None


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def ready_gate() -> ReadinessGate:
    gate = ReadinessGate()
    gate.signal_ready()
    return gate


@pytest.fixture
def make_negotiator() -> Callable[..., tuple[VersionNegotiator, ClientRecorder]]:
    """Build a negotiator over fake clients with scripted version probes."""

    def _make(
        rest_versions: list[Any],
        graphql_versions: list[Any],
        **kwargs: Any,
    ) -> tuple[VersionNegotiator, ClientRecorder]:
        recorder = ClientRecorder(rest_versions, graphql_versions)
        kwargs.setdefault("sleep", no_sleep)
        negotiator = VersionNegotiator(
            rest_client_factory=recorder.rest,
            graphql_client_factory=recorder.graphql,
            **kwargs,
        )
        return negotiator, recorder

    return _make
