# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Server payload types shared by the REST and GraphQL clients.

These are pass-through values: the facade hands them to callers without
inspecting them, except for ActivationResult which it branches on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ApiProtocol(Enum):
    """The backend protocol a client speaks.

    - REST: The REST API, supported by newer servers. The only protocol
      that can send application-level requests.
    - GRAPHQL: The GraphQL API, supported by every server version.
    """

    REST = "rest"
    GRAPHQL = "graphql"


@dataclass
class ServerConfig:
    """Proxy configuration reported by the server.

    Attributes:
        certificate_path: Filesystem path of the proxy's CA certificate
        certificate_content: PEM content of the CA certificate
        certificate_fingerprint: Fingerprint of the CA certificate
        network_interfaces: Network interfaces, when the server includes them
        system_proxy: Upstream system proxy settings, if detected
        dns_servers: DNS servers the proxy resolves through, if configured
        rule_parameter_keys: Keys of rule parameters the server accepts
    """

    certificate_path: str
    certificate_content: str | None = None
    certificate_fingerprint: str | None = None
    network_interfaces: dict[str, Any] | None = None
    system_proxy: dict[str, Any] | None = None
    dns_servers: list[str] = field(default_factory=list)
    rule_parameter_keys: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerConfig":
        return cls(
            certificate_path=data["certificatePath"],
            certificate_content=data.get("certificateContent"),
            certificate_fingerprint=data.get("certificateFingerprint"),
            network_interfaces=data.get("networkInterfaces"),
            system_proxy=data.get("systemProxy"),
            dns_servers=list(data.get("dnsServers") or []),
            rule_parameter_keys=list(data.get("ruleParameterKeys") or []),
        )


# Interface name -> list of address records, exactly as the server reports them
NetworkInterfaces = dict[str, list[dict[str, Any]]]


@dataclass
class ServerInterceptor:
    """An interceptor the server knows how to activate.

    Attributes:
        id: Interceptor identifier (e.g., 'fresh-chrome', 'docker-attach')
        version: Interceptor implementation version
        is_activable: Whether the interceptor can be activated on this machine
        is_active: Whether the interceptor is active for the queried proxy port
        metadata: Summary metadata, interceptor specific
    """

    id: str
    version: str
    is_activable: bool
    is_active: bool
    metadata: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerInterceptor":
        return cls(
            id=data["id"],
            version=data["version"],
            is_activable=bool(data.get("isActivable", False)),
            is_active=bool(data.get("isActive", False)),
            metadata=data.get("metadata"),
        )


@dataclass
class ActivationResult:
    """
    Outcome of an interceptor activation.

    On success, ``metadata`` holds whatever the interceptor returned. On
    failure, ``details`` holds every field the server sent back, verbatim,
    including ``success`` itself.
    """

    success: bool
    metadata: Any = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, result: Any) -> "ActivationResult":
        """Normalize a raw activation response.

        Older servers answer with a bare boolean; newer ones with an object
        containing at least ``success``.
        """
        if isinstance(result, bool):
            return cls(success=result, details={"success": result})
        if not isinstance(result, dict):
            return cls(success=False, details={"success": False, "result": result})

        return cls(
            success=bool(result.get("success", False)),
            metadata=result.get("metadata"),
            details=dict(result),
        )


__all__ = [
    "ActivationResult",
    "ApiProtocol",
    "NetworkInterfaces",
    "ServerConfig",
    "ServerInterceptor",
]
