# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request types for sending application-level requests through the server.

Only the REST API can send requests; these types are serialized into the
body of its ``/client/send`` endpoint.
"""

import base64
from dataclasses import dataclass, field
from typing import Any


@dataclass
class RequestDefinition:
    """
    An HTTP request to be sent by the server on the caller's behalf.

    Attributes:
        method: HTTP method (e.g., 'GET', 'POST')
        url: Absolute target URL
        headers: Raw header pairs, preserving order and duplicates
        raw_body: Request body bytes (sent base64 encoded)
    """

    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    raw_body: bytes = b""

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "headers": [list(pair) for pair in self.headers],
            "rawBody": base64.b64encode(self.raw_body).decode("ascii"),
        }


@dataclass
class RequestOptions:
    """
    Options controlling how the server sends a request.

    Attributes:
        ignore_host_https_errors: Hostnames whose TLS errors are ignored,
            or True to ignore TLS errors everywhere
        trusted_ca_certificates: Extra PEM certificates to trust
        client_certificate: Client certificate to present, as sent to the server
        proxy_config: Upstream proxy configuration, as sent to the server
        lookup_options: DNS lookup options, as sent to the server
    """

    ignore_host_https_errors: list[str] | bool = field(default_factory=list)
    trusted_ca_certificates: list[str] = field(default_factory=list)
    client_certificate: dict[str, Any] | None = None
    proxy_config: Any = None
    lookup_options: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "ignoreHostHttpsErrors": self.ignore_host_https_errors,
            "trustedCAs": [{"cert": cert} for cert in self.trusted_ca_certificates],
        }
        if self.client_certificate is not None:
            options["clientCertificate"] = self.client_certificate
        if self.proxy_config is not None:
            options["proxyConfig"] = self.proxy_config
        if self.lookup_options is not None:
            options["lookupOptions"] = self.lookup_options
        return options


__all__ = ["RequestDefinition", "RequestOptions"]
