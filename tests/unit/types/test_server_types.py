import base64

from proxy_server_api.types import (
    ActivationResult,
    RequestDefinition,
    RequestOptions,
    ServerConfig,
    ServerInterceptor,
)


class TestActivationResult:
    def test_boolean_response(self):
        assert ActivationResult.from_response(True).success is True
        failed = ActivationResult.from_response(False)
        assert failed.success is False
        assert failed.details == {"success": False}

    def test_object_response(self):
        result = ActivationResult.from_response({"success": True, "metadata": [1]})
        assert result.success is True
        assert result.metadata == [1]

    def test_missing_success_is_failure(self):
        result = ActivationResult.from_response({"error": "boom"})
        assert result.success is False
        assert result.details == {"error": "boom"}

    def test_unexpected_response_is_failure(self):
        result = ActivationResult.from_response(None)
        assert result.success is False
        assert result.details == {"success": False, "result": None}


class TestServerPayloads:
    def test_server_config_from_dict(self):
        config = ServerConfig.from_dict({"certificatePath": "/ca.pem"})
        assert config.certificate_path == "/ca.pem"
        assert config.certificate_content is None
        assert config.dns_servers == []

    def test_interceptor_from_dict_defaults(self):
        interceptor = ServerInterceptor.from_dict({"id": "x", "version": "1.0.0"})
        assert interceptor.is_activable is False
        assert interceptor.is_active is False
        assert interceptor.metadata is None


class TestRequestTypes:
    def test_definition_to_dict(self):
        definition = RequestDefinition(
            method="PUT",
            url="https://example.com/a",
            headers=[("x-a", "1"), ("x-a", "2")],
            raw_body=b"\x00body",
        )

        assert definition.to_dict() == {
            "method": "PUT",
            "url": "https://example.com/a",
            "headers": [["x-a", "1"], ["x-a", "2"]],
            "rawBody": base64.b64encode(b"\x00body").decode("ascii"),
        }

    def test_options_to_dict_omits_unset(self):
        assert RequestOptions().to_dict() == {
            "ignoreHostHttpsErrors": [],
            "trustedCAs": [],
        }

    def test_options_to_dict_full(self):
        options = RequestOptions(
            ignore_host_https_errors=True,
            trusted_ca_certificates=["PEM"],
            client_certificate={"pfx": "abc"},
            proxy_config={"proxyUrl": "http://proxy:8080"},
            lookup_options={"servers": ["1.1.1.1"]},
        )

        assert options.to_dict() == {
            "ignoreHostHttpsErrors": True,
            "trustedCAs": [{"cert": "PEM"}],
            "clientCertificate": {"pfx": "abc"},
            "proxyConfig": {"proxyUrl": "http://proxy:8080"},
            "lookupOptions": {"servers": ["1.1.1.1"]},
        }
