"""
Tests for oss_template.storage.urls: gateway and object URL formatting.
"""

import pytest

from oss_template.exceptions import ConfigurationError
from oss_template.storage.urls import (
    build_gateway_url,
    build_object_url,
    to_virtual_host_endpoint,
)

ENDPOINT = "https://store.example.com"


class TestGatewayUrl:

    def test_path_style(self):
        assert build_gateway_url(ENDPOINT, "b", "k", path_style_access=True) == "https://store.example.com/b/k"

    def test_virtual_host_style(self):
        assert build_gateway_url(ENDPOINT, "b", "k", path_style_access=False) == "https://b.store.example.com/k"

    @pytest.mark.parametrize("path_style", [True, False])
    def test_custom_domain_wins(self, path_style):
        url = build_gateway_url(
            ENDPOINT, "b", "k",
            path_style_access=path_style,
            custom_domain="https://cdn.example.com",
        )
        assert url == "https://cdn.example.com/k"

    def test_custom_domain_ignores_bucket(self):
        a = build_gateway_url(ENDPOINT, "one", "k", custom_domain="https://cdn.example.com")
        b = build_gateway_url(ENDPOINT, "two", "k", custom_domain="https://cdn.example.com")
        assert a == b

    def test_key_with_slashes_kept_verbatim(self):
        url = build_gateway_url(ENDPOINT, "b", "a/b c.txt")
        assert url == "https://store.example.com/b/a/b c.txt"

    def test_virtual_host_keeps_port(self):
        url = build_gateway_url("http://localhost:9000", "b", "k", path_style_access=False)
        assert url == "http://b.localhost:9000/k"

    def test_malformed_endpoint_names_bucket(self):
        with pytest.raises(ConfigurationError, match="photos"):
            build_gateway_url("store.example.com", "photos", "k", path_style_access=False)

    def test_malformed_endpoint_ok_in_path_style(self):
        assert build_gateway_url("store.example.com", "b", "k") == "store.example.com/b/k"


class TestVirtualHostEndpoint:

    def test_rewrites_authority(self):
        assert to_virtual_host_endpoint("https://oss.example.com", "img") == "https://img.oss.example.com"

    def test_missing_scheme(self):
        with pytest.raises(ConfigurationError):
            to_virtual_host_endpoint("//oss.example.com", "img")

    def test_empty_endpoint(self):
        with pytest.raises(ConfigurationError):
            to_virtual_host_endpoint("", "img")


class TestObjectUrl:

    def test_path_style_quotes_key(self):
        url = build_object_url(ENDPOINT + "/", "b", "dir/a file.txt")
        assert url == "https://store.example.com/b/dir/a%20file.txt"

    def test_virtual_host_style(self):
        url = build_object_url(ENDPOINT, "b", "k", path_style_access=False)
        assert url == "https://b.store.example.com/k"
