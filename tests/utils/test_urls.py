"""Tests for ssrf_guard/utils/urls.py — format_url and parse_url."""

from urllib.parse import urlparse, urlsplit

import httpx
import pytest

from ssrf_guard.exceptions import InvalidFormatError, InvalidInputError
from ssrf_guard.utils.urls import format_url, parse_url


class TestFormatUrl:
    """Serialising strings and URL-like objects."""

    def test_string_passes_through(self):
        assert format_url("https://example.com/a?b=1") == "https://example.com/a?b=1"

    def test_httpx_url(self):
        assert format_url(httpx.URL("https://example.com/path")) == "https://example.com/path"

    def test_split_result(self):
        assert format_url(urlsplit("http://example.com/x")) == "http://example.com/x"

    def test_parse_result(self):
        assert format_url(urlparse("http://example.com/x;p")) == "http://example.com/x;p"

    def test_mapping_with_hostname_and_port(self):
        """Legacy URL objects are rebuilt from their parts."""
        url = format_url(
            {
                "protocol": "http:",
                "hostname": "example.com",
                "port": 8080,
                "pathname": "/a",
                "search": "?q=1",
                "hash": "#top",
            }
        )
        assert url == "http://example.com:8080/a?q=1#top"

    def test_mapping_with_host_and_bare_scheme(self):
        assert format_url({"protocol": "https", "host": "example.com"}) == "https://example.com"

    def test_mapping_with_scheme_path_query_keys(self):
        url = format_url(
            {"scheme": "https", "hostname": "example.com", "path": "docs", "query": "a=1"}
        )
        assert url == "https://example.com/docs?a=1"

    def test_mapping_brackets_ipv6_hostname(self):
        assert format_url({"protocol": "http:", "hostname": "::1"}) == "http://[::1]"

    def test_mapping_with_auth(self):
        url = format_url({"protocol": "http:", "auth": "user:pw", "hostname": "10.0.0.1"})
        assert url == "http://user:pw@10.0.0.1"

    @pytest.mark.parametrize("value", [None, 42, 3.14, b"http://example.com", ["http://x"], ""])
    def test_rejects_non_url_input(self, value):
        with pytest.raises(InvalidInputError):
            format_url(value)


class TestParseUrl:
    """Extracting protocol and hostname."""

    def test_lowercases_protocol_and_hostname(self):
        parsed = parse_url("HTTPS://Example.COM/Path")
        assert parsed.protocol == "https:"
        assert parsed.hostname == "example.com"

    def test_ipv6_brackets_stripped(self):
        assert parse_url("http://[::1]:8080/").hostname == "::1"

    def test_userinfo_not_part_of_hostname(self):
        assert parse_url("http://user:pw@10.0.0.1/").hostname == "10.0.0.1"

    def test_non_http_scheme_parses(self):
        """Scheme policy is the validator's job; parsing just reports it."""
        parsed = parse_url("file:///etc/passwd")
        assert parsed.protocol == "file:"
        assert parsed.hostname == ""

    def test_missing_scheme_raises(self):
        with pytest.raises(InvalidFormatError, match="missing scheme"):
            parse_url("example.com/path")

    def test_unbalanced_ipv6_bracket_raises(self):
        with pytest.raises(InvalidFormatError):
            parse_url("http://[::1/")

    def test_port_out_of_range_raises(self):
        with pytest.raises(InvalidFormatError):
            parse_url("http://example.com:99999/")

    def test_non_numeric_port_raises(self):
        with pytest.raises(InvalidFormatError):
            parse_url("http://example.com:abc/")
