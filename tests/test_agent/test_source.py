"""Tests for configuration sources."""

import httpx
import pytest
from unittest.mock import patch

from convoy.agent.source import ConfigSourceError, Locator, fetch, parse_locator


class TestParseLocator:
    """Test locator parsing."""

    def test_file_scheme(self):
        locator = parse_locator("file:///etc/convoy/defs.json")

        assert locator == Locator("file", "/etc/convoy/defs.json")
        assert locator.is_file
        assert str(locator.path) == "/etc/convoy/defs.json"

    def test_relative_file_scheme(self):
        assert parse_locator("file://example/defs.json").location == "example/defs.json"

    def test_http_keeps_full_url(self):
        locator = parse_locator("http://config.local:8080/defs.json")

        assert locator.scheme == "http"
        assert locator.location == "http://config.local:8080/defs.json"
        assert not locator.is_file

    def test_https_scheme_case_insensitive(self):
        locator = parse_locator("HTTPS://example.com/defs.json")

        assert locator.scheme == "https"

    def test_bare_path_is_a_file(self):
        assert parse_locator("  ./defs.yaml ") == Locator("file", "./defs.yaml")

    @pytest.mark.parametrize("locator", ["", "   ", None])
    def test_empty_locator(self, locator):
        with pytest.raises(ConfigSourceError, match="empty"):
            parse_locator(locator)

    def test_missing_location(self):
        with pytest.raises(ConfigSourceError, match="no location"):
            parse_locator("file://")

    def test_unsupported_scheme(self):
        with pytest.raises(ConfigSourceError, match="Unsupported"):
            parse_locator("ftp://example.com/defs.json")

    def test_http_locator_has_no_path(self):
        with pytest.raises(ValueError):
            parse_locator("http://example.com/x").path


def _mock_client(handler):
    """Patch httpx.AsyncClient to route requests through a mock transport."""
    real_client = httpx.AsyncClient

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return patch("convoy.agent.source.httpx.AsyncClient", side_effect=factory)


@pytest.mark.asyncio
class TestFetch:
    """Test fetching raw documents."""

    async def test_fetch_file(self, tmp_path):
        config_file = tmp_path / "defs.json"
        config_file.write_text('{"Volumes": []}')

        data = await fetch(parse_locator(f"file://{config_file}"))

        assert data == b'{"Volumes": []}'

    async def test_fetch_missing_file(self, tmp_path):
        with pytest.raises(ConfigSourceError, match="Cannot read"):
            await fetch(parse_locator(str(tmp_path / "missing.json")))

    async def test_fetch_http(self):
        def handler(request):
            assert request.url == "http://config.local/defs.json"
            return httpx.Response(200, content=b'{"Containers": {}}')

        with _mock_client(handler):
            data = await fetch(parse_locator("http://config.local/defs.json"))

        assert data == b'{"Containers": {}}'

    async def test_fetch_http_status_error(self):
        with _mock_client(lambda request: httpx.Response(404)):
            with pytest.raises(ConfigSourceError, match="HTTP error 404"):
                await fetch(parse_locator("http://config.local/defs.json"))

    async def test_fetch_http_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with _mock_client(handler):
            with pytest.raises(ConfigSourceError, match="Connection error"):
                await fetch(parse_locator("https://config.local/defs.json"))
