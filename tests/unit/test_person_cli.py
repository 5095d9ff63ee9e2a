"""
Unit tests for the person CLI client.

Tests URL resolution, request wiring and exit code mapping against a
mocked transport, without requiring a running server.
"""

import json
import os
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from person_cli.config import DEFAULT_URL, Config
from person_cli.http import HTTPClient
from person_cli.main import app

runner = CliRunner()


class FakeService:
    """Mimics the person endpoints on top of a dict."""

    def __init__(self):
        self.persons = {1: {"id": 1, "name": "Jason", "age": 30, "date": "2023-01-01T00:00:00Z"}}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/health":
            return httpx.Response(200, text="OK")
        if path == "/api/persons":
            return httpx.Response(200, json=list(self.persons.values()))
        if path.startswith("/api/person/"):
            person_id = int(path.rsplit("/", 1)[1])
            if person_id not in self.persons:
                return httpx.Response(404, json={"detail": f"Person {person_id} not found"})
            if request.method == "DELETE":
                del self.persons[person_id]
                return httpx.Response(204)
            return httpx.Response(200, json=self.persons[person_id])
        if path == "/api/person":
            body = json.loads(request.content)
            exists = body["id"] in self.persons
            if request.method == "POST":
                if exists:
                    return httpx.Response(409, json={"detail": "exists"})
                self.persons[body["id"]] = body
                return httpx.Response(201)
            if not exists:
                return httpx.Response(404, json={"detail": "missing"})
            self.persons[body["id"]].update(name=body["name"], age=body["age"], date=body["date"])
            return httpx.Response(204)
        return httpx.Response(500)


@pytest.fixture
def service():
    fake = FakeService()

    def client_factory(config):
        return HTTPClient(config, transport=httpx.MockTransport(fake))

    with patch("person_cli.main.HTTPClient", side_effect=client_factory):
        yield fake


class TestConfig:
    """Test configuration management."""

    def test_default_url(self, tmp_path):
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}, clear=True):
            config = Config()
        assert config.url == DEFAULT_URL
        assert config.timeout == 30

    def test_url_from_environment(self):
        with patch.dict(os.environ, {"PERSON_API_URL": "http://env.example.com"}):
            config = Config()
        assert config.url == "http://env.example.com"

    def test_url_from_config_file(self, tmp_path):
        config_dir = tmp_path / "person-cli"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text('url = "http://file.example.com"\n')

        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}, clear=True):
            config = Config()
        assert config.url == "http://file.example.com"

    def test_explicit_url_wins(self):
        with patch.dict(os.environ, {"PERSON_API_URL": "http://env.example.com"}):
            config = Config(url="http://flag.example.com")
        assert config.url == "http://flag.example.com"


class TestCommands:
    """Test CLI commands against a fake service."""

    def test_ping(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "ping"])

        assert result.exit_code == 0
        assert "healthy" in result.output

    def test_list_json(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "--json", "list"])

        assert result.exit_code == 0
        assert json.loads(result.output) == list(service.persons.values())

    def test_get_json(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "--json", "get", "1"])

        assert result.exit_code == 0
        assert json.loads(result.output)["name"] == "Jason"

    def test_get_missing(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "get", "999"])

        assert result.exit_code == 1
        assert "404" in result.output

    def test_add_sends_body(self, service):
        result = runner.invoke(
            app, ["--url", "http://svc", "add", "42", "X", "30", "2024-01-01T00:00:00Z"]
        )

        assert result.exit_code == 0
        sent = service.requests[-1]
        assert sent.method == "POST"
        assert str(sent.url) == "http://svc/api/person"
        assert json.loads(sent.content) == {
            "id": 42,
            "name": "X",
            "age": 30,
            "date": "2024-01-01T00:00:00Z",
        }

    def test_add_duplicate(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "add", "1", "X", "30", "2024"])

        assert result.exit_code == 1

    def test_update(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "update", "1", "Y", "31", "2024"])

        assert result.exit_code == 0
        assert service.persons[1] == {"id": 1, "name": "Y", "age": 31, "date": "2024"}

    def test_delete(self, service):
        result = runner.invoke(app, ["--url", "http://svc", "delete", "1"])

        assert result.exit_code == 0
        assert service.persons == {}

    def test_server_error_exit_code(self):
        def failing(request):
            return httpx.Response(500, json={"detail": "Internal server error"})

        def client_factory(config):
            return HTTPClient(config, transport=httpx.MockTransport(failing))

        with patch("person_cli.main.HTTPClient", side_effect=client_factory):
            result = runner.invoke(app, ["--url", "http://svc", "list"])

        assert result.exit_code == 2

    def test_unreachable_service(self):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        def client_factory(config):
            return HTTPClient(config, transport=httpx.MockTransport(unreachable))

        with patch("person_cli.main.HTTPClient", side_effect=client_factory):
            result = runner.invoke(app, ["--url", "http://svc", "ping"])

        assert result.exit_code == 2
