"""Tests for the Flask report endpoint."""

from __future__ import annotations

import pytest

from envbench import web
from envbench.benchmark.runner import RunResult

SERVER = {"base_url": "http://web01", "environ_base": {"SERVER_ADDR": "10.0.0.1"}}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for key in ("MYSQL_USER", "MYSQL_PASSWORD", "ENVBENCH_MULTIPLIER", "ENVBENCH_OUTPUT_WIDTH"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def client():
    web.app.config["TESTING"] = True
    return web.app.test_client()


@pytest.fixture
def captured(monkeypatch):
    """Replace the session with a recorder."""
    calls = []

    def fake_run(config, stream=None, server=None, **kwargs):
        calls.append((config, server))
        stream.write("report\n")
        return RunResult()

    monkeypatch.setattr(web, "run_benchmarks", fake_run)
    return calls


class TestSettings:
    """Where a request's configuration comes from."""

    def test_last_query_value_wins(self, client, captured) -> None:
        response = client.get("/?multiplier=1&multiplier=3")

        assert response.status_code == 200
        assert captured[0][0].multiplier == 3.0

    def test_query_overrides_connection_strings(self, client, captured, monkeypatch) -> None:
        monkeypatch.setenv("MYSQLCONNSTR_env", "Data Source=envhost;User Id=envuser;Password=x")
        environ = {
            "SERVER_ADDR": "10.0.0.1",
            "MYSQLCONNSTR_localdb": "Data Source=wsgihost;Database=wp;User Id=wsgi;Password=pw",
        }

        client.get("/?mysql_user=query", base_url="http://web01", environ_base=environ)

        config = captured[0][0]
        assert config.mysql_host == "wsgihost"
        assert config.mysql_database == "wp"
        assert config.mysql_user == "query"
        assert config.mysql_password == "pw"

    def test_process_environment_connection_string(self, client, captured, monkeypatch) -> None:
        monkeypatch.setenv("MYSQLCONNSTR_env", "Data Source=envhost;User Id=envuser;Password=x")

        client.get("/")

        config = captured[0][0]
        assert config.mysql_host == "envhost"
        assert config.mysql_user == "envuser"

    def test_server_description(self) -> None:
        assert web.server_description({"SERVER_NAME": "web01", "SERVER_ADDR": "10.0.0.1"}) == "web01@10.0.0.1"
        assert web.server_description({}) == "null@null"


class TestReport:
    def test_report_is_plain_text(self, client, captured) -> None:
        response = client.get("/?multiplier=0.5", **SERVER)

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "text/plain; charset=utf-8"
        assert response.get_data(as_text=True) == "report\n"

        config, server = captured[0]
        assert config.multiplier == 0.5
        assert server == "web01@10.0.0.1"

    def test_bad_setting_is_rejected(self, client, captured) -> None:
        response = client.get("/?output_width=abc")

        assert response.status_code == 400
        assert response.mimetype == "text/plain"
        assert response.get_data(as_text=True).startswith("Error: Invalid value for output_width")
        assert captured == []

    def test_only_get_is_served(self, client, captured) -> None:
        assert client.post("/").status_code == 405
        assert captured == []

    def test_full_run(self, client) -> None:
        response = client.get("/?multiplier=0.001", **SERVER)

        assert response.status_code == 200
        text = response.get_data(as_text=True)
        assert "core::math" in text
        assert "web01@10.0.0.1" in text
        assert text.rstrip().endswith("Thanks for using envbench")
