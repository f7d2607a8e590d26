import logging

import requests

from app.functions.render import ping


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


def test_keep_alive_ping_hits_health_url(monkeypatch, caplog):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        return FakeResponse(200)

    monkeypatch.setattr(ping.requests, "get", fake_get)
    monkeypatch.setattr(ping.configuration, "keep_alive_url", "https://shop.example.com/api/health")

    with caplog.at_level(logging.INFO):
        ping.keep_alive_ping()

    assert calls == ["https://shop.example.com/api/health"]
    assert any("OK" in record.getMessage() for record in caplog.records)


def test_keep_alive_ping_logs_bad_status(monkeypatch, caplog):
    monkeypatch.setattr(ping.requests, "get", lambda url, timeout: FakeResponse(503))

    with caplog.at_level(logging.WARNING):
        ping.keep_alive_ping()

    assert any("503" in record.getMessage() for record in caplog.records)


def test_keep_alive_ping_swallows_connection_errors(monkeypatch, caplog):
    def boom(url, timeout):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(ping.requests, "get", boom)

    with caplog.at_level(logging.ERROR):
        ping.keep_alive_ping()

    assert any("down" in record.getMessage() for record in caplog.records)
