"""
Tests for the uvicorn entrypoint in app.main.
"""

import uvicorn

from app import main


def test_run_serves_app_with_env_host_and_port(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")

    main.run()

    assert calls == [(main.app, {"host": "0.0.0.0", "port": 9001})]


def test_run_defaults_to_localhost(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.append(kw))
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    main.run()

    assert calls == [{"host": "127.0.0.1", "port": 8000}]
