"""Tests for the uvicorn runner helpers."""

from __future__ import annotations

import pytest

from recipebox.server import run


def test_parse_duration():
    assert run.parse_duration(None) is None
    assert run.parse_duration("") is None
    assert run.parse_duration("1.5") == 1.5


@pytest.mark.parametrize("value", ["soon", "0", "-2"])
def test_parse_duration_rejects_bad_values(value):
    with pytest.raises(SystemExit):
        run.parse_duration(value)


def test_reload_cannot_be_combined_with_duration():
    with pytest.raises(SystemExit):
        run.serve(reload=True, duration=1.0)


def test_main_reads_environment(monkeypatch):
    seen = {}
    monkeypatch.delenv("RECIPEBOX_SERVER_HOST", raising=False)
    monkeypatch.delenv("RELOAD", raising=False)
    monkeypatch.setenv("RECIPEBOX_SERVER_PORT", "8123")
    monkeypatch.setenv("RECIPEBOX_SERVER_DURATION", "2")
    monkeypatch.setattr(run, "serve", lambda **kwargs: seen.update(kwargs))

    run.main()

    assert seen == {"host": "127.0.0.1", "port": 8123, "reload": False, "duration": 2.0}
