"""Unit tests for the main.py CLI."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import main
from utils.exceptions import NoContentError


class _FakeRetriever:
    instances = []

    def __init__(self, url, *args, **kwargs):
        self.url = url
        self.timeout = 5.0
        self.calls = []
        _FakeRetriever.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def retrieve(self, factors_url=None):
        self.calls.append(("retrieve", factors_url))
        if self.url.endswith("missing"):
            raise NoContentError("no content found")
        return {"docs": [{"url": self.url, "m3u8Url": "M"}]}

    async def get_base_content_model(self):
        self.calls.append(("base",))
        return {"docs": [{"url": self.url}]}

    async def get_recent_publishes(self, **kwargs):
        self.calls.append(("recent", kwargs))
        return {"docs": []}


def _install(monkeypatch):
    _FakeRetriever.instances = []
    monkeypatch.setattr(main, "ContentRetriever", _FakeRetriever)


def test_lookup_prints_hydrated_json(monkeypatch, capsys):
    _install(monkeypatch)

    code = main.main(["--timeout", "9", "lookup", "http://www.cnn.com/2016/a", "--factors-url", "http://f.test/x"])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"docs": [{"url": "http://www.cnn.com/2016/a", "m3u8Url": "M"}]}
    fake = _FakeRetriever.instances[0]
    assert fake.timeout == 9.0
    assert fake.calls == [("retrieve", "http://f.test/x")]


def test_lookup_without_hydration(monkeypatch, capsys):
    _install(monkeypatch)

    assert main.main(["lookup", "http://www.cnn.com/2016/a", "--no-hydrate"]) == 0
    assert _FakeRetriever.instances[0].calls == [("base",)]


def test_recent_passes_filters(monkeypatch, capsys):
    _install(monkeypatch)

    assert main.main(["recent", "--type", "video", "--data-source", "cnn", "--rows", "10"]) == 0

    _, kwargs = _FakeRetriever.instances[0].calls[0]
    assert kwargs == {"content_type": "video", "data_source": "cnn", "rows": 10, "since": None}
    assert json.loads(capsys.readouterr().out) == {"docs": []}


def test_lookup_error_exits_non_zero(monkeypatch, capsys):
    _install(monkeypatch)

    assert main.main(["lookup", "http://www.cnn.com/missing"]) == 1
    assert "no content found" in capsys.readouterr().err


def test_recent_since_accepts_utc_suffix(monkeypatch, capsys):
    _install(monkeypatch)

    assert main.main(["recent", "--since", "2016-04-01T12:00:00Z"]) == 0

    _, kwargs = _FakeRetriever.instances[0].calls[0]
    assert kwargs["since"] == datetime(2016, 4, 1, 12, 0, tzinfo=timezone.utc)


def test_cli_errors_are_logged_under_retriever(monkeypatch, caplog):
    _install(monkeypatch)

    with caplog.at_level("ERROR"):
        assert main.main(["lookup", "http://www.cnn.com/missing"]) == 1

    assert [record.name for record in caplog.records] == ["retriever.cli"]
