"""Tests for the source fetcher."""

import io
from dataclasses import replace

import pytest
from PIL import Image

pytest.importorskip("requests")

from filterplay.infrastructure import network
from filterplay.infrastructure.network import SourceFetcher


class FakeResponse:
    def __init__(self, content):
        self.content = content

    def raise_for_status(self):
        return None


class FakeSession:
    def __init__(self, content):
        self.headers = {}
        self.requests = []
        self._content = content

    def get(self, url, timeout):
        self.requests.append((url, timeout))
        return FakeResponse(self._content)


def png_bytes(color):
    buffer = io.BytesIO()
    Image.new("RGB", (4, 3), color=color).save(buffer, "PNG")
    return buffer.getvalue()


def test_fetch_source_decodes_rgba():
    session = FakeSession(png_bytes((9, 8, 7)))
    fetcher = SourceFetcher(session_factory=lambda: session)

    img = fetcher.fetch_source("http://example.com/cat.png")

    assert img.mode == "RGBA"
    assert img.size == (4, 3)
    assert img.getpixel((0, 0)) == (9, 8, 7, 255)
    assert session.requests[0][0] == "http://example.com/cat.png"
    assert session.headers["User-Agent"].startswith("filterplay/")


def test_fetch_source_uses_configured_url(monkeypatch):
    monkeypatch.setattr(network, "SETTINGS", replace(network.SETTINGS, source_url="http://cfg/img.png", timeout=3.0))
    session = FakeSession(png_bytes((0, 0, 0)))

    SourceFetcher(session_factory=lambda: session).fetch_source()

    assert session.requests == [("http://cfg/img.png", 3.0)]


def test_fetch_source_without_url(monkeypatch):
    monkeypatch.setattr(network, "SETTINGS", replace(network.SETTINGS, source_url=""))
    fetcher = SourceFetcher(session_factory=lambda: FakeSession(b""))

    with pytest.raises(ValueError):
        fetcher.fetch_source()
