"""
Unit tests for reading translation sources (files, bytes, URLs).
"""
import pytest
import requests

import csv_localize.sources as sources
from csv_localize.errors import SourceUnavailable, MalformedSource
from csv_localize.sources import read_source, decode_source, describe_source, is_url


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


class TestReadSource:

    def test_bytes_pass_through(self):
        assert read_source(b"key,en\n") == b"key,en\n"

    def test_reads_file(self, sample_csv):
        assert read_source(sample_csv).startswith(b"key,en,es")

    def test_accepts_path_objects(self, tmp_path):
        path = tmp_path / "x.csv"
        path.write_bytes(b"key,en\n")
        assert read_source(path) == b"key,en\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnavailable) as exc:
            read_source(str(tmp_path / "missing.csv"))
        assert isinstance(exc.value.__cause__, FileNotFoundError)

    def test_directory_is_unavailable(self, tmp_path):
        with pytest.raises(SourceUnavailable):
            read_source(str(tmp_path))


class TestUrlSource:

    def test_fetches_url(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(200, b"key,en\nhello,Hello\n")

        monkeypatch.setattr(sources.requests, "get", fake_get)
        data = read_source("https://example.test/Localization.csv", timeout=3)
        assert data == b"key,en\nhello,Hello\n"
        assert calls == [("https://example.test/Localization.csv", 3)]

    def test_http_error_status(self, monkeypatch):
        monkeypatch.setattr(sources.requests, "get", lambda url, timeout: FakeResponse(503))
        with pytest.raises(SourceUnavailable, match="HTTP 503"):
            read_source("http://example.test/x.csv")

    def test_connection_error(self, monkeypatch):
        def fail(url, timeout):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(sources.requests, "get", fail)
        with pytest.raises(SourceUnavailable) as exc:
            read_source("http://example.test/x.csv")
        assert isinstance(exc.value.__cause__, requests.ConnectionError)

    def test_service_loads_from_url(self, monkeypatch, make_service):
        monkeypatch.setattr(sources.requests, "get",
                            lambda url, timeout: FakeResponse(200, b"key,en,es\nhello,Hello,Hola\n"))
        svc = make_service(http_timeout=1.5)
        svc.initialize("https://example.test/Localization.csv", language="es")
        assert svc.resolve("hello") == "Hola"
        assert svc.source == "https://example.test/Localization.csv"


class TestDecode:

    def test_plain_utf8(self):
        assert decode_source("key,ru\nyes,Да\n".encode("utf-8")) == "key,ru\nyes,Да\n"

    def test_bom_is_dropped(self):
        assert decode_source(b"\xef\xbb\xbfkey,en\n") == "key,en\n"

    def test_invalid_bytes(self):
        with pytest.raises(MalformedSource, match="not valid UTF-8"):
            decode_source(b"\xff\xfe", "broken.csv")


def test_helpers():
    assert is_url("HTTPS://example.test/a.csv")
    assert not is_url("Localization.csv")
    assert not is_url(b"https://")
    assert describe_source(b"abc") == "<3 bytes>"
    assert describe_source("a.csv") == "a.csv"
