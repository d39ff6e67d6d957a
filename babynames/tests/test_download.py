"""
Tests for download module. Network access is replaced with monkeypatch.
"""
from __future__ import annotations

import io
import zipfile

import pytest
import requests

from babynames import download as download_module
from babynames.errors import ConfigError, SourceError


def _zip_bytes(members):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        for name, text in members.items():
            archive.writestr(name, text)
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, content, status_error=None):
        self.content = content
        self.status_error = status_error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]


class TestDownload:
    """Tests for download()."""

    def test_extracts_text_files(self, tmp_path, monkeypatch):
        content = _zip_bytes({'yob2000.txt': "Ann,F,5\n", 'NationalReadMe.pdf': "pdf"})
        calls = []

        def fake_get(url, **kwargs):
            calls.append((url, kwargs))
            return FakeResponse(content)

        monkeypatch.setattr(download_module.requests, 'get', fake_get)

        files = download_module.download('national', tmp_path)

        assert calls[0][0] == download_module.DATASET_URLS['national']
        assert calls[0][1]['stream'] is True
        assert files == [tmp_path / 'national' / 'yob2000.txt']
        assert files[0].read_text() == "Ann,F,5\n"

    def test_states_url(self, tmp_path, monkeypatch):
        urls = []

        def fake_get(url, **kwargs):
            urls.append(url)
            return FakeResponse(_zip_bytes({'AK.TXT': "AK,F,1910,Mary,14\n"}))

        monkeypatch.setattr(download_module.requests, 'get', fake_get)

        files = download_module.download('states', tmp_path)

        assert urls == [download_module.DATASET_URLS['states']]
        assert files == [tmp_path / 'states' / 'AK.TXT']

    def test_http_error(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            download_module.requests, 'get',
            lambda url, **kwargs: FakeResponse(b'', status_error=requests.HTTPError("404 Not Found")),
        )

        with pytest.raises(SourceError):
            download_module.download('national', tmp_path)

    def test_bad_archive(self, tmp_path, monkeypatch):
        monkeypatch.setattr(download_module.requests, 'get', lambda url, **kwargs: FakeResponse(b'not a zip'))

        with pytest.raises(SourceError):
            download_module.download('national', tmp_path)

    def test_unknown_dataset(self, tmp_path):
        with pytest.raises(ConfigError):
            download_module.download('county', tmp_path)
