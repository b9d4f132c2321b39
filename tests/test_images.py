"""Tests for image source resolution and downloads."""

import os

import pytest
import requests

import images
from errors import HTTPStatusFailure, NetworkFailure, TimeoutFailure, TransportFailure
from images import download_file, extension_from_url, is_url, resolve_image_source


class FakeResponse:
    def __init__(self, status_code=200, headers=None, content=b""):
        self.status_code = status_code
        self.headers = headers or {}
        self.content = content

    def iter_content(self, chunk_size=1):
        yield self.content

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_get(monkeypatch):
    """Route requests.get through a queue of canned responses or exceptions."""
    queue = []
    calls = []

    def get(url, **kwargs):
        calls.append((url, kwargs))
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(images.requests, "get", get)
    get.queue = queue
    get.calls = calls
    return get


class TestExtensionDetection:
    """Tests for extension_from_url()."""

    @pytest.mark.parametrize("url,content_type,expected", [
        ("https://example.com/logo.svg", None, ".svg"),
        ("https://example.com/logo.PNG", "image/svg+xml", ".png"),
        ("https://example.com/logo.jpeg?size=large", None, ".jpeg"),
        ("https://example.com/logo", "image/svg+xml", ".svg"),
        ("https://example.com/logo", "image/jpeg; charset=binary", ".jpg"),
        ("https://example.com/logo.gif", "image/gif", ".png"),
        ("https://example.com/logo", None, ".png"),
    ])
    def test_extension(self, url, content_type, expected):
        assert extension_from_url(url, content_type) == expected

    @pytest.mark.parametrize("value,expected", [
        ("https://example.com/a.png", True),
        ("http://example.com/a.png", True),
        ("ftp://example.com/a.png", False),
        ("./logo.png", False),
        ("/tmp/logo.png", False),
    ])
    def test_is_url(self, value, expected):
        assert is_url(value) is expected


class TestDownloadFile:
    """Tests for download_file()."""

    def test_success(self, fake_get, tmp_path):
        dest = tmp_path / "out"
        fake_get.queue.append(FakeResponse(headers={"Content-Type": "image/png"}, content=b"data"))

        assert download_file("https://example.com/logo", str(dest), timeout=5) == "image/png"
        assert dest.read_bytes() == b"data"
        assert fake_get.calls[0][1]["timeout"] == 5
        assert fake_get.calls[0][1]["allow_redirects"] is False

    @pytest.mark.parametrize("status", [301, 302])
    def test_follows_redirects(self, fake_get, tmp_path, status):
        dest = tmp_path / "out"
        fake_get.queue.extend([
            FakeResponse(status_code=status, headers={"Location": "/cdn/logo.svg"}),
            FakeResponse(headers={"Content-Type": "image/svg+xml"}, content=b"<svg/>"),
        ])

        assert download_file("https://example.com/logo", str(dest)) == "image/svg+xml"
        assert [url for url, _ in fake_get.calls] == ["https://example.com/logo", "https://example.com/cdn/logo.svg"]
        assert dest.read_bytes() == b"<svg/>"

    def test_too_many_redirects(self, fake_get, tmp_path):
        fake_get.queue.extend([FakeResponse(status_code=302, headers={"Location": "/again"}) for _ in range(3)])
        with pytest.raises(NetworkFailure, match="Too many redirects"):
            download_file("https://example.com/logo", str(tmp_path / "out"), redirects_left=2)

    def test_http_error(self, fake_get, tmp_path):
        fake_get.queue.append(FakeResponse(status_code=404))
        with pytest.raises(HTTPStatusFailure) as excinfo:
            download_file("https://example.com/logo", str(tmp_path / "out"))
        assert excinfo.value.status_code == 404
        assert "HTTP 404" in str(excinfo.value)

    def test_transport_error(self, fake_get, tmp_path):
        fake_get.queue.append(requests.ConnectionError("connection refused"))
        with pytest.raises(TransportFailure):
            download_file("https://example.com/logo", str(tmp_path / "out"))

    def test_timeout(self, fake_get, tmp_path):
        fake_get.queue.append(requests.ReadTimeout("too slow"))
        with pytest.raises(TimeoutFailure):
            download_file("https://example.com/logo", str(tmp_path / "out"))


class TestResolveImageSource:
    """Tests for resolve_image_source()."""

    def test_local_file(self, png_file, tmp_path):
        with resolve_image_source(png_file, str(tmp_path / "work")) as image:
            assert image.path == png_file
            assert image.ext == ".png"
            assert not image.downloaded
        assert os.path.exists(png_file)

    def test_temp_file_removed_when_caller_fails(self, tmp_path):
        work_dir = tmp_path / "work"

        def fetch(url, dest_path):
            with open(dest_path, "wb") as f:
                f.write(b"<svg/>")
            return "image/svg+xml"

        with pytest.raises(RuntimeError):
            with resolve_image_source("https://example.com/logo", str(work_dir), fetch) as image:
                assert image.downloaded
                assert os.path.exists(image.path)
                raise RuntimeError("later step failed")

        assert os.listdir(work_dir) == []
