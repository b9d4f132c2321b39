import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Optional
from urllib.parse import urljoin, urlparse

import requests

from errors import FileNotFound, FilesystemFailure, HTTPStatusFailure, NetworkFailure, TimeoutFailure, \
    TransportFailure, UnsupportedImageFormat
from statics import DEFAULT_IMAGE_EXTENSION, HTTP_TIMEOUT, MAX_REDIRECTS, MIME_TO_EXTENSION, \
    REDIRECT_STATUS_CODES, SUPPORTED_IMAGE_EXTENSIONS

CHUNK_SIZE = 64 * 1024


@dataclass
class ImageSource:
    path: str
    ext: str
    downloaded: bool = False
    content_type: Optional[str] = None


def is_url(value: str) -> bool:
    return urlparse(value).scheme in ("http", "https")


def extension_from_url(url: str, content_type: Optional[str]) -> str:
    url_ext = os.path.splitext(urlparse(url).path)[1].lower()
    if url_ext in SUPPORTED_IMAGE_EXTENSIONS:
        return url_ext

    if content_type:
        mime = content_type.split(";")[0].strip().lower()
        return MIME_TO_EXTENSION.get(mime, DEFAULT_IMAGE_EXTENSION)

    return DEFAULT_IMAGE_EXTENSION


def download_file(url: str, dest_path: str, timeout=HTTP_TIMEOUT, redirects_left=MAX_REDIRECTS) -> Optional[str]:
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=False, stream=True)
    except requests.Timeout as e:
        raise TimeoutFailure(f"Timed out after {timeout}s downloading {url}") from e
    except requests.RequestException as e:
        raise TransportFailure(f"Failed to download {url}: {e}") from e

    with response:
        if response.status_code in REDIRECT_STATUS_CODES:
            location = response.headers.get("Location")
            if not location:
                raise HTTPStatusFailure(url, response.status_code)
            if redirects_left <= 0:
                raise NetworkFailure(f"Too many redirects downloading {url}")
            return download_file(urljoin(url, location), dest_path, timeout, redirects_left - 1)

        if not 200 <= response.status_code < 300:
            raise HTTPStatusFailure(url, response.status_code)

        try:
            with open(dest_path, "wb") as dest_file:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    dest_file.write(chunk)
        except requests.Timeout as e:
            raise TimeoutFailure(f"Timed out after {timeout}s downloading {url}") from e
        except requests.RequestException as e:
            raise TransportFailure(f"Failed to download {url}: {e}") from e
        except OSError as e:
            raise FilesystemFailure(f"Cannot write {dest_path}: {e}") from e

        return response.headers.get("Content-Type")


@contextmanager
def resolve_image_source(image: str, work_dir: str, fetch=download_file) -> Generator[ImageSource, None, None]:
    if not is_url(image):
        ext = os.path.splitext(image)[1].lower()
        if ext not in SUPPORTED_IMAGE_EXTENSIONS:
            raise UnsupportedImageFormat(
                f"Unsupported image format: '{ext or image}'. Supported: {', '.join(SUPPORTED_IMAGE_EXTENSIONS)}")
        if not os.path.isfile(image):
            raise FileNotFound(f"Image file not found: {image}")
        yield ImageSource(path=image, ext=ext)
        return

    try:
        os.makedirs(work_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=work_dir, prefix="temp-download-")
        os.close(fd)
    except OSError as e:
        raise FilesystemFailure(f"Cannot create a temporary file in {work_dir}: {e}") from e

    # The download is removed whether or not the caller succeeded:
    try:
        print(f"Downloading image from URL: {image}")
        content_type = fetch(image, tmp_path)
        ext = extension_from_url(image, content_type)
        print(f"✓ Downloaded image ({content_type or 'unknown content type'})")
        yield ImageSource(path=tmp_path, ext=ext, downloaded=True, content_type=content_type)
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
