"""
Fetches glTF JSON text from a local file or an http(s) URL.

Parsing itself never does I/O; this module is the optional front door used by
the command line tool and by callers that start from a location rather than
from text.
"""
import logging
import os
import struct
from urllib.parse import urljoin, urlparse

import httpx

from pygltfscene.errors import LoadError
from pygltfscene.parser import parse
from pygltfscene.settings import ParserSettings
from pygltfscene.types import GLB_MAGIC, Gltf

logger = logging.getLogger(__name__)

_GLB_MAGIC_BYTES = struct.pack("<I", GLB_MAGIC)  # b"glTF"


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _fetch(url: str, timeout: float) -> bytes:
    logger.debug("Fetching %s", url)
    try:
        with httpx.Client(timeout=timeout) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.content
    except httpx.HTTPError as e:
        raise LoadError(f"could not fetch document: {e}", url) from e


def _read_file(path: str) -> bytes:
    logger.debug("Reading %s", path)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise LoadError(f"could not read document: {e.strerror or e}", path) from e


def read_gltf_text(source: str, timeout: float = ParserSettings.HTTP_TIMEOUT) -> tuple[str, str]:
    """
    Returns ``(json_text, base_uri)`` for a file path or http(s) URL.

    ``base_uri`` is the location relative buffer and image URIs resolve
    against: the URL's directory, or the file's absolute directory. A binary
    GLB container is rejected with LoadError.
    """
    if is_url(source):
        data = _fetch(source, timeout)
        base_uri = urljoin(source, ".")
    else:
        data = _read_file(source)
        base_uri = os.path.dirname(os.path.abspath(source)) + os.sep

    if data[:4] == _GLB_MAGIC_BYTES:
        raise LoadError("binary glTF (GLB) containers are not supported, "
                        "extract the JSON chunk first", source)
    try:
        return data.decode("utf-8"), base_uri
    except UnicodeDecodeError as e:
        raise LoadError(f"document is not UTF-8 text: {e}", source) from e


def load_gltf(source: str, settings: ParserSettings | None = None) -> Gltf:
    """Reads and parses the document at ``source``."""
    settings = settings if settings is not None else ParserSettings()
    text, base_uri = read_gltf_text(source, timeout=settings.HTTP_TIMEOUT)
    return parse(text, base_uri=base_uri, settings=settings)
