"""Document loading for JSON trees."""

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from ..tree import JSONArray, JSONObject

Source = Union[str, bytes, bytearray, os.PathLike, Any]

_HTTP_SCHEMES = ("http", "https")


class JSONReader:
    """
    Loads JSON documents into object and array nodes.

    A source may be a filesystem path, raw bytes, JSON text, a binary or
    text stream, an http(s)/file URL, or a package resource obtained from
    :meth:`resource`. Text is recognized by its leading ``{`` or ``[``;
    any other string is taken as a URL when it has a known scheme and as a
    path otherwise. Bytes are decoded as UTF-8.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, timeout: float = 30.0):
        """
        Initialize the reader.

        Args:
            logger: Optional logger instance
            timeout: Request timeout in seconds for http(s) sources
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout

    def read_json_object(self, source: Source) -> JSONObject:
        """
        Read a document whose root is an object.

        Raises:
            JSONTreeError: If the document is not valid JSON or its root is not an object
            OSError: If the source cannot be read
            requests.RequestException: If an http(s) source cannot be fetched
        """
        return JSONObject.parse(self.read_text(source))

    def read_json_array(self, source: Source) -> JSONArray:
        """
        Read a document whose root is an array.

        Raises:
            JSONTreeError: If the document is not valid JSON or its root is not an array
            OSError: If the source cannot be read
            requests.RequestException: If an http(s) source cannot be fetched
        """
        return JSONArray.parse(self.read_text(source))

    @staticmethod
    def resource(package: str, name: str) -> Any:
        """
        Locate a resource bundled inside an importable package.

        Args:
            package: Dotted package name
            name: Resource path relative to the package

        Returns:
            Traversable accepted as a source by the read methods
        """
        return resources.files(package).joinpath(name)

    def read_text(self, source: Source) -> str:
        """
        Read the raw document text from any supported source.

        Args:
            source: Path, bytes, JSON text, stream, URL or package resource

        Returns:
            Document text
        """
        if isinstance(source, (bytes, bytearray)):
            return bytes(source).decode("utf-8")
        if isinstance(source, str):
            if source.lstrip()[:1] in ("{", "["):
                return source
            parsed = urlparse(source)
            if parsed.scheme in _HTTP_SCHEMES:
                return self._read_url(source)
            if parsed.scheme == "file":
                return self._read_path(Path(url2pathname(parsed.path)))
            return self._read_path(Path(source))
        if isinstance(source, os.PathLike):
            return self._read_path(Path(source))
        if hasattr(source, "read"):
            data = source.read()
            return data.decode("utf-8") if isinstance(data, bytes) else data
        if hasattr(source, "read_text"):
            self.logger.debug(f"Reading resource {source}")
            return source.read_text(encoding="utf-8")
        raise TypeError(f"Unsupported JSON source of type {type(source).__name__}")

    def _read_path(self, path: Path) -> str:
        self.logger.debug(f"Reading {path}")
        return path.read_text(encoding="utf-8")

    def _read_url(self, url: str) -> str:
        self.logger.debug(f"Fetching {url}")
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        if response.encoding is None:
            response.encoding = "utf-8"
        return response.text
