"""Loading type schemas.

A schema is a JSON array of normalized type records. It can come from a
local file, a URL or an already open stream; every loader returns a
``(source, records)`` pair where ``source`` names where the records came
from for use in messages.
"""

import json
from pathlib import Path
from typing import TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """A schema could not be read or is not a JSON array."""

    pass


def _decode_schema(text: str, source: str) -> tuple[str, list]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", source, e)
        raise JSONLoaderError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(data, list):
        logger.error("Schema from %s is not a JSON array", source)
        raise JSONLoaderError(
            f"Schema from {source} must be a JSON array of type definitions"
        )

    logger.info("Loaded %d type records from %s", len(data), source)
    return source, data


def load_schema_from_file(file_path: str | Path) -> tuple[str, list]:
    """Load a schema from a local JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If the file cannot be read or decoded.
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e

    return _decode_schema(text, str(file_path))


def _describe_request_error(url: str, error: requests.RequestException) -> str:
    if isinstance(error, requests.exceptions.Timeout):
        return f"Request timeout for URL: {url}"
    if isinstance(error, requests.exceptions.ConnectionError):
        return f"Connection error for URL: {url}"
    if isinstance(error, requests.exceptions.HTTPError):
        return f"HTTP error {error.response.status_code} for URL: {url}"
    return f"Request error for URL {url}: {error}"


def load_schema_from_url(url: str, timeout: int = 30) -> tuple[str, list]:
    """Fetch a schema over HTTP(S).

    Raises:
        JSONLoaderError: If the URL is malformed, the request fails or the
            body is not a JSON array.
    """
    parsed = urlparse(url)
    if not (parsed.scheme and parsed.netloc):
        logger.error("Invalid URL format: %s", url)
        raise JSONLoaderError(f"Invalid URL: {url}")

    logger.debug("Fetching schema from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        message = _describe_request_error(url, e)
        logger.error(message)
        raise JSONLoaderError(message) from e

    return _decode_schema(response.text, url)


def load_schema_from_stream(stream: TextIO, name: str = "<stdin>") -> tuple[str, list]:
    """Load a schema from an open text stream."""
    return _decode_schema(stream.read(), name)


def load_schema(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, list]:
    """Load a schema from exactly one of ``file_path`` or ``url``.

    Raises:
        JSONLoaderError: If neither or both sources are given, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if bool(file_path) == bool(url):
        raise JSONLoaderError("Exactly one of file_path or url must be provided")

    if file_path:
        return load_schema_from_file(file_path)
    return load_schema_from_url(url, timeout)
