"""Corpus readers: local text files and HTTP(S) sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import requests

from ._structural_utils import ConfigBase

logger = logging.getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")


class CorpusError(RuntimeError):
    """Raised when a corpus source exists but cannot be read or decoded."""


@dataclass
class CorpusConfig(ConfigBase):
    encoding: str = "utf-8"
    timeout_s: float = 10.0

    def validate(self) -> None:
        if not self.encoding:
            raise ValueError("corpus encoding must be a non-empty string")
        if self.timeout_s <= 0:
            raise ValueError(f"corpus timeout_s must be positive, got {self.timeout_s}")


def is_url(source: str) -> bool:
    return source.lower().startswith(_URL_PREFIXES)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds, NEL and other Unicode separators stay inside their line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _declared_charset(response: requests.Response) -> str | None:
    # requests reports ISO-8859-1 for any text/* response without a charset,
    # so only an explicit charset parameter overrides the configured encoding.
    content_type = response.headers.get("content-type") or ""
    if "charset" not in content_type.lower():
        return None
    return requests.utils.get_encoding_from_headers(response.headers)


def read_lines(path: str | Path, config: CorpusConfig | None = None) -> list[str]:
    """Read a local corpus file into lines."""
    config = config or CorpusConfig()
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"corpus file not found: {file_path}")

    try:
        text = file_path.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusError(f"failed to read corpus: {file_path}: {exc}") from exc

    lines = split_lines(text)
    logger.debug("read corpus file %s: %d lines", file_path, len(lines))
    return lines


def fetch_lines(url: str, config: CorpusConfig | None = None) -> list[str]:
    """Fetch a corpus over HTTP(S) into lines."""
    config = config or CorpusConfig()
    try:
        response = requests.get(url, timeout=config.timeout_s)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise CorpusError(f"failed to fetch corpus: {url}: {exc}") from exc

    encoding = _declared_charset(response) or config.encoding
    try:
        text = response.content.decode(encoding)
    except (LookupError, UnicodeDecodeError) as exc:
        raise CorpusError(f"failed to decode corpus: {url}: {exc}") from exc

    lines = split_lines(text)
    logger.debug("fetched corpus %s: %d lines", url, len(lines))
    return lines


def load_corpus(source: str | Path, config: CorpusConfig | None = None) -> list[str]:
    """Load corpus lines from a URL or a file path."""
    if isinstance(source, str) and is_url(source):
        return fetch_lines(source, config)
    return read_lines(source, config)
