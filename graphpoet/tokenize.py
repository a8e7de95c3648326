"""Whitespace tokenization for corpora and input phrases."""

from __future__ import annotations

import re
from typing import Iterable

# Only space, tab, CR and LF separate tokens; NBSP and other Unicode spaces
# stay inside the token.
_TOKEN_RE = re.compile(r"[^ \t\r\n]+")


def tokenize(text: str) -> list[str]:
    """Split ``text`` on runs of spaces, tabs, carriage returns and newlines.

    Punctuation stays attached and casing is kept exactly as written. Empty or
    all-whitespace text gives an empty list.
    """
    return _TOKEN_RE.findall(text)


def tokenize_lines(lines: Iterable[str]) -> list[str]:
    """Tokenize an ordered sequence of lines as one continuous text.

    Line breaks are ordinary whitespace, so the last word of one line is
    adjacent to the first word of the next.
    """
    tokens: list[str] = []
    for line in lines:
        tokens.extend(_TOKEN_RE.findall(line))
    return tokens
