"""Build a word-adjacency graph from corpus tokens."""

from __future__ import annotations

import logging
from typing import Iterable

from .graph import Graph

logger = logging.getLogger(__name__)


def canonical(token: str) -> str:
    """Return the case-folded form used as a vertex label."""
    return token.lower()


def build_word_graph(tokens: Iterable[str]) -> Graph[str]:
    """Return a graph whose edge ``a -> b`` counts how often ``b`` follows ``a``.

    Every distinct canonical word becomes a vertex, including a corpus-final
    word with no outgoing edge.
    """
    graph: Graph[str] = Graph()
    previous: str | None = None
    token_count = 0
    for token in tokens:
        word = canonical(token)
        graph.add(word)
        if previous is not None:
            graph.set(previous, word, graph.weight(previous, word) + 1)
        previous = word
        token_count += 1

    logger.debug(
        "built word graph: tokens=%d nodes=%d edges=%d",
        token_count,
        graph.node_count,
        graph.edge_count,
    )
    return graph
