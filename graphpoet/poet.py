"""
Word bridging over a corpus word graph.

Between each pair of adjacent input words ``a b`` the poet inserts the corpus
word ``x`` that maximizes ``weight(a -> x) * weight(x -> b)``. Input words keep
their spelling and casing; inserted words use their canonical lowercase form.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ._structural_utils import ConfigBase
from .builder import build_word_graph, canonical
from .corpus import CorpusConfig, load_corpus
from .graph import Graph
from .tokenize import tokenize, tokenize_lines

logger = logging.getLogger(__name__)

TIE_BREAK_RULES = ("lexical", "reverse_lexical")


@dataclass
class PoetConfig(ConfigBase):
    # Among equally scored bridges: "lexical" keeps the smallest label,
    # "reverse_lexical" the largest.
    tie_break: str = "lexical"
    min_score: int = 1

    def validate(self) -> None:
        if self.tie_break not in TIE_BREAK_RULES:
            raise ValueError(
                f"unknown tie_break {self.tie_break!r}; expected one of {', '.join(TIE_BREAK_RULES)}"
            )
        if self.min_score < 1:
            raise ValueError(f"min_score must be at least 1, got {self.min_score}")


@dataclass(frozen=True)
class BridgeCandidate:
    """A two-hop path ``a -> word -> b`` and its score."""

    word: str
    first_weight: int
    second_weight: int

    @property
    def score(self) -> int:
        return self.first_weight * self.second_weight


@dataclass
class PairDecision:
    left: str
    right: str
    bridge: BridgeCandidate | None
    alternatives: list[BridgeCandidate] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "left": self.left,
            "right": self.right,
            "bridge": self.bridge.word if self.bridge else None,
            "score": self.bridge.score if self.bridge else 0,
            "alternatives": [[c.word, c.score] for c in self.alternatives],
        }


def bridge_candidates(
    graph: Graph[str],
    left: str,
    right: str,
    config: PoetConfig | None = None,
) -> list[BridgeCandidate]:
    """Return every bridge between two words, best first.

    ``left`` and ``right`` are case-folded before lookup. Candidates scoring
    below ``config.min_score`` are left out.
    """
    config = config or PoetConfig()
    a = canonical(left)
    b = canonical(right)
    outgoing = graph.targets(a)
    incoming = graph.sources(b)

    candidates = [
        BridgeCandidate(word=word, first_weight=outgoing[word], second_weight=incoming[word])
        for word in outgoing.keys() & incoming.keys()
    ]
    candidates = [c for c in candidates if c.score >= config.min_score]

    if config.tie_break == "reverse_lexical":
        return sorted(candidates, key=lambda c: (c.score, c.word), reverse=True)
    return sorted(candidates, key=lambda c: (-c.score, c.word))


def find_bridge(
    graph: Graph[str],
    left: str,
    right: str,
    config: PoetConfig | None = None,
) -> BridgeCandidate | None:
    """Return the strongest bridge between two words, or None."""
    ranked = bridge_candidates(graph, left, right, config)
    return ranked[0] if ranked else None


def explain(phrase: str, graph: Graph[str], config: PoetConfig | None = None) -> list[PairDecision]:
    """Return the bridge decision for every adjacent pair in ``phrase``."""
    tokens = tokenize(phrase)
    decisions: list[PairDecision] = []
    for left, right in zip(tokens, tokens[1:]):
        ranked = bridge_candidates(graph, left, right, config)
        decisions.append(
            PairDecision(
                left=left,
                right=right,
                bridge=ranked[0] if ranked else None,
                alternatives=ranked[1:],
            )
        )
    return decisions


def poem(phrase: str, graph: Graph[str], config: PoetConfig | None = None) -> str:
    """Expand ``phrase`` by inserting the strongest bridge word between each pair.

    A phrase with fewer than two tokens is returned unchanged. Otherwise the
    output is the input tokens, with any bridges, joined by single spaces.
    """
    return compose(phrase, explain(phrase, graph, config))


def compose(phrase: str, decisions: list[PairDecision]) -> str:
    """Render ``phrase`` with the bridges chosen in ``decisions``.

    ``decisions`` must come from ``explain`` on the same phrase.
    """
    if not decisions:
        return phrase

    words = [decisions[0].left]
    for decision in decisions:
        if decision.bridge is not None:
            words.append(decision.bridge.word)
            logger.debug(
                "bridge %r -> %r -> %r (score=%d, alternatives=%d)",
                decision.left,
                decision.bridge.word,
                decision.right,
                decision.bridge.score,
                len(decision.alternatives),
            )
        words.append(decision.right)
    return " ".join(words)


class GraphPoet:
    """A corpus word graph plus the bridging algorithm that reads it."""

    def __init__(
        self,
        corpus_words: Iterable[str],
        config: PoetConfig | None = None,
    ) -> None:
        self.config = config or PoetConfig()
        self._corpus_words: list[str] = []
        self._graph: Graph[str] = Graph()
        self._publish(list(corpus_words))

    @classmethod
    def from_text(cls, text: str, config: PoetConfig | None = None) -> "GraphPoet":
        return cls(tokenize(text), config)

    @classmethod
    def from_lines(cls, lines: Iterable[str], config: PoetConfig | None = None) -> "GraphPoet":
        return cls(tokenize_lines(lines), config)

    @classmethod
    def from_source(
        cls,
        source: str | Path,
        config: PoetConfig | None = None,
        corpus_config: CorpusConfig | None = None,
    ) -> "GraphPoet":
        """Build from a corpus file path or an HTTP(S) URL."""
        return cls.from_lines(load_corpus(source, corpus_config), config)

    from_file = from_source

    @property
    def graph(self) -> Graph[str]:
        return self._graph

    @property
    def corpus_words(self) -> list[str]:
        """Canonical corpus tokens in corpus order."""
        return list(self._corpus_words)

    def rebuild(self, lines: Iterable[str]) -> Graph[str]:
        """Build a graph from new corpus lines and publish it in one step.

        The old graph is never mutated, so readers holding it stay consistent.
        """
        return self._publish(tokenize_lines(lines))

    def _publish(self, tokens: list[str]) -> Graph[str]:
        graph = build_word_graph(tokens)
        words = [canonical(token) for token in tokens]
        self._graph, self._corpus_words = graph, words
        return graph

    def poem(self, phrase: str) -> str:
        return poem(phrase, self._graph, self.config)

    def explain(self, phrase: str) -> list[PairDecision]:
        return explain(phrase, self._graph, self.config)

    def __repr__(self) -> str:
        return (
            f"GraphPoet(words={len(self._corpus_words)}, "
            f"nodes={self._graph.node_count}, edges={self._graph.edge_count}, "
            f"tie_break={self.config.tie_break!r})"
        )

    def __str__(self) -> str:
        return self._graph.describe()
