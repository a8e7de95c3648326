"""
Most users only need: from graphpoet import GraphPoet

graphpoet: word bridging over a corpus adjacency graph.

A corpus becomes a weighted directed graph whose edge ``a -> b`` counts how
often ``b`` follows ``a``. A poem inserts, between each pair of input words,
the corpus word forming the strongest two-hop bridge between them.

CLI:
  python -m graphpoet.cli
  graphpoet  # via console_scripts entry point
"""

__version__ = "1.0.0"

from .builder import build_word_graph, canonical
from .corpus import CorpusConfig, CorpusError, fetch_lines, load_corpus, read_lines
from .graph import Graph, InvalidWeightError
from .poet import (
    BridgeCandidate,
    GraphPoet,
    PairDecision,
    PoetConfig,
    bridge_candidates,
    compose,
    explain,
    find_bridge,
    poem,
)
from .tokenize import tokenize, tokenize_lines

__all__ = [
    # --- Core (start here) ---
    "Graph",
    "InvalidWeightError",
    "GraphPoet",
    "PoetConfig",
    "poem",

    # --- Building ---
    "tokenize",
    "tokenize_lines",
    "canonical",
    "build_word_graph",

    # --- Bridging internals ---
    "BridgeCandidate",
    "PairDecision",
    "bridge_candidates",
    "find_bridge",
    "explain",
    "compose",

    # --- Corpus sources ---
    "CorpusConfig",
    "CorpusError",
    "read_lines",
    "fetch_lines",
    "load_corpus",
]
