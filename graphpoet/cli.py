"""Thin CLI wrapper around corpus loading, graph building and word bridging."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .builder import canonical
from .corpus import CorpusConfig, CorpusError, load_corpus
from .journal import journal_stats, log_build, log_poem, read_journal
from .poet import TIE_BREAK_RULES, GraphPoet, PoetConfig, compose

NO_LOG_ENV_VAR = "GRAPHPOET_NO_LOG"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="graphpoet")
    sub = parser.add_subparsers(dest="command", required=True)

    poem = sub.add_parser("poem", help="insert corpus bridge words into a phrase")
    poem.add_argument("text")
    poem.add_argument("--corpus", required=True, help="corpus file path or http(s) URL")
    poem.add_argument("--tie-break", choices=TIE_BREAK_RULES, default="lexical")
    poem.add_argument("--min-score", type=int, default=1)
    poem.add_argument("--timeout", type=float, default=10.0, help="URL fetch timeout in seconds")
    poem.add_argument("--explain", action="store_true", help="print the decision for every word pair")
    poem.add_argument("--json", action="store_true")
    poem.add_argument("--no-log", action="store_true", help="disable build/poem journaling")
    poem.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    graph = sub.add_parser("graph", help="summarize the corpus word graph")
    graph.add_argument("--corpus", required=True, help="corpus file path or http(s) URL")
    graph.add_argument("--word", help="show sources and targets of one word")
    graph.add_argument("--timeout", type=float, default=10.0, help="URL fetch timeout in seconds")
    graph.add_argument("--json", action="store_true")
    graph.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    journal = sub.add_parser("journal", help="read recent journal entries or summary stats")
    journal.add_argument("--last", type=int, default=10)
    journal.add_argument("--stats", action="store_true")
    journal.add_argument("--json", action="store_true")

    return parser


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("graphpoet")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False


def _journaling_enabled(args: argparse.Namespace) -> bool:
    if getattr(args, "no_log", False):
        return False
    return os.getenv(NO_LOG_ENV_VAR, "").strip().lower() not in {"1", "true", "yes", "on"}


def _load_poet(source: str, timeout: float, config: PoetConfig | None = None) -> GraphPoet:
    try:
        lines = load_corpus(source, CorpusConfig(timeout_s=timeout))
    except FileNotFoundError:
        raise SystemExit(f"missing corpus file: {source}")
    except (CorpusError, ValueError) as exc:
        raise SystemExit(str(exc))
    return GraphPoet.from_lines(lines, config)


def cmd_poem(args: argparse.Namespace) -> int:
    try:
        config = PoetConfig(tie_break=args.tie_break, min_score=args.min_score)
    except ValueError as exc:
        raise SystemExit(str(exc))

    poet = _load_poet(args.corpus, args.timeout, config)
    decisions = poet.explain(args.text)
    output = compose(args.text, decisions)
    bridges = sum(1 for decision in decisions if decision.bridge is not None)

    if _journaling_enabled(args):
        graph = poet.graph
        log_build(args.corpus, len(poet.corpus_words), graph.node_count, graph.edge_count)
        log_poem(args.text, output, bridges)

    if args.json:
        payload = {
            "input": args.text,
            "output": output,
            "bridges": bridges,
            "tie_break": config.tie_break,
        }
        if args.explain:
            payload["pairs"] = [decision.as_dict() for decision in decisions]
        print(json.dumps(payload, indent=2))
        return 0

    print(output)
    if args.explain:
        for decision in decisions:
            if decision.bridge is None:
                print(f"  {decision.left} | {decision.right}: no bridge")
                continue
            detail = f"  {decision.left} | {decision.right}: {decision.bridge.word} (score={decision.bridge.score})"
            if decision.alternatives:
                others = ", ".join(f"{c.word}={c.score}" for c in decision.alternatives)
                detail += f" over {others}"
            print(detail)
    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    poet = _load_poet(args.corpus, args.timeout)
    graph = poet.graph

    if args.word is not None:
        word = canonical(args.word)
        payload = {
            "word": word,
            "present": word in graph,
            "sources": dict(sorted(graph.sources(word).items())),
            "targets": dict(sorted(graph.targets(word).items())),
        }
        if args.json:
            print(json.dumps(payload, indent=2))
            return 0
        if not payload["present"]:
            print(f"{word}: not in corpus")
            return 0
        print(f"word: {word}")
        print("sources: " + ", ".join(f"{k}={v}" for k, v in payload["sources"].items()))
        print("targets: " + ", ".join(f"{k}={v}" for k, v in payload["targets"].items()))
        return 0

    payload = {
        "words": len(poet.corpus_words),
        "nodes": graph.node_count,
        "edges": graph.edge_count,
        "max_weight": max((weight for _, _, weight in graph.edges()), default=0),
    }
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print("words: {words}\nnodes: {nodes}\nedges: {edges}\nmax_weight: {max_weight}".format(**payload))
    return 0


def cmd_journal(args: argparse.Namespace) -> int:
    if args.last is not None and args.last <= 0:
        raise SystemExit("last must be a positive integer")

    if args.stats:
        payload = journal_stats()
        if args.json:
            print(json.dumps(payload, indent=2))
            return 0

        print(f"total_entries: {payload['total_entries']}")
        print(f"builds: {payload['builds']}")
        print(f"poems: {payload['poems']}")
        print(f"poems_with_bridges: {payload['poems_with_bridges']}")
        print(f"avg_bridges_per_poem: {payload['avg_bridges_per_poem']:.4f}")
        return 0

    entries = read_journal(last_n=args.last)
    if args.json:
        print(json.dumps(entries, indent=2))
        return 0

    if not entries:
        print("No entries.")
        return 0

    for idx, entry in enumerate(entries, start=1):
        kind = entry.get("type", "unknown")
        timestamp = entry.get("iso", entry.get("ts", ""))
        if kind == "poem":
            detail = f"input={entry.get('input')!r}, output={entry.get('output')!r}"
        elif kind == "build":
            detail = (
                f"source={entry.get('source')}, "
                f"nodes={entry.get('node_count', 0)}, "
                f"edges={entry.get('edge_count', 0)}"
            )
        else:
            detail = ", ".join(
                f"{key}={value}"
                for key, value in entry.items()
                if key not in {"type", "ts", "iso"}
            )
        print(f"{idx:>2}. {kind} @ {timestamp}: {detail}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    if args.command == "poem":
        return cmd_poem(args)
    if args.command == "graph":
        return cmd_graph(args)
    if args.command == "journal":
        return cmd_journal(args)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
