"""Append-only JSONL journal for build/poem telemetry."""

from __future__ import annotations

import json
import os
import time
from pathlib import Path

DEFAULT_JOURNAL_PATH = "~/.graphpoet/journal.jsonl"
JOURNAL_ENV_VAR = "GRAPHPOET_JOURNAL"


def resolve_journal_path(journal_path: str | None = None) -> Path:
    """Resolve the journal file: explicit path, then env var, then default."""
    return Path(journal_path or os.getenv(JOURNAL_ENV_VAR) or DEFAULT_JOURNAL_PATH).expanduser()


def log_event(event: dict, journal_path: str | None = None) -> None:
    """Append an event to the journal file."""
    path = resolve_journal_path(journal_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    event["ts"] = time.time()
    event["iso"] = time.strftime("%Y-%m-%dT%H:%M:%S%z")
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")


def log_build(source: str, word_count: int, node_count: int, edge_count: int, journal_path: str | None = None) -> None:
    log_event(
        {
            "type": "build",
            "source": source,
            "word_count": word_count,
            "node_count": node_count,
            "edge_count": edge_count,
        },
        journal_path,
    )


def log_poem(phrase: str, output: str, bridges: int, journal_path: str | None = None) -> None:
    log_event(
        {
            "type": "poem",
            "input": phrase,
            "output": output,
            "bridges": bridges,
        },
        journal_path,
    )


def read_journal(journal_path: str | None = None, last_n: int | None = None) -> list[dict]:
    """Read journal entries. Optionally return only the last N entries."""
    path = resolve_journal_path(journal_path)
    if not path.exists():
        return []
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    entries = [json.loads(line) for line in lines if line.strip()]
    if last_n is not None:
        entries = entries[-last_n:]
    return entries


def journal_stats(journal_path: str | None = None) -> dict:
    """Return summary stats from journal entries."""
    entries = read_journal(journal_path)
    builds = [e for e in entries if e.get("type") == "build"]
    poems = [e for e in entries if e.get("type") == "poem"]
    bridged = [e for e in poems if e.get("bridges", 0) > 0]
    return {
        "total_entries": len(entries),
        "builds": len(builds),
        "poems": len(poems),
        "poems_with_bridges": len(bridged),
        "avg_bridges_per_poem": sum(e.get("bridges", 0) for e in poems) / max(len(poems), 1),
    }
