from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _run_cli(
    args: list[str], journal: Path, env: dict[str, str] | None = None
) -> subprocess.CompletedProcess[str]:
    proc_env = os.environ.copy()
    proc_env["PYTHONPATH"] = str(PROJECT_ROOT)
    proc_env["GRAPHPOET_JOURNAL"] = str(journal)
    proc_env.pop("GRAPHPOET_NO_LOG", None)
    if env:
        proc_env.update(env)
    return subprocess.run(
        [sys.executable, "-m", "graphpoet.cli", *args],
        text=True,
        capture_output=True,
        env=proc_env,
    )


def _write_corpus(tmp_path: Path, text: str) -> Path:
    corpus = tmp_path / "corpus.txt"
    corpus.write_text(text, encoding="utf-8")
    return corpus


def test_poem_prints_bridged_phrase(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "Seek to explore strange new life and exciting synergies!\n")
    journal = tmp_path / "journal.jsonl"

    result = _run_cli(
        ["poem", "Seek to explore new and exciting synergies!", "--corpus", str(corpus)],
        journal,
    )

    assert result.returncode == 0
    assert result.stdout.strip() == "Seek to explore strange new life and exciting synergies!"
    entries = [json.loads(line) for line in journal.read_text(encoding="utf-8").splitlines()]
    assert [e["type"] for e in entries] == ["build", "poem"]
    assert entries[1]["bridges"] == 2


def test_poem_json_explain_and_tie_break(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "a x b\na y b\n")
    journal = tmp_path / "journal.jsonl"

    result = _run_cli(
        [
            "poem",
            "a b",
            "--corpus",
            str(corpus),
            "--tie-break",
            "reverse_lexical",
            "--explain",
            "--json",
            "--no-log",
        ],
        journal,
    )

    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert payload["output"] == "a y b"
    assert payload["tie_break"] == "reverse_lexical"
    assert payload["pairs"][0]["alternatives"] == [["x", 1]]
    assert not journal.exists()


def test_poem_respects_no_log_env(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "a x b")
    journal = tmp_path / "journal.jsonl"
    result = _run_cli(["poem", "a b", "--corpus", str(corpus)], journal, env={"GRAPHPOET_NO_LOG": "1"})
    assert result.returncode == 0
    assert result.stdout.strip() == "a x b"
    assert not journal.exists()


def test_poem_missing_corpus(tmp_path: Path) -> None:
    result = _run_cli(["poem", "a b", "--corpus", str(tmp_path / "nope.txt")], tmp_path / "j.jsonl")
    assert result.returncode != 0
    assert "missing corpus file" in result.stderr


def test_poem_rejects_bad_min_score(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "a x b")
    result = _run_cli(["poem", "a b", "--corpus", str(corpus), "--min-score", "0"], tmp_path / "j.jsonl")
    assert result.returncode != 0
    assert "min_score" in result.stderr


def test_graph_summary_and_word(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "Hello, HELLO, hello, goodbye.")
    journal = tmp_path / "journal.jsonl"

    summary = _run_cli(["graph", "--corpus", str(corpus), "--json"], journal)
    assert summary.returncode == 0
    assert json.loads(summary.stdout) == {"words": 4, "nodes": 2, "edges": 2, "max_weight": 2}

    word = _run_cli(["graph", "--corpus", str(corpus), "--word", "HELLO,", "--json"], journal)
    assert word.returncode == 0
    payload = json.loads(word.stdout)
    assert payload["present"] is True
    assert payload["targets"] == {"goodbye.": 1, "hello,": 2}
    assert payload["sources"] == {"hello,": 2}


def test_verbose_logs_to_stderr(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "a x b")
    result = _run_cli(
        ["poem", "a b", "--corpus", str(corpus), "--no-log", "--verbose"], tmp_path / "j.jsonl"
    )
    assert result.returncode == 0
    assert "built word graph" in result.stderr
    assert "bridge 'a' -> 'x' -> 'b'" in result.stderr


def test_journal_lists_entries_and_stats(tmp_path: Path) -> None:
    corpus = _write_corpus(tmp_path, "a x b")
    journal = tmp_path / "journal.jsonl"
    _run_cli(["poem", "a b", "--corpus", str(corpus)], journal)

    listing = _run_cli(["journal"], journal)
    assert listing.returncode == 0
    assert "poem @" in listing.stdout
    assert "input='a b', output='a x b'" in listing.stdout

    stats = _run_cli(["journal", "--stats", "--json"], journal)
    assert json.loads(stats.stdout)["poems_with_bridges"] == 1


def test_journal_empty(tmp_path: Path) -> None:
    result = _run_cli(["journal"], tmp_path / "empty.jsonl")
    assert result.returncode == 0
    assert result.stdout.strip() == "No entries."


def test_poem_searches_each_pair_once(tmp_path: Path, monkeypatch, capsys) -> None:
    import graphpoet.poet as poet_module
    from graphpoet import cli

    corpus = _write_corpus(tmp_path, "a x b y c")
    calls: list[tuple[str, str]] = []
    original = poet_module.bridge_candidates

    def counting(graph, left, right, config=None):
        calls.append((left, right))
        return original(graph, left, right, config)

    monkeypatch.setattr(poet_module, "bridge_candidates", counting)
    monkeypatch.setattr(cli, "_configure_logging", lambda verbose: None)
    assert cli.main(["poem", "a b c", "--corpus", str(corpus), "--no-log", "--explain"]) == 0

    assert calls == [("a", "b"), ("b", "c")]
    assert capsys.readouterr().out.splitlines()[0] == "a x b y c"
