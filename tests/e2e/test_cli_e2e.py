from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Drives the CLI controller in-process for argument handling, exit codes and
stdout content, and once through a real subprocess to validate the
`python -m fstree` entry point.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

from fstree.interface.cli.app import main

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Structure:
    /sample
      /pkg
        mod.py   (4 bytes)
      notes.txt  (2 bytes)
    """
    root = tmp_path / "sample"
    (root / "pkg").mkdir(parents=True)
    (root / "pkg" / "mod.py").write_bytes(b"pass")
    (root / "notes.txt").write_bytes(b"hi")
    return root


def run(args: List[str]) -> int:
    return main(["--use-defaults"] + args)


def test_scan_prints_tree_and_summary(sample_project: Path, capsys) -> None:
    code = run(["-i", str(sample_project)])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[:4] == [
        "sample/ (total 6 bytes)",
        "  notes.txt (2 bytes)",
        "  pkg/ (total 4 bytes)",
        "    mod.py (4 bytes)",
    ]
    assert "Total: 6 bytes in 4 entries" in out


def test_json_output(sample_project: Path, capsys) -> None:
    code = run(["-i", str(sample_project), "--json", "--style", "ascii"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["ok"] is True
    assert payload["root_name"] == "sample"
    assert payload["total_size"] == 6
    assert payload["node_count"] == 4
    assert payload["lines"][1:] == [
        "├── notes.txt (2 bytes)",
        "└── pkg/ (total 4 bytes)",
        "    └── mod.py (4 bytes)",
    ]


def test_save_then_load_renders_identically(sample_project: Path, tmp_path: Path, capsys) -> None:
    snapshot = tmp_path / "snap" / "sample.fst"

    assert run(["-i", str(sample_project), "--save", str(snapshot), "--json"]) == 0
    scanned = json.loads(capsys.readouterr().out)
    assert scanned["snapshot_path"] == str(snapshot)
    assert snapshot.exists()

    assert run(["--load", str(snapshot), "--json"]) == 0
    loaded = json.loads(capsys.readouterr().out)
    assert loaded["lines"] == scanned["lines"]
    assert loaded["source"] == str(snapshot)


def test_missing_input_exits_with_2(tmp_path: Path, capsys) -> None:
    code = run(["-i", str(tmp_path / "does_not_exist")])
    assert code == 2
    assert "ERROR" in capsys.readouterr().err


def test_malformed_snapshot_exits_with_3(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.fst"
    bad.write_text("FST1|D1:a2[F1:b1;]", encoding="utf-8")

    code = run(["--load", str(bad), "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 3
    assert payload["ok"] is False
    assert "declares 2 children" in payload["error"]


def test_non_utf8_snapshot_exits_with_3(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "binary.fst"
    bad.write_bytes(b"FST1|F1:\xff1;")

    code = run(["--load", str(bad), "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 3
    assert payload["ok"] is False
    assert "not valid UTF-8" in payload["error"]


def test_missing_snapshot_exits_with_1(tmp_path: Path) -> None:
    assert run(["--load", str(tmp_path / "nope.fst")]) == 1


def test_dump_config(sample_project: Path, capsys) -> None:
    code = run(["-i", str(sample_project), "--indent", "4", "--dump-config"])
    cfg = json.loads(capsys.readouterr().out)

    assert code == 0
    assert cfg["input_path"] == str(sample_project)
    assert cfg["indent_unit"] == 4


def test_remember_persists_session_for_next_run(sample_project: Path, capsys) -> None:
    assert run(["-i", str(sample_project), "--indent", "4", "--remember"]) == 0
    capsys.readouterr()

    assert main(["--dump-config"]) == 0
    cfg = json.loads(capsys.readouterr().out)
    assert cfg["input_path"] == str(sample_project)
    assert cfg["indent_unit"] == 4


def test_session_is_not_persisted_without_remember(sample_project: Path, capsys) -> None:
    assert run(["-i", str(sample_project), "--indent", "4"]) == 0
    capsys.readouterr()

    assert main(["--dump-config"]) == 0
    assert json.loads(capsys.readouterr().out)["indent_unit"] == 2


def test_log_file_option(sample_project: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "cli.log"
    assert run(["-i", str(sample_project), "--log-file", str(log_file)]) == 0
    assert "Scanning directory" in log_file.read_text(encoding="utf-8")


def test_module_entry_point(sample_project: Path, tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["FSTREE_HOME"] = str(tmp_path / "home")

    proc = subprocess.run(
        [sys.executable, "-m", "fstree", "--use-defaults", "-i", str(sample_project)],
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )

    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.splitlines()[0] == "sample/ (total 6 bytes)"
