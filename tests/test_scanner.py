"""Unit tests for summary backup and scanner invocation."""

import subprocess
from pathlib import Path
from types import SimpleNamespace

from license_gate.scanner import backup_summary, build_scanner_command, run_scanner


def test_backup_summary_without_previous_summary(tmp_path: Path):
    assert backup_summary(tmp_path / "license-check-summary.txt") is None


def test_backup_summary_replaces_older_backup(tmp_path: Path, capsys):
    summary = tmp_path / "license-check-summary.txt"
    old = tmp_path / "license-check-summary.txt.old"
    summary.write_text("new", encoding="utf-8")
    old.write_text("older", encoding="utf-8")

    assert backup_summary(summary) == old
    assert not summary.exists()
    assert old.read_text(encoding="utf-8") == "new"
    assert "INFO: Backing up previous summary..." in capsys.readouterr().err


def test_backup_summary_to_explicit_path(tmp_path: Path):
    summary = tmp_path / "summary.txt"
    target = tmp_path / "previous-summary.txt"
    summary.write_text("new", encoding="utf-8")

    assert backup_summary(summary, target) == target
    assert target.read_text(encoding="utf-8") == "new"
    assert not (tmp_path / "summary.txt.old").exists()


def test_build_scanner_command():
    command = build_scanner_command(
        Path("/d/dash.jar"), Path("/r/yarn.lock"), Path("/r/summary.txt")
    )
    assert command == [
        "java",
        "-jar",
        "/d/dash.jar",
        "/r/yarn.lock",
        "-batch",
        "50",
        "-timeout",
        "240",
        "-summary",
        "/r/summary.txt",
    ]


def test_run_scanner_discards_stdout_and_keeps_stderr(monkeypatch, tmp_path: Path):
    seen = {}

    def fake_run(argv, **kwargs):
        seen.update(kwargs, argv=argv)
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = run_scanner(
        tmp_path / "dash.jar",
        tmp_path / "yarn.lock",
        tmp_path / "summary.txt",
        batch=10,
        timeout=30,
        java="/opt/java",
    )
    assert result is None
    assert seen["argv"][0] == "/opt/java"
    assert seen["argv"][4:8] == ["-batch", "10", "-timeout", "30"]
    assert seen["stdin"] is subprocess.DEVNULL
    assert seen["stdout"] is subprocess.DEVNULL
    assert seen["stderr"] is None


def test_run_scanner_failure_is_only_a_warning(monkeypatch, tmp_path: Path, capsys):
    monkeypatch.setattr(subprocess, "run", lambda *a, **k: SimpleNamespace(returncode=1))
    warning = run_scanner(tmp_path / "dash.jar", tmp_path / "yarn.lock", tmp_path / "s.txt")
    assert warning is not None
    assert "exited with code: 1" in warning
    err = capsys.readouterr().err
    assert "INFO: Running dash-licenses..." in err
    assert "WARN: Command [" in err
