from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path

import pytest

from git_contributors.cli import main

DOC = "# Project\n\n## Contributors\n\nTBD\n"


def _run(cmd: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> str:
    proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=True, capture_output=True, text=True)
    return proc.stdout


def _init_repo(repo: Path, authors: list[str]) -> None:
    repo.mkdir(parents=True, exist_ok=True)
    _run(["git", "init"], cwd=repo)
    _run(["git", "config", "user.name", "Repo User"], cwd=repo)
    _run(["git", "config", "user.email", "repo@example.com"], cwd=repo)
    _run(["git", "config", "commit.gpgsign", "false"], cwd=repo)
    env = os.environ.copy()
    env["GIT_AUTHOR_DATE"] = "2025-01-01T00:00:00Z"
    env["GIT_COMMITTER_DATE"] = "2025-01-01T00:00:00Z"
    for author in authors:
        _run(["git", "commit", "--allow-empty", "-m", "change", "--author", author], cwd=repo, env=env)


def test_cli_updates_readme(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo, ["Alpha <alpha@example.com>", "Bravo <bravo@example.com>", "Alpha <alpha@example.com>"])
    (repo / "README.md").write_text(DOC, encoding="utf-8")
    monkeypatch.chdir(repo)

    assert main([]) == 0

    text = (repo / "README.md").read_text(encoding="utf-8")
    assert text == "# Project\n\n## Contributors\n\n| Name |\n| :-- |\n| Alpha |\n| Bravo |\n"
    captured = capsys.readouterr()
    assert "Updated README.md (2 contributors)." in captured.out
    assert "info: no social profile for `alpha@example.com` [git-contributors:contributor-social-missing]" in captured.err


def test_cli_check_and_stdout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo, ["Alpha <alpha@example.com>"])
    readme = repo / "README.md"
    readme.write_text(DOC, encoding="utf-8")
    monkeypatch.chdir(repo)

    assert main(["--check", "README.md"]) == 1
    assert readme.read_text(encoding="utf-8") == DOC

    capsys.readouterr()
    assert main(["--stdout", "README.md"]) == 0
    assert "| Alpha |" in capsys.readouterr().out
    assert readme.read_text(encoding="utf-8") == DOC

    assert main(["README.md"]) == 0
    assert main(["--check", "README.md"]) == 0


def test_cli_contributors_file_and_limit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo, ["Alpha <alpha@example.com>", "Bravo <bravo@example.com>", "Bravo <bravo@example.com>"])
    (repo / "README.md").write_text(DOC, encoding="utf-8")
    (repo / "people.json").write_text(json.dumps([{"email": "bravo@example.com", "github": "bravo"}]), encoding="utf-8")
    monkeypatch.chdir(repo)

    assert main(["--contributors", "people.json", "--limit", "1"]) == 0
    text = (repo / "README.md").read_text(encoding="utf-8")
    assert "| Bravo | [**@bravo**](https://github.com/bravo) |" in text
    assert "Alpha" not in text


def test_cli_reads_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo, ["Alpha <alpha@example.com>"])
    (repo / "README.md").write_text("# Project\n", encoding="utf-8")
    (repo / ".git-contributors.json").write_text(json.dumps({"append_if_missing": True}), encoding="utf-8")
    monkeypatch.chdir(repo)

    assert main([]) == 0
    assert (repo / "README.md").read_text(encoding="utf-8").endswith("## Contributors\n\n| Name |\n| :-- |\n| Alpha |\n")


def test_cli_reports_fatal_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo, ["Alpha <alpha@example.com>"])
    (repo / "README.md").write_text(DOC, encoding="utf-8")
    monkeypatch.chdir(repo)

    assert main(["--contributors", "missing.json"]) == 1
    assert "README.md: error: cannot find contributors file 'missing.json'" in capsys.readouterr().err
    assert (repo / "README.md").read_text(encoding="utf-8") == DOC


def test_cli_empty_repo_is_not_an_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo, [])
    (repo / "README.md").write_text(DOC, encoding="utf-8")
    monkeypatch.chdir(repo)

    assert main([]) == 0
    assert "[git-contributors:no-commits]" in capsys.readouterr().err
    assert (repo / "README.md").read_text(encoding="utf-8") == DOC


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("git-contributors ")
