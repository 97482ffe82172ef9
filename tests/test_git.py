from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest

from git_contributors.git import list_contributors
from git_contributors.models import GitHistoryError, NoCommitsError, RawContributor


def _run(cmd: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> str:
    proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=True, capture_output=True, text=True)
    return proc.stdout


def _init_repo(repo: Path) -> None:
    repo.mkdir(parents=True, exist_ok=True)
    _run(["git", "init"], cwd=repo)
    _run(["git", "config", "user.name", "Repo User"], cwd=repo)
    _run(["git", "config", "user.email", "repo@example.com"], cwd=repo)
    _run(["git", "config", "commit.gpgsign", "false"], cwd=repo)


def _commit(repo: Path, author: str, n: int) -> None:
    env = os.environ.copy()
    env["GIT_AUTHOR_DATE"] = f"2025-01-{n:02d}T00:00:00Z"
    env["GIT_COMMITTER_DATE"] = f"2025-01-{n:02d}T00:00:00Z"
    _run(["git", "commit", "--allow-empty", "-m", f"commit {n}", "--author", author], cwd=repo, env=env)


def test_list_contributors_aggregates_by_email(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo)
    _commit(repo, "Alpha <alpha@example.com>", 1)
    _commit(repo, "Bravo <bravo@example.com>", 2)
    _commit(repo, "Alpha <alpha@example.com>", 3)
    _commit(repo, "Alpha Renamed <alpha@example.com>", 4)

    assert list_contributors(repo) == [
        RawContributor(name="Alpha Renamed", email="alpha@example.com", commits=3),
        RawContributor(name="Bravo", email="bravo@example.com", commits=1),
    ]


def test_list_contributors_empty_repo(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    _init_repo(repo)
    with pytest.raises(NoCommitsError):
        list_contributors(repo)


def test_list_contributors_not_a_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(GitHistoryError, match="could not get Git contributors") as excinfo:
        list_contributors(plain)
    assert not isinstance(excinfo.value, NoCommitsError)
