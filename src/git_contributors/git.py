from __future__ import annotations

import subprocess
from pathlib import Path

from .models import GitHistoryError, NoCommitsError, RawContributor

NO_COMMITS_MARKER = "does not have any commits yet"


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def list_contributors(cwd: Path) -> list[RawContributor]:
    """
    Commit authors of the repository at `cwd`, one entry per email address.

    Entries are ordered by first commit (oldest first); the name is the one
    used on the author's most recent commit. Names and emails go through
    .mailmap.
    """
    try:
        code, out, err = run_git(["log", "--reverse", "--format=%aN%x09%aE"], cwd=cwd)
    except (OSError, subprocess.SubprocessError) as e:
        raise GitHistoryError(str(e)) from e
    if code != 0:
        if NO_COMMITS_MARKER in err:
            raise NoCommitsError(err)
        raise GitHistoryError(err or f"git log exited {code}")

    names: dict[str, str] = {}
    commits: dict[str, int] = {}
    for line in out.splitlines():
        if not line.strip():
            continue
        name, _, email = line.partition("\t")
        email = email.strip()
        names[email] = name.strip()
        commits[email] = commits.get(email, 0) + 1

    return [RawContributor(name=names[email], email=email, commits=n) for email, n in commits.items()]
