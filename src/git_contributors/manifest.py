from __future__ import annotations

import dataclasses
import json
import tomllib
from pathlib import Path

from .models import ManifestError


@dataclasses.dataclass(frozen=True)
class Manifest:
    path: Path | None = None
    author: object = None
    contributors: list[object] = dataclasses.field(default_factory=list)

    def records(self) -> list[object]:
        out: list[object] = []
        if self.author:
            out.append(self.author)
        out.extend(c for c in self.contributors if c)
        return out


def _pyproject_people(path: Path) -> list[object] | None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"cannot parse {path}: {e}") from e
    project = data.get("project")
    if not isinstance(project, dict):
        return None
    people = [p for key in ("authors", "maintainers") for p in (project.get(key) or []) if isinstance(p, dict)]
    return people or None


def find_manifest(base: Path) -> Path | None:
    """
    Nearest manifest walking up from `base`. In each directory a package.json
    wins over a pyproject.toml, which only counts when it lists authors or
    maintainers.
    """
    start = base.resolve()
    for d in [start, *start.parents]:
        candidate = d / "package.json"
        if candidate.is_file():
            return candidate
        candidate = d / "pyproject.toml"
        if candidate.is_file() and _pyproject_people(candidate):
            return candidate
    return None


def load_manifest(path: Path | None) -> Manifest:
    if path is None:
        return Manifest()

    if path.name == "pyproject.toml":
        people = _pyproject_people(path) or []
        if not people:
            return Manifest(path=path)
        return Manifest(path=path, author=people[0], contributors=list(people[1:]))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"cannot parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"cannot parse {path}: expected a JSON object")
    contributors = data.get("contributors")
    return Manifest(
        path=path,
        author=data.get("author"),
        contributors=list(contributors) if isinstance(contributors, list) else [],
    )
