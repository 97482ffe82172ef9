from __future__ import annotations

from .models import Contributor


def rank_contributors(contributors: list[Contributor], limit: int = 0) -> list[Contributor]:
    ranked = sorted(contributors, key=lambda c: (-c.commits, c.name))
    if limit and limit > 0:
        ranked = ranked[:limit]
    return ranked


def visible_columns(contributors: list[Contributor]) -> list[str]:
    """Columns worth rendering: GitHub and Social are dropped when every cell would be empty."""
    cols = ["name"]
    if any(c.github for c in contributors):
        cols.append("github")
    if any(c.social for c in contributors):
        cols.append("social")
    return cols
