from __future__ import annotations

import dataclasses
from typing import Callable

from .models import Contributor

# Checked in order; the first field whose value was already claimed wins.
ID_FIELDS: tuple[tuple[str, Callable[[Contributor], str | None]], ...] = (
    ("email", lambda c: c.email),
    ("name", lambda c: c.name),
    ("github", lambda c: c.github),
    ("social.url", lambda c: c.social.url if c.social else None),
)


def dedupe_contributors(contributors: list[Contributor]) -> list[Contributor]:
    """
    Merge contributors that share an email, name, GitHub handle or social URL.

    Commits of a duplicate are added to the first contributor that claimed the
    matching value; output keeps first-seen order. Inputs are not modified.
    """
    seen: dict[str, dict[str, Contributor]] = {field: {} for field, _ in ID_FIELDS}
    out: list[Contributor] = []

    for contributor in contributors:
        existing: Contributor | None = None
        for field, get in ID_FIELDS:
            value = get(contributor)
            if value and value in seen[field]:
                existing = seen[field][value]
                break

        if existing is not None:
            existing.commits += contributor.commits
            continue

        kept = dataclasses.replace(contributor)
        for field, get in ID_FIELDS:
            value = get(kept)
            if value:
                seen[field][value] = kept
        out.append(kept)

    return out
