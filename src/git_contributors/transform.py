from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Callable

from .config import Settings
from .dedupe import dedupe_contributors
from .git import list_contributors
from .indexer import index_contributor, index_contributors
from .manifest import find_manifest, load_manifest
from .markdown import has_contributors_heading, inject_contributors_table
from .models import Contributor, Message, NoCommitsError, NoContributorsError, RawContributor
from .ranking import rank_contributors, visible_columns
from .resolve import resolve_contributors

CommitSource = Callable[[Path], list[RawContributor]]


@dataclasses.dataclass
class TransformResult:
    text: str
    changed: bool
    contributors: list[Contributor] = dataclasses.field(default_factory=list)
    messages: list[Message] = dataclasses.field(default_factory=list)


def collect_contributors(
    settings: Settings,
    *,
    base: Path,
    messages: list[Message],
    commit_source: CommitSource = list_contributors,
) -> list[Contributor] | None:
    """
    Ranked, deduplicated contributors for the repository at `settings.cwd`.

    Metadata from the `contributors` setting is indexed before the manifest
    found upward from `base`, so it wins on conflicts. Returns None when the
    repository has no commits yet.
    """
    cwd = (settings.cwd or Path.cwd()).resolve()
    indices = index_contributors(cwd, settings.contributors)

    manifest = load_manifest(find_manifest(base))
    for record in manifest.records():
        index_contributor(indices, record)

    try:
        raws = commit_source(cwd)
    except NoCommitsError as e:
        messages.append(
            Message(
                "could not get Git contributors as there are no commits yet",
                "no-commits",
                severity="info",
                cause=e,
            )
        )
        return None

    resolved = resolve_contributors(raws, indices, messages)
    contributors = rank_contributors(dedupe_contributors(resolved), settings.limit)
    if not contributors:
        raise NoContributorsError("no contributors found")
    return contributors


def transform_document(
    text: str,
    settings: Settings | None = None,
    *,
    path: Path | None = None,
    commit_source: CommitSource = list_contributors,
) -> TransformResult:
    settings = settings or Settings()
    if not settings.append_if_missing and not has_contributors_heading(text):
        return TransformResult(text=text, changed=False)

    cwd = (settings.cwd or Path.cwd()).resolve()
    base = (cwd / path).parent if path is not None else cwd

    messages: list[Message] = []
    contributors = collect_contributors(settings, base=base, messages=messages, commit_source=commit_source)
    if contributors is None:
        return TransformResult(text=text, changed=False, messages=messages)

    out = inject_contributors_table(
        text,
        contributors,
        visible_columns(contributors),
        append_if_missing=settings.append_if_missing,
    )
    return TransformResult(text=out, changed=out != text, contributors=contributors, messages=messages)


def transform_file(
    path: Path,
    settings: Settings | None = None,
    *,
    write: bool = True,
    commit_source: CommitSource = list_contributors,
) -> TransformResult:
    text = path.read_text(encoding="utf-8")
    result = transform_document(text, settings, path=path.resolve(), commit_source=commit_source)
    if write and result.changed:
        path.write_text(result.text, encoding="utf-8")
    return result
