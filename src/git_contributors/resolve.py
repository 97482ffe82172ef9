from __future__ import annotations

from .identity import github_username_from_email, is_bot, normalize_key
from .indexer import index_value
from .models import Contributor, Indices, Message, RawContributor
from .social import resolve_social


def resolve_contributor(raw: RawContributor, indices: Indices, messages: list[Message]) -> Contributor | None:
    """
    Enrich one commit author with indexed metadata.

    Returns None when the author has no email (reported) or is a known bot
    (dropped silently).
    """
    name = raw.name or ""
    email = raw.email or ""
    if not email:
        messages.append(Message(f"no git email for `{name}`", "contributor-email-missing"))
        return None

    found = indices.email.get(normalize_key(email)) or indices.name.get(normalize_key(name)) or {}
    metadata = dict(found)

    github = github_username_from_email(email)
    if github:
        metadata["github"] = github
        index_value(indices.github, github, metadata)

    github = str(metadata.get("github") or "") or None
    if is_bot(name=name, email=email, github=github):
        return None

    social = resolve_social(metadata, email, messages)

    return Contributor(
        email=email,
        commits=int(raw.commits),
        name=str(metadata.get("name") or name),
        github=github,
        social=social,
    )


def resolve_contributors(raws: list[RawContributor], indices: Indices, messages: list[Message]) -> list[Contributor]:
    out: list[Contributor] = []
    for raw in raws:
        c = resolve_contributor(raw, indices, messages)
        if c is not None:
            out.append(c)
    return out
