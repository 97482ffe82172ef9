from __future__ import annotations

import re

from .models import Message, MetadataRecord, Social

_TWITTER_SPLIT = re.compile(r"[@/]")


def twitter_social(raw: str) -> Social | None:
    parts = _TWITTER_SPLIT.split(raw)
    handle = next((s.strip() for s in reversed(parts) if s.strip()), "")
    if not handle:
        return None
    return Social(url=f"https://twitter.com/{handle}", text=f"@{handle}@twitter")


def mastodon_social(raw: str) -> Social | None:
    parts = [p for p in raw.split("@") if p]
    if len(parts) < 2:
        return None
    handle, domain = parts[0], parts[1]
    return Social(url=f"https://{domain}/@{handle}", text=f"@{handle}@{domain}")


def resolve_social(metadata: MetadataRecord, email: str, messages: list[Message]) -> Social | None:
    twitter = metadata.get("twitter")
    if twitter:
        social = twitter_social(str(twitter))
        if social is None:
            messages.append(Message(f"invalid twitter handle for `{email}`", "contributor-twitter-invalid"))
        return social

    mastodon = metadata.get("mastodon")
    if mastodon:
        social = mastodon_social(str(mastodon))
        if social is None:
            messages.append(Message(f"invalid mastodon handle for `{email}`", "contributor-mastodon-invalid"))
        return social

    messages.append(Message(f"no social profile for `{email}`", "contributor-social-missing", severity="info"))
    return None
