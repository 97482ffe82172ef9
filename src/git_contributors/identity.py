from __future__ import annotations

import re

from .models import MetadataRecord

NOREPLY_SUFFIX = "@users.noreply.github.com"

BOT_EMAIL_SUFFIXES = ("@greenkeeper.io",)
BOT_NAMES = frozenset({"greenkeeper"})
BOT_GITHUB_USERNAMES = frozenset({"greenkeeper[bot]", "greenkeeperio-bot"})

_NOREPLY_ID_PREFIX = re.compile(r"^\d+\+")
_AUTHOR_RE = re.compile(r"^\s*([^<(]*?)\s*(?:<([^>]*)>)?\s*(?:\(([^)]*)\))?\s*$")


def normalize_key(value: object) -> str:
    return str(value).lower()


def github_username_from_email(email: str) -> str:
    """
    Extract GitHub username from GitHub noreply patterns:
      - username@users.noreply.github.com
      - 123456+username@users.noreply.github.com
    Returns the username as written, or "".
    """
    if not email or not email.endswith(NOREPLY_SUFFIX):
        return ""
    local = email[: -len(NOREPLY_SUFFIX)]
    return _NOREPLY_ID_PREFIX.sub("", local)


def is_bot(*, name: str, email: str, github: str | None) -> bool:
    if email.endswith(BOT_EMAIL_SUFFIXES):
        return True
    if name.lower() in BOT_NAMES:
        return True
    return bool(github) and github in BOT_GITHUB_USERNAMES


def parse_author(value: str) -> MetadataRecord:
    """
    Parse a single-line author string, as found in package manifests:
      - "Jane Doe <jane@example.com> (https://jane.example)"
      - "Jane Doe <jane@example.com>"
      - "Jane Doe (https://jane.example)"
    Parts that are missing are left out of the result.
    """
    out: MetadataRecord = {}
    m = _AUTHOR_RE.match(value or "")
    if m is None:
        name = (value or "").strip()
        if name:
            out["name"] = name
        return out
    name, email, url = (g.strip() if g else "" for g in m.groups())
    if name:
        out["name"] = name
    if email:
        out["email"] = email
    if url:
        out["url"] = url
    return out
