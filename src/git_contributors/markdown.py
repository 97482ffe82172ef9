from __future__ import annotations

import re

from .models import Contributor

HEADING_TEXT = re.compile(r"^contributors$", re.IGNORECASE)

_ATX_HEADING = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_INDENTED_CODE = re.compile(r"^(?: {4}|\t)")

LABELS = {"name": "Name", "github": "GitHub", "social": "Social"}


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ").strip()


def format_cell(contributor: Contributor, column: str) -> str:
    if column == "name":
        return _cell(contributor.name)
    if column == "github":
        if not contributor.github:
            return ""
        return f"[**@{_cell(contributor.github)}**](https://github.com/{contributor.github})"
    if column == "social":
        if contributor.social is None:
            return ""
        return f"[**{_cell(contributor.social.text)}**]({contributor.social.url})"
    raise ValueError(f"unknown column: {column!r}")


def render_table(contributors: list[Contributor], columns: list[str]) -> list[str]:
    lines = [
        "| " + " | ".join(LABELS[c] for c in columns) + " |",
        "| " + " | ".join(":--" for _ in columns) + " |",
    ]
    for contributor in contributors:
        lines.append("| " + " | ".join(format_cell(contributor, c) for c in columns) + " |")
    return lines


def _headings(lines: list[str]) -> list[tuple[int, int, int, str]]:
    """
    (first line, line after the heading, depth, text) of every heading outside
    fenced code. Setext headings start at the first line of the paragraph
    their underline closes.
    """
    out: list[tuple[int, int, int, str]] = []
    fence = ""
    para: int | None = None
    for i, line in enumerate(lines):
        m = _FENCE.match(line)
        if fence:
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
                fence = ""
            continue
        if m:
            fence = m.group(1)
            para = None
            continue
        if not line.strip():
            para = None
            continue
        h = _ATX_HEADING.match(line)
        if h:
            out.append((i, i + 1, len(h.group(1)), (h.group(2) or "").strip()))
            para = None
            continue
        u = _SETEXT_UNDERLINE.match(line)
        if u and para is not None:
            text = " ".join(part.strip() for part in lines[para:i])
            out.append((para, i + 1, 1 if u.group(1)[0] == "=" else 2, text))
            para = None
            continue
        if para is None and not _INDENTED_CODE.match(line) and not (u and u.group(1)[0] == "-"):
            para = i
    return out


def find_contributors_section(lines: list[str]) -> tuple[int, int, int] | None:
    """
    Locate the first Contributors section as (heading line, body line, end line).

    The section runs up to the next heading of the same or higher rank, or the
    end of the document.
    """
    headings = _headings(lines)
    for n, (start, body, depth, text) in enumerate(headings):
        if not HEADING_TEXT.match(text):
            continue
        for idx, _, d, _ in headings[n + 1 :]:
            if d <= depth:
                return start, body, idx
        return start, body, len(lines)
    return None


def has_contributors_heading(text: str) -> bool:
    return find_contributors_section(text.splitlines()) is not None


def inject_contributors_table(
    text: str,
    contributors: list[Contributor],
    columns: list[str],
    *,
    append_if_missing: bool = False,
) -> str:
    """Replace the body of the Contributors section with a table; unchanged text if there is no section."""
    lines = text.splitlines()
    table = render_table(contributors, columns)
    section = find_contributors_section(lines)

    if section is None:
        if not append_if_missing:
            return text
        while lines and not lines[-1].strip():
            lines.pop()
        head = [*lines, ""] if lines else []
        return "\n".join([*head, "## Contributors", "", *table]) + "\n"

    _, body_start, end = section
    tail = lines[end:]
    body = [*lines[:body_start], "", *table]
    if tail:
        body.extend(["", *tail])
    return "\n".join(body) + "\n"
