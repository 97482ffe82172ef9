from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Iterable, Protocol

from .identity import normalize_key, parse_author
from .models import ContributorsNotFoundError, ContributorsTypeError, Indices, MetadataRecord

NOT_A_LIST = "the contributors setting must be, or resolve to, an array"


class MetadataProvider(Protocol):
    def load(self) -> object: ...


class InlineMetadataProvider:
    def __init__(self, records: object) -> None:
        self.records = records

    def load(self) -> object:
        return self.records


class FileMetadataProvider:
    """
    Load contributor metadata from a JSON or TOML file.

    The specifier is resolved against each base directory in turn (the
    configured working directory first, then the process working directory).
    The file may hold a bare list, or an object with a `contributors` or
    `default` list.
    """

    def __init__(self, specifier: str, base_dirs: Iterable[Path]) -> None:
        self.specifier = specifier
        self.base_dirs = list(base_dirs)

    def resolve(self) -> Path:
        for base in self.base_dirs:
            candidate = (base / self.specifier).expanduser()
            if candidate.is_file():
                return candidate.resolve()
        searched = ", ".join(str(b) for b in self.base_dirs)
        raise ContributorsNotFoundError(f"cannot find contributors file {self.specifier!r} (searched: {searched})")

    def load(self) -> object:
        path = self.resolve()
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".toml":
            data: object = tomllib.loads(text)
        else:
            data = json.loads(text)
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in ("contributors", "default"):
                if isinstance(data.get(key), list):
                    return data[key]
        return data


def provider_for(cwd: Path, contributors: object) -> MetadataProvider:
    if isinstance(contributors, str):
        return FileMetadataProvider(contributors, [cwd, Path.cwd()])
    return InlineMetadataProvider(contributors)


def index_value(index: dict[str, MetadataRecord], raw: object, record: MetadataRecord) -> MetadataRecord:
    """
    Store `record` under the lowercased `raw` key and return what was stored.

    When the key is already taken, the stored value becomes the union of both
    records, with the fields of the record already in the index winning.
    """
    if not raw:
        return record
    key = normalize_key(raw)
    existing = index.get(key)
    merged = {**record, **existing} if existing is not None else record
    index[key] = merged
    return merged


def index_contributor(indices: Indices, contributor: object) -> None:
    if not contributor:
        return
    if isinstance(contributor, str):
        record = parse_author(contributor)
    elif isinstance(contributor, dict):
        record = dict(contributor)
    else:
        return

    emails: list[object] = []
    if isinstance(record.get("emails"), list):
        emails.extend(record["emails"])  # type: ignore[arg-type]
    if record.get("email"):
        emails.append(record["email"])

    for email in emails:
        record = index_value(indices.email, email, record)
    record = index_value(indices.github, record.get("github"), record)
    index_value(indices.name, record.get("name"), record)


def index_contributors(cwd: Path, contributors: object) -> Indices:
    indices = Indices()
    if contributors is None:
        return indices

    records = provider_for(cwd, contributors).load()
    if not isinstance(records, list):
        raise ContributorsTypeError(NOT_A_LIST)

    for contributor in records:
        index_contributor(indices, contributor)
    return indices
