from __future__ import annotations

import dataclasses

SOURCE = "git-contributors"

MetadataRecord = dict[str, object]


@dataclasses.dataclass(frozen=True)
class Social:
    url: str
    text: str


@dataclasses.dataclass(frozen=True)
class RawContributor:
    name: str = ""
    email: str = ""
    commits: int = 0


@dataclasses.dataclass
class Contributor:
    email: str
    commits: int
    name: str
    github: str | None = None
    social: Social | None = None


@dataclasses.dataclass
class Indices:
    email: dict[str, MetadataRecord] = dataclasses.field(default_factory=dict)
    name: dict[str, MetadataRecord] = dataclasses.field(default_factory=dict)
    github: dict[str, MetadataRecord] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class Message:
    reason: str
    rule_id: str
    severity: str = "warning"  # "warning" | "info"
    source: str = SOURCE
    cause: BaseException | None = None

    def format(self, path: str = "") -> str:
        prefix = f"{path}: " if path else ""
        return f"{prefix}{self.severity}: {self.reason} [{self.source}:{self.rule_id}]"


class ContributorsError(RuntimeError):
    """Fatal error that aborts a document transform."""


class GitHistoryError(ContributorsError):
    def __init__(self, detail: str) -> None:
        self.detail = detail.strip()
        super().__init__(f"could not get Git contributors: {self.detail}")


class NoCommitsError(GitHistoryError):
    pass


class ManifestError(ContributorsError):
    pass


class NoContributorsError(ContributorsError):
    pass


class ContributorsTypeError(TypeError):
    pass


class ContributorsNotFoundError(FileNotFoundError):
    pass
