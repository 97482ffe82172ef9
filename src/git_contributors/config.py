from __future__ import annotations

import dataclasses
import json
from pathlib import Path

DEFAULT_CONFIG_NAME = ".git-contributors.json"


@dataclasses.dataclass(frozen=True)
class Settings:
    """
    Options for one document transform.

    `contributors` is an inline list of metadata records/author strings, the
    path of a JSON or TOML file holding such a list, or None. `limit` keeps
    the top N contributors by commit count (0 keeps everyone). `cwd` is the
    repository and resolution directory (defaults to the process working
    directory).
    """

    contributors: object = None
    limit: int = 0
    cwd: Path | None = None
    append_if_missing: bool = False


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    data = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a JSON object")
    return data


def settings_from_config(config: dict, *, base_dir: Path) -> Settings:
    cwd_cfg = str(config.get("cwd", "") or "").strip()
    try:
        limit = int(config.get("limit", 0) or 0)
    except (TypeError, ValueError):
        raise ValueError(f"limit must be an integer, got: {config.get('limit')!r}") from None
    return Settings(
        contributors=config.get("contributors"),
        limit=max(0, limit),
        cwd=(base_dir / cwd_cfg).resolve() if cwd_cfg else None,
        append_if_missing=bool(config.get("append_if_missing", False)),
    )
