from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from . import __version__
from .config import DEFAULT_CONFIG_NAME, Settings, load_config, settings_from_config
from .models import ContributorsError, ContributorsTypeError
from .transform import transform_file


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-contributors",
        description="Fill the Contributors section of markdown files from Git history.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("files", type=Path, nargs="*", default=[Path("README.md")], help="Markdown files to update (default: README.md).")
    parser.add_argument("--config", type=Path, default=Path(DEFAULT_CONFIG_NAME), help="Path to a JSON config file.")
    parser.add_argument("--contributors", type=str, default=None, help="JSON or TOML file with contributor metadata.")
    parser.add_argument("--limit", type=int, default=None, help="Only render the top N contributors by commits (0 = no limit).")
    parser.add_argument("--cwd", type=Path, default=None, help="Repository directory (default: current directory).")
    parser.add_argument("--append-if-missing", action="store_true", help="Add a Contributors section when there is none.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="Do not write; exit 1 if any file would change.")
    mode.add_argument("--stdout", action="store_true", help="Print the result instead of writing files.")
    return parser


def _settings(args: argparse.Namespace) -> Settings:
    config = load_config(args.config)
    settings = settings_from_config(config, base_dir=args.config.resolve().parent)
    overrides: dict[str, object] = {}
    if args.contributors is not None:
        overrides["contributors"] = args.contributors
    if args.limit is not None:
        overrides["limit"] = max(0, int(args.limit))
    if args.cwd is not None:
        overrides["cwd"] = args.cwd.resolve()
    if args.append_if_missing:
        overrides["append_if_missing"] = True
    return dataclasses.replace(settings, **overrides)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _settings(args)
    except (ValueError, OSError) as e:
        print(f"{args.config}: error: {e}", file=sys.stderr)
        return 1

    status = 0
    for path in args.files:
        try:
            result = transform_file(path, settings, write=not (args.check or args.stdout))
        except (ContributorsError, ContributorsTypeError, ValueError, OSError) as e:
            print(f"{path}: error: {e}", file=sys.stderr)
            status = 1
            continue

        for message in result.messages:
            print(message.format(str(path)), file=sys.stderr)

        if args.stdout:
            sys.stdout.write(result.text)
        elif args.check:
            if result.changed:
                print(f"{path}: contributors table is out of date")
                status = 1
        elif result.changed:
            print(f"Updated {path} ({len(result.contributors)} contributors).")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
