"""Command line front end for managing sd-local config entries.

Each sub-command loads the config file, applies one change and saves it::

    sdlocal-config create staging
    sdlocal-config use staging
    sdlocal-config set api-url https://api.example.com
    sdlocal-config view
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from sdlocal.config import Config
from sdlocal.entry import ENTRY_KEYS, default_entry
from sdlocal.errors import ConfigError

logger = logging.getLogger("sdlocal_config")


def default_config_path() -> Path:
    return Path.home() / ".sdlocal" / "config"


def _mask(token: str) -> str:
    if not token:
        return ""
    return "*" * len(token)


def format_config(config: Config) -> str:
    """Render every entry, marking the current one with ``*``."""

    lines: List[str] = []
    for name in config.names():
        entry = config.entries[name]
        marker = "*" if name == config.current else " "
        lines.append(f"{marker} {name}")
        lines.append(f"    api-url: {entry.api_url}")
        lines.append(f"    store-url: {entry.store_url}")
        lines.append(f"    token: {_mask(entry.token)}")
        lines.append(f"    launcher-version: {entry.launcher.version}")
        lines.append(f"    launcher-image: {entry.launcher.image}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sdlocal-config", description="Manage sd-local config entries")
    parser.add_argument("--config", type=Path, default=None, help="config file (default: ~/.sdlocal/config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="add a new entry with default values")
    create.add_argument("name")

    delete = sub.add_parser("delete", help="remove an entry other than the current one")
    delete.add_argument("name")

    set_ = sub.add_parser("set", help="set a field of the current entry")
    set_.add_argument("key", choices=ENTRY_KEYS)
    set_.add_argument("value", nargs="?", default="")

    use = sub.add_parser("use", help="switch the current entry")
    use.add_argument("name")

    sub.add_parser("view", help="show all entries")
    return parser


def run(args: argparse.Namespace) -> None:
    path = args.config or default_config_path()
    config = Config.load(path)

    if args.command == "view":
        print(format_config(config))
        return

    if args.command == "create":
        config.add_entry(args.name, default_entry())
    elif args.command == "delete":
        config.delete_entry(args.name)
    elif args.command == "set":
        config.current_entry().set(args.key, args.value)
    elif args.command == "use":
        config.set_current(args.name)
    config.save()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except (ConfigError, OSError) as exc:
        logger.error("%s failed", args.command)
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
