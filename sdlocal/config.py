"""Named connection profiles persisted as a YAML file.

The file holds every known :class:`~sdlocal.entry.Entry` under ``entries``
together with the name of the ``current`` one::

    entries:
      default:
        api-url: ""
        store-url: ""
        token: ""
        launcher:
          version: stable
          image: screwdrivercd/launcher
    current: default

:meth:`Config.load` creates this file on first use.  Mutating methods only
change memory; call :meth:`Config.save` to write the whole file back.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from sdlocal.entry import Entry, default_entry
from sdlocal.errors import (
    AlreadyExistsError,
    CurrentEntryProtectedError,
    NotFoundError,
    ParseError,
)

DEFAULT_ENTRY_NAME = "default"

logger = logging.getLogger(__name__)


@dataclass
class Config:
    entries: Dict[str, Entry] = field(default_factory=dict)
    current: str = ""
    # Where save() writes; never part of the serialized payload.
    file_path: str | Path = field(default="", compare=False)

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Return the config stored at ``path``, creating it if needed.

        Raises :class:`ParseError` when the file cannot be understood.
        Filesystem errors propagate unchanged.
        """

        create(path)
        with open(path, "rb") as f:
            raw = f.read()
        try:
            # BaseLoader keeps every scalar as written, e.g. `version: 1.10`.
            data = yaml.load(raw, Loader=yaml.BaseLoader)
        except yaml.YAMLError as exc:
            raise ParseError(exc) from exc
        try:
            config = cls.from_dict(data, file_path=path)
        except (TypeError, ValueError) as exc:
            raise ParseError(exc) from exc
        logger.debug("Loaded %d config entries from %s", len(config.entries), path)
        return config

    @classmethod
    def from_dict(cls, data: Any, file_path: str | Path = "") -> "Config":
        """Build a config from the mapping produced by :meth:`to_dict`.

        Raises ``ValueError`` or ``TypeError`` describing the first problem
        found in ``data``.
        """

        if data is None:
            raise ValueError("file is empty")
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a mapping at top level, not {type(data).__name__}")
        raw_entries = data.get("entries") or {}
        if not isinstance(raw_entries, Mapping):
            raise TypeError("`entries` must be a mapping")
        entries = {str(name): Entry.from_dict(value) for name, value in raw_entries.items()}
        current = data.get("current")
        current = "" if current is None else str(current)
        if current not in entries:
            raise ValueError(f"current config `{current}` does not exist")
        return cls(entries=entries, current=current, file_path=file_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": {name: self.entries[name].to_dict() for name in sorted(self.entries)},
            "current": self.current,
        }

    def save(self) -> None:
        """Write every entry and the current name to ``file_path``."""

        with open(self.file_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        logger.debug("Saved %d config entries to %s", len(self.entries), self.file_path)

    def entry(self, name: str) -> Entry:
        """Return the entry stored under ``name``.

        The returned object belongs to this config; changes made through it
        are written by the next :meth:`save`.
        """

        try:
            return self.entries[name]
        except KeyError:
            raise NotFoundError(name, entry=Entry()) from None

    def current_entry(self) -> Entry:
        return self.entry(self.current)

    def names(self) -> List[str]:
        return sorted(self.entries)

    def add_entry(self, name: str, entry: Entry) -> None:
        """Store a copy of ``entry`` under the new name ``name``."""

        if name in self.entries:
            raise AlreadyExistsError(name)
        self.entries[name] = copy.deepcopy(entry)

    def delete_entry(self, name: str) -> None:
        if name not in self.entries:
            raise NotFoundError(name)
        if name == self.current:
            raise CurrentEntryProtectedError(name)
        del self.entries[name]

    def set_current(self, name: str) -> None:
        if name not in self.entries:
            raise NotFoundError(name)
        self.current = name


def create(path: str | Path) -> None:
    """Write a config holding only the default entry if ``path`` is missing.

    An existing file is left untouched, so calling this repeatedly is safe.
    Missing parent directories are created.
    """

    path = Path(path)
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    config = Config(
        entries={DEFAULT_ENTRY_NAME: default_entry()},
        current=DEFAULT_ENTRY_NAME,
        file_path=path,
    )
    config.save()
    logger.info("Created config file %s", path)
