"""Connection profile for the remote build service.

An :class:`Entry` holds the API and store endpoints, the auth token and the
launcher container reference used when running builds locally.  Entries are
edited one field at a time through :meth:`Entry.set`, using the same keys the
command line exposes as flags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from sdlocal.errors import UnknownKeyError

DEFAULT_LAUNCHER_VERSION = "stable"
DEFAULT_LAUNCHER_IMAGE = "screwdrivercd/launcher"

ENTRY_KEYS = ("api-url", "store-url", "token", "launcher-version", "launcher-image")


@dataclass
class Launcher:
    version: str = ""
    image: str = ""


@dataclass
class Entry:
    api_url: str = ""
    store_url: str = ""
    token: str = ""
    launcher: Launcher = field(default_factory=Launcher)

    def set(self, key: str, value: str) -> None:
        """Update the field named by ``key``.

        ``launcher-version`` and ``launcher-image`` fall back to their
        defaults when ``value`` is empty; the other keys store ``value``
        literally.  An unrecognised key raises :class:`UnknownKeyError` and
        leaves the entry untouched.
        """

        if key == "api-url":
            self.api_url = value
        elif key == "store-url":
            self.store_url = value
        elif key == "token":
            self.token = value
        elif key == "launcher-version":
            self.launcher.version = value or DEFAULT_LAUNCHER_VERSION
        elif key == "launcher-image":
            self.launcher.image = value or DEFAULT_LAUNCHER_IMAGE
        else:
            raise UnknownKeyError(key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "api-url": self.api_url,
            "store-url": self.store_url,
            "token": self.token,
            "launcher": {
                "version": self.launcher.version,
                "image": self.launcher.image,
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Entry":
        """Build an entry from its serialized mapping.

        Missing keys, and an entry written as ``name:`` with no body, become
        empty strings.  Any other non-mapping value, or a list or mapping
        where a string belongs, raises ``TypeError``.
        """

        if data is None or data == "":
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"entry must be a mapping, not {type(data).__name__}")
        launcher = data.get("launcher") or {}
        if not isinstance(launcher, Mapping):
            raise TypeError(f"launcher must be a mapping, not {type(launcher).__name__}")
        return cls(
            api_url=_text(data.get("api-url")),
            store_url=_text(data.get("store-url")),
            token=_text(data.get("token")),
            launcher=Launcher(
                version=_text(launcher.get("version")),
                image=_text(launcher.get("image")),
            ),
        )


def default_entry() -> Entry:
    """Return a new entry with the default launcher and empty endpoints."""

    return Entry(
        launcher=Launcher(version=DEFAULT_LAUNCHER_VERSION, image=DEFAULT_LAUNCHER_IMAGE)
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        raise TypeError(f"expected a string, not {type(value).__name__}")
    return str(value)
