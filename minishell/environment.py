"""The shell's environment: a list of NAME=value entries and PATH lookup."""

from __future__ import annotations

import os
from typing import Iterable, Iterator, Mapping

from minishell.textutils import count_until_semicolon, split


class Environment:
    """An ordered list of raw ``NAME=value`` environment entries."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self.entries: list[str] = list(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Environment":
        """Build an environment from a name-to-value mapping."""
        return cls(f"{name}={value}" for name, value in mapping.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, name: str) -> str | None:
        """Return the value of the last entry named name, or None.

        The value is the field after the first '=' up to the next one.
        An entry with no '=' gives None.
        """
        value = None
        for entry in self.entries:
            fields = split(entry, "=")
            if fields and fields[0] == name:
                value = fields[1] if len(fields) > 1 else None
        return value

    def add(self, entry: str) -> None:
        """Append a raw entry; later entries take precedence in get()."""
        self.entries.append(entry)

    def candidate_paths(self, command: str) -> list[str]:
        """Return PATH directories joined with command, in PATH order.

        The last directory of PATH is not searched.
        """
        path = self.get("PATH")
        if not path:
            return []
        directories = split(path, ":")
        usable = directories[: count_until_semicolon(directories)]
        return [f"{directory}/{command}" for directory in usable[:-1]]

    def resolve(self, command: str) -> str | None:
        """Return the first candidate path that exists, or None."""
        return next(
            (path for path in self.candidate_paths(command) if os.access(path, os.F_OK)),
            None,
        )

    def as_dict(self) -> dict[str, str]:
        """Return the entries as a mapping suitable for a child process."""
        result: dict[str, str] = {}
        for entry in self.entries:
            name, sep, value = entry.partition("=")
            if sep:
                result[name] = value
        return result