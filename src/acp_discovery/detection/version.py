"""Normalized semantic version used to compare agent releases."""

from __future__ import annotations

import functools
from dataclasses import dataclass


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # Numeric identifiers sort numerically and before alphanumeric ones
    if identifier.isascii() and identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A major.minor.patch version with optional pre-release and build tags.

    Ordering follows semver precedence: a pre-release sorts before the
    release it precedes and pre-release labels compare identifier by
    identifier. Build metadata is informational and never takes part in
    equality, hashing or ordering.
    """

    major: int
    minor: int
    patch: int = 0
    prerelease: str | None = None
    build: str | None = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Version {name} must be a non-negative integer, got {value!r}")
        if self.prerelease == "":
            raise ValueError("Version pre-release label must not be empty")
        if self.build == "":
            raise ValueError("Version build metadata must not be empty")

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def _precedence_key(self) -> tuple:
        if self.prerelease is None:
            # A release outranks any of its pre-releases
            return (*self.release, (1,))
        identifiers = tuple(_identifier_key(part) for part in self.prerelease.split("."))
        return (*self.release, (0, identifiers))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text
