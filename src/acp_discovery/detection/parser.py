"""Version extraction from free-form `--version` output.

Agents print their version in many shapes ("2.1.12 (Claude Code)",
"codex-cli 0.87.0", "v0.1.5", multi-line banners with ANSI colors). A single
generic scan handles all of them: the first version-looking token anywhere
in the text wins. Text without such a token yields None, which callers treat
as a found-but-unversioned agent rather than a failure.
"""

from __future__ import annotations

import logging
import re

from acp_discovery.detection.version import Version

logger = logging.getLogger(__name__)

# Largest value accepted for a numeric component (unsigned 64-bit)
MAX_COMPONENT = 2**64 - 1

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

_VERSION_PATTERN = re.compile(
    r"""
    (?<![0-9])
    [vV]?
    (?P<major>\d+)\.(?P<minor>\d+)
    (?:\.(?P<patch>\d+))?
    (?:\.\d+)*
    (?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?
    (?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?
    """,
    re.VERBOSE | re.ASCII,
)


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from text."""
    return _ANSI_ESCAPE.sub("", text)


def _component(value: str | None) -> int | None:
    if value is None:
        return 0
    number = int(value)
    if number > MAX_COMPONENT:
        return None
    return number


def parse_version(raw_text: str | bytes | None) -> Version | None:
    """Extract the first version found in `raw_text`.

    Args:
        raw_text: Output of an agent's version command

    Returns:
        Parsed Version, or None when the text holds no usable version
    """
    if isinstance(raw_text, bytes):
        raw_text = raw_text.decode("utf-8", errors="replace")
    if not isinstance(raw_text, str) or not raw_text:
        return None

    text = strip_ansi(raw_text)
    for match in _VERSION_PATTERN.finditer(text):
        major = _component(match.group("major"))
        minor = _component(match.group("minor"))
        patch = _component(match.group("patch"))
        if major is None or minor is None or patch is None:
            logger.debug(f"Skipping out-of-range version candidate: {match.group(0)!r}")
            continue
        return Version(
            major=major,
            minor=minor,
            patch=patch,
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )
    return None
