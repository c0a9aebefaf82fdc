"""Supported AI coding agent kinds."""

from __future__ import annotations

from enum import Enum


class AgentKind(Enum):
    """The AI coding agents that can be detected and installed.

    Declaration order is the iteration order used everywhere else
    (registry lookups, `detect_all` results, CLI tables).
    """

    CLAUDE_CODE = "claude-code"
    CODEX = "codex"
    OPENCODE = "opencode"
    GEMINI = "gemini"

    @property
    def executable_name(self) -> str:
        """Command name looked up on PATH."""
        return _EXECUTABLES[self]

    @property
    def display_name(self) -> str:
        """Human readable agent name."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def all(cls) -> tuple[AgentKind, ...]:
        return tuple(cls)

    @classmethod
    def from_name(cls, name: str) -> AgentKind:
        """Resolve an agent from its id, executable name, or display name.

        Args:
            name: e.g. "claude-code", "claude", or "Claude Code" (any case)

        Returns:
            Matching AgentKind

        Raises:
            ValueError: If no agent matches
        """
        wanted = name.strip().lower()
        for kind in cls:
            candidates = {kind.value, kind.executable_name, kind.display_name.lower()}
            if wanted in candidates:
                return kind
        known = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown agent '{name}'. Known agents: {known}")

    def __str__(self) -> str:
        return self.value


_EXECUTABLES: dict[AgentKind, str] = {
    AgentKind.CLAUDE_CODE: "claude",
    AgentKind.CODEX: "codex",
    AgentKind.OPENCODE: "opencode",
    AgentKind.GEMINI: "gemini",
}

_DISPLAY_NAMES: dict[AgentKind, str] = {
    AgentKind.CLAUDE_CODE: "Claude Code",
    AgentKind.CODEX: "Codex",
    AgentKind.OPENCODE: "OpenCode",
    AgentKind.GEMINI: "Gemini CLI",
}
