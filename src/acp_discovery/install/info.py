"""Install descriptor lookup.

The recipes live in one declarative table keyed by agent and platform
family. `install_info` is total: pairs without a recipe get a descriptor
that asks for manual installation instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.install.types import (
    InstallInfo,
    InstallMethod,
    Prerequisite,
    StructuredCommand,
    VerificationStep,
)
from acp_discovery.utils.platform import HostOS

VERSION_PATTERN = r"\d+\.\d+\.\d+"

UNIX = "unix"
WINDOWS = "windows"

NODE_URL = "https://nodejs.org"

DOCS_URLS: dict[AgentKind, str] = {
    AgentKind.CLAUDE_CODE: "https://docs.anthropic.com/en/docs/claude-code",
    AgentKind.CODEX: "https://github.com/openai/codex",
    AgentKind.OPENCODE: "https://github.com/anomalyco/opencode",
    AgentKind.GEMINI: "https://github.com/google-gemini/gemini-cli",
}


@dataclass(frozen=True)
class _Recipe:
    primary: InstallMethod
    alternatives: tuple[InstallMethod, ...] = ()
    prerequisites: tuple[Prerequisite, ...] = ()
    success_note: str = ""


def _shell(script: str, description: str) -> InstallMethod:
    return InstallMethod(
        command=StructuredCommand("bash", ("-c", script)),
        raw_command=script,
        description=description,
    )


def _powershell(script: str, description: str) -> InstallMethod:
    return InstallMethod(
        command=StructuredCommand("powershell", ("-Command", script)),
        raw_command=script,
        description=description,
    )


def _npm(package: str, description: str, raw_command: str | None = None) -> InstallMethod:
    return InstallMethod(
        command=StructuredCommand("npm", ("install", "-g", package)),
        raw_command=raw_command or f"npm install -g {package}",
        description=description,
    )


def _node(major: int) -> Prerequisite:
    return Prerequisite(
        name=f"Node.js {major}+", check_command="node --version", install_url=NODE_URL
    )


_CLAUDE_NPM = _npm("@anthropic-ai/claude-code", "Install via npm (requires Node.js 18+)")
_OPENCODE_NPM = _npm(
    "opencode-ai@latest",
    "Install via npm (requires Node.js)",
    raw_command="npm i -g opencode-ai@latest",
)

_RECIPES: dict[tuple[AgentKind, str], _Recipe] = {
    (AgentKind.CLAUDE_CODE, UNIX): _Recipe(
        primary=_shell(
            "curl -fsSL https://claude.ai/install.sh | bash",
            "Install via curl script (native installer)",
        ),
        alternatives=(_CLAUDE_NPM,),
    ),
    (AgentKind.CLAUDE_CODE, WINDOWS): _Recipe(
        primary=_powershell(
            "irm https://claude.ai/install.ps1 | iex",
            "Install via PowerShell (native installer)",
        ),
        alternatives=(_CLAUDE_NPM,),
    ),
    (AgentKind.CODEX, UNIX): _Recipe(
        primary=_npm("@openai/codex", "Install via npm (Node.js package manager)"),
        prerequisites=(_node(18),),
    ),
    (AgentKind.CODEX, WINDOWS): _Recipe(
        primary=_npm("@openai/codex", "Install via npm (Node.js package manager)"),
        prerequisites=(_node(18),),
        success_note=" (Windows support is experimental; consider WSL)",
    ),
    (AgentKind.OPENCODE, UNIX): _Recipe(
        primary=_shell(
            "curl -fsSL https://opencode.ai/install | bash",
            "Install via curl script (native Go binary)",
        ),
        alternatives=(_OPENCODE_NPM,),
    ),
    (AgentKind.OPENCODE, WINDOWS): _Recipe(
        primary=InstallMethod(
            command=StructuredCommand("scoop", ("install", "opencode")),
            raw_command="scoop install opencode",
            description="Install via Scoop (Windows package manager)",
        ),
        alternatives=(_OPENCODE_NPM,),
    ),
    (AgentKind.GEMINI, UNIX): _Recipe(
        primary=_npm("@google/gemini-cli", "Install via npm (Node.js package manager)"),
        prerequisites=(_node(20),),
    ),
    (AgentKind.GEMINI, WINDOWS): _Recipe(
        primary=_npm("@google/gemini-cli", "Install via npm (Node.js package manager)"),
        prerequisites=(_node(20),),
    ),
}


def _family(host_os: HostOS) -> str | None:
    if host_os.is_windows:
        return WINDOWS
    if host_os.is_unix:
        return UNIX
    return None


def _verification(kind: AgentKind, note: str = "") -> VerificationStep:
    return VerificationStep(
        command=f"{kind.executable_name} --version",
        expected_pattern=VERSION_PATTERN,
        success_message=f"{kind.display_name} is installed{note}",
    )


def manual_install_info(kind: AgentKind, host_os: HostOS) -> InstallInfo:
    """Descriptor for a (kind, os) pair with no automated installer."""
    docs_url = DOCS_URLS[kind]
    return InstallInfo(
        kind=kind,
        host_os=host_os,
        primary=InstallMethod(
            command=None,
            raw_command="",
            description=(
                f"Manual installation required: no automated installer for "
                f"{kind.display_name} on {host_os.value}. See {docs_url}"
            ),
        ),
        verification=_verification(kind),
        docs_url=docs_url,
        is_supported=False,
    )


def install_info(kind: AgentKind, host_os: HostOS | None = None) -> InstallInfo:
    """Return the install descriptor for `kind` on `host_os`.

    Args:
        kind: Agent to install
        host_os: Target OS. Defaults to the running OS

    Returns:
        InstallInfo; a manual-install descriptor when no recipe exists
    """
    host_os = host_os or HostOS.current()
    family = _family(host_os)
    recipe = _RECIPES.get((kind, family)) if family else None
    if recipe is None:
        return manual_install_info(kind, host_os)

    return InstallInfo(
        kind=kind,
        host_os=host_os,
        primary=recipe.primary,
        alternatives=recipe.alternatives,
        prerequisites=recipe.prerequisites,
        verification=_verification(kind, recipe.success_note),
        docs_url=DOCS_URLS[kind],
    )
