"""Options controlling how agents are probed."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DETECT_TIMEOUT = 5.0


@dataclass(frozen=True)
class DetectOptions:
    """Probe settings shared by `detect` and `detect_all`.

    Attributes:
        timeout: Seconds a version command may run before it is killed
        skip_version: Only locate executables, never run them
        search_path: PATH-style string to search instead of the process PATH
        use_fallback_paths: Also look in well-known install locations
    """

    timeout: float = DEFAULT_DETECT_TIMEOUT
    skip_version: bool = False
    search_path: str | None = None
    use_fallback_paths: bool = True

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
