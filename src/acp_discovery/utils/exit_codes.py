"""Exit codes for the acp-discovery CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes returned by CLI commands."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_CONFIG = 2
    MISSING_DEPS = 3  # Installer prerequisite missing or too old
    NOT_INSTALLED = 4  # Requested agent was not detected
    INSTALL_FAILED = 5
    TIMEOUT = 124
    INTERRUPTED = 130
