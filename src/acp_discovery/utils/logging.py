"""Logging utilities."""

import logging
import re


class SecretRedactor:
    """Redact common secret patterns from installer output before logging."""

    PATTERNS = [
        # GitHub tokens
        (r"gh[ps]_[A-Za-z0-9]{36}", "gh*_***"),
        # OpenAI/Anthropic keys
        (r"sk-ant-[A-Za-z0-9_\-]{20,}", "sk-ant-***"),
        (r"sk-[A-Za-z0-9]{48}", "sk-***"),
        # Google API keys
        (r"AIza[0-9A-Za-z_\-]{35}", "AIza***"),
        # npm registry tokens
        (r"npm_[A-Za-z0-9]{36}", "npm_***"),
        (r"//[^\s/]+/:_authToken=\S+", "//***/:_authToken=***"),
        # Bearer tokens
        (r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", "Bearer ***"),
        # Credentials embedded in URLs
        (r"(https?)://[^:@/\s]+:[^@/\s]+@", r"\1://***:***@"),
    ]

    def redact(self, text: str) -> str:
        """Redact secrets from text."""
        for pattern, replacement in self.PATTERNS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text


def setup_logging(level: str = "INFO") -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
