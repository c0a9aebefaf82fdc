"""Utility modules for acp-discovery."""

from acp_discovery.utils.platform import HostOS

__all__ = ["HostOS"]
