"""Agent detection and version normalization."""

from acp_discovery.detection.aggregator import detect, detect_all, detect_all_sync, detect_sync
from acp_discovery.detection.options import DetectOptions
from acp_discovery.detection.parser import parse_version
from acp_discovery.detection.path_finder import find_executable
from acp_discovery.detection.prober import probe
from acp_discovery.detection.status import (
    DetectionStatus,
    Found,
    FoundButUnresponsive,
    NotFound,
    ProbeFailed,
)
from acp_discovery.detection.version import Version

__all__ = [
    "DetectOptions",
    "DetectionStatus",
    "Found",
    "FoundButUnresponsive",
    "NotFound",
    "ProbeFailed",
    "Version",
    "detect",
    "detect_all",
    "detect_all_sync",
    "detect_sync",
    "find_executable",
    "parse_version",
    "probe",
]
