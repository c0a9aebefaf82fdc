"""Detect every registered agent concurrently.

One task per agent kind runs on the event loop. Each task is isolated: an
exception, cancellation, or runaway probe in one kind becomes a ProbeFailed
for that kind alone, and `detect_all` always returns an entry for every kind.
"""

from __future__ import annotations

import asyncio
import logging
import time

from acp_discovery.agents.kinds import AgentKind
from acp_discovery.agents.registry import all_kinds, probe_spec
from acp_discovery.detection.options import DetectOptions
from acp_discovery.detection.prober import probe
from acp_discovery.detection.status import DetectionStatus, ProbeFailed
from acp_discovery.utils.platform import HostOS

logger = logging.getLogger(__name__)

# Extra seconds a whole probe may take beyond the version command timeout
PROBE_GRACE_SECONDS = 2.0


async def detect(
    kind: AgentKind,
    options: DetectOptions | None = None,
    host_os: HostOS | None = None,
) -> DetectionStatus:
    """Detect a single agent."""
    return await probe(kind, host_os=host_os, options=options)


async def _isolated_detect(
    kind: AgentKind, options: DetectOptions, host_os: HostOS
) -> DetectionStatus:
    guard = options.timeout + PROBE_GRACE_SECONDS
    try:
        return await asyncio.wait_for(probe(kind, host_os=host_os, options=options), timeout=guard)
    except asyncio.TimeoutError:
        logger.error(f"{kind.display_name}: probe exceeded {guard:g}s")
        return ProbeFailed(reason=f"probe did not finish within {guard:g}s")
    except Exception as e:
        logger.exception(f"{kind.display_name}: unexpected probe error")
        return ProbeFailed(reason=f"unexpected error: {e}")


async def detect_all(
    options: DetectOptions | None = None,
    host_os: HostOS | None = None,
) -> dict[AgentKind, DetectionStatus]:
    """Detect every registered agent.

    Args:
        options: Probe settings applied to every agent
        host_os: OS whose conventions apply. Defaults to the running OS

    Returns:
        Mapping with one DetectionStatus per registered AgentKind

    Raises:
        KeyError: If an AgentKind has no registry entry
    """
    options = options or DetectOptions()
    host_os = host_os or HostOS.current()
    kinds = all_kinds()
    # Checked before the isolated tasks, which would turn this into ProbeFailed
    for kind in kinds:
        probe_spec(kind)

    start_time = time.monotonic()
    outcomes = await asyncio.gather(
        *(_isolated_detect(kind, options, host_os) for kind in kinds),
        return_exceptions=True,
    )

    results: dict[AgentKind, DetectionStatus] = {}
    for kind, outcome in zip(kinds, outcomes):
        if isinstance(outcome, DetectionStatus):
            results[kind] = outcome
        else:
            # Cancellation of a single probe task surfaces here
            logger.error(f"{kind.display_name}: probe aborted: {outcome!r}")
            results[kind] = ProbeFailed(reason=f"probe aborted: {outcome!r}")

    found = sum(1 for status in results.values() if status.is_installed)
    logger.info(
        f"Detected {found}/{len(kinds)} agents in {time.monotonic() - start_time:.2f}s"
    )
    return results


def detect_sync(
    kind: AgentKind,
    options: DetectOptions | None = None,
    host_os: HostOS | None = None,
) -> DetectionStatus:
    """Blocking wrapper around `detect` for synchronous callers."""
    return asyncio.run(detect(kind, options=options, host_os=host_os))


def detect_all_sync(
    options: DetectOptions | None = None,
    host_os: HostOS | None = None,
) -> dict[AgentKind, DetectionStatus]:
    """Blocking wrapper around `detect_all` for synchronous callers."""
    return asyncio.run(detect_all(options=options, host_os=host_os))
