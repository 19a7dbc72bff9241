from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class DescriptorLimitError(RuntimeError):
    """The process's open-file limit could not be determined."""


def descriptor_limit() -> int:
    """
    Max open file descriptors for this process (RLIMIT_NOFILE).
    Soft limit if finite, else the hard limit. Raises DescriptorLimitError
    when neither is usable.
    """
    try:
        import resource
    except ImportError as e:
        raise DescriptorLimitError("RLIMIT_NOFILE is not available on this platform") from e

    try:
        soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError) as e:
        raise DescriptorLimitError(f"getrlimit(RLIMIT_NOFILE) failed: {e}") from e

    for value in (soft, hard):
        if value != resource.RLIM_INFINITY and value > 0:
            return int(value)

    raise DescriptorLimitError(f"no finite descriptor limit (soft={soft}, hard={hard})")


def admission_width(limit: int, cap: Optional[int] = None) -> int:
    if limit < 1:
        raise DescriptorLimitError(f"descriptor limit must be positive, got {limit}")
    if cap is None:
        return limit
    if cap < 1:
        raise ValueError(f"Invalid in-flight cap: {cap}")
    if cap > limit:
        logger.info("In-flight cap %d exceeds descriptor limit %d, using %d", cap, limit, limit)
        return limit
    return cap
