import logging
import os

log = logging.getLogger(__name__)

SEGMENT_TIMEOUT_ENV = "BYTEMERGE_SEGMENT_TIMEOUT"
MAX_WORKERS_ENV = "BYTEMERGE_MAX_WORKERS"

_segment_timeout: float | None = None


def set_segment_timeout(seconds: float | None) -> None:
    """Set the regex matching timeout for all segmenters; ``None`` disables it."""
    global _segment_timeout
    if seconds is not None and seconds <= 0:
        seconds = None
    _segment_timeout = seconds


def get_segment_timeout() -> float | None:
    """Return the active segmentation timeout (respects env var override)."""
    raw = os.environ.get(SEGMENT_TIMEOUT_ENV, "").strip()
    if raw:
        try:
            value = float(raw)
        except ValueError:
            log.warning(f"ignoring invalid {SEGMENT_TIMEOUT_ENV}={raw!r}")
        else:
            return value if value > 0 else None
    return _segment_timeout


def default_workers() -> int:
    """Return the default worker count for batch operations."""
    raw = os.environ.get(MAX_WORKERS_ENV, "").strip()
    if raw:
        try:
            return max(1, int(raw))
        except ValueError:
            log.warning(f"ignoring invalid {MAX_WORKERS_ENV}={raw!r}")
    return os.cpu_count() or 1
