"""
Utility classes for the zoo population report pipeline.

This module contains:
- StageTimer: Timing utility for the individual pipeline stages
- decode_line: Per-line decoding so one bad byte only rejects its own line
"""

import logging
import time
from typing import Dict, Optional

from exceptions import LineDecodeError

logger = logging.getLogger(__name__)


class StageTimer:
    """Times one pipeline stage and optionally records it in a shared dict."""

    def __init__(self, stage_name="Stage", timings: Optional[Dict[str, float]] = None):
        self.stage_name = stage_name
        self.timings = timings
        self.start_time = None
        self.duration = 0.0

    def start(self):
        """Start timing."""
        self.start_time = time.perf_counter()
        return self

    def stop(self) -> float:
        """Stop timing and return duration."""
        if self.start_time is None:
            return 0.0

        self.duration = time.perf_counter() - self.start_time
        if self.timings is not None:
            self.timings[self.stage_name] = self.duration
        return self.duration

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = self.stop()
        logger.debug(f"{self.stage_name} took {duration * 1000:.1f}ms")


def decode_line(raw: bytes, encoding: str) -> str:
    """Decode one raw line, raising LineDecodeError instead of UnicodeDecodeError."""
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise LineDecodeError(f"Could not decode line as {encoding}: {e.reason} "
                              f"at byte {e.start}") from e
