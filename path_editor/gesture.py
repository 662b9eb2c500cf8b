"""Long-hold detector that opens the checkpoint menu."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_FRAMES = 30


class GestureTimer:
    """Counts frames (or wall-clock seconds) while a touch is held on a checkpoint.

    In frame mode the timer fires once the counter is strictly greater than
    ``threshold_frames``. With ``hold_seconds`` set, elapsed
    :func:`time.monotonic` time is compared instead, so the hold no longer
    depends on the frame rate. Either way the timer deactivates and resets
    when the threshold is crossed, whether or not it fired.
    """

    def __init__(
        self,
        threshold_frames: int = DEFAULT_THRESHOLD_FRAMES,
        hold_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.threshold_frames = threshold_frames
        self.hold_seconds = hold_seconds
        self._clock = clock
        self.count = 0
        self.active = False
        self._started_at: float | None = None

    def start(self) -> None:
        """Mark the touch active without touching the counter."""
        if not self.active:
            self._started_at = self._clock()
        self.active = True

    def reset(self) -> None:
        self.count = 0
        self._started_at = self._clock()

    def stop(self) -> None:
        self.active = False
        self.count = 0
        self._started_at = None

    def _threshold_reached(self) -> bool:
        if self.hold_seconds is None:
            return self.count > self.threshold_frames
        started = self._started_at if self._started_at is not None else self._clock()
        return self._clock() - started > self.hold_seconds

    def tick(self, has_selection: bool) -> bool:
        """Advance one frame. Returns True when the hold gesture fires."""
        if not self.active:
            return False
        self.count += 1
        if not self._threshold_reached():
            return False
        self.stop()
        if has_selection:
            logger.debug("Long hold detected on selected checkpoint")
            return True
        return False
