import time


class FpsCounter:
    """Counts frames and reports the average rate once per ``interval`` seconds."""

    def __init__(self, interval=1.0, clock=None):
        self.interval = interval
        self.clock = clock or time.perf_counter
        self.frames = 0
        self._start = self.clock()

    def tick(self):
        """Count one frame. Returns frames per second when an interval closes, else None."""
        self.frames += 1
        now = self.clock()
        elapsed = now - self._start
        if elapsed < self.interval:
            return None
        fps = self.frames / elapsed
        self.frames = 0
        self._start = now
        return fps
