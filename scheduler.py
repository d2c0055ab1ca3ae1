# scheduler.py

import heapq
import itertools
import time


def wall_clock_ms():
    return time.monotonic() * 1000.0


class TimerHandle:
    """A scheduled callback. Once cancelled it never fires."""

    def __init__(self, callback, due, interval=None):
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def __repr__(self):
        if self.cancelled:
            state = "cancelled"
        elif self.due is None:
            state = "next frame"
        else:
            state = f"due={self.due:.0f}"
        return f"<TimerHandle {getattr(self.callback, '__name__', self.callback)} {state}>"


class FrameScheduler:
    """Cooperative timers for a single-threaded frame loop.

    Nothing runs on its own: the host calls run_pending() once per frame and
    every due delay, interval and frame callback runs inside that call, one
    at a time.
    """

    def __init__(self, clock=None):
        self.clock = clock or wall_clock_ms
        self._timers = []
        self._frame_callbacks = []
        self._seq = itertools.count()

    def now(self):
        return self.clock()

    def call_later(self, delay_ms, callback):
        handle = TimerHandle(callback, self.now() + delay_ms)
        self._push(handle)
        return handle

    def call_every(self, interval_ms, callback):
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        handle = TimerHandle(callback, self.now() + interval_ms, interval=interval_ms)
        self._push(handle)
        return handle

    def request_frame(self, callback):
        """Run callback once on the next run_pending() pass."""
        handle = TimerHandle(callback, None)
        self._frame_callbacks.append(handle)
        return handle

    def _push(self, handle):
        heapq.heappush(self._timers, (handle.due, next(self._seq), handle))

    def pending(self):
        timers = sum(1 for _, _, h in self._timers if not h.cancelled)
        frames = sum(1 for h in self._frame_callbacks if not h.cancelled)
        return timers + frames

    def run_pending(self):
        now = self.now()

        while self._timers and self._timers[0][0] <= now:
            _, _, handle = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            if handle.interval is not None:
                # Re-arm before the call so the callback may cancel it.
                handle.due += handle.interval
                self._push(handle)
            handle.callback()

        # Callbacks requested during this pass wait for the next one.
        frame_callbacks, self._frame_callbacks = self._frame_callbacks, []
        for handle in frame_callbacks:
            if not handle.cancelled:
                handle.callback()

    def clear(self):
        for _, _, handle in self._timers:
            handle.cancel()
        for handle in self._frame_callbacks:
            handle.cancel()
        self._timers = []
        self._frame_callbacks = []
