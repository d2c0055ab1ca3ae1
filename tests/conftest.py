import pytest

from catch_engine import CatchEngine
from notifications import EVENTS
from scheduler import FrameScheduler


class ManualClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class ScriptedRandom:
    """Stands in for random.Random: queued draws first, then a fixed default.

    The default 0.99 spawns a bomb in the RIGHT zone every 2490ms, which a
    basket left in the CENTER dodges without touching the score.
    """

    def __init__(self, draws=(), default=0.99):
        self.draws = list(draws)
        self.default = default

    def random(self):
        if self.draws:
            return self.draws.pop(0)
        return self.default


class Recorder:
    def __init__(self, bus):
        self.events = []
        for event in EVENTS:
            bus.subscribe(event, self._listener(event))

    def _listener(self, event):
        def record(*args):
            self.events.append((event,) + args)
        return record

    def of(self, event):
        return [e[1:] for e in self.events if e[0] == event]

    def payloads(self, event):
        return [e[1] for e in self.events if e[0] == event]


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def engine(clock, rng):
    return CatchEngine(scheduler=FrameScheduler(clock), rng=rng)


@pytest.fixture
def recorder(engine):
    return Recorder(engine.bus)


def run_for(engine, clock, duration_ms, step_ms=100):
    """Drive the scheduler frame by frame for duration_ms."""
    elapsed = 0
    while elapsed < duration_ms:
        step = min(step_ms, duration_ms - elapsed)
        clock.advance(step)
        elapsed += step
        engine.scheduler.run_pending()
