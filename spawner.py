# spawner.py

import logging

import numpy as np

from catch_config import DEFAULT_ITEM_TAG, ITEM_KINDS, ZONES, spawn_weights_for_level

logger = logging.getLogger(__name__)


def select_item_kind(level, draw):
    """Pick an item kind for a uniform draw in [0, 1).

    Walks the cumulative distribution of the level's bracket in catalog
    order; a draw left over by rounding falls back to the default kind.
    """
    kinds = list(ITEM_KINDS.values())
    edges = np.cumsum(spawn_weights_for_level(level))
    for kind, edge in zip(kinds, edges):
        if draw < edge:
            return kind
    return ITEM_KINDS[DEFAULT_ITEM_TAG]


def select_zone(draw):
    return ZONES[min(int(draw * len(ZONES)), len(ZONES) - 1)]


class ItemSpawner:
    """Spawns one item right away, then one more after every random delay.

    The pending delay is the cancellation token: cancel() drops it, and each
    firing re-checks that the engine is still active before spawning.
    """

    def __init__(self, engine, scheduler, rng, delay_range):
        self.engine = engine
        self.scheduler = scheduler
        self.rng = rng
        self.delay_min, self.delay_max = delay_range
        self.timer = None

    def start(self):
        self.cancel()
        self._spawn()

    def cancel(self):
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None

    def next_delay(self):
        return self.delay_min + self.rng.random() * (self.delay_max - self.delay_min)

    def _spawn(self):
        self.timer = None
        if not self.engine.is_active:
            return

        kind = select_item_kind(self.engine.state.level, self.rng.random())
        zone = select_zone(self.rng.random())
        self.engine.add_item(kind, zone)

        delay = self.next_delay()
        self.timer = self.scheduler.call_later(delay, self._spawn)
        logger.debug(f"Next spawn in {delay:.0f}ms")
