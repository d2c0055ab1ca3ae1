# catch_engine.py

import logging
import random

from catch_config import (
    REASON_BOMB_CAUGHT,
    REASON_TOO_MANY_MISSES,
    GameSettings,
    level_config,
    zone_for_label,
)
from catch_state import ACTIVE, ENDED, IDLE, FallingItem, GameState
from notifications import GameOver, NotificationBus, ScoreUpdate
from scheduler import FrameScheduler
from spawner import ItemSpawner

logger = logging.getLogger(__name__)


class CatchEngine:
    """Rules of the fruit catch game.

    Items fall into one of three zones; the basket is moved by zone labels
    from the pose classifier. A fruit landing in the basket scores, a fruit
    landing elsewhere costs a miss, and a bomb landing in the basket ends the
    game. Three timing sources drive a session, all owned by the scheduler:
    the level-up interval, the spawner's delays and the per-frame tick.

    Everything the outside world learns goes through the notification bus.
    """

    def __init__(self, settings=None, scheduler=None, rng=None, bus=None):
        self.settings = settings or GameSettings()
        self.scheduler = scheduler or FrameScheduler()
        self.rng = rng or random.Random()
        self.bus = bus or NotificationBus()
        self.state = GameState(self.settings.max_misses, self.settings.max_level)

        self.level_up_timer = None
        self.frame_handle = None
        self.spawner = ItemSpawner(
            self,
            self.scheduler,
            self.rng,
            (self.settings.spawn_delay_min_ms, self.settings.spawn_delay_max_ms),
        )

    @property
    def is_active(self):
        return self.state.is_active

    @property
    def phase(self):
        return self.state.phase

    def now(self):
        return self.scheduler.now()

    # --------- session lifecycle ---------
    def start(self):
        if self.state.phase != IDLE:
            self.stop()

        self.state = GameState(self.settings.max_misses, self.settings.max_level)
        self.state.phase = ACTIVE
        self.state.started_at = self.now()

        self.notify_score_change()

        self.level_up_timer = self.scheduler.call_every(
            self.settings.level_up_interval_ms, self.level_up
        )
        self.spawner.start()
        self.frame_handle = self.scheduler.request_frame(self.tick)
        logger.info("Game started")

    def stop(self):
        was_active = self.state.is_active
        self._cancel_timers()

        for item in list(self.state.items):
            self.bus.item_removed(item.id)
        self.state.items = []
        self.state.phase = IDLE

        if was_active:
            logger.info("Game stopped")

    def end_game(self, reason):
        if not self.state.is_active:
            return

        self._cancel_timers()
        self.state.phase = ENDED
        self.state.combo = 0
        self.state.check_invariants()

        logger.info(
            f"Game over: {reason} (score {self.state.score}, level {self.state.level}, "
            f"fruits {self.state.fruits_caught})"
        )
        self.bus.game_ended(GameOver(
            reason=reason,
            score=self.state.score,
            level=self.state.level,
            fruits_caught=self.state.fruits_caught,
        ))

    def _cancel_timers(self):
        if self.level_up_timer is not None:
            self.level_up_timer.cancel()
            self.level_up_timer = None
        self.spawner.cancel()
        if self.frame_handle is not None:
            self.frame_handle.cancel()
            self.frame_handle = None

    # --------- timers ---------
    def level_up(self):
        if not self.state.is_active:
            return
        if self.state.level < self.settings.max_level:
            self.state.level += 1
            self.notify_score_change()
            logger.info(f"Level up! Now level {self.state.level}")

    def fall_duration_ms(self, item=None):
        if item is not None and self.settings.freeze_fall_duration:
            return item.fall_duration_ms
        return level_config(self.state.level).fall_duration_ms

    def add_item(self, kind, zone):
        fall_duration = self.fall_duration_ms()
        item = FallingItem(
            id=self.state.new_item_id(),
            kind=kind,
            zone=zone,
            created_at=self.now(),
            fall_duration_ms=fall_duration,
        )
        self.state.items.append(item)
        logger.debug(f"Spawned {kind.tag} #{item.id} in {zone}")
        self.bus.item_created(item, fall_duration)
        return item

    def tick(self):
        """Advance every falling item by one frame."""
        self.frame_handle = None
        state = self.state
        if not state.is_active:
            return

        now = self.now()
        resolved = []
        for item in list(state.items):
            # Listeners may stop or restart the session mid-scan.
            if self.state is not state or not state.is_active:
                break
            if item.progress(now, self.fall_duration_ms(item)) < 1.0:
                continue
            if self.check_collision(item):
                self.handle_item_catch(item)
            else:
                self.handle_item_miss(item)
            resolved.append(item.id)

        # A restarted session flushed this one's items and armed its own frame.
        if self.state is not state:
            return

        for item_id in resolved:
            if state.remove_item(item_id) is not None:
                self.bus.item_removed(item_id)

        if state.is_active:
            self.frame_handle = self.scheduler.request_frame(self.tick)

    # --------- resolution ---------
    def check_collision(self, item):
        return item.zone == self.state.basket_position

    def handle_item_catch(self, item):
        if item.is_hazard:
            logger.debug(f"{item.kind.emoji} caught!")
            self.end_game(REASON_BOMB_CAUGHT)
            return

        state = self.state
        state.score += item.kind.score
        state.combo += 1
        state.fruits_caught += 1

        bonus = self.settings.combo_bonus(state.combo)
        if bonus:
            state.score += bonus
            logger.info(f"{state.combo} combo! +{bonus} bonus")

        self.notify_score_change()
        logger.debug(f"{item.kind.emoji} caught! +{item.kind.score} (combo: {state.combo})")

    def handle_item_miss(self, item):
        if item.is_hazard:
            logger.debug(f"{item.kind.emoji} dodged")
            return

        state = self.state
        state.miss_count += 1
        state.combo = 0
        logger.debug(f"{item.kind.emoji} missed ({state.miss_count}/{state.max_misses})")

        if state.miss_count >= state.max_misses:
            # Reported before the session ends, so the invariant check waits
            # for end_game.
            self.bus.score_changed(self.score_update())
            self.end_game(REASON_TOO_MANY_MISSES)
            return

        self.notify_score_change()

    # --------- input ---------
    def on_pose_detected(self, label):
        if not self.state.is_active:
            return

        zone = zone_for_label(label)
        if zone is None:
            logger.debug(f"Ignoring label {label!r}")
            return

        if zone != self.state.basket_position:
            self.state.basket_position = zone
            self.bus.basket_moved(zone)
            logger.debug(f"Basket moved: {zone}")

    # --------- notifications ---------
    def score_update(self):
        state = self.state
        return ScoreUpdate(
            score=state.score,
            level=state.level,
            miss_count=state.miss_count,
            max_misses=state.max_misses,
            combo=state.combo,
        )

    def notify_score_change(self):
        self.state.check_invariants()
        self.bus.score_changed(self.score_update())

    def get_game_state(self):
        return self.state.snapshot()
