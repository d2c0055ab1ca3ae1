# notifications.py

from dataclasses import dataclass

SCORE_CHANGE = "score_change"
ITEM_CREATED = "item_created"
ITEM_REMOVED = "item_removed"
BASKET_MOVED = "basket_moved"
GAME_ENDED = "game_ended"

EVENTS = (SCORE_CHANGE, ITEM_CREATED, ITEM_REMOVED, BASKET_MOVED, GAME_ENDED)


@dataclass(frozen=True)
class ScoreUpdate:
    score: int
    level: int
    miss_count: int
    max_misses: int
    combo: int


@dataclass(frozen=True)
class GameOver:
    reason: str
    score: int
    level: int
    fruits_caught: int


class NotificationBus:
    """One-way notifications from the engine to whoever draws the game.

    Callback signatures:
        score_change(ScoreUpdate)
        item_created(FallingItem, fall_duration_ms)
        item_removed(item_id)
        basket_moved(zone)
        game_ended(GameOver)
    """

    def __init__(self):
        self._subscribers = {event: [] for event in EVENTS}

    def _listeners(self, event):
        try:
            return self._subscribers[event]
        except KeyError:
            raise ValueError(f"Unknown event '{event}', expected one of {EVENTS}") from None

    def subscribe(self, event, callback):
        self._listeners(event).append(callback)
        return lambda: self.unsubscribe(event, callback)

    def unsubscribe(self, event, callback):
        listeners = self._listeners(event)
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event, *args):
        # Copy so a listener may unsubscribe while being called.
        for callback in list(self._listeners(event)):
            callback(*args)

    def score_changed(self, update):
        self.emit(SCORE_CHANGE, update)

    def item_created(self, item, fall_duration_ms):
        self.emit(ITEM_CREATED, item, fall_duration_ms)

    def item_removed(self, item_id):
        self.emit(ITEM_REMOVED, item_id)

    def basket_moved(self, zone):
        self.emit(BASKET_MOVED, zone)

    def game_ended(self, result):
        self.emit(GAME_ENDED, result)
