# fruit_catch_game.py

import cv2

from catch_config import ITEM_KINDS, ZONES
from catch_engine import CatchEngine
from game import Game
from notifications import BASKET_MOVED, GAME_ENDED, ITEM_CREATED, ITEM_REMOVED, SCORE_CHANGE
from scheduler import FrameScheduler

WHITE = (255, 255, 255)
GREY = (120, 120, 120)
RED = (8, 15, 207)
GOLD = (0, 215, 255)

# Items are drawn as discs with a letter; OpenCV fonts cannot draw emoji.
ITEM_COLORS = {
    'apple': (40, 40, 220),
    'banana': (40, 220, 240),
    'watermelon': (60, 200, 60),
    'cherry': (120, 20, 180),
    'bomb': (30, 30, 30),
}


class FruitCatchGame(Game):
    """Hosts a CatchEngine inside the frame loop.

    The board and HUD are built only from bus notifications. render() is a
    debug overlay, not the game's look.
    """

    def __init__(self, engine=None, clock=None):
        if engine is None:
            engine = CatchEngine(scheduler=FrameScheduler(clock))
        self.engine = engine
        self.pose_label = None

        self.hud = {}
        self.falling = {}
        self.game_over = None
        self.clear_board()

        bus = engine.bus
        bus.subscribe(SCORE_CHANGE, self.on_score_change)
        bus.subscribe(ITEM_CREATED, self.on_item_created)
        bus.subscribe(ITEM_REMOVED, self.on_item_removed)
        bus.subscribe(BASKET_MOVED, self.on_basket_moved)
        bus.subscribe(GAME_ENDED, self.on_game_ended)

    def clear_board(self):
        self.hud = {'score': 0, 'level': 1, 'miss_count': 0, 'max_misses': 0, 'combo': 0}
        self.basket = 'CENTER'
        self.falling = {}
        self.game_over = None

    # --------- bus listeners ---------
    def on_score_change(self, update):
        self.hud = {
            'score': update.score,
            'level': update.level,
            'miss_count': update.miss_count,
            'max_misses': update.max_misses,
            'combo': update.combo,
        }

    def on_item_created(self, item, fall_duration_ms):
        self.falling[item.id] = {
            'tag': item.kind.tag,
            'zone': item.zone,
            'created_at': item.created_at,
            'fall_duration_ms': fall_duration_ms,
        }

    def on_item_removed(self, item_id):
        self.falling.pop(item_id, None)

    def on_basket_moved(self, zone):
        self.basket = zone

    def on_game_ended(self, result):
        self.game_over = result
        print(f"Game Over! {result.reason}. Score: {result.score}")

    # --------- Game interface ---------
    def handle_input(self, pose_data):
        self.pose_label = pose_data
        if pose_data and self.engine.is_active:
            self.engine.on_pose_detected(pose_data)

    def update(self, pose_data, dt):
        self.handle_input(pose_data)
        self.engine.scheduler.run_pending()

    def reset(self):
        self.clear_board()
        self.engine.start()

    def stop(self):
        self.engine.stop()

    def render(self, frame):
        height, width, _ = frame.shape
        lane_width = width // len(ZONES)
        floor_y = height - 120
        now = self.engine.now()

        for i in range(1, len(ZONES)):
            cv2.line(frame, (i * lane_width, 0), (i * lane_width, height), GREY, 1)

        for item in self.falling.values():
            progress = min((now - item['created_at']) / item['fall_duration_ms'], 1.0)
            x = ZONES.index(item['zone']) * lane_width + lane_width // 2
            y = int(150 + progress * (floor_y - 150))
            color = ITEM_COLORS.get(item['tag'], WHITE)
            cv2.circle(frame, (x, y), 30, color, -1)
            label = item['tag'][0].upper()
            if ITEM_KINDS[item['tag']].is_hazard:
                label = '!'
            cv2.putText(frame, label, (x - 10, y + 10), cv2.FONT_HERSHEY_SIMPLEX, 1.0, WHITE, 2, cv2.LINE_AA)

        basket_x = ZONES.index(self.basket) * lane_width
        cv2.rectangle(frame, (basket_x + 20, floor_y + 20), (basket_x + lane_width - 20, floor_y + 70), GOLD, -1)

        cv2.rectangle(frame, (0, 0), (width, 110), (20, 20, 20), -1)
        hud = self.hud
        cv2.putText(frame, f"SCORE: {hud['score']}", (30, 45), cv2.FONT_HERSHEY_SIMPLEX, 1.0, WHITE, 2, cv2.LINE_AA)
        cv2.putText(frame, f"LEVEL: {hud['level']}", (30, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.8, WHITE, 2, cv2.LINE_AA)
        cv2.putText(frame, f"MISS: {hud['miss_count']}/{hud['max_misses']}", (width // 2 - 100, 45), cv2.FONT_HERSHEY_SIMPLEX, 1.0, RED, 2, cv2.LINE_AA)
        cv2.putText(frame, f"COMBO: {hud['combo']}", (width // 2 - 100, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.8, GOLD, 2, cv2.LINE_AA)
        cv2.putText(frame, f"POSE: {self.pose_label or '-'}", (width - 320, 45), cv2.FONT_HERSHEY_SIMPLEX, 0.8, WHITE, 2, cv2.LINE_AA)

        if self.game_over:
            text = "Game Over"
            text_size, _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, 3, 5)
            text_x = (width - text_size[0]) // 2
            text_y = (height + text_size[1]) // 2
            cv2.putText(frame, text, (text_x, text_y), cv2.FONT_HERSHEY_SIMPLEX, 3, GOLD, 5, cv2.LINE_AA)
            summary = f"{self.game_over.reason} - score {self.game_over.score}, level {self.game_over.level}, fruits {self.game_over.fruits_caught}"
            cv2.putText(frame, summary, (text_x, text_y + 60), cv2.FONT_HERSHEY_SIMPLEX, 0.8, WHITE, 2, cv2.LINE_AA)
            cv2.putText(frame, "Press 'r' to play again", (text_x, text_y + 110), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (200, 200, 200), 2, cv2.LINE_AA)

        return frame
