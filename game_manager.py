# game_manager.py

import logging
import time

import cv2

from fruit_catch_game import FruitCatchGame
from input_module import InputModule

logger = logging.getLogger(__name__)


class GameManager:
    def __init__(self, input_module=None, game=None):
        print("Opening camera...")
        self.input = input_module or InputModule()
        self.current_game = game or FruitCatchGame()
        self.prev_time = time.time()

    def run(self):
        self.current_game.reset()
        try:
            while True:
                frame = self.input.get_frame()
                if frame is None:
                    break

                current_time = time.time()
                dt = current_time - self.prev_time
                self.prev_time = current_time

                label = self.input.zone_label(self.input.process_pose(frame))
                self.current_game.update(label, dt)
                frame = self.current_game.render(frame)

                cv2.imshow('Fruit Catch', frame)
                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                elif key == ord('r'):
                    logger.info("Restarting")
                    self.current_game.reset()
                elif key == ord('s'):
                    self.current_game.stop()
        finally:
            self.current_game.stop()
            self.input.release()
            cv2.destroyAllWindows()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    GameManager().run()
