# game.py

class Game:
    def update(self, pose_data, dt):
        """Advance the game by one frame with the latest input and time delta (seconds)."""
        pass

    def render(self, frame):
        """Draw the game over the camera frame and return it."""
        return frame

    def handle_input(self, pose_data):
        """Feed one classifier result to the game."""
        pass

    def reset(self):
        """Start a fresh session."""
        pass

    def stop(self):
        """End the session without reporting a result."""
        pass
