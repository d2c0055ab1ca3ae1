import cv2
import mediapipe as mp

from catch_config import ZONES


class InputModule:
    """Webcam frames and a coarse LEFT/CENTER/RIGHT reading of the player's pose.

    zone_label() only splits the frame into thirds on the nose position. The
    real classifier and its smoothing live upstream and are not part of this
    project; anything that yields zone labels can stand in for this class.
    """

    def __init__(self, camera_index=0, min_visibility=0.5):
        self.cap = cv2.VideoCapture(camera_index)
        if not self.cap.isOpened():
            raise IOError("Cannot open webcam")

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, 1280)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, 720)
        self.mp_pose = mp.solutions.pose
        self.pose = self.mp_pose.Pose(min_detection_confidence=0.5, min_tracking_confidence=0.5)
        self.min_visibility = min_visibility

    def get_frame(self):
        success, frame = self.cap.read()
        if not success or frame is None:
            print("Ignoring empty camera frame.")
            return None
        if frame.shape[1] == 0:
            print("Warning: Frame has zero width.")
            return None
        return cv2.flip(frame, 1)

    def process_pose(self, frame):
        if frame is None:
            return None
        image_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return self.pose.process(image_rgb)

    def zone_label(self, results):
        if results is None or not results.pose_landmarks:
            return None
        nose = results.pose_landmarks.landmark[self.mp_pose.PoseLandmark.NOSE.value]
        if nose.visibility < self.min_visibility:
            return None
        index = min(int(nose.x * len(ZONES)), len(ZONES) - 1)
        return ZONES[max(index, 0)]

    def release(self):
        self.cap.release()
        self.pose.close()
