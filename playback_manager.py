import logging
from PyQt5.QtCore import QObject, QTimer, QElapsedTimer, pyqtSignal
import constants


class PlaybackManager(QObject):
    playhead_updated = pyqtSignal(float)
    state_changed = pyqtSignal(bool)

    def __init__(self, duration, auto_tick=True, frame_interval_ms=constants.FRAME_INTERVAL_MS):
        super().__init__()
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        self.duration = float(duration)
        self._current_time = 0.0
        self.is_playing = False
        self._last_timestamp = None
        self.auto_tick = auto_tick
        self._clock = QElapsedTimer()
        self.timer = QTimer(self)
        self.timer.setInterval(frame_interval_ms)
        self.timer.timeout.connect(self._on_timer)

    @property
    def current_time(self):
        return self._current_time

    @current_time.setter
    def current_time(self, value):
        self._current_time = max(0.0, min(self.duration, float(value)))

    def play(self):
        """Starts playback; a playhead parked at the end rewinds to 0 first."""
        if self.is_playing:
            return
        if self.current_time >= self.duration:
            self.seek(0.0)
        self.is_playing = True
        self._last_timestamp = None
        if self.auto_tick:
            self._clock.start()
            self.timer.start()
        self.logger.info(f"[PLAYBACK] Play from {self.current_time:.3f}s")
        self.state_changed.emit(True)

    def pause(self):
        if not self.is_playing:
            return
        self._stop()
        self.logger.info(f"[PLAYBACK] Paused at {self.current_time:.3f}s")

    def toggle_play(self):
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def _stop(self):
        self.is_playing = False
        self._last_timestamp = None
        self.timer.stop()
        self.state_changed.emit(False)

    def tick(self, timestamp_ms):
        """Advances the playhead by the wall-clock time since the previous frame.

        The first frame of a run only records the baseline.
        """
        if not self.is_playing:
            return
        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
            return
        delta = max(0.0, (timestamp_ms - self._last_timestamp) / 1000.0)
        self._last_timestamp = timestamp_ms
        new_time = self.current_time + delta
        if new_time >= self.duration:
            self.current_time = self.duration
            self.playhead_updated.emit(self.current_time)
            self.logger.info(f"[PLAYBACK] Reached end ({self.duration:.3f}s), stopping.")
            self._stop()
            return
        self.current_time = new_time
        self.playhead_updated.emit(self.current_time)

    def _on_timer(self):
        self.tick(self._clock.elapsed())

    def seek(self, time):
        self.current_time = time
        self.playhead_updated.emit(self.current_time)
        return self.current_time
