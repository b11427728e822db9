import logging
import math
from PyQt5.QtCore import QObject, pyqtSignal
import constants


def time_to_pixels(time, zoom, base_scale=constants.BASE_SCALE):
    return time * base_scale * zoom


def pixels_to_time(pixels, zoom, base_scale=constants.BASE_SCALE):
    return pixels / (base_scale * zoom)


def clip_pixel_width(duration, zoom, base_scale=constants.BASE_SCALE, min_width=constants.MIN_CLIP_WIDTH):
    """Rendered width of a clip; short clips keep a touchable minimum."""
    return max(min_width, time_to_pixels(duration, zoom, base_scale))


def format_time(seconds):
    """Toolbar clock text, e.g. 75.46 -> '01:15.4'."""
    mins = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    tenths = math.floor((seconds % 1) * 10)
    return f"{mins:02}:{secs:02}.{tenths}"


class ZoomController(QObject):
    zoom_changed = pyqtSignal(float)

    def __init__(self, zoom=constants.DEFAULT_ZOOM, min_zoom=constants.MIN_ZOOM, max_zoom=constants.MAX_ZOOM,
                 step=constants.ZOOM_STEP, base_scale=constants.BASE_SCALE):
        super().__init__()
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.step = step
        self.base_scale = base_scale
        self._zoom = self._clamp(zoom)

    @property
    def zoom(self):
        return self._zoom

    def _clamp(self, value):
        return max(self.min_zoom, min(self.max_zoom, value))

    def set_zoom(self, value):
        new_zoom = self._clamp(value)
        if new_zoom == self._zoom:
            return False
        self._zoom = new_zoom
        self.logger.debug(f"[ZOOM] {self._zoom:.3f} ({self.zoom_percent()}%)")
        self.zoom_changed.emit(self._zoom)
        return True

    def zoom_in(self):
        return self.set_zoom(self._zoom * self.step)

    def zoom_out(self):
        return self.set_zoom(self._zoom / self.step)

    def can_zoom_in(self):
        return self._zoom < self.max_zoom

    def can_zoom_out(self):
        return self._zoom > self.min_zoom

    def zoom_percent(self):
        return round(self._zoom * 100)

    def time_to_pixels(self, time):
        return time_to_pixels(time, self._zoom, self.base_scale)

    def pixels_to_time(self, pixels):
        return pixels_to_time(pixels, self._zoom, self.base_scale)

    def clip_width(self, duration):
        return clip_pixel_width(duration, self._zoom, self.base_scale)
