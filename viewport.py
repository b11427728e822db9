import logging
from PyQt5.QtCore import QObject, pyqtSignal
from coordinates import time_to_pixels
import constants


def ensure_playhead_visible(current_time, viewport_width, scroll_left, zoom,
                            margin=constants.PLAYHEAD_MARGIN, base_scale=constants.BASE_SCALE):
    """Returns the scroll offset that keeps the playhead on screen.

    The playhead must sit inside [scroll_left, scroll_left + width - margin);
    once it leaves that band the view re-centres on it.
    """
    px = time_to_pixels(current_time, zoom, base_scale)
    if px < scroll_left or px >= scroll_left + viewport_width - margin:
        return max(0.0, px - viewport_width / 2)
    return scroll_left


class ViewportController(QObject):
    scroll_requested = pyqtSignal(float)

    def __init__(self, zoom_controller, viewport_width=0.0, margin=constants.PLAYHEAD_MARGIN):
        super().__init__()
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        self.zoom_controller = zoom_controller
        self.viewport_width = viewport_width
        self.scroll_left = 0.0
        self.margin = margin

    def set_viewport(self, width, scroll_left=None):
        self.viewport_width = width
        if scroll_left is not None:
            self.scroll_left = scroll_left

    def on_playhead_updated(self, current_time):
        if self.viewport_width <= 0:
            return
        target = ensure_playhead_visible(
            current_time, self.viewport_width, self.scroll_left,
            self.zoom_controller.zoom, self.margin, self.zoom_controller.base_scale)
        if target != self.scroll_left:
            self.scroll_left = target
            self.logger.debug(f"[VIEWPORT] Follow playhead -> scroll {target:.1f}px")
            self.scroll_requested.emit(target)
