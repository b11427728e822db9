import math
from dataclasses import dataclass
from coordinates import time_to_pixels
import constants

EPSILON = 1e-9


@dataclass(frozen=True)
class TimeMarker:
    time: float
    label: str
    is_major: bool


def get_time_interval(zoom):
    """Ruler tick spacing in seconds; finer as the timeline is zoomed in."""
    for upper, interval in constants.ZOOM_INTERVALS:
        if zoom < upper:
            return interval
    return constants.FINEST_INTERVAL


def format_marker_label(time):
    if time < 1:
        return f"{round(time * 10) * 100}ms"
    return f"{time:.6f}".rstrip('0').rstrip('.') + "s"


def _is_major(time, interval):
    frac = time % 1
    if frac < EPSILON or 1 - frac < EPSILON:
        return True
    return interval < 1 and frac < interval - EPSILON


def generate_markers(duration, zoom):
    """Builds the ruler ticks from 0 to duration inclusive.

    Marker times are rounded so accumulated float error never shows up in
    labels or pushes the last marker past the end of the project.
    """
    interval = get_time_interval(zoom)
    markers = []
    total = math.ceil(duration / interval) + 1
    for i in range(total):
        time = round(i * interval, 6)
        if time > duration:
            break
        markers.append(TimeMarker(time, format_marker_label(time), _is_major(time, interval)))
    return markers


def ruler_width(duration, zoom, base_scale=constants.BASE_SCALE):
    return time_to_pixels(duration, zoom, base_scale)
