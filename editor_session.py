import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from PyQt5.QtCore import QPointF
from coordinates import ZoomController, format_time
from drag_manager import DragManager
from errors import NotFoundError
from model import ProjectModel
from playback_manager import PlaybackManager
from system import ConfigManager
from timeline_grid import generate_markers, ruler_width
from timeline_ops import TimelineOperations
from viewport import ViewportController
import constants


class EventKind(Enum):
    POINTER_DOWN = 1
    POINTER_MOVE = 2
    POINTER_UP = 3
    POINTER_CANCEL = 4
    FRAME_TICK = 5
    RULER_TAP = 6
    TRACK_TAP = 7
    ZOOM_IN = 8
    ZOOM_OUT = 9
    PLAY_PAUSE = 10
    KEY_PRESS = 11


@dataclass
class EditorEvent:
    kind: EventKind
    x: float = 0.0
    y: float = 0.0
    timestamp: float = 0.0
    clip_id: str = None
    track_id: str = None
    key: str = None


class EditorSession:
    """Owns one editor's timeline state and feeds host input through it.

    Events are queued and handled strictly one after another, so a frame tick
    and a pointer move never interleave inside a single update.
    """

    def __init__(self, project, config=None, auto_tick=False):
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        if isinstance(project, dict):
            project = ProjectModel.from_dict(project)
        self.project = project
        self.config = config or ConfigManager()
        cfg = self.config
        self.zoom = ZoomController(
            zoom=cfg.get('initial_zoom'),
            min_zoom=cfg.get('min_zoom'),
            max_zoom=cfg.get('max_zoom'),
            step=cfg.get('zoom_step'),
            base_scale=cfg.get('base_scale'),
        )
        self.timeline = TimelineOperations(project, enforce_track_types=bool(cfg.get('enforce_track_types')))
        self.playback = PlaybackManager(project.duration, auto_tick=auto_tick,
                                        frame_interval_ms=cfg.get('frame_interval_ms'))
        self.drag = DragManager(self.timeline, self.zoom)
        self.viewport = ViewportController(self.zoom, margin=cfg.get('playhead_margin'))
        self.playback.playhead_updated.connect(self.viewport.on_playhead_updated)
        self._queue = deque()
        self._handlers = {
            EventKind.POINTER_DOWN: self._on_pointer_down,
            EventKind.POINTER_MOVE: self._on_pointer_move,
            EventKind.POINTER_UP: self._on_pointer_up,
            EventKind.POINTER_CANCEL: lambda e: self.drag.cancel_drag(),
            EventKind.FRAME_TICK: lambda e: self.playback.tick(e.timestamp),
            EventKind.RULER_TAP: self._on_tap,
            EventKind.TRACK_TAP: self._on_tap,
            EventKind.ZOOM_IN: lambda e: self.zoom.zoom_in(),
            EventKind.ZOOM_OUT: lambda e: self.zoom.zoom_out(),
            EventKind.PLAY_PAUSE: lambda e: self.playback.toggle_play(),
            EventKind.KEY_PRESS: self._on_key,
        }
        self.logger.info(f"[SESSION] Loaded '{project.metadata.name}': "
                         f"{len(project.tracks)} tracks, {self.timeline.clip_count()} clips, {project.duration}s")

    @property
    def duration(self):
        return self.project.duration

    def post_event(self, event):
        self._queue.append(event)

    def pending_events(self):
        return len(self._queue)

    def process_events(self):
        handled = 0
        while self._queue:
            self.dispatch(self._queue.popleft())
            handled += 1
        return handled

    def dispatch(self, event):
        return self._handlers[event.kind](event)

    def _on_pointer_down(self, event):
        if event.clip_id is None:
            return None
        track_id = event.track_id or self.timeline.find_track_containing_clip(event.clip_id)
        track = self.timeline.get_track(track_id)
        idx = track.index_of(event.clip_id)
        if idx < 0:
            raise NotFoundError(f"Clip '{event.clip_id}' is not on track '{track_id}'")
        return self.drag.begin_drag(track.clips[idx], track_id, QPointF(event.x, event.y))

    def _on_pointer_move(self, event):
        if not self.drag.is_dragging():
            return None
        return self.drag.update_drag(QPointF(event.x, event.y))

    def _on_pointer_up(self, event):
        if not self.drag.is_dragging():
            return None
        return self.drag.end_drag()

    def _on_tap(self, event):
        return self.seek_to_pixel(event.x)

    def _on_key(self, event):
        if event.key == ' ':
            self.playback.toggle_play()
        elif event.key in ('+', '='):
            self.zoom.zoom_in()
        elif event.key in ('-', '_'):
            self.zoom.zoom_out()

    def seek_to_pixel(self, x):
        return self.playback.seek(self.zoom.pixels_to_time(x))

    def render_state(self):
        zoom = self.zoom.zoom
        drag = None
        if self.drag.is_dragging():
            s = self.drag.session
            drag = {
                'clip_id': s.clip.id,
                'origin_track_id': s.origin_track_id,
                'target_track_id': s.target_track_id,
                'start_time': s.pending_start_time,
                'preview': self.drag.preview_geometry(),
            }
        return {
            'tracks': self.timeline.get_state(),
            'current_time': self.playback.current_time,
            'is_playing': self.playback.is_playing,
            'zoom': zoom,
            'zoom_percent': self.zoom.zoom_percent(),
            'can_zoom_in': self.zoom.can_zoom_in(),
            'can_zoom_out': self.zoom.can_zoom_out(),
            'time_display': f"{format_time(self.playback.current_time)} / {format_time(self.duration)}",
            'timeline_width': ruler_width(self.duration, zoom, self.zoom.base_scale),
            'markers': generate_markers(self.duration, zoom),
            'playhead_x': self.zoom.time_to_pixels(self.playback.current_time),
            'scroll_left': self.viewport.scroll_left,
            'drag': drag,
        }
