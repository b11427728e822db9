import logging
from dataclasses import dataclass, replace
from enum import Enum
from PyQt5.QtCore import QObject, QPointF, pyqtSignal
from errors import InvalidStateError
import constants


class DragState(Enum):
    IDLE = 1
    DRAGGING = 2


@dataclass
class DragSession:
    clip: object
    origin_track_id: str
    original_start_time: float
    pointer_start: QPointF
    target_track_id: str
    pending_start_time: float


@dataclass(frozen=True)
class PreviewGeometry:
    x: float
    y: float
    width: float


class DragManager(QObject):
    """Moves one clip at a time between tracks and along the time axis.

    Pointer positions are relative to the timeline container, ruler band
    included, so the y value can be hit-tested against the track stack.
    """
    drag_started = pyqtSignal(object)
    drag_updated = pyqtSignal(object)
    drag_finished = pyqtSignal(object)

    def __init__(self, timeline_ops, zoom_controller):
        super().__init__()
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        self.ops = timeline_ops
        self.zoom = zoom_controller
        self.session = None

    @property
    def state(self):
        return DragState.DRAGGING if self.session is not None else DragState.IDLE

    def is_dragging(self):
        return self.session is not None

    def is_dragging_clip(self, clip_id):
        return self.session is not None and self.session.clip.id == clip_id

    def begin_drag(self, clip, track_id, pointer_pos):
        if self.session is not None:
            raise InvalidStateError(f"Drag of '{self.session.clip.id}' already in progress")
        self.session = DragSession(
            clip=replace(clip),
            origin_track_id=track_id,
            original_start_time=clip.start_time,
            pointer_start=QPointF(pointer_pos),
            target_track_id=track_id,
            pending_start_time=clip.start_time,
        )
        self.logger.debug(f"[DRAG] Start {clip.id} on {track_id} at ({pointer_pos.x():.0f}, {pointer_pos.y():.0f})")
        self.drag_started.emit(self.session)
        return self.session

    def update_drag(self, pointer_pos):
        if self.session is None:
            raise InvalidStateError("update_drag called with no active drag")
        s = self.session
        time_delta = self.zoom.pixels_to_time(pointer_pos.x() - s.pointer_start.x())
        s.pending_start_time = max(0.0, s.original_start_time + time_delta)
        hit = self.ops.track_at_position(pointer_pos.y())
        if hit is not None:
            s.target_track_id = hit
        self.drag_updated.emit(s)
        return s

    def end_drag(self):
        """Commits the pending move and returns the placed clip.

        A target track removed while the drag was in flight is not an error:
        the clip stays where it was and None is returned.
        """
        if self.session is None:
            raise InvalidStateError("end_drag called with no active drag")
        s = self.session
        moved = None
        try:
            if not self.ops.has_track(s.target_track_id):
                self.logger.warning(
                    f"[DRAG] Target track {s.target_track_id} vanished, {s.clip.id} stays on {s.origin_track_id}")
            else:
                moved = self.ops.move_clip(s.clip.id, s.origin_track_id, s.target_track_id, s.pending_start_time)
        finally:
            self.session = None
            self.drag_finished.emit(moved)
        return moved

    def cancel_drag(self):
        if self.session is None:
            return
        self.logger.debug(f"[DRAG] Cancelled {self.session.clip.id}")
        self.session = None
        self.drag_finished.emit(None)

    def preview_geometry(self):
        if self.session is None or not self.ops.has_track(self.session.target_track_id):
            return None
        s = self.session
        return PreviewGeometry(
            x=self.zoom.time_to_pixels(s.pending_start_time),
            y=self.ops.track_top_offset(s.target_track_id),
            width=self.zoom.clip_width(s.clip.duration),
        )

    def request_resize(self, clip, direction):
        # Edge handles exist in the UI, trimming is not supported yet.
        self.logger.debug(f"[DRAG] Resize {direction} requested on {clip.id}, ignored")
