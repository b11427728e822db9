import logging
from dataclasses import replace
from PyQt5.QtCore import QObject, pyqtSignal
from errors import NotFoundError, InvalidArgumentError
import constants


def track_at_position(vertical_offset, tracks, ruler_height=constants.RULER_HEIGHT):
    """Hit-tests a y offset measured from the top of the timeline container.

    Returns None inside the ruler band, and the last track's id once the
    offset runs past the bottom of every track.
    """
    if not tracks or vertical_offset <= ruler_height:
        return None
    track_area_y = vertical_offset - ruler_height
    bottom = 0
    for track in tracks:
        bottom += track.height
        if track_area_y <= bottom:
            return track.id
    return tracks[-1].id


class TimelineOperations(QObject):
    data_changed = pyqtSignal()
    clip_moved = pyqtSignal(str, str, str, float)

    def __init__(self, project, enforce_track_types=False):
        super().__init__()
        self.logger = logging.getLogger(constants.LOGGER_NAME)
        self.project = project
        self.enforce_track_types = enforce_track_types

    def get_track(self, track_id):
        for track in self.project.tracks:
            if track.id == track_id:
                return track
        raise NotFoundError(f"Track '{track_id}' does not exist")

    def has_track(self, track_id):
        return any(t.id == track_id for t in self.project.tracks)

    def get_clip(self, clip_id):
        for track in self.project.tracks:
            idx = track.index_of(clip_id)
            if idx >= 0:
                return track.clips[idx]
        raise NotFoundError(f"Clip '{clip_id}' does not exist")

    def find_track_containing_clip(self, clip_id):
        for track in self.project.tracks:
            if track.index_of(clip_id) >= 0:
                return track.id
        raise NotFoundError(f"Clip '{clip_id}' is not on any track")

    def move_clip(self, clip_id, from_track_id, to_track_id, new_start_time):
        """Moves a clip to the end of the target track with a new start time.

        Every lookup and check runs before the source track is touched, so a
        failed move leaves the project exactly as it was.
        """
        if new_start_time is None or new_start_time < 0:
            raise InvalidArgumentError(f"new_start_time must be >= 0, got {new_start_time}")
        source = self.get_track(from_track_id)
        target = self.get_track(to_track_id)
        idx = source.index_of(clip_id)
        if idx < 0:
            raise NotFoundError(f"Clip '{clip_id}' is not on track '{from_track_id}'")
        clip = source.clips[idx]
        if self.enforce_track_types and clip.type not in constants.TRACK_ACCEPTS.get(target.type, ()):
            raise InvalidArgumentError(
                f"Clip '{clip_id}' of type '{clip.type}' cannot be placed on {target.type} track '{to_track_id}'")
        moved = replace(clip, start_time=float(new_start_time))
        del source.clips[idx]
        target.clips.append(moved)
        self.logger.info(f"[MOVE] {clip_id}: {from_track_id}@{clip.start_time:.2f}s -> {to_track_id}@{moved.start_time:.2f}s")
        self.clip_moved.emit(clip_id, from_track_id, to_track_id, moved.start_time)
        self.data_changed.emit()
        return moved

    def track_at_position(self, vertical_offset):
        return track_at_position(vertical_offset, self.project.tracks)

    def track_top_offset(self, track_id):
        top = 0
        for track in self.project.tracks:
            if track.id == track_id:
                return constants.RULER_HEIGHT + top + constants.CLIP_INSET
            top += track.height
        raise NotFoundError(f"Track '{track_id}' does not exist")

    def clip_count(self):
        return sum(len(t.clips) for t in self.project.tracks)

    def get_content_end(self):
        ends = [c.end_time for t in self.project.tracks for c in t.clips]
        return max(ends) if ends else 0.0

    def clips_at(self, time):
        """Clips under the playhead, in track display order."""
        hits = []
        for track in self.project.tracks:
            for clip in track.clips:
                if clip.start_time <= time < clip.end_time:
                    hits.append((track.id, clip))
        return hits

    def get_state(self):
        return [t.to_dict() for t in self.project.tracks]
