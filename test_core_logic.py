"""
Test Suite for Track Editor Core Logic
Coordinate mapping, zoom, ruler markers, data model and timeline operations.
"""
import pytest
from unittest.mock import MagicMock
from PyQt5.QtCore import QCoreApplication

if not QCoreApplication.instance():
    app = QCoreApplication([])

import constants
from coordinates import time_to_pixels, pixels_to_time, clip_pixel_width, format_time, ZoomController
from errors import NotFoundError, InvalidArgumentError
from initial_data import build_initial_project, generate_mock_waveform
from model import ClipModel, TrackModel, ProjectModel
from timeline_grid import generate_markers, get_time_interval, ruler_width, format_marker_label
from timeline_ops import TimelineOperations, track_at_position

# ---------- Fixtures ----------
@pytest.fixture
def project():
    return ProjectModel.from_dict(build_initial_project())

@pytest.fixture
def ops(project):
    return TimelineOperations(project)

@pytest.fixture
def clip_model_factory():
    """Factory to create ClipModel instances for testing."""
    def create(uid, start, duration, clip_type='video', **kwargs):
        return ClipModel(id=uid, type=clip_type, name=f"Clip {uid}", start_time=start, duration=duration, **kwargs)
    return create

# ---------- Coordinate Mapper ----------
class TestCoordinateMapping:
    @pytest.mark.parametrize("zoom", [constants.MIN_ZOOM, 0.5, 1.0, 2.2, constants.MAX_ZOOM])
    @pytest.mark.parametrize("t", [0.0, 0.5, 1.0, 7.25, 123.456])
    def test_round_trip(self, t, zoom):
        assert pixels_to_time(time_to_pixels(t, zoom), zoom) == pytest.approx(t)

    def test_base_scale_at_unit_zoom(self):
        assert time_to_pixels(2, 1.0) == 60
        assert pixels_to_time(90, 1.0) == 3

    def test_zoom_strictly_increases_pixels(self):
        zooms = [0.1, 0.3, 0.9, 1.0, 1.5, 2.9, 3.0]
        pixels = [time_to_pixels(4.2, z) for z in zooms]
        assert all(a < b for a, b in zip(pixels, pixels[1:]))

    def test_clip_width_has_minimum(self):
        assert clip_pixel_width(0.5, 1.0) == constants.MIN_CLIP_WIDTH
        assert clip_pixel_width(4, 1.0) == 120

    def test_format_time(self):
        assert format_time(0) == "00:00.0"
        assert format_time(75.46) == "01:15.4"
        assert format_time(30) == "00:30.0"

class TestZoomController:
    def test_zoom_in_clamps_at_max(self):
        zc = ZoomController()
        for _ in range(20):
            zc.zoom_in()
        assert zc.zoom == constants.MAX_ZOOM
        receiver = MagicMock()
        zc.zoom_changed.connect(receiver)
        assert zc.zoom_in() is False
        assert zc.zoom == constants.MAX_ZOOM
        receiver.assert_not_called()
        assert not zc.can_zoom_in()

    def test_zoom_out_clamps_at_min(self):
        zc = ZoomController()
        for _ in range(30):
            zc.zoom_out()
        assert zc.zoom == constants.MIN_ZOOM
        assert zc.zoom_out() is False
        assert not zc.can_zoom_out()

    def test_zoom_step_is_multiplicative(self):
        zc = ZoomController()
        receiver = MagicMock()
        zc.zoom_changed.connect(receiver)
        zc.zoom_in()
        assert zc.zoom == pytest.approx(1.2)
        assert zc.zoom_percent() == 120
        zc.zoom_out()
        assert zc.zoom == pytest.approx(1.0)
        assert receiver.call_count == 2

    def test_initial_zoom_is_clamped(self):
        assert ZoomController(zoom=10).zoom == constants.MAX_ZOOM

    def test_bound_conversions_follow_zoom(self):
        zc = ZoomController()
        zc.set_zoom(2.0)
        assert zc.time_to_pixels(1) == 60
        assert zc.pixels_to_time(60) == 1

# ---------- Time Marker Generator ----------
class TestTimeMarkers:
    @pytest.mark.parametrize("zoom,interval", [
        (0.1, 5), (0.29, 5), (0.3, 2), (0.59, 2), (0.6, 1), (0.99, 1),
        (1.0, 0.5), (1.99, 0.5), (2.0, 0.2), (2.99, 0.2), (3.0, 0.1), (10, 0.1),
    ])
    def test_interval_table(self, zoom, interval):
        assert get_time_interval(zoom) == interval

    def test_every_whole_second_is_major(self):
        markers = generate_markers(30, 1.0)
        by_time = {m.time: m for m in markers}
        for second in range(31):
            assert by_time[second].is_major
        assert markers[0].time == 0
        assert markers[-1].time == 30
        assert len(markers) == 61

    def test_half_seconds_are_minor(self):
        markers = generate_markers(30, 1.0)
        assert all(not m.is_major for m in markers if m.time % 1)

    def test_labels(self):
        markers = generate_markers(2, 1.0)
        assert [m.label for m in markers] == ["0ms", "500ms", "1s", "1.5s", "2s"]

    @pytest.mark.parametrize("time,label", [
        (100000.5, "100000.5s"), (1000000, "1000000s"), (12.25, "12.25s"), (0.3, "300ms"),
    ])
    def test_long_labels_keep_precision(self, time, label):
        assert format_marker_label(time) == label

    def test_no_float_drift(self):
        markers = generate_markers(1, 2.5)
        assert [m.time for m in markers] == [0, 0.2, 0.4, 0.6, 0.8, 1.0]
        assert markers[3].label == "600ms"

    def test_never_past_duration(self):
        markers = generate_markers(7, 0.2)
        assert [m.time for m in markers] == [0, 5]
        assert all(m.is_major for m in markers)
        fine = generate_markers(10, 3.0)
        assert len(fine) == 101
        assert fine[-1].time == 10

    def test_deterministic(self):
        assert generate_markers(12.5, 1.7) == generate_markers(12.5, 1.7)

    def test_ruler_width(self):
        assert ruler_width(30, 1.0) == 900

# ---------- Data Model ----------
class TestModel:
    def test_from_dict_accepts_camel_case(self, project):
        clip = project.tracks[0].clips[0]
        assert clip.id == "clip-1"
        assert clip.start_time == 0
        assert clip.duration == 4
        assert project.metadata.frame_rate == 30
        assert project.metadata.width == 1920
        assert project.tracks[0].height == 70

    def test_to_dict_uses_external_keys(self, project):
        data = project.tracks[0].clips[1].to_dict()
        assert data['startTime'] == 5
        assert 'start_time' not in data
        assert project.to_dict()['metadata']['frameRate'] == 30

    def test_negative_start_rejected(self, clip_model_factory):
        with pytest.raises(InvalidArgumentError):
            clip_model_factory("X", start=-5, duration=10)

    @pytest.mark.parametrize("duration", [0, -1])
    def test_non_positive_duration_rejected(self, clip_model_factory, duration):
        with pytest.raises(InvalidArgumentError):
            clip_model_factory("X", start=0, duration=duration)

    def test_waveform_range_checked(self, clip_model_factory):
        clip_model_factory("A", start=0, duration=1, clip_type='audio', waveform=[0.0, 0.5, 1.0])
        with pytest.raises(InvalidArgumentError):
            clip_model_factory("B", start=0, duration=1, clip_type='audio', waveform=[0.2, 1.3])

    def test_default_color_by_type(self, clip_model_factory):
        assert clip_model_factory("A", 0, 1, clip_type='effect').color == "#C7B3E5"

    def test_clip_may_exceed_project(self, project):
        clip = ClipModel(id="long", type="video", name="Long", start_time=28, duration=10)
        project.tracks[0].clips.append(clip)
        assert clip.end_time == 38

    def test_track_validation(self):
        with pytest.raises(InvalidArgumentError):
            TrackModel(id="t", type="midi")
        with pytest.raises(InvalidArgumentError):
            TrackModel(id="t", type="audio", height=0)
        assert TrackModel(id="t", type="video").height == 70

    def test_duplicate_clip_ids_rejected(self):
        data = build_initial_project()
        data['tracks'][1]['clips'][0]['id'] = "clip-1"
        with pytest.raises(InvalidArgumentError):
            ProjectModel.from_dict(data)

    def test_project_duration_must_be_positive(self):
        data = build_initial_project()
        data['metadata']['duration'] = 0
        with pytest.raises(InvalidArgumentError):
            ProjectModel.from_dict(data)

    def test_mock_waveform(self):
        wave = generate_mock_waveform(6, seed=3)
        assert len(wave) == 300
        assert all(0.2 <= s <= 0.8 for s in wave)
        assert wave == generate_mock_waveform(6, seed=3)

# ---------- Timeline Operations ----------
def all_clip_ids(project):
    return [c.id for t in project.tracks for c in t.clips]

class TestTrackHitTesting:
    @pytest.mark.parametrize("y,expected", [
        (0, None), (10, None), (30, None),
        (31, "track-1"), (100, "track-1"), (101, "track-2"),
        (150, "track-2"), (151, "track-3"), (250, "track-4"),
        (251, "track-4"), (5000, "track-4"),
    ])
    def test_track_at_position(self, project, y, expected):
        assert track_at_position(y, project.tracks) == expected

    def test_empty_track_list(self):
        assert track_at_position(100, []) is None

    def test_track_top_offset(self, ops):
        assert ops.track_top_offset("track-1") == 33
        assert ops.track_top_offset("track-2") == 103
        assert ops.track_top_offset("track-3") == 153
        with pytest.raises(NotFoundError):
            ops.track_top_offset("track-99")

class TestMoveClip:
    def test_move_between_tracks(self, ops, project):
        before = project.tracks[0].clips[0]
        count = ops.clip_count()
        moved = ops.move_clip("clip-1", "track-1", "track-2", 10.0)
        assert ops.clip_count() == count
        assert "clip-1" not in [c.id for c in project.tracks[0].clips]
        target_ids = [c.id for c in project.tracks[1].clips]
        assert target_ids.count("clip-1") == 1
        assert target_ids[-1] == "clip-1"
        assert moved.start_time == 10.0
        for attr in ("id", "name", "type", "color", "duration", "metadata"):
            assert getattr(moved, attr) == getattr(before, attr)
        assert ops.find_track_containing_clip("clip-1") == "track-2"

    def test_reposition_on_same_track(self, ops, project):
        ops.move_clip("clip-1", "track-1", "track-1", 12.5)
        assert [c.id for c in project.tracks[0].clips] == ["clip-2", "clip-1"]
        assert ops.get_clip("clip-1").start_time == 12.5

    def test_signals(self, ops):
        moved_rx, changed_rx = MagicMock(), MagicMock()
        ops.clip_moved.connect(moved_rx)
        ops.data_changed.connect(changed_rx)
        ops.move_clip("clip-3", "track-2", "track-4", 1.5)
        moved_rx.assert_called_once_with("clip-3", "track-2", "track-4", 1.5)
        changed_rx.assert_called_once()

    def test_negative_start_is_contract_violation(self, ops, project):
        snapshot = all_clip_ids(project)
        with pytest.raises(InvalidArgumentError):
            ops.move_clip("clip-1", "track-1", "track-2", -0.1)
        assert all_clip_ids(project) == snapshot

    @pytest.mark.parametrize("clip_id,src,dst", [
        ("clip-99", "track-1", "track-2"),
        ("clip-3", "track-1", "track-2"),
        ("clip-1", "track-99", "track-2"),
        ("clip-1", "track-1", "track-99"),
    ])
    def test_not_found_leaves_project_untouched(self, ops, project, clip_id, src, dst):
        snapshot = all_clip_ids(project)
        with pytest.raises(NotFoundError):
            ops.move_clip(clip_id, src, dst, 1.0)
        assert all_clip_ids(project) == snapshot

    def test_type_mismatch_allowed_by_default(self, ops):
        ops.move_clip("clip-1", "track-1", "track-2", 0.0)
        assert ops.find_track_containing_clip("clip-1") == "track-2"

    def test_strict_track_types(self, project):
        strict = TimelineOperations(project, enforce_track_types=True)
        with pytest.raises(InvalidArgumentError):
            strict.move_clip("clip-1", "track-1", "track-2", 0.0)
        strict.move_clip("clip-2", "track-1", "track-1", 9.0)

    def test_find_unknown_clip(self, ops):
        with pytest.raises(NotFoundError):
            ops.find_track_containing_clip("nope")

    def test_content_queries(self, ops):
        assert ops.get_content_end() == 12
        assert [c.id for _, c in ops.clips_at(3.5)] == ["clip-1", "clip-3", "clip-5", "clip-6"]
        assert ops.get_state()[0]['clips'][0]['id'] == "clip-1"
