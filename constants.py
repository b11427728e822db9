BASE_SCALE = 30
RULER_HEIGHT = 30
CLIP_INSET = 3
MIN_CLIP_WIDTH = 40
MIN_ZOOM = 0.1
MAX_ZOOM = 3.0
DEFAULT_ZOOM = 1.0
ZOOM_STEP = 1.2
PLAYHEAD_MARGIN = 100
FRAME_INTERVAL_MS = 16
LOGGER_NAME = "Track_Editor"
TRACK_TYPES = ("video", "audio", "text", "effects")
CLIP_TYPES = ("video", "audio", "text", "image", "effect")
ZOOM_INTERVALS = [
    (0.3, 5),
    (0.6, 2),
    (1.0, 1),
    (2.0, 0.5),
    (3.0, 0.2),
]
FINEST_INTERVAL = 0.1
TRACK_TYPE_CONFIG = {
    "video": {"icon": "🎬", "default_height": 70, "name": "Video Track"},
    "audio": {"icon": "🎵", "default_height": 50, "name": "Audio Track"},
    "text": {"icon": "📝", "default_height": 50, "name": "Text Track"},
    "effects": {"icon": "✨", "default_height": 50, "name": "Effects Track"},
}
CLIP_TYPE_CONFIG = {
    "video": {"icon": "🎬", "default_color": "#FF6B6B", "name": "Video"},
    "audio": {"icon": "🎵", "default_color": "#95E77E", "name": "Audio"},
    "text": {"icon": "📝", "default_color": "#A8E6CF", "name": "Text"},
    "image": {"icon": "🖼️", "default_color": "#FFE66D", "name": "Image"},
    "effect": {"icon": "✨", "default_color": "#C7B3E5", "name": "Effect"},
}
# Clip types each track type accepts when strict placement is enabled.
TRACK_ACCEPTS = {
    "video": ("video", "image"),
    "audio": ("audio",),
    "text": ("text",),
    "effects": ("effect",),
}
CONFIG_DEFAULTS = {
    "base_scale": BASE_SCALE,
    "min_zoom": MIN_ZOOM,
    "max_zoom": MAX_ZOOM,
    "zoom_step": ZOOM_STEP,
    "initial_zoom": DEFAULT_ZOOM,
    "playhead_margin": PLAYHEAD_MARGIN,
    "frame_interval_ms": FRAME_INTERVAL_MS,
    "enforce_track_types": False,
    "log_level": "DEBUG",
}
