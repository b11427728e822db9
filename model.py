from dataclasses import dataclass, field, fields, asdict
import uuid
from errors import InvalidArgumentError
import constants

CLIP_ALIASES = {'startTime': 'start_time', 'dur': 'duration'}
TRACK_ALIASES = {'displayHeight': 'height'}
META_ALIASES = {'frameRate': 'frame_rate'}


def _rename_keys(data, aliases):
    data = dict(data)
    for old, new in aliases.items():
        if old in data and new not in data:
            data[new] = data.pop(old)
    return data


@dataclass
class ClipModel:
    type: str
    name: str
    start_time: float
    duration: float
    color: str = None
    volume: float = None
    waveform: list = None
    metadata: dict = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if self.start_time is None or self.start_time < 0:
            raise InvalidArgumentError(f"Clip {self.id}: start_time must be >= 0, got {self.start_time}")
        if self.duration is None or self.duration <= 0:
            raise InvalidArgumentError(f"Clip {self.id}: duration must be > 0, got {self.duration}")
        if self.waveform is not None:
            for sample in self.waveform:
                if not 0.0 <= sample <= 1.0:
                    raise InvalidArgumentError(f"Clip {self.id}: waveform sample {sample} outside [0, 1]")
        if self.color is None:
            cfg = constants.CLIP_TYPE_CONFIG.get(self.type)
            self.color = cfg['default_color'] if cfg else "#888888"

    @property
    def end_time(self):
        return self.start_time + self.duration

    @classmethod
    def from_dict(cls, data):
        data = _rename_keys(data, CLIP_ALIASES)
        valid_keys = {f.name for f in fields(cls)}
        filtered_args = {k: v for k, v in data.items() if k in valid_keys}
        for key in ('type', 'name', 'start_time', 'duration'):
            if key not in filtered_args:
                raise InvalidArgumentError(f"Clip data missing '{key}': {data.get('id', '?')}")
        if filtered_args.get('waveform') is not None:
            filtered_args['waveform'] = list(filtered_args['waveform'])
        return cls(**filtered_args)

    def to_dict(self):
        data = asdict(self)
        data['startTime'] = data.pop('start_time')
        return data


@dataclass
class TrackModel:
    id: str
    type: str
    name: str = ""
    height: float = None
    muted: bool = False
    locked: bool = False
    clips: list = field(default_factory=list)

    def __post_init__(self):
        if self.type not in constants.TRACK_TYPES:
            raise InvalidArgumentError(f"Track {self.id}: unknown type '{self.type}'")
        if self.height is None:
            self.height = constants.TRACK_TYPE_CONFIG[self.type]['default_height']
        if self.height <= 0:
            raise InvalidArgumentError(f"Track {self.id}: height must be positive, got {self.height}")

    def index_of(self, clip_id):
        for i, clip in enumerate(self.clips):
            if clip.id == clip_id:
                return i
        return -1

    @classmethod
    def from_dict(cls, data):
        data = _rename_keys(data, TRACK_ALIASES)
        if 'id' not in data or 'type' not in data:
            raise InvalidArgumentError(f"Track data needs 'id' and 'type': {data}")
        clips = [ClipModel.from_dict(c) for c in data.get('clips', [])]
        return cls(
            id=data['id'],
            type=data['type'],
            name=data.get('name', ""),
            height=data.get('height'),
            muted=bool(data.get('muted', False)),
            locked=bool(data.get('locked', False)),
            clips=clips,
        )

    def to_dict(self):
        return {
            'id': self.id, 'type': self.type, 'name': self.name, 'height': self.height,
            'muted': self.muted, 'locked': self.locked,
            'clips': [c.to_dict() for c in self.clips],
        }


@dataclass
class ProjectMetadata:
    duration: float
    name: str = "Untitled Project"
    frame_rate: float = 30
    width: int = 1920
    height: int = 1080

    def __post_init__(self):
        if self.duration is None or self.duration <= 0:
            raise InvalidArgumentError(f"Project duration must be > 0, got {self.duration}")

    @classmethod
    def from_dict(cls, data):
        data = _rename_keys(data, META_ALIASES)
        if 'duration' not in data:
            raise InvalidArgumentError("Project metadata missing 'duration'")
        res = data.get('resolution') or {}
        return cls(
            duration=data['duration'],
            name=data.get('name', "Untitled Project"),
            frame_rate=data.get('frame_rate', 30),
            width=res.get('width', 1920),
            height=res.get('height', 1080),
        )

    def to_dict(self):
        return {
            'name': self.name, 'duration': self.duration, 'frameRate': self.frame_rate,
            'resolution': {'width': self.width, 'height': self.height},
        }


@dataclass
class ProjectModel:
    metadata: ProjectMetadata
    tracks: list = field(default_factory=list)

    def __post_init__(self):
        track_ids, clip_ids = set(), set()
        for track in self.tracks:
            if track.id in track_ids:
                raise InvalidArgumentError(f"Duplicate track id '{track.id}'")
            track_ids.add(track.id)
            for clip in track.clips:
                if clip.id in clip_ids:
                    raise InvalidArgumentError(f"Clip id '{clip.id}' appears more than once")
                clip_ids.add(clip.id)

    @property
    def duration(self):
        return self.metadata.duration

    @classmethod
    def from_dict(cls, data):
        if 'metadata' not in data:
            raise InvalidArgumentError("Project data missing 'metadata'")
        return cls(
            metadata=ProjectMetadata.from_dict(data['metadata']),
            tracks=[TrackModel.from_dict(t) for t in data.get('tracks', [])],
        )

    def to_dict(self):
        return {'metadata': self.metadata.to_dict(), 'tracks': [t.to_dict() for t in self.tracks]}
