import math
import random


def generate_mock_waveform(duration, seed=None):
    """Stand-in amplitude samples (50 per second, range 0.2-0.8)."""
    rng = random.Random(seed)
    return [rng.random() * 0.6 + 0.2 for _ in range(math.floor(duration * 50))]


def build_initial_project(seed=0):
    """The sample project loaded when no project file is given."""
    return {
        'metadata': {
            'name': "Untitled Project",
            'duration': 30,
            'frameRate': 30,
            'resolution': {'width': 1920, 'height': 1080},
        },
        'tracks': [
            {
                'id': "track-1", 'type': "video", 'name': "Video Track 1", 'height': 70,
                'muted': False, 'locked': False,
                'clips': [
                    {'id': "clip-1", 'type': "video", 'name': "Video 1", 'startTime': 0, 'duration': 4,
                     'color': "#FF6B6B", 'metadata': {'source': "video1.mp4", 'inPoint': 0, 'outPoint': 4}},
                    {'id': "clip-2", 'type': "video", 'name': "Video 2", 'startTime': 5, 'duration': 3,
                     'color': "#4ECDC4", 'metadata': {'source': "video2.mp4", 'inPoint': 0, 'outPoint': 3}},
                ],
            },
            {
                'id': "track-2", 'type': "audio", 'name': "Audio Track 1", 'height': 50,
                'muted': False, 'locked': False,
                'clips': [
                    {'id': "clip-3", 'type': "audio", 'name': "Audio 1", 'startTime': 1, 'duration': 6,
                     'color': "#95E77E", 'volume': 1.0, 'waveform': generate_mock_waveform(6, seed),
                     'metadata': {'source': "audio1.mp3", 'inPoint': 0, 'outPoint': 6}},
                    {'id': "clip-4", 'type': "audio", 'name': "Audio 2", 'startTime': 8, 'duration': 4,
                     'color': "#FFE66D", 'volume': 1.0, 'waveform': generate_mock_waveform(4, seed + 1),
                     'metadata': {'source': "audio2.mp3", 'inPoint': 0, 'outPoint': 4}},
                ],
            },
            {
                'id': "track-3", 'type': "text", 'name': "Text Track 1", 'height': 50,
                'muted': False, 'locked': False,
                'clips': [
                    {'id': "clip-5", 'type': "text", 'name': "Title", 'startTime': 2, 'duration': 5,
                     'color': "#A8E6CF",
                     'metadata': {'text': "Title", 'fontSize': 48, 'fontFamily': "Arial",
                                  'color': "#FFFFFF", 'position': {'x': 100, 'y': 200}}},
                ],
            },
            {
                'id': "track-4", 'type': "effects", 'name': "Effects Track 1", 'height': 50,
                'muted': False, 'locked': False,
                'clips': [
                    {'id': "clip-6", 'type': "effect", 'name': "Fade In", 'startTime': 3, 'duration': 2,
                     'color': "#C7B3E5",
                     'metadata': {'effectType': "fadeIn", 'parameters': {'duration': 1, 'ease': "ease-in-out"}}},
                ],
            },
        ],
    }
