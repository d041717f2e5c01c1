"""Audio module - background music, looping tracks and sound effects."""

from engine.audio.manager import AudioManager
from engine.audio.music import MusicPlayer

__all__ = [
    "AudioManager",
    "MusicPlayer",
]
