"""
Music player wrapper for pygame.mixer.music.

Streams one background track at a time and remembers whether it was
paused, so a track covered by another mode resumes where it stopped.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pygame


logger = logging.getLogger(__name__)


class MusicPlayer:
    """
    Handles background music playback using pygame.mixer.music.

    Features:
    - Streaming playback (OGG/MP3/WAV)
    - Volume control
    - Pause / resume that survives a mode change
    """

    def __init__(self):
        self._volume: float = 1.0
        self._current_track: str = ""
        self._is_paused: bool = False

    @property
    def volume(self) -> float:
        """Get current music volume (0.0 to 1.0)."""
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = max(0.0, min(1.0, value))
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(self._volume)

    @property
    def current_track(self) -> str:
        """Path of the loaded track, empty when nothing was played."""
        return self._current_track

    @property
    def is_paused(self) -> bool:
        return self._is_paused

    def play(self, track_path: str, loops: int = -1, fade_ms: int = 0) -> bool:
        """
        Play a music track.

        Args:
            track_path: Path to the music file
            loops: Number of loops (-1 for infinite)
            fade_ms: Fade in duration in milliseconds

        Returns:
            True if playback started
        """
        if not pygame.mixer.get_init():
            logger.warning("Audio system not initialized, cannot play music.")
            return False

        if not Path(track_path).exists():
            logger.warning("Music file not found: %s", track_path)
            return False

        try:
            pygame.mixer.music.load(track_path)
            pygame.mixer.music.play(loops=loops, fade_ms=fade_ms)
            pygame.mixer.music.set_volume(self._volume)
        except pygame.error as e:
            logger.error("Failed to load music '%s': %s", track_path, e)
            return False

        self._current_track = track_path
        self._is_paused = False
        logger.info("Playing BGM: %s", track_path)
        return True

    def pause(self) -> None:
        """Pause playback."""
        if pygame.mixer.get_init() and self._current_track and not self._is_paused:
            pygame.mixer.music.pause()
            self._is_paused = True

    def unpause(self) -> None:
        """Resume playback."""
        if pygame.mixer.get_init() and self._is_paused:
            pygame.mixer.music.unpause()
            self._is_paused = False
