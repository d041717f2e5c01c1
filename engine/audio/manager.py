"""
Core Audio Manager.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from engine.audio.music import MusicPlayer
from engine.core.events import EventBus, AudioEvent


logger = logging.getLogger(__name__)


class AudioManager:
    """
    Central audio manager for the engine.

    Handles:
    - Background music via MusicPlayer (pausable, resumes in place)
    - One looping track on a reserved channel that plays over a paused BGM
    - SFX caching and playback
    - A single master volume applied to all of the above
    """

    LOOP_CHANNEL = 0

    def __init__(self, event_bus: EventBus | None = None, volume: float = 1.0):
        self.music = MusicPlayer()
        self.event_bus = event_bus

        self._master_volume: float = max(0.0, min(1.0, volume))
        self._sound_cache: dict[str, pygame.mixer.Sound] = {}
        self._loop_channel: pygame.mixer.Channel | None = None
        self._loop_track: str = ""
        self._initialized: bool = False

    def init(self, frequency: int = 44100, size: int = -16, channels: int = 2, buffer: int = 512) -> None:
        """Initialize the audio system."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=frequency, size=size, channels=channels, buffer=buffer)
            pygame.mixer.set_num_channels(16)
            pygame.mixer.set_reserved(1)
            self._loop_channel = pygame.mixer.Channel(self.LOOP_CHANNEL)
            self._initialized = True
            self._apply_volume()
            logger.info("Audio system initialized.")
        except pygame.error as e:
            logger.error("Failed to initialize audio system: %s", e)

    @property
    def initialized(self) -> bool:
        return self._initialized

    # --- Volume Control ---

    @property
    def master_volume(self) -> float:
        return self._master_volume

    def set_master_volume(self, volume: float) -> None:
        """Set master volume, clamped to 0.0 - 1.0."""
        self._master_volume = max(0.0, min(1.0, volume))
        self._apply_volume()

    def _apply_volume(self) -> None:
        self.music.volume = self._master_volume
        if self._loop_channel is not None:
            self._loop_channel.set_volume(self._master_volume)

    # --- BGM ---

    def play_bgm(self, file_path: str, loop: bool = True, fade_ms: int = 0) -> None:
        """Play background music."""
        loops = -1 if loop else 0
        if self.music.play(file_path, loops=loops, fade_ms=fade_ms) and self.event_bus:
            self.event_bus.publish(AudioEvent.BGM_STARTED, file=file_path)

    def pause_bgm(self) -> None:
        """Pause background music, keeping its position."""
        if self.music.is_paused:
            return
        self.music.pause()
        if self.music.is_paused and self.event_bus:
            self.event_bus.publish(AudioEvent.BGM_PAUSED, file=self.music.current_track)

    def resume_bgm(self) -> None:
        """Resume paused background music."""
        if not self.music.is_paused:
            return
        self.music.unpause()
        if self.event_bus:
            self.event_bus.publish(AudioEvent.BGM_RESUMED, file=self.music.current_track)

    # --- Loop channel ---

    def play_loop(self, file_path: str) -> None:
        """Start a looping track on the reserved channel."""
        sound = self._get_sound(file_path)
        if sound is None or self._loop_channel is None:
            return
        self._loop_channel.set_volume(self._master_volume)
        self._loop_channel.play(sound, loops=-1)
        self._loop_track = file_path

    def stop_loop(self) -> None:
        """Stop the looping track, if any."""
        if self._loop_channel is not None and self._loop_track:
            self._loop_channel.stop()
        self._loop_track = ""

    @property
    def loop_track(self) -> str:
        return self._loop_track

    # --- SFX ---

    def _get_sound(self, file_path: str) -> pygame.mixer.Sound | None:
        """Load or retrieve sound from cache."""
        if not self._initialized:
            return None

        if file_path not in self._sound_cache:
            if not Path(file_path).exists():
                logger.warning("Audio file not found: %s", file_path)
                return None
            try:
                self._sound_cache[file_path] = pygame.mixer.Sound(file_path)
            except pygame.error as e:
                logger.error("Failed to load sound %s: %s", file_path, e)
                return None

        return self._sound_cache[file_path]

    def play_sfx(self, file_path: str, volume: float = 1.0) -> pygame.mixer.Channel | None:
        """
        Play a sound effect once.

        Returns:
            The channel used, or None if the sound could not be played.
        """
        sound = self._get_sound(file_path)
        if not sound:
            return None

        channel = pygame.mixer.find_channel(True)
        if not channel:
            return None

        channel.set_volume(self._master_volume * volume)
        channel.play(sound)

        if self.event_bus:
            self.event_bus.publish(AudioEvent.SFX_PLAYED, file=file_path)

        return channel
