"""
Game Audio Controller - wires game events to audio playback.

Subscribes to battle and input events and drives the AudioManager:
- Overworld music loops from the start of the game
- Entering a battle pauses it and loops the battle track over it
- Leaving a battle stops the battle track and resumes the overworld music
- Hits and rewards play their sound effects
- Up/Down change the master volume in steps
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from engine.core.actions import Action
from engine.core.events import Event, EventBus
from engine.input.handler import InputEvent
from ascii_rpg.battle.events import CombatEvent

if TYPE_CHECKING:
    from engine.audio.manager import AudioManager
    from ascii_rpg.config import CombatTuning


logger = logging.getLogger(__name__)


@dataclass
class AudioConfig:
    """Audio file names, relative to audio_path."""
    audio_path: str = "assets/audio"
    overworld_bgm: str = "bip-bop.ogg"
    battle_bgm: str = "ganxta.ogg"
    hit_sfx: str = "hit.wav"
    reward_sfx: str = "reward.wav"

    def path(self, filename: str) -> str:
        return f"{self.audio_path}/{filename}"


class GameAudioController:
    """
    Central controller for game audio integration.

    Usage:
        audio = AudioManager(game.event_bus, volume=tuning.volume)
        audio.init()
        controller = GameAudioController(audio, game.event_bus, tuning)
        controller.start()
    """

    def __init__(
        self,
        audio_manager: AudioManager,
        event_bus: EventBus,
        tuning: CombatTuning,
        config: AudioConfig | None = None,
    ):
        self.audio = audio_manager
        self.event_bus = event_bus
        self.volume_step = tuning.volume_step
        self.config = config or AudioConfig(audio_path=tuning.asset("audio"))

        self._subscribe_events()

    def _subscribe_events(self) -> None:
        bus = self.event_bus
        bus.subscribe(CombatEvent.BATTLE_STARTED, self._on_battle_started, weak=False)
        bus.subscribe(CombatEvent.BATTLE_ENDED, self._on_battle_ended, weak=False)
        bus.subscribe(CombatEvent.HIT, self._on_hit, weak=False)
        bus.subscribe(CombatEvent.REWARD, self._on_reward, weak=False)
        bus.subscribe(InputEvent.ACTION_PRESSED, self._on_action_pressed, weak=False)

    def start(self) -> None:
        """Start the overworld music."""
        self.audio.play_bgm(self.config.path(self.config.overworld_bgm))

    # Event handlers

    def _on_battle_started(self, event: Event) -> None:
        self.audio.pause_bgm()
        self.audio.play_loop(self.config.path(self.config.battle_bgm))

    def _on_battle_ended(self, event: Event) -> None:
        self.audio.stop_loop()
        self.audio.resume_bgm()

    def _on_hit(self, event: Event) -> None:
        self.audio.play_sfx(self.config.path(self.config.hit_sfx))

    def _on_reward(self, event: Event) -> None:
        self.audio.play_sfx(self.config.path(self.config.reward_sfx))

    def _on_action_pressed(self, event: Event) -> None:
        action = event.get("action")
        if action is Action.VOLUME_UP:
            self.change_volume(self.volume_step)
        elif action is Action.VOLUME_DOWN:
            self.change_volume(-self.volume_step)

    def change_volume(self, delta: float) -> float:
        """Shift the master volume, clamped to 0.0 - 1.0."""
        self.audio.set_master_volume(self.audio.master_volume + delta)
        logger.debug("Volume %.2f", self.audio.master_volume)
        return self.audio.master_volume
