"""
Attack effects - the enemy flash and the camera shake that hold the
battle in an attack state for a fixed time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ascii_rpg.battle.states import BattleState


@dataclass
class AttackEffectState:
    """
    Timing of the attack effect currently playing.

    Attributes:
        duration: Seconds an attack state is held
        flash_period: Seconds between visibility toggles of the enemy
        shake_amplitude: Peak horizontal camera offset
        elapsed: Seconds since the attack state was entered
        flash_elapsed: Seconds since the last visibility toggle
        target_visible: Whether the flashing enemy is currently drawn
        current_shake: Horizontal camera offset this tick
    """
    duration: float
    flash_period: float
    shake_amplitude: float
    elapsed: float = 0.0
    flash_elapsed: float = 0.0
    target_visible: bool = True
    current_shake: float = 0.0

    @property
    def finished(self) -> bool:
        return self.elapsed >= self.duration

    def reset(self) -> None:
        """Start a new effect from zero."""
        self.elapsed = 0.0
        self.flash_elapsed = 0.0
        self.target_visible = True
        self.current_shake = 0.0

    def settle(self) -> None:
        """Leave nothing hidden or offset once the effect stops."""
        self.target_visible = True
        self.current_shake = 0.0


class AttackEffectScheduler:
    """
    Advances the attack effect of the current state.

    PLAYER_ATTACK flashes the enemy; ENEMY_ATTACK shakes the camera
    through one full sine period. Any other state is left alone.
    """

    def update(self, effect: AttackEffectState, state: BattleState, dt: float) -> bool:
        """
        Advance the effect by dt.

        Returns:
            True on the tick the effect completes
        """
        if not state.is_attack:
            return False

        effect.elapsed += dt

        if state is BattleState.PLAYER_ATTACK:
            effect.flash_elapsed += dt
            while effect.flash_elapsed >= effect.flash_period:
                effect.flash_elapsed -= effect.flash_period
                effect.target_visible = not effect.target_visible
        else:
            fraction = min(effect.elapsed / effect.duration, 1.0)
            effect.current_shake = effect.shake_amplitude * math.sin(2 * math.pi * fraction)

        if effect.finished:
            effect.settle()
            return True
        return False
