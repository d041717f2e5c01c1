"""
Gameplay tuning.

Every constant the overworld and battle code reads lives on
CombatTuning, so a JSON file can rebalance the game without code
changes:

    {
        "dwell_threshold": 1.5,
        "player": {"health": 12, "attack": 3, "defense": 1}
    }

An "enemies" table replaces the default one and must list every kind.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ascii_rpg.components.actors import EnemyKind


logger = logging.getLogger(__name__)

Color = tuple[float, float, float]


class EnemyProfile(BaseModel):
    """Base stats, looks and reward of one enemy kind."""

    model_config = ConfigDict(extra='forbid')

    health: int = Field(ge=1)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    experience: int = Field(ge=0)
    glyph: int = Field(ge=0, lt=256)
    color: Color = (1.0, 1.0, 1.0)
    weight: int = Field(default=50, ge=0)


class PlayerProfile(BaseModel):
    """Starting stats of the player."""

    model_config = ConfigDict(extra='forbid')

    health: int = Field(default=10, ge=1)
    attack: int = Field(default=2, ge=0)
    defense: int = Field(default=1, ge=0)
    speed: float = Field(default=3.0, ge=0.0)


class LevelUpBonus(BaseModel):
    """Stat increases granted on each level-up."""

    model_config = ConfigDict(extra='forbid')

    max_health: int = Field(default=2, ge=0)
    attack: int = Field(default=1, ge=0)
    defense: int = Field(default=1, ge=0)


def _default_enemies() -> dict[EnemyKind, EnemyProfile]:
    return {
        EnemyKind.BAT: EnemyProfile(
            health=3, attack=2, defense=1, experience=10,
            glyph=ord("b"), color=(0.8, 0.8, 0.8),
        ),
        EnemyKind.GHOST: EnemyProfile(
            health=5, attack=3, defense=1, experience=30,
            glyph=ord("g"), color=(0.7, 0.9, 1.0),
        ),
    }


class CombatTuning(BaseModel):
    """
    Gameplay constants.

    Attributes:
        tile_size: World pixels per map tile
        hitbox_inset: Fraction of a tile the player's hit-box covers
        dwell_threshold: Seconds on encounter tiles before a battle starts
        attack_duration: Seconds an attack effect holds the battle
        flash_period: Seconds between enemy visibility toggles
        shake_amplitude: Peak horizontal camera offset in world pixels
        fade_duration: Seconds the screen takes to fade in after a mode change
        experience_threshold: Experience consumed by one level-up
        level_up: Stat bonus per level-up
        player: Player starting stats
        enemies: Enemy table, drawn by weight
        volume: Starting master volume
        volume_step: Change per volume key press
        asset_dir: Root directory for maps and audio
    """

    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    tile_size: float = Field(default=32.0, gt=0)
    hitbox_inset: float = Field(default=0.9, gt=0, le=1.0)
    dwell_threshold: float = Field(default=2.0, gt=0)

    attack_duration: float = Field(default=0.7, gt=0)
    flash_period: float = Field(default=0.1, gt=0)
    shake_amplitude: float = Field(default=8.0, ge=0)
    fade_duration: float = Field(default=0.4, ge=0)

    experience_threshold: int = Field(default=50, gt=0)
    level_up: LevelUpBonus = Field(default_factory=LevelUpBonus)

    player: PlayerProfile = Field(default_factory=PlayerProfile)
    enemies: dict[EnemyKind, EnemyProfile] = Field(default_factory=_default_enemies)

    volume: float = Field(default=0.5, ge=0.0, le=1.0)
    volume_step: float = Field(default=0.1, gt=0.0)

    asset_dir: str = "assets"

    @model_validator(mode="after")
    def _enemy_table_complete(self) -> CombatTuning:
        missing = [kind.value for kind in EnemyKind if kind not in self.enemies]
        if missing:
            raise ValueError(f"enemy table is missing {', '.join(missing)}")
        if sum(profile.weight for profile in self.enemies.values()) <= 0:
            raise ValueError("enemy weights must not all be zero")
        return self

    def asset(self, *parts: str) -> str:
        """Path of a file under the asset directory."""
        return str(Path(self.asset_dir).joinpath(*parts))


def load_tuning(path: Path | str | None = None) -> CombatTuning:
    """
    Load tuning from a JSON file.

    A missing file falls back to the defaults with a warning. Malformed
    JSON or invalid values raise (json.JSONDecodeError or
    pydantic.ValidationError), since a half-applied balance file is
    worse than none.
    """
    if path is None:
        return CombatTuning()

    config_file = Path(path)
    if not config_file.exists():
        logger.warning("Tuning file not found: %s, using defaults", config_file)
        return CombatTuning()

    with open(config_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    tuning = CombatTuning.model_validate(data)
    logger.info("Loaded tuning from %s", config_file)
    return tuning
