"""Game scenes."""

from ascii_rpg.scenes.overworld import OverworldScene
from ascii_rpg.scenes.battle import BattleScene
from ascii_rpg.scenes.fade import FadeScene

__all__ = [
    "OverworldScene",
    "BattleScene",
    "FadeScene",
]
