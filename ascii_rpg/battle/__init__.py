"""
Turn-based battles.

A battle is one BattleContext driven by a BattleSystem inside the
battle scene's World.
"""

from ascii_rpg.battle.states import BattleState, ATTACK_STATES
from ascii_rpg.battle.events import CombatEvent
from ascii_rpg.battle.errors import CombatInvariantError
from ascii_rpg.battle.intents import FightIntent, IntentQueue
from ascii_rpg.battle.resolver import FightResolver, resolve_damage
from ascii_rpg.battle.effects import AttackEffectState, AttackEffectScheduler
from ascii_rpg.battle.menu import MenuOption, MenuSelector, MenuView
from ascii_rpg.battle.rewards import RewardOutcome, grant_experience, apply_level_up
from ascii_rpg.battle.displays import HealthDisplays
from ascii_rpg.battle.enemies import draw_enemy_kind, spawn_enemy
from ascii_rpg.battle.context import BattleContext, BattleLayout, find_single
from ascii_rpg.battle.system import BattleSystem

__all__ = [
    "BattleState",
    "ATTACK_STATES",
    "CombatEvent",
    "CombatInvariantError",
    "FightIntent",
    "IntentQueue",
    "FightResolver",
    "resolve_damage",
    "AttackEffectState",
    "AttackEffectScheduler",
    "MenuOption",
    "MenuSelector",
    "MenuView",
    "RewardOutcome",
    "grant_experience",
    "apply_level_up",
    "HealthDisplays",
    "draw_enemy_kind",
    "spawn_enemy",
    "BattleContext",
    "BattleLayout",
    "find_single",
    "BattleSystem",
]
