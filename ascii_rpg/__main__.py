"""
Entry point.

Usage:
    python -m ascii_rpg
    python -m ascii_rpg --map assets/map.txt --tuning tuning.json --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random

from engine.audio import AudioManager
from engine.core import Game, GameConfig
from ascii_rpg.audio import GameAudioController
from ascii_rpg.config import load_tuning
from ascii_rpg.modes import ModeHost
from ascii_rpg.scenes import BattleScene, FadeScene, OverworldScene
from ascii_rpg.world import load_map


def main() -> None:
    parser = argparse.ArgumentParser(prog="ascii_rpg", description="Tile-based ASCII RPG")
    parser.add_argument("--map", default=None, help="Path to the map text file (default: <asset_dir>/map.txt)")
    parser.add_argument("--tuning", default=None, help="Path to a JSON tuning file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for enemy selection")
    parser.add_argument("--debug", action="store_true", help="Log battle state transitions")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    tuning = load_tuning(args.tuning)
    tile_map = load_map(args.map or tuning.asset("map.txt"))
    rng = random.Random(args.seed)

    game = Game(GameConfig(title="ASCII RPG"))

    audio = AudioManager(game.event_bus, volume=tuning.volume)
    audio.init()
    audio_controller = GameAudioController(audio, game.event_bus, tuning)

    modes = ModeHost(
        game.scene_manager,
        game.input,
        lambda: BattleScene(game, modes, tuning, overworld.world, rng),
        lambda: FadeScene(game, tuning.fade_duration),
    )
    overworld = OverworldScene(game, modes, tuning, tile_map)
    game.scene_manager.push(overworld)

    audio_controller.start()
    game.run()


if __name__ == "__main__":
    main()
