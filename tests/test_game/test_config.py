import json
import random

import pytest
from pydantic import ValidationError

from ascii_rpg.battle import draw_enemy_kind
from ascii_rpg.components import EnemyKind
from ascii_rpg.config import CombatTuning, load_tuning


def test_defaults():
    tuning = CombatTuning()

    assert tuning.dwell_threshold == 2.0
    assert tuning.attack_duration == 0.7
    assert tuning.fade_duration == 0.4
    assert tuning.experience_threshold == 50
    bat = tuning.enemies[EnemyKind.BAT]
    assert (bat.health, bat.attack, bat.defense, bat.experience) == (3, 2, 1, 10)
    ghost = tuning.enemies[EnemyKind.GHOST]
    assert (ghost.health, ghost.attack, ghost.defense, ghost.experience) == (5, 3, 1, 30)


def test_asset_path():
    assert CombatTuning(asset_dir="data").asset("audio", "hit.wav").replace("\\", "/") == "data/audio/hit.wav"


def test_load_without_path():
    assert load_tuning() == CombatTuning()


def test_missing_file_falls_back(tmp_path, caplog):
    tuning = load_tuning(tmp_path / "missing.json")

    assert tuning == CombatTuning()
    assert "Tuning file not found" in caplog.text


def test_load_partial_file(tmp_path):
    path = tmp_path / "tuning.json"
    path.write_text(json.dumps({"dwell_threshold": 1.5, "player": {"health": 12}}))

    tuning = load_tuning(path)

    assert tuning.dwell_threshold == 1.5
    assert tuning.player.health == 12
    assert tuning.player.attack == 2


def test_invalid_value_raises(tmp_path):
    path = tmp_path / "tuning.json"
    path.write_text(json.dumps({"attack_duration": 0}))

    with pytest.raises(ValidationError):
        load_tuning(path)


def test_unknown_key_raises(tmp_path):
    path = tmp_path / "tuning.json"
    path.write_text(json.dumps({"dwell": 1.0}))

    with pytest.raises(ValidationError):
        load_tuning(path)


def test_incomplete_enemy_table():
    bat = CombatTuning().enemies[EnemyKind.BAT]

    with pytest.raises(ValidationError):
        CombatTuning(enemies={EnemyKind.BAT: bat})


def test_all_zero_weights():
    enemies = {
        kind: profile.model_copy(update={"weight": 0})
        for kind, profile in CombatTuning().enemies.items()
    }

    with pytest.raises(ValidationError):
        CombatTuning(enemies=enemies)


def test_enemy_draw_follows_weights():
    defaults = CombatTuning().enemies
    tuning = CombatTuning(enemies={
        EnemyKind.BAT: defaults[EnemyKind.BAT],
        EnemyKind.GHOST: defaults[EnemyKind.GHOST].model_copy(update={"weight": 0}),
    })
    rng = random.Random(3)

    assert {draw_enemy_kind(rng, tuning) for _ in range(20)} == {EnemyKind.BAT}


def test_enemy_draw_sees_both_kinds():
    rng = random.Random(7)
    kinds = {draw_enemy_kind(rng, CombatTuning()) for _ in range(100)}

    assert kinds == set(EnemyKind)
