from unittest.mock import MagicMock, call

import pytest

from ascii_rpg.modes import GameMode, ModeHost


@pytest.fixture
def host():
    return ModeHost(MagicMock(), MagicMock(), MagicMock(name="battle_factory"))


def test_starts_in_overworld(host):
    assert host.current_mode() is GameMode.OVERWORLD


def test_battle_pushes_fresh_scene(host):
    host.enter_mode(GameMode.BATTLE)

    assert host.current_mode() is GameMode.BATTLE
    host._battle_factory.assert_called_once()
    host.scene_manager.push.assert_called_once_with(host._battle_factory.return_value)
    host.input.clear.assert_called_once()


def test_repeat_request_ignored(host):
    host.enter_mode(GameMode.BATTLE)
    host.enter_mode(GameMode.BATTLE)

    host.scene_manager.push.assert_called_once()
    assert host.input.clear.call_count == 1


def test_overworld_pops_battle(host):
    host.enter_mode(GameMode.BATTLE)
    host.enter_mode(GameMode.OVERWORLD)

    assert host.current_mode() is GameMode.OVERWORLD
    host.scene_manager.pop.assert_called_once()
    assert host.input.clear.call_count == 2


def test_overworld_while_in_overworld(host):
    host.enter_mode(GameMode.OVERWORLD)

    host.scene_manager.pop.assert_not_called()
    host.input.clear.assert_not_called()


def test_transition_covers_every_change():
    manager = MagicMock()
    battle_factory = MagicMock(name="battle_factory")
    fade_factory = MagicMock(name="fade_factory")
    host = ModeHost(manager, MagicMock(), battle_factory, fade_factory)

    host.enter_mode(GameMode.BATTLE)
    host.enter_mode(GameMode.OVERWORLD)

    assert manager.method_calls == [
        call.push(battle_factory.return_value),
        call.push(fade_factory.return_value),
        call.pop(),
        call.push(fade_factory.return_value),
    ]
    assert fade_factory.call_count == 2
