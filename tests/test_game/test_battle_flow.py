import pygame
import pytest

from ascii_rpg.battle import (
    BattleContext,
    BattleState,
    CombatEvent,
    CombatInvariantError,
    FightIntent,
    spawn_enemy,
)
from ascii_rpg.battle.menu import HIGHLIGHT_COLOR
from ascii_rpg.components import EnemyKind, PlayerProgression, StatBlock
from ascii_rpg.modes import GameMode
from engine.graphics.ascii import BOX_COLOR

DT = 0.25

S = BattleState


def run_until(world, keyboard, context, state, limit=40):
    """Idle ticks until the battle reaches state."""
    for _ in range(limit):
        if context.state is state:
            return
        keyboard.idle()
        world.update(DT)
    raise AssertionError(f"Battle never reached {state}, stuck in {context.state}")


def press(world, keyboard, key):
    keyboard.tap(key)
    world.update(DT)


def health_text(context, actor):
    return context.renderer.text_of(context.health.handle_of(actor.id))


@pytest.fixture
def recorded(event_bus):
    """Combat events published during the test, in order."""
    events = []

    def record(event):
        events.append(event)

    for event_type in CombatEvent:
        event_bus.subscribe(event_type, record, weak=False)
    return events


def test_battle_starts_in_player_turn(make_battle, world):
    context, _ = make_battle()

    assert context.state is S.PLAYER_TURN
    assert health_text(context, context.player) == "Health: 10"
    assert health_text(context, context.enemy) == "Health: 3"


def test_confirm_fight_queues_one_intent(make_battle, keyboard):
    context, system = make_battle()

    keyboard.tap(pygame.K_RETURN)
    system.process_input()

    assert context.state is S.PLAYER_ATTACK
    assert context.intents.pending() == [
        FightIntent(target=context.enemy.id, damage_amount=2, next_state=S.PLAYER_ATTACK)
    ]


def test_fight_damages_enemy_and_flashes(make_battle, world, keyboard, recorded):
    context, _ = make_battle()

    press(world, keyboard, pygame.K_RETURN)

    assert context.enemy.get(StatBlock).health == 2
    assert health_text(context, context.enemy) == "Health: 2"
    hits = [e for e in recorded if e.type is CombatEvent.HIT]
    assert [(e["target"], e["damage"], e["health"]) for e in hits] == [(context.enemy, 1, 2)]

    run_until(world, keyboard, context, S.PLAYER_TURN)
    assert context.renderer.is_visible(context.enemy.id)
    assert context.player.get(StatBlock).health == 9


def test_bat_battle_history(make_battle, world, keyboard, recorded, modes):
    context, _ = make_battle(EnemyKind.BAT)

    for _ in range(2):
        press(world, keyboard, pygame.K_RETURN)
        run_until(world, keyboard, context, S.PLAYER_TURN)

    press(world, keyboard, pygame.K_RETURN)
    assert context.state is S.REWARD
    assert context.player.get(PlayerProgression).experience == 10
    assert context.renderer.text_of(context.messages[0]) == "+10 EXP"
    assert not context.renderer.is_visible(context.enemy.id)

    rewards = [e for e in recorded if e.type is CombatEvent.REWARD]
    assert len(rewards) == 1
    assert rewards[0]["experience"] == 10
    assert not rewards[0]["leveled_up"]

    press(world, keyboard, pygame.K_RETURN)

    assert context.history == [
        S.PLAYER_TURN, S.PLAYER_ATTACK,
        S.ENEMY_TURN, S.ENEMY_TURN_RESOLVING, S.ENEMY_ATTACK,
        S.PLAYER_TURN, S.PLAYER_ATTACK,
        S.ENEMY_TURN, S.ENEMY_TURN_RESOLVING, S.ENEMY_ATTACK,
        S.PLAYER_TURN, S.PLAYER_ATTACK,
        S.REWARD, S.EXITING,
    ]
    modes.enter_mode.assert_called_once_with(GameMode.OVERWORLD)
    assert context.player.get(StatBlock).health == 8


def test_reward_levels_up(make_battle, world, keyboard):
    context, _ = make_battle(EnemyKind.GHOST)
    context.player.get(PlayerProgression).experience = 40
    context.enemy.get(StatBlock).health = 1

    press(world, keyboard, pygame.K_RETURN)

    assert context.state is S.REWARD
    progression = context.player.get(PlayerProgression)
    assert (progression.experience, progression.level) == (20, 2)
    texts = [context.renderer.text_of(handle) for handle in context.messages]
    assert texts == ["+30 EXP", "LEVEL UP!"]
    assert health_text(context, context.player) == "Health: 12"


def test_player_defeat_and_restore(make_battle, world, keyboard, modes):
    context, _ = make_battle(EnemyKind.GHOST)
    context.player.get(StatBlock).health = 2

    press(world, keyboard, pygame.K_RETURN)
    run_until(world, keyboard, context, S.DEFEAT)

    assert context.player.get(StatBlock).health == 0
    assert S.ENEMY_ATTACK not in context.history
    assert context.renderer.text_of(context.messages[-1]) == "YOU WERE DEFEATED"

    # Nothing happens until confirm
    keyboard.idle()
    world.update(DT)
    assert context.state is S.DEFEAT

    press(world, keyboard, pygame.K_RETURN)

    assert context.state is S.EXITING
    assert context.player.get(StatBlock).health == 10
    modes.enter_mode.assert_called_once_with(GameMode.OVERWORLD)


def test_cancel_from_defeat_restores_health(make_battle, world, keyboard, modes):
    context, _ = make_battle(EnemyKind.GHOST)
    context.player.get(StatBlock).health = 2

    press(world, keyboard, pygame.K_RETURN)
    run_until(world, keyboard, context, S.DEFEAT)
    assert context.player.get(StatBlock).health == 0

    press(world, keyboard, pygame.K_ESCAPE)

    assert context.state is S.EXITING
    assert context.player.get(StatBlock).health == 10
    modes.enter_mode.assert_called_once_with(GameMode.OVERWORLD)


def test_run_exits_battle(make_battle, world, keyboard, modes):
    context, _ = make_battle()

    press(world, keyboard, pygame.K_RIGHT)
    press(world, keyboard, pygame.K_RETURN)

    assert context.state is S.EXITING
    assert context.enemy.get(StatBlock).health == 3
    modes.enter_mode.assert_called_once_with(GameMode.OVERWORLD)


def test_cancel_from_attack_state(make_battle, world, keyboard, modes):
    context, _ = make_battle()
    press(world, keyboard, pygame.K_RETURN)
    assert context.state is S.PLAYER_ATTACK

    press(world, keyboard, pygame.K_ESCAPE)

    assert context.state is S.EXITING
    assert len(context.intents) == 0
    assert context.renderer.is_visible(context.enemy.id)
    assert context.effect.current_shake == 0.0

    # Exiting is final
    press(world, keyboard, pygame.K_RETURN)
    assert context.history[-1] is S.EXITING
    modes.enter_mode.assert_called_once_with(GameMode.OVERWORLD)


def test_cancel_during_enemy_shake(make_battle, world, keyboard, modes):
    context, _ = make_battle(EnemyKind.BAT)
    press(world, keyboard, pygame.K_RETURN)
    run_until(world, keyboard, context, S.ENEMY_ATTACK)
    assert context.effect.current_shake != 0.0

    press(world, keyboard, pygame.K_ESCAPE)

    assert context.state is S.EXITING
    assert context.effect.current_shake == 0.0
    assert context.effect.target_visible
    modes.enter_mode.assert_called_once_with(GameMode.OVERWORLD)


def test_menu_highlight_follows_selection(make_battle, world, keyboard):
    context, _ = make_battle()
    fight_box, run_box = context.menu_view.boxes

    keyboard.idle()
    world.update(DT)
    assert context.renderer.color_of(fight_box) == HIGHLIGHT_COLOR
    assert context.renderer.color_of(run_box) == BOX_COLOR

    press(world, keyboard, pygame.K_LEFT)
    assert context.renderer.color_of(fight_box) == BOX_COLOR
    assert context.renderer.color_of(run_box) == HIGHLIGHT_COLOR


def test_no_highlight_outside_player_turn(make_battle, world, keyboard):
    context, _ = make_battle()

    press(world, keyboard, pygame.K_RETURN)

    for box in context.menu_view.boxes:
        assert context.renderer.color_of(box) == BOX_COLOR


def test_menu_ignored_while_enemy_acts(make_battle, world, keyboard):
    context, _ = make_battle()
    press(world, keyboard, pygame.K_RETURN)

    press(world, keyboard, pygame.K_RIGHT)
    assert context.menu.index == 0


def test_only_oldest_intent_resolves(make_battle, keyboard):
    context, system = make_battle()
    context.intents.push(FightIntent(context.enemy.id, 2, S.PLAYER_ATTACK))
    context.intents.push(FightIntent(context.enemy.id, 9, S.PLAYER_ATTACK))

    system.resolver.resolve(context)

    assert context.enemy.get(StatBlock).health == 2
    assert len(context.intents) == 0


def test_intent_for_unknown_actor(make_battle):
    context, system = make_battle()
    context.intents.push(FightIntent(9999, 2, S.PLAYER_ATTACK))

    with pytest.raises(CombatInvariantError):
        system.resolver.resolve(context)


def test_context_requires_stats(renderer, player, tuning, event_bus, modes):
    enemy = spawn_enemy(renderer, tuning, EnemyKind.BAT, (0.0, -64.0))
    enemy.remove(StatBlock)

    with pytest.raises(CombatInvariantError):
        BattleContext(renderer, player, enemy, tuning, event_bus, modes)


def test_context_rejects_swapped_actors(renderer, player, tuning, event_bus, modes):
    enemy = spawn_enemy(renderer, tuning, EnemyKind.BAT, (0.0, -64.0))

    with pytest.raises(CombatInvariantError):
        BattleContext(renderer, enemy, player, tuning, event_bus, modes)


def test_reward_requires_progression(make_battle, world, keyboard):
    context, _ = make_battle()
    context.player.remove(PlayerProgression)
    context.enemy.get(StatBlock).health = 1

    with pytest.raises(CombatInvariantError):
        press(world, keyboard, pygame.K_RETURN)
