import pygame
import pytest

from engine.graphics.ascii import AsciiRenderer, WHITE
from engine.graphics.camera import Camera
from ascii_rpg.components import EncounterTracker, EncounterZone, Player, TileCollider, Transform
from ascii_rpg.modes import GameMode
from ascii_rpg.world import EncounterSystem, PlayerMovementSystem


def add_tile(world, tuning, component, col, row):
    renderer = AsciiRenderer(world, tuning.tile_size)
    size = tuning.tile_size
    tile_id = renderer.spawn_sprite(ord("~"), WHITE, (col * size, row * size, 0))
    world.get_entity(tile_id).add(component)


class TestEncounter:
    @pytest.fixture
    def encounters(self, overworld_world, tuning, modes, player):
        add_tile(overworld_world, tuning, EncounterZone(), 0, 0)
        overworld_world.add_system(EncounterSystem(modes, tuning))
        return overworld_world

    def test_no_battle_below_threshold(self, encounters, player, modes):
        for _ in range(3):
            encounters.update(0.5)

        modes.enter_mode.assert_not_called()
        assert player.get(EncounterTracker).dwell_timer == pytest.approx(1.5)

    def test_battle_at_threshold(self, encounters, player, modes):
        for _ in range(4):
            encounters.update(0.5)

        modes.enter_mode.assert_called_once_with(GameMode.BATTLE)
        assert player.get(EncounterTracker).dwell_timer == 0.0
        assert not player.get(Player).active

    def test_single_request_while_frozen(self, encounters, modes):
        for _ in range(10):
            encounters.update(0.5)

        assert modes.enter_mode.call_count == 1

    def test_leaving_zone_resets_timer(self, encounters, player, modes, tuning):
        encounters.update(1.5)
        player.get(Transform).x = 3 * tuning.tile_size
        encounters.update(0.5)
        assert player.get(EncounterTracker).dwell_timer == 0.0

        player.get(Transform).x = 0.0
        encounters.update(1.5)
        modes.enter_mode.assert_not_called()

    def test_edge_contact_is_not_inside(self, encounters, player, modes, tuning):
        # Hit-box edge exactly on the tile edge
        size = tuning.tile_size
        player.get(Transform).x = size / 2 + size * tuning.hitbox_inset / 2

        encounters.update(5.0)
        modes.enter_mode.assert_not_called()


class TestMovement:
    @pytest.fixture
    def camera(self):
        return Camera(800, 600)

    @pytest.fixture
    def moving(self, overworld_world, tuning, input_handler, camera, player):
        overworld_world.add_system(PlayerMovementSystem(input_handler, tuning, camera))
        return overworld_world

    def test_moves_at_speed(self, moving, keyboard, player):
        keyboard.hold(pygame.K_d)
        moving.update(0.1)

        # 3 tiles per second of 32 pixels
        assert player.get(Transform).x == pytest.approx(9.6)
        assert player.get(Transform).y == 0.0

    def test_diagonal_is_normalized(self, moving, keyboard, player):
        keyboard.hold(pygame.K_w, pygame.K_d)
        moving.update(0.1)

        transform = player.get(Transform)
        assert transform.x == pytest.approx(9.6 * 0.707)
        assert transform.y == pytest.approx(-9.6 * 0.707)

    def test_wall_blocks_movement(self, moving, overworld_world, keyboard, tuning, player):
        add_tile(overworld_world, tuning, TileCollider(), 2, 0)

        keyboard.hold(pygame.K_d)
        for _ in range(10):
            moving.update(0.1)

        assert player.get(Transform).x == pytest.approx(28.8)

    def test_slides_along_wall(self, moving, overworld_world, keyboard, tuning, player):
        add_tile(overworld_world, tuning, TileCollider(), 1, 0)

        keyboard.hold(pygame.K_s, pygame.K_d)
        moving.update(0.1)

        transform = player.get(Transform)
        assert transform.x == 0.0
        assert transform.y > 0.0

    def test_inactive_player_stays(self, moving, keyboard, player):
        player.get(Player).active = False

        keyboard.hold(pygame.K_d)
        moving.update(0.1)

        assert player.get(Transform).x == 0.0

    def test_camera_follows(self, moving, keyboard, camera, player):
        keyboard.hold(pygame.K_s)
        moving.update(0.1)
        camera.update(0.1)

        assert (camera.x, camera.y) == player.get(Transform).position
