import pytest
from engine.core.system import System, RenderSystem
from engine.core.entity import Entity
from engine.core.component import Component


class Position(Component):
    x: float = 0.0


class Velocity(Component):
    vx: float = 0.0


class MovementSystem(System):
    required_components = [Position, Velocity]

    def process_entity(self, entity, dt):
        pos = entity.get(Position)
        vel = entity.get(Velocity)
        pos.x += vel.vx * dt


class RecordingRenderSystem(RenderSystem):
    required_components = [Position]

    def __init__(self):
        super().__init__()
        self.rendered = []

    def render_entity(self, entity, alpha):
        self.rendered.append(entity)


def test_system_processing(world):
    # Entity with required matching components
    e1 = Entity()
    e1.add(Position(x=0))
    e1.add(Velocity(vx=10))
    world.add_entity(e1)

    # Entity missing one component
    e2 = Entity()
    e2.add(Position(x=0))
    world.add_entity(e2)

    system = MovementSystem()
    world.add_system(system)

    world.update(1.0)

    assert e1.get(Position).x == 10.0
    assert e2.get(Position).x == 0.0


def test_inactive_entities_are_skipped(world):
    e = world.create_entity()
    e.add(Position(x=0))
    e.add(Velocity(vx=10))
    e.active = False

    world.add_system(MovementSystem())
    world.update(1.0)

    assert e.get(Position).x == 0.0


def test_disabled_system_does_not_run(world):
    e = world.create_entity()
    e.add(Position(x=0))
    e.add(Velocity(vx=10))

    system = MovementSystem()
    system.enabled = False
    world.add_system(system)
    world.update(1.0)

    assert e.get(Position).x == 0.0


def test_system_add_remove(world):
    system = MovementSystem()

    world.add_system(system)
    assert system.world is world
    assert world.get_system(MovementSystem) is system

    world.remove_system(system)
    with pytest.raises(RuntimeError):
        _ = system.world


def test_render_system_only_renders(world):
    e = world.create_entity()
    e.add(Position())

    system = RecordingRenderSystem()
    world.add_system(system)

    world.update(1.0)
    assert system.rendered == []

    world.render(0.5)
    assert system.rendered == [e]
