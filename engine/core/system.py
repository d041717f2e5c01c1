"""
System base class for logic processors.

Systems process entities that carry a given set of components.

Usage:
    class BlinkSystem(System):
        required_components = [Glyph]

        def process_entity(self, entity: Entity, dt: float) -> None:
            glyph = entity.get(Glyph)
            glyph.visible = not glyph.visible
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Iterator

from engine.core.component import Component

if TYPE_CHECKING:
    from engine.core.entity import Entity
    from engine.core.world import World


class System(ABC):
    """
    Base class for all systems.

    Override required_components to pick entities and process_entity
    to act on each of them. Systems that work on a single context
    object instead override update().
    """

    required_components: ClassVar[list[type[Component]]] = []

    # Higher runs earlier
    priority: ClassVar[int] = 0

    enabled: bool = True

    def __init__(self):
        self._world: World | None = None

    @property
    def world(self) -> World:
        """Get the world this system belongs to."""
        if self._world is None:
            raise RuntimeError(f"System {self.__class__.__name__} not attached to world")
        return self._world

    def on_add(self, world: World) -> None:
        """Called when system is added to a world."""
        self._world = world

    def on_remove(self) -> None:
        """Called when system is removed from a world."""
        self._world = None

    def get_entities(self) -> Iterator[Entity]:
        """Get entities that match this system's required components."""
        if not self._world:
            return iter([])
        if not self.required_components:
            return iter(self._world.entities)
        return self._world.get_entities_with(*self.required_components)

    def update(self, dt: float) -> None:
        """
        Update this system.

        Default implementation calls process_entity for each active
        matching entity.
        """
        if not self.enabled:
            return

        for entity in list(self.get_entities()):
            if entity.active:
                self.process_entity(entity, dt)

    @abstractmethod
    def process_entity(self, entity: Entity, dt: float) -> None:
        """Process a single entity."""

    def __repr__(self) -> str:
        required = ", ".join(c.__name__ for c in self.required_components)
        return f"{self.__class__.__name__}(requires=[{required}])"


class RenderSystem(System):
    """
    Base class for render systems.

    Render systems only read component data and receive an
    interpolation alpha instead of a delta time.
    """

    def update(self, dt: float) -> None:
        """Render systems don't use update - use render instead."""

    def process_entity(self, entity: Entity, dt: float) -> None:
        """Render systems don't use process_entity - use render_entity instead."""

    def render(self, alpha: float) -> None:
        """Render every active matching entity."""
        if not self.enabled:
            return

        self.pre_render(alpha)
        for entity in self.get_entities():
            if entity.active:
                self.render_entity(entity, alpha)

    def pre_render(self, alpha: float) -> None:
        """Called before rendering entities."""

    @abstractmethod
    def render_entity(self, entity: Entity, alpha: float) -> None:
        """Render a single entity."""
