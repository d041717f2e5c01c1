"""
World container for entities and systems.

Each Scene owns one World. The World holds:
- All entities of the scene
- The scene's logic and render systems
- Component and tag indices for fast queries

Usage:
    world = World()
    world.add_system(EncounterSystem(modes, tuning))

    player = world.create_entity("Player")
    player.add(Transform(x=32, y=32))

    # In game loop:
    world.update(dt)
    world.render(alpha)
"""

from __future__ import annotations

from typing import Iterator, TypeVar

from engine.core.entity import Entity
from engine.core.component import Component
from engine.core.system import System, RenderSystem
from engine.core.events import EventBus, EngineEvent


C = TypeVar('C', bound=Component)


class World:
    """
    Container for entities and systems.

    Entity destruction is deferred to the end of update() so systems
    can despawn while iterating.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus or EventBus()

        self._entities: dict[int, Entity] = {}
        self._entities_to_destroy: list[int] = []

        # component_type -> entity ids
        self._component_index: dict[type[Component], set[int]] = {}
        # tag -> entity ids
        self._tag_index: dict[str, set[int]] = {}

        self._systems: list[System] = []
        self._render_systems: list[RenderSystem] = []

    # Entity Management

    def create_entity(self, name: str = "") -> Entity:
        """Create a new entity in this world."""
        entity = Entity(name)
        self._add_entity(entity)
        return entity

    def add_entity(self, entity: Entity) -> Entity:
        """Add an existing entity to this world."""
        if entity.id in self._entities:
            raise ValueError(f"Entity {entity.id} already in world")
        self._add_entity(entity)
        return entity

    def _add_entity(self, entity: Entity) -> None:
        entity._world = self
        self._entities[entity.id] = entity

        for component in entity.components:
            self._index_component(entity, type(component))
        for tag in entity.tags:
            self._index_tag(entity, tag)

        self.event_bus.publish(EngineEvent.ENTITY_CREATED, entity=entity)

    def destroy_entity(self, entity: Entity | int) -> None:
        """
        Mark an entity for destruction.

        The entity is removed at the end of the current update.
        """
        entity_id = entity.id if isinstance(entity, Entity) else entity
        if entity_id not in self._entities:
            return
        if entity_id not in self._entities_to_destroy:
            self._entities_to_destroy.append(entity_id)

    def is_pending_destroy(self, entity_id: int) -> bool:
        """Whether an entity is queued for removal."""
        return entity_id in self._entities_to_destroy

    def _process_destroyed_entities(self) -> None:
        for entity_id in self._entities_to_destroy:
            entity = self._entities.pop(entity_id, None)
            if entity is None:
                continue

            for component in entity.components:
                self._unindex_component(entity, type(component))
            for tag in entity.tags:
                self._unindex_tag(entity, tag)

            entity._world = None
            self.event_bus.publish(EngineEvent.ENTITY_DESTROYED, entity=entity)

        self._entities_to_destroy.clear()

    def get_entity(self, entity_id: int) -> Entity | None:
        """Get entity by ID."""
        return self._entities.get(entity_id)

    @property
    def entities(self) -> Iterator[Entity]:
        """Iterate over all entities."""
        return iter(list(self._entities.values()))

    @property
    def entity_count(self) -> int:
        """Get number of entities."""
        return len(self._entities)

    # Indexing

    def _index_component(self, entity: Entity, component_type: type[Component]) -> None:
        self._component_index.setdefault(component_type, set()).add(entity.id)

    def _unindex_component(self, entity: Entity, component_type: type[Component]) -> None:
        if component_type in self._component_index:
            self._component_index[component_type].discard(entity.id)

    def _on_component_added(self, entity: Entity, component: Component) -> None:
        self._index_component(entity, type(component))
        self.event_bus.publish(
            EngineEvent.COMPONENT_ADDED,
            entity=entity,
            component=component,
        )

    def _on_component_removed(self, entity: Entity, component: Component) -> None:
        self._unindex_component(entity, type(component))
        self.event_bus.publish(
            EngineEvent.COMPONENT_REMOVED,
            entity=entity,
            component=component,
        )

    def _index_tag(self, entity: Entity, tag: str) -> None:
        self._tag_index.setdefault(tag, set()).add(entity.id)

    def _unindex_tag(self, entity: Entity, tag: str) -> None:
        if tag in self._tag_index:
            self._tag_index[tag].discard(entity.id)

    # Queries

    def get_entities_with(self, *component_types: type[Component]) -> Iterator[Entity]:
        """
        Get all entities that have ALL specified components.

        Entities queued for destruction are still returned until the
        end of the update, matching the deferred removal.
        """
        if not component_types:
            return iter([])

        candidate_ids: set[int] | None = None
        for comp_type in component_types:
            ids = self._component_index.get(comp_type)
            if not ids:
                return iter([])
            candidate_ids = set(ids) if candidate_ids is None else candidate_ids & ids

        return iter([
            self._entities[entity_id]
            for entity_id in sorted(candidate_ids or ())
            if entity_id in self._entities
        ])

    def get_entities_with_tag(self, tag: str) -> Iterator[Entity]:
        """Get all entities with a specific tag."""
        ids = self._tag_index.get(tag, set())
        return iter([self._entities[i] for i in sorted(ids) if i in self._entities])

    def single(self, *component_types: type[Component]) -> Entity:
        """
        Get the one live entity carrying all specified components.

        Raises:
            LookupError: If zero or more than one entity matches
        """
        matches = [
            entity for entity in self.get_entities_with(*component_types)
            if not self.is_pending_destroy(entity.id)
        ]
        if len(matches) != 1:
            names = ", ".join(c.__name__ for c in component_types)
            raise LookupError(
                f"Expected exactly one entity with [{names}], found {len(matches)}"
            )
        return matches[0]

    # System Management

    def add_system(self, system: System) -> None:
        """Add a system; systems run in descending priority order."""
        if isinstance(system, RenderSystem):
            self._render_systems.append(system)
            self._render_systems.sort(key=lambda s: -s.priority)
        else:
            self._systems.append(system)
            self._systems.sort(key=lambda s: -s.priority)

        system.on_add(self)

    def remove_system(self, system: System) -> None:
        """Remove a system from this world."""
        if isinstance(system, RenderSystem):
            if system in self._render_systems:
                self._render_systems.remove(system)
                system.on_remove()
        elif system in self._systems:
            self._systems.remove(system)
            system.on_remove()

    def get_system(self, system_type: type[System]) -> System | None:
        """Get a system by type."""
        for system in self._systems + self._render_systems:
            if isinstance(system, system_type):
                return system
        return None

    # Update and Render

    def update(self, dt: float) -> None:
        """Update all logic systems, then remove destroyed entities."""
        for system in self._systems:
            if system.enabled:
                system.update(dt)

        self._process_destroyed_entities()

    def flush(self) -> None:
        """Remove destroyed entities without running systems."""
        self._process_destroyed_entities()

    def render(self, alpha: float) -> None:
        """Render all render systems."""
        for system in self._render_systems:
            if system.enabled:
                system.render(alpha)

    def clear(self) -> None:
        """Remove all entities and systems."""
        for entity_id in list(self._entities.keys()):
            self.destroy_entity(entity_id)
        self._process_destroyed_entities()

        for system in self._systems[:]:
            self.remove_system(system)
        for system in self._render_systems[:]:
            self.remove_system(system)

        self._component_index.clear()
        self._tag_index.clear()
