"""
Component base class for data-only components.

Components are pydantic models holding the data an entity carries.
Systems own the logic that reads and mutates them.

Usage:
    class Velocity(Component):
        vx: float = 0.0
        vy: float = 0.0

    entity.add(Velocity(vx=32.0))
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Pydantic gives every component:
    - Validation on construction and on assignment
    - Defaults and type hints
    - model_dump() for debugging and snapshots
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    # Name used by the registry; defaults to the class name
    _type_name: ClassVar[str] = ""

    # Id of the owning entity (set by Entity.add)
    _entity_id: int | None = None

    @classmethod
    def get_type_name(cls) -> str:
        """Get the component type name used by the registry."""
        return cls._type_name or cls.__name__

    @property
    def entity_id(self) -> int | None:
        """Id of the entity this component is attached to."""
        return self._entity_id


_component_registry: dict[str, type[Component]] = {}


def register_component(cls: type[Component]) -> type[Component]:
    """
    Decorator to register a component type by name.

    Usage:
        @register_component
        class Marker(Component):
            pass
    """
    _component_registry[cls.get_type_name()] = cls
    return cls


def get_component_type(type_name: str) -> type[Component] | None:
    """Get component class by type name."""
    return _component_registry.get(type_name)
