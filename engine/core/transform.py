"""
Transform component - position in world space.
"""

from __future__ import annotations

from engine.core.component import Component, register_component


@register_component
class Transform(Component):
    """
    Position in world space.

    Attributes:
        x: X position in pixels (centre of the tile-sized glyph)
        y: Y position in pixels, growing downward
        z: Draw order (higher = on top)
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def position(self) -> tuple[float, float]:
        """Get position as tuple."""
        return (self.x, self.y)

    @position.setter
    def position(self, value: tuple[float, float]) -> None:
        self.x, self.y = value

    def move(self, dx: float, dy: float) -> None:
        """Move by delta."""
        self.x += dx
        self.y += dy
