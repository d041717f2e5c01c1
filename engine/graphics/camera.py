"""
Camera with follow, horizontal shake offset and zoom.

Handles converting between world and screen coordinates. World
coordinates are pixels with y growing downward; the camera position
is the world point shown at the centre of the screen.
"""

from __future__ import annotations

import math


class Camera:
    """
    2D camera.

    Usage:
        camera = Camera(1280, 720)
        camera.follow(player_x, player_y)
        camera.update(dt)
        sx, sy = camera.world_to_screen(x, y)

        # Battle screen shake, written by the effect scheduler each tick
        camera.shake_x = effect.current_shake
    """

    def __init__(
        self,
        view_width: float,
        view_height: float,
        zoom: float = 1.0,
    ):
        self.view_width = view_width
        self.view_height = view_height
        self.zoom = zoom

        # Centre of view in world coordinates
        self._x = 0.0
        self._y = 0.0
        self._target_x = 0.0
        self._target_y = 0.0

        # 0 snaps to the target every update; higher values ease toward it
        self.follow_lerp = 0.0

        # Horizontal offset in world units added on top of the position
        self.shake_x = 0.0

    @property
    def x(self) -> float:
        """Camera X position (with shake)."""
        return self._x + self.shake_x

    @property
    def y(self) -> float:
        """Camera Y position."""
        return self._y

    def set_center(self, x: float, y: float) -> None:
        """Center camera on a point immediately."""
        self._x = self._target_x = x
        self._y = self._target_y = y

    def follow(self, x: float, y: float) -> None:
        """Set the point the camera moves toward on the next update."""
        self._target_x = x
        self._target_y = y

    def update(self, dt: float) -> None:
        """Move toward the follow target."""
        if self.follow_lerp > 0:
            t = 1 - math.exp(-self.follow_lerp * dt)
            self._x += (self._target_x - self._x) * t
            self._y += (self._target_y - self._y) * t
        else:
            self._x = self._target_x
            self._y = self._target_y

    def world_to_screen(self, world_x: float, world_y: float) -> tuple[float, float]:
        """Convert world coordinates to screen coordinates."""
        return (
            (world_x - self.x) * self.zoom + self.view_width / 2,
            (world_y - self.y) * self.zoom + self.view_height / 2,
        )

    def screen_to_world(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Convert screen coordinates to world coordinates."""
        return (
            (screen_x - self.view_width / 2) / self.zoom + self.x,
            (screen_y - self.view_height / 2) / self.zoom + self.y,
        )
