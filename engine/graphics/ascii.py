"""
ASCII glyph rendering.

Everything on screen is a code page 437 glyph drawn at a Transform:
map tiles, actors, text and menu boxes. AsciiRenderer spawns and edits
glyph entities in a World and hands back their entity ids as handles;
AsciiRenderSystem draws them with pygame.font.

Usage:
    renderer = AsciiRenderer(world, tile_size=32)
    bat = renderer.spawn_sprite(ord("b"), (1, 1, 1), (0, -16, 1))
    label = renderer.spawn_text("Health: 3", (-64, -64, 2))
    renderer.set_visible(bat, False)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pygame
from pydantic import Field

from engine.core.component import Component, register_component
from engine.core.entity import Entity
from engine.core.system import RenderSystem
from engine.core.transform import Transform

if TYPE_CHECKING:
    from engine.core.world import World
    from engine.graphics.camera import Camera


logger = logging.getLogger(__name__)

Color = tuple[float, float, float]

WHITE: Color = (1.0, 1.0, 1.0)
TEXT_COLOR: Color = (0.8, 0.8, 0.8)
BOX_COLOR: Color = (0.3, 0.3, 0.9)

# Code page 437 box-drawing glyphs
BOX_UPPER_LEFT = 218
BOX_UPPER_RIGHT = 191
BOX_LOWER_LEFT = 192
BOX_LOWER_RIGHT = 217
BOX_HORIZONTAL = 196
BOX_VERTICAL = 179

# cp437 draws pictographs in the control range that the codec leaves out
_CONTROL_GLYPHS = {
    1: "☺", 2: "☻", 3: "♥", 4: "♦",
    5: "♣", 6: "♠", 7: "•", 8: "◘",
    9: "○", 10: "◙", 11: "♂", 12: "♀",
    13: "♪", 14: "♫", 15: "☼", 16: "►",
    17: "◄", 18: "↕", 19: "‼", 20: "¶",
    21: "§", 22: "▬", 23: "↨", 24: "↑",
    25: "↓", 26: "→", 27: "←", 28: "∟",
    29: "↔", 30: "▲", 31: "▼", 127: "⌂",
}


def glyph_char(index: int) -> str:
    """Unicode character for a code page 437 glyph index."""
    if not 0 <= index < 256:
        raise ValueError(f"Glyph index {index} out of ASCII range")
    if index in _CONTROL_GLYPHS:
        return _CONTROL_GLYPHS[index]
    if index == 0:
        return " "
    return bytes([index]).decode("cp437")


@register_component
class Glyph(Component):
    """
    One character cell.

    Attributes:
        index: Code page 437 index (0-255)
        color: RGB, each channel 0.0 - 1.0
        visible: Hidden glyphs keep their entity but are not drawn
    """
    index: int = Field(ge=0, lt=256)
    color: Color = WHITE
    visible: bool = True


@register_component
class GlyphGroup(Component):
    """
    A parent owning several glyph entities (a text line or a box).

    Attributes:
        children: Entity ids of the owned glyphs
        text: The string a text group spells, empty for boxes
    """
    children: list[int] = Field(default_factory=list)
    text: str = ""


class AsciiRenderer:
    """
    Spawns and edits glyph entities.

    Handles are entity ids in the renderer's World. Despawning is
    deferred like any other entity destruction.
    """

    def __init__(self, world: World, tile_size: float):
        self.world = world
        self.tile_size = tile_size

    def spawn_sprite(
        self,
        index: int,
        color: Color,
        position: tuple[float, float, float],
        name: str = "",
    ) -> int:
        """
        Spawn a single glyph.

        Raises:
            ValueError: If index is outside 0-255
        """
        if not 0 <= index < 256:
            raise ValueError(f"Glyph index {index} out of ASCII range")

        x, y, z = position
        entity = self.world.create_entity(name or f"Glyph {index}")
        entity.add(Transform(x=x, y=y, z=z))
        entity.add(Glyph(index=index, color=color))
        return entity.id

    def spawn_text(
        self,
        text: str,
        position: tuple[float, float, float],
        color: Color = TEXT_COLOR,
    ) -> int:
        """
        Spawn a line of text, one glyph per character.

        The first character is centred on position; the rest follow
        to the right one tile apart.
        """
        x, y, z = position
        children = [
            self.spawn_sprite(ord(char), color, (x + i * self.tile_size, y, z))
            for i, char in enumerate(text)
        ]

        parent = self.world.create_entity(f"Text - {text}")
        parent.add(Transform(x=x, y=y, z=z))
        parent.add(GlyphGroup(children=children, text=text))
        return parent.id

    def spawn_nine_slice(
        self,
        width: int,
        height: int,
        position: tuple[float, float, float],
        color: Color = BOX_COLOR,
    ) -> int:
        """
        Spawn a box border width x height tiles, centred on position.

        Raises:
            ValueError: If the box is smaller than 2x2 tiles
        """
        if width < 2 or height < 2:
            raise ValueError(f"Nine-slice box must be at least 2x2, got {width}x{height}")

        x, y, z = position
        children = []
        for row in range(height):
            for col in range(width):
                index = self._border_index(col, row, width, height)
                if index is None:
                    continue
                cell_x = x + (col - (width - 1) / 2) * self.tile_size
                cell_y = y + (row - (height - 1) / 2) * self.tile_size
                children.append(self.spawn_sprite(index, color, (cell_x, cell_y, z)))

        parent = self.world.create_entity("NineSliceBox")
        parent.add(Transform(x=x, y=y, z=z))
        parent.add(GlyphGroup(children=children))
        return parent.id

    @staticmethod
    def _border_index(col: int, row: int, width: int, height: int) -> int | None:
        top, bottom = row == 0, row == height - 1
        left, right = col == 0, col == width - 1

        if top and left:
            return BOX_UPPER_LEFT
        if top and right:
            return BOX_UPPER_RIGHT
        if bottom and left:
            return BOX_LOWER_LEFT
        if bottom and right:
            return BOX_LOWER_RIGHT
        if top or bottom:
            return BOX_HORIZONTAL
        if left or right:
            return BOX_VERTICAL
        return None

    def despawn(self, handle: int) -> None:
        """Destroy a glyph or a group together with its glyphs."""
        entity = self.world.get_entity(handle)
        if entity is None:
            return
        group = entity.try_get(GlyphGroup)
        if group:
            for child in group.children:
                self.world.destroy_entity(child)
        self.world.destroy_entity(entity)

    def set_visible(self, handle: int, visible: bool) -> None:
        for glyph in self._glyphs(handle):
            glyph.visible = visible

    def is_visible(self, handle: int) -> bool:
        """True when every glyph of the handle is drawn."""
        return all(glyph.visible for glyph in self._glyphs(handle))

    def set_color(self, handle: int, color: Color) -> None:
        for glyph in self._glyphs(handle):
            glyph.color = color

    def color_of(self, handle: int) -> Color:
        """Colour of the handle's first glyph."""
        glyphs = self._glyphs(handle)
        if not glyphs:
            raise KeyError(f"Handle {handle} has no glyphs")
        return glyphs[0].color

    def text_of(self, handle: int) -> str:
        entity = self._entity(handle)
        group = entity.try_get(GlyphGroup)
        return group.text if group else ""

    def position_of(self, handle: int) -> tuple[float, float]:
        return self._entity(handle).get(Transform).position

    def _entity(self, handle: int) -> Entity:
        entity = self.world.get_entity(handle)
        if entity is None:
            raise KeyError(f"No entity for render handle {handle}")
        return entity

    def _glyphs(self, handle: int) -> list[Glyph]:
        entity = self._entity(handle)
        group = entity.try_get(GlyphGroup)
        if group is None:
            return [entity.get(Glyph)]

        glyphs = []
        for child_id in group.children:
            child = self.world.get_entity(child_id)
            if child is not None:
                glyphs.append(child.get(Glyph))
        return glyphs


class AsciiRenderSystem(RenderSystem):
    """
    Draws every visible Glyph centred on its Transform.

    Glyphs are drawn in ascending z so text and actors cover the map.
    Rendered characters are cached per (character, colour).
    """

    required_components = [Transform, Glyph]

    FONT_NAMES = "dejavusansmono,couriernew,consolas,monospace"

    def __init__(self, surface: pygame.Surface, camera: Camera, tile_size: float):
        super().__init__()
        self.surface = surface
        self.camera = camera
        self.tile_size = tile_size
        self._font: pygame.font.Font | None = None
        self._cache: dict[tuple[str, tuple[int, int, int]], pygame.Surface] = {}

    def render(self, alpha: float) -> None:
        if not self.enabled:
            return

        self.pre_render(alpha)
        entities = [e for e in self.get_entities() if e.active]
        entities.sort(key=lambda e: e.get(Transform).z)
        for entity in entities:
            self.render_entity(entity, alpha)

    def pre_render(self, alpha: float) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            size = max(8, int(self.tile_size * self.camera.zoom))
            self._font = pygame.font.SysFont(self.FONT_NAMES, size)
            logger.debug("Glyph font loaded at %dpx", size)

    def render_entity(self, entity: Entity, alpha: float) -> None:
        glyph = entity.get(Glyph)
        if not glyph.visible:
            return

        transform = entity.get(Transform)
        image = self._glyph_surface(glyph)
        sx, sy = self.camera.world_to_screen(transform.x, transform.y)
        rect = image.get_rect(center=(int(sx), int(sy)))
        self.surface.blit(image, rect)

    def _glyph_surface(self, glyph: Glyph) -> pygame.Surface:
        rgb = tuple(int(max(0.0, min(1.0, c)) * 255) for c in glyph.color)
        key = (glyph_char(glyph.index), rgb)
        image = self._cache.get(key)
        if image is None:
            image = self._font.render(key[0], True, rgb)
            self._cache[key] = image
        return image
