"""
Graphics module - camera and ASCII glyph rendering.

Exports:
- Camera: Camera with follow, horizontal shake offset and zoom
- AsciiRenderer: Spawns and edits glyph entities
- AsciiRenderSystem: Draws glyphs with pygame.font
- Glyph, GlyphGroup: Glyph components
"""

from engine.graphics.camera import Camera
from engine.graphics.ascii import (
    AsciiRenderer,
    AsciiRenderSystem,
    Glyph,
    GlyphGroup,
    glyph_char,
)

__all__ = [
    "Camera",
    "AsciiRenderer",
    "AsciiRenderSystem",
    "Glyph",
    "GlyphGroup",
    "glyph_char",
]
