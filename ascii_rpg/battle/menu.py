"""
Battle command menu.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from engine.graphics.ascii import BOX_COLOR

if TYPE_CHECKING:
    from engine.graphics.ascii import AsciiRenderer

MENU_Z = 7.0

HIGHLIGHT_COLOR = tuple(1.0 - c for c in BOX_COLOR)


class MenuOption(Enum):
    FIGHT = "Fight"
    RUN = "Run"


class MenuSelector:
    """
    Cyclic selection over the battle commands.

    Stepping past either end wraps around, so the index is always a
    valid option.
    """

    OPTIONS: tuple[MenuOption, ...] = (MenuOption.FIGHT, MenuOption.RUN)

    def __init__(self):
        self.index = 0

    @property
    def selected(self) -> MenuOption:
        return self.OPTIONS[self.index]

    def move(self, delta: int) -> MenuOption:
        count = len(self.OPTIONS)
        self.index = (self.index + delta + count) % count
        return self.selected

    def reset(self) -> None:
        self.index = 0


class MenuView:
    """
    One nine-slice box with a label per option, side by side.

    sync() recolours every border from the selector's index, so the
    highlight never depends on what was drawn last tick.
    """

    BOX_WIDTH = 7
    BOX_HEIGHT = 3

    def __init__(self, renderer: AsciiRenderer, center: tuple[float, float]):
        self.renderer = renderer
        self.boxes: list[int] = []
        self.labels: list[int] = []

        size = renderer.tile_size
        count = len(MenuSelector.OPTIONS)
        for i, option in enumerate(MenuSelector.OPTIONS):
            box_x = center[0] + (i - (count - 1) / 2) * (self.BOX_WIDTH + 1) * size
            box_y = center[1]
            self.boxes.append(renderer.spawn_nine_slice(
                self.BOX_WIDTH, self.BOX_HEIGHT, (box_x, box_y, MENU_Z),
            ))
            text_x = box_x - (len(option.value) - 1) / 2 * size
            self.labels.append(renderer.spawn_text(option.value, (text_x, box_y, MENU_Z)))

    def sync(self, selector: MenuSelector, highlighted: bool = True) -> None:
        for i, box in enumerate(self.boxes):
            selected = highlighted and i == selector.index
            self.renderer.set_color(box, HIGHLIGHT_COLOR if selected else BOX_COLOR)
