"""
ASCII RPG

A tile-based role-playing game drawn entirely in code page 437 glyphs:
walk the overworld, linger in the tall grass ('~') and fight the bats
and ghosts that turn up there.

Run: python -m ascii_rpg [--map PATH] [--tuning PATH] [--seed N]
"""

__version__ = "0.1.0"
