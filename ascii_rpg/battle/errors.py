"""
Battle errors.
"""


class CombatInvariantError(RuntimeError):
    """
    Raised when battle setup or state breaks an assumption the combat
    code relies on, such as an actor without a StatBlock or a battle
    without exactly one player and one enemy.

    These are programming errors; nothing catches them.
    """
