"""Game rules for an elemental spell-casting roguelike."""

__version__ = "0.1.0"

__all__ = [
    "animation",
    "boss_ai",
    "boss_attacks",
    "elements",
    "gamemap",
    "health",
    "items",
    "progression",
]