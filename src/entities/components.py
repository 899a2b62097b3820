"""
Component definitions for the ECS system.
"""

from dataclasses import dataclass
from typing import Tuple
from core.ecs import Component


@dataclass(slots=True)
class Position(Component):
    """Position component for entities."""

    x: int
    y: int


@dataclass(slots=True)
class Render(Component):
    """Render component for entities."""

    char: str
    fg_color: Tuple[int, int, int]  # RGB values
    bg_color: Tuple[int, int, int] = (0, 0, 0)


@dataclass(slots=True)
class Player(Component):
    """Player tag component."""

    pass


@dataclass(slots=True)
class WantsToMove(Component):
    """Movement intent, consumed by the movement system."""

    dx: int
    dy: int
