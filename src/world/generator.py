"""
Map generation: an enclosed room with randomly scattered wall tiles.
"""

from typing import Optional, Tuple

from core.rng import RandomNumberGenerator
from world.map import GameMap, TileType


def generate_map(
    width: int = 80,
    height: int = 50,
    wall_trials: int = 100,
    protected_cell: Tuple[int, int] = (40, 25),
    rng: Optional[RandomNumberGenerator] = None,
) -> GameMap:
    """
    Build a walled map and scatter up to `wall_trials` extra walls inside it.

    Each trial rolls x on a (width - 1)-sided die and y on a (height - 1)-sided
    die, so a trial may land on the right or bottom border or on a cell that
    is already a wall. The protected cell is never turned into a wall. The
    returned map is frozen.
    """
    if rng is None:
        rng = RandomNumberGenerator()

    game_map = GameMap(width, height)
    tiles = game_map.tiles

    # Border
    tiles[0, :] = TileType.WALL
    tiles[height - 1, :] = TileType.WALL
    tiles[:, 0] = TileType.WALL
    tiles[:, width - 1] = TileType.WALL

    protected_idx = game_map.xy_idx(*protected_cell)
    for _ in range(wall_trials):
        x = rng.roll_dice(1, width - 1)
        y = rng.roll_dice(1, height - 1)
        idx = game_map.xy_idx(x, y)
        if idx != protected_idx:
            tiles.flat[idx] = TileType.WALL

    game_map.start_position = protected_cell
    game_map.freeze()
    return game_map
