import numpy as np
from enum import IntEnum
from typing import Dict, Tuple, Optional


class TileType(IntEnum):
    """Kinds of map cell, stored as uint8 in GameMap.tiles."""

    FLOOR = 0
    WALL = 1


class Tile:
    """Represents a single tile definition in the game world."""

    __slots__ = ["tile_type", "char", "fg_color", "bg_color"]

    def __init__(
        self,
        tile_type: TileType,
        char: str,
        fg_color: Tuple[int, int, int],
        bg_color: Tuple[int, int, int] = (0, 0, 0),
    ):
        self.tile_type = tile_type
        self.char = char
        self.fg_color = fg_color
        self.bg_color = bg_color


TILE_DEFINITIONS: Dict[TileType, Tile] = {
    TileType.FLOOR: Tile(TileType.FLOOR, ".", (128, 128, 128)),
    TileType.WALL: Tile(TileType.WALL, "#", (0, 255, 255)),
}

CHAR_MAP = {
    ".": TileType.FLOOR,
    "#": TileType.WALL,
}


def xy_idx(x: int, y: int, width: int = 80) -> int:
    """Row-major linear index of (x, y)."""
    return y * width + x


class GameMap:
    """Represents the game map."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        # Row-major (height, width); tiles.flat[xy_idx(x, y, width)] is (x, y)
        self.tiles = np.full((height, width), TileType.FLOOR, dtype=np.uint8)

        # Start position (x, y) if defined by the generator or map data
        self.start_position: Optional[Tuple[int, int]] = None

    def xy_idx(self, x: int, y: int) -> int:
        return xy_idx(x, y, self.width)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int):
        if not self.in_bounds(x, y):
            raise IndexError(
                f"({x}, {y}) is outside the {self.width}x{self.height} map"
            )

    def tile_at(self, x: int, y: int) -> TileType:
        """Return the kind of tile at (x, y). Coordinates must be in bounds."""
        self._check_bounds(x, y)
        return TileType(self.tiles[y, x])

    def is_wall(self, x: int, y: int) -> bool:
        """Check if the tile at (x, y) is a wall. Coordinates must be in bounds."""
        self._check_bounds(x, y)
        return bool(self.tiles[y, x] == TileType.WALL)

    def get_tile(self, x: int, y: int) -> Tile:
        """Get the tile definition (glyph and colors) at (x, y)."""
        return TILE_DEFINITIONS[self.tile_at(x, y)]

    def count(self, tile_type: TileType) -> int:
        return int(np.count_nonzero(self.tiles == tile_type))

    def freeze(self):
        """Make the tile grid read-only."""
        self.tiles.flags.writeable = False

    @property
    def frozen(self) -> bool:
        return not self.tiles.flags.writeable

    def to_strings(self) -> list[str]:
        """Text form of the map, one string per row."""
        chars = {tile_type: tile.char for tile_type, tile in TILE_DEFINITIONS.items()}
        rows = []
        for y in range(self.height):
            row = [chars[TileType(t)] for t in self.tiles[y]]
            if self.start_position and self.start_position[1] == y:
                row[self.start_position[0]] = "@"
            rows.append("".join(row))
        return rows

    def load_from_string(self, map_data: list[str]):
        """Load map data from a list of strings."""
        for y, row in enumerate(map_data):
            if y >= self.height:
                break
            for x, char in enumerate(row):
                if x >= self.width:
                    break

                if char == "@":
                    self.start_position = (x, y)
                    self.tiles[y, x] = TileType.FLOOR
                    continue

                # Default to floor for spaces or unknown chars
                self.tiles[y, x] = CHAR_MAP.get(char, TileType.FLOOR)


def create_map_from_string(map_data: list[str]) -> GameMap:
    """Create a GameMap from a string definition."""
    if not map_data:
        raise ValueError("Map data is empty")

    height = len(map_data)
    width = max(len(row) for row in map_data)

    game_map = GameMap(width, height)
    game_map.load_from_string(map_data)
    return game_map
