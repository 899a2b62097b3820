"""
Terminal rendering for BananaLike.
Cells are drawn into numpy buffers and flushed as truecolor ANSI escapes.
"""

from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from typing import TYPE_CHECKING, Optional, TextIO, Tuple
import numpy as np
import sys

if TYPE_CHECKING:
    from world.map import GameMap
    from core.ecs import EntityManager

Color = Tuple[int, int, int]


class TerminalTooSmallError(RuntimeError):
    """The terminal cannot hold the full grid."""


class Renderer:
    """Fixed-size character grid rendered to the terminal."""

    def __init__(
        self,
        console: Console,
        width: int,
        height: int,
        title: str = "",
        stream: Optional[TextIO] = None,
    ):
        self.console = console
        self.width = width
        self.height = height
        self.title = title
        self.stream = stream

        # Current frame
        self.glyphs = np.full((height, width), " ", dtype="<U1")
        self.fg_color_buffer = np.full((height, width, 3), -1, dtype=np.int16)
        self.bg_color_buffer = np.full((height, width, 3), -1, dtype=np.int16)

        # Last frame written to the terminal
        self.previous_frame = np.full((height, width), "", dtype="<U1")
        self.previous_fg_buffer = np.full((height, width, 3), -1, dtype=np.int16)
        self.previous_bg_buffer = np.full((height, width, 3), -1, dtype=np.int16)

        self.first_render = True
        self.set_calls = 0

    def open(self):
        """Prepare the terminal surface. Fails if the grid does not fit."""
        cols, lines = self.console.size
        if cols < self.width or lines < self.height:
            raise TerminalTooSmallError(
                f"Terminal is {cols}x{lines}, need at least {self.width}x{self.height}"
            )
        if self.title:
            self.console.set_window_title(self.title)
        # Clear screen and hide cursor
        self._write("\033[2J\033[?25l")
        self.first_render = True

    def close(self):
        """Restore the cursor and colors."""
        self._write(f"\033[0m\033[?25h\033[{self.height + 1};1H\n")

    def cls(self):
        """Clear the current frame."""
        self.glyphs.fill(" ")
        self.fg_color_buffer.fill(-1)
        self.bg_color_buffer.fill(-1)
        self.set_calls = 0

    def set(self, x: int, y: int, fg: Color, bg: Color, glyph: str):
        """Set the character and colors of one cell. Off-grid cells are ignored."""
        self.set_calls += 1
        if 0 <= x < self.width and 0 <= y < self.height:
            self.glyphs[y, x] = glyph
            self.fg_color_buffer[y, x] = fg
            self.bg_color_buffer[y, x] = bg

    def draw_map(self, game_map: "GameMap"):
        """Draw every map cell."""
        for y in range(game_map.height):
            for x in range(game_map.width):
                tile = game_map.get_tile(x, y)
                self.set(x, y, tile.fg_color, tile.bg_color, tile.char)

    def draw_entities(self, entity_manager: "EntityManager"):
        """Draw every entity with both Position and Render components."""
        from entities.components import Position, Render

        for eid in entity_manager.get_entities_with_components(Position, Render):
            pos = entity_manager.get_component(eid, Position)
            render = entity_manager.get_component(eid, Render)
            self.set(pos.x, pos.y, render.fg_color, render.bg_color, render.char)

    def render(self, game_map: "GameMap", entity_manager: "EntityManager"):
        """Render the current game state."""
        self.cls()
        self.draw_map(game_map)
        self.draw_entities(entity_manager)
        self.present()

    def present(self):
        """Write cells that changed since the last frame."""
        if self.first_render:
            self.first_render = False
            self.previous_frame.fill("")
            self.previous_fg_buffer.fill(-1)
            self.previous_bg_buffer.fill(-1)

        changed = (
            (self.glyphs != self.previous_frame)
            | np.any(self.fg_color_buffer != self.previous_fg_buffer, axis=2)
            | np.any(self.bg_color_buffer != self.previous_bg_buffer, axis=2)
        )

        render_commands = []
        last_fg = (-1, -1, -1)
        last_bg = (-1, -1, -1)
        v_cursor_y = -1
        v_cursor_x = -1

        for y, x in zip(*np.nonzero(changed)):
            fg = tuple(int(c) for c in self.fg_color_buffer[y, x])
            bg = tuple(int(c) for c in self.bg_color_buffer[y, x])

            if y != v_cursor_y or x != v_cursor_x:
                render_commands.append(f"\033[{y + 1};{x + 1}H")

            if fg != last_fg:
                if fg[0] == -1:
                    render_commands.append("\033[39m")
                else:
                    render_commands.append(f"\033[38;2;{fg[0]};{fg[1]};{fg[2]}m")
                last_fg = fg

            if bg != last_bg:
                if bg[0] == -1:
                    render_commands.append("\033[49m")
                else:
                    render_commands.append(f"\033[48;2;{bg[0]};{bg[1]};{bg[2]}m")
                last_bg = bg

            render_commands.append(self.glyphs[y, x])
            v_cursor_y = y
            v_cursor_x = x + 1

        self.previous_frame[:] = self.glyphs
        self.previous_fg_buffer[:] = self.fg_color_buffer
        self.previous_bg_buffer[:] = self.bg_color_buffer

        if render_commands:
            render_commands.append("\033[0m")
            self._write("".join(render_commands))
        return int(np.count_nonzero(changed))

    def _write(self, data: str):
        stream = self.stream or sys.stdout
        stream.write(data)
        stream.flush()

    def render_simple_map(self, game_map: "GameMap"):
        """Simple map rendering for debugging."""
        map_text = Text()

        for y in range(game_map.height):
            for x in range(game_map.width):
                tile = game_map.get_tile(x, y)
                char = tile.char
                if game_map.start_position == (x, y):
                    char = "@"
                r, g, b = tile.fg_color
                map_text.append(char, style=f"bold rgb({r},{g},{b})")

            map_text.append("\n")

        panel = Panel(map_text, title=self.title or "Map", border_style="blue")
        self.console.print(panel)
