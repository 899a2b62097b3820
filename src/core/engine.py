"""
Main game engine for BananaLike.
"""

import time
from typing import Optional
from rich.console import Console
from core.ecs import EntityManager, SystemManager
from core.rng import RandomNumberGenerator
from config import CONFIG
from world.map import GameMap
from world.generator import generate_map
from entities.entities import EntityManagerWrapper
from entities.components import WantsToMove
from entities.movement_system import MovementSystem
from ui.renderer import Renderer
from input.handler import InputHandler, InputEvent


class GameEngine:
    """Main game engine that drives one input, update, render cycle per tick."""

    def __init__(self, seed: Optional[int] = None, console: Optional[Console] = None):
        self.running = True
        self.entity_manager = EntityManager()
        self.system_manager = SystemManager(self.entity_manager)
        self.last_time = time.time()
        self.frame_duration = 1.0 / CONFIG.target_fps

        self.seed = seed if seed is not None else CONFIG.seed
        self.rng = RandomNumberGenerator(self.seed)

        # Initialize game components
        self.game_map: Optional[GameMap] = None
        self.entity_wrapper = EntityManagerWrapper(self.entity_manager)
        self.player_id: Optional[int] = None
        self.movement_system: Optional[MovementSystem] = None

        # Initialize rendering
        self.console = console or Console()
        self.renderer = Renderer(
            self.console, CONFIG.map_width, CONFIG.map_height, title=CONFIG.game_title
        )

        # Input takes over the terminal, so it is created by run()
        self.input_handler: Optional[InputHandler] = None

    def initialize_game(self):
        """Initialize game state."""
        start = (CONFIG.player_start_x, CONFIG.player_start_y)
        self.game_map = generate_map(
            width=CONFIG.map_width,
            height=CONFIG.map_height,
            wall_trials=CONFIG.wall_trials,
            protected_cell=start,
            rng=self.rng,
        )
        print(f"Generated {self.game_map.width}x{self.game_map.height} map (seed={self.seed})")

        self.movement_system = MovementSystem(self.entity_manager, self.game_map)
        self.system_manager.add_system(self.movement_system)

        self.player_id = self.entity_wrapper.factory.create_player(*start)
        print(f"Player created at {start}")

    def run(self):
        """Run the main game loop."""
        print(f"Starting {CONFIG.game_title}...")
        print("Controls: Arrow keys to move, Esc or q to quit")

        self.initialize_game()
        self.input_handler = InputHandler()

        loop_count = 0
        try:
            self.renderer.open()
            while self.running:
                loop_count += 1
                self.last_time = time.time()
                self.tick(self.input_handler.check_for_input())
                self.throttle_framerate()
        except Exception as e:
            import traceback

            with open("game_debug.log", "a") as f:
                f.write(
                    f"Loop Crash at iteration {loop_count}: {e}\n{traceback.format_exc()}\n"
                )
            raise
        finally:
            self.renderer.close()
            self.input_handler.restore_terminal()
            self.input_handler = None

    def tick(self, event: Optional[InputEvent] = None):
        """Run one full frame: input, systems, maintenance, render."""
        if event:
            self.handle_input(event)

        self.update(self.frame_duration)
        self.entity_manager.maintain()
        self.render()

    def handle_input(self, event: InputEvent):
        """Handle an input event."""
        if event.action_type == "move":
            for eid in self.entity_wrapper.get_players():
                self.entity_manager.add_component(eid, WantsToMove(event.dx, event.dy))
        elif event.action_type == "quit":
            self.quit()

    def update(self, dt: float):
        """Update game state."""
        self.system_manager.update_all(dt)

    def render(self):
        """Render the game."""
        if self.game_map is not None:
            self.renderer.render(self.game_map, self.entity_manager)

    def throttle_framerate(self):
        """Throttle the framerate to stabilize rendering."""
        elapsed = time.time() - self.last_time
        sleep_time = self.frame_duration - elapsed

        if sleep_time > 0:
            time.sleep(sleep_time)

    def quit(self):
        """Quit the game."""
        self.running = False
