"""
Main entry point for BananaLike.
"""

import sys
import os

# Add the directory containing this file (src) to the Python path
# This allows imports like 'from core.engine import ...' to work
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config import CONFIG
from core.engine import GameEngine


def main(argv=None):
    """Entry point for the game."""
    import argparse

    parser = argparse.ArgumentParser(prog="bananalike")
    parser.add_argument("--seed", type=int, help="Seed for map generation")
    parser.add_argument("--config", help="Path to a config.toml file")
    parser.add_argument(
        "--dump", action="store_true", help="Print the generated map and exit"
    )
    args = parser.parse_args(argv)

    if args.config:
        CONFIG.reload(args.config)

    engine = GameEngine(seed=args.seed)

    if args.dump:
        engine.initialize_game()
        engine.renderer.render_simple_map(engine.game_map)
        return 0

    try:
        engine.run()
    except KeyboardInterrupt:
        print("\nGame interrupted by user.")
        return 0
    except Exception as e:
        import traceback

        with open("game_debug.log", "a") as f:
            f.write(f"CRASH REPORT:\n{str(e)}\n\n{traceback.format_exc()}")
        print(f"An error occurred: {e}")
        print("See game_debug.log for details.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
