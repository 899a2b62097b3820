"""
Configuration settings for BananaLike.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Tuple, Dict, Any, Optional
import toml
import os


def _default_controls() -> Dict[str, Any]:
    return {
        "movement": {
            "left": [-1, 0],
            "right": [1, 0],
            "up": [0, -1],
            "down": [0, 1],
        },
        "actions": {
            "escape": "quit",
            "q": "quit",
        },
    }


class GameConfig(BaseModel):
    """Configuration settings for the game."""

    # Game Metadata
    game_title: str = "BananaLike"
    version: str = "0.1.0"

    # Map settings
    map_width: int = 80
    map_height: int = 50
    wall_trials: int = 100  # Random wall placement attempts
    seed: Optional[int] = None

    # Performance settings
    target_fps: int = 30

    # Player
    player_start_x: int = 40
    player_start_y: int = 25
    player_char: str = "@"
    player_fg: Tuple[int, int, int] = (255, 255, 0)
    player_bg: Tuple[int, int, int] = (0, 0, 0)

    # Controls
    controls: Dict[str, Any] = Field(default_factory=_default_controls)

    model_config = ConfigDict(extra="allow")

    @classmethod
    def load_from_toml(cls, path: str = "config.toml") -> "GameConfig":
        """Load configuration from a TOML file."""
        if not os.path.exists(path):
            print(f"Warning: Config file {path} not found. Using defaults.")
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)

            config = cls(**data.get("game", {}))

            # Controls replace the defaults per section
            controls = data.get("controls", {})
            for section, bindings in controls.items():
                config.controls[section] = bindings

            return config
        except Exception as e:
            print(f"Error loading config: {e}")
            return cls()

    def reload(self, path: str):
        """Reload settings from `path` into this instance in place."""
        loaded = self.load_from_toml(path)
        for key, value in loaded.model_dump().items():
            setattr(self, key, value)


# Global config instance
CONFIG = GameConfig.load_from_toml()
