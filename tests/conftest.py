"""
Pytest configuration and shared fixtures for BananaLike tests.
"""

import io
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from rich.console import Console

from core.ecs import EntityManager
from core.engine import GameEngine
from core.rng import RandomNumberGenerator
from entities.entities import EntityManagerWrapper, EntityFactory
from world.generator import generate_map
from world.map import create_map_from_string


@pytest.fixture
def entity_manager():
    """Create a fresh EntityManager for testing."""
    return EntityManager()


@pytest.fixture
def entity_factory(entity_manager):
    """Create an EntityFactory tied to the entity_manager fixture."""
    return EntityFactory(entity_manager)


@pytest.fixture
def entity_wrapper(entity_manager):
    """Create an EntityManagerWrapper for testing."""
    return EntityManagerWrapper(entity_manager)


@pytest.fixture
def rng():
    """A seeded dice roller."""
    return RandomNumberGenerator(seed=42)


@pytest.fixture
def game_map(rng):
    """A generated 80x50 map."""
    return generate_map(rng=rng)


@pytest.fixture
def open_map():
    """A 5x5 walled room with a single pillar at (3, 1)."""
    return create_map_from_string(
        [
            "#####",
            "#..##",
            "#.@.#",
            "#...#",
            "#####",
        ]
    )


@pytest.fixture
def console():
    """A rich console writing to memory, large enough for the full grid."""
    return Console(file=io.StringIO(), width=100, height=60)


@pytest.fixture
def game_engine(console):
    """Create a GameEngine instance for integration tests."""
    engine = GameEngine(seed=1234, console=console)
    engine.renderer.stream = io.StringIO()
    engine.initialize_game()
    return engine
