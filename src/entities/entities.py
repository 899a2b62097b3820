from typing import List
from core.ecs import EntityManager
from config import CONFIG
from entities.components import Position, Render, Player


class EntityFactory:
    """Factory for creating entities with predefined templates."""

    def __init__(self, entity_manager: EntityManager):
        self.entity_manager = entity_manager

    def create_player(self, x: int, y: int) -> int:
        """Create a player entity."""
        eid = self.entity_manager.create_entity()

        self.entity_manager.add_component(eid, Position(x=x, y=y))
        self.entity_manager.add_component(
            eid,
            Render(
                char=CONFIG.player_char,
                fg_color=tuple(CONFIG.player_fg),
                bg_color=tuple(CONFIG.player_bg),
            ),
        )
        self.entity_manager.add_component(eid, Player())

        return eid


class EntityManagerWrapper:
    """Wrapper for entity management with convenience methods."""

    def __init__(self, entity_manager: EntityManager):
        self.entity_manager = entity_manager
        self.factory = EntityFactory(entity_manager)

    def get_players(self) -> List[int]:
        """Get every entity tagged as player-controlled."""
        return self.entity_manager.get_entities_with_components(Player)
