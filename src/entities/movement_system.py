"""
Movement and wall collision for positioned entities.
"""

from typing import List, Tuple
from core.ecs import EntityManager, System
from entities.components import Position, WantsToMove
from world.map import GameMap


def try_move(
    position: Position, dx: int, dy: int, game_map: GameMap
) -> Tuple[Position, bool]:
    """
    Attempt to move `position` by (dx, dy) on `game_map`.

    The target is clamped to the map before the wall check, so a move past
    the edge lands on the border wall and is rejected. On success the
    position is updated in place.
    """
    new_x = max(0, min(position.x + dx, game_map.width - 1))
    new_y = max(0, min(position.y + dy, game_map.height - 1))

    if game_map.is_wall(new_x, new_y):
        return position, False

    position.x = new_x
    position.y = new_y
    return position, True


class MovementSystem(System):
    """Resolves WantsToMove intents against the map."""

    def __init__(self, entity_manager: EntityManager, game_map: GameMap):
        super().__init__(entity_manager)
        self.game_map = game_map

    def update(self, dt: float = 0.0) -> List[int]:
        """Apply every pending intent. Returns the ids that actually moved."""
        moved_ids = []
        for eid in self.entity_manager.get_entities_with_components(
            Position, WantsToMove
        ):
            pos = self.entity_manager.get_component(eid, Position)
            intent = self.entity_manager.get_component(eid, WantsToMove)
            self.entity_manager.remove_component(eid, WantsToMove)

            _, moved = try_move(pos, intent.dx, intent.dy, self.game_map)
            if moved:
                self.entity_manager.notify_component_change(eid, Position)
                moved_ids.append(eid)
        return moved_ids
