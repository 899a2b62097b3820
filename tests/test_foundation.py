"""
Tests for the ECS foundation and entity templates.
"""

import pytest

from entities.components import Position, Render, Player, WantsToMove


class TestECS:
    """Test the Entity Component System."""

    def test_create_entity(self, entity_manager):
        """Test entity creation returns unique IDs."""
        eid1 = entity_manager.create_entity()
        eid2 = entity_manager.create_entity()

        assert eid1 != eid2, "Entity IDs should be unique"
        assert eid1 == 0, "First entity ID should be 0"
        assert eid2 == 1, "Second entity ID should be 1"

    def test_destroy_entity(self, entity_manager):
        """Test entity destruction removes all components."""
        eid = entity_manager.create_entity()
        entity_manager.add_component(eid, Position(5, 5))

        entity_manager.destroy_entity(eid)

        assert eid not in entity_manager.entities
        assert not entity_manager.has_component(eid, Position)

    def test_add_component_to_missing_entity(self, entity_manager):
        with pytest.raises(ValueError):
            entity_manager.add_component(99, Position(0, 0))

    def test_component_add_and_get(self, entity_manager):
        """Test adding and retrieving components."""
        eid = entity_manager.create_entity()
        position = Position(10, 20)
        entity_manager.add_component(eid, position)

        retrieved = entity_manager.get_component(eid, Position)

        assert retrieved is position
        assert retrieved.x == 10
        assert retrieved.y == 20

    def test_remove_component(self, entity_manager):
        eid = entity_manager.create_entity()
        entity_manager.add_component(eid, WantsToMove(1, 0))
        entity_manager.remove_component(eid, WantsToMove)

        assert not entity_manager.has_component(eid, WantsToMove)
        assert eid in entity_manager.entities

    def test_get_entities_with_components(self, entity_manager):
        """Test querying entities with specific components."""
        eid1 = entity_manager.create_entity()
        entity_manager.add_component(eid1, Position(0, 0))

        eid2 = entity_manager.create_entity()
        entity_manager.add_component(eid2, Position(5, 5))
        entity_manager.add_component(eid2, Player())

        assert entity_manager.get_entities_with_components(Position) == [eid1, eid2]
        assert entity_manager.get_entities_with_components(Position, Player) == [eid2]
        assert entity_manager.get_entities_with_components() == []

    def test_callbacks_receive_changes(self, entity_manager):
        """Test callbacks see add, update and remove notifications."""
        events = []
        entity_manager.callbacks.append(
            lambda change, eid, comp_type, comp: events.append((change, eid, comp_type))
        )

        eid = entity_manager.create_entity()
        entity_manager.add_component(eid, Position(1, 1))
        entity_manager.notify_component_change(eid, Position)
        entity_manager.destroy_entity(eid)

        assert events == [
            ("add", eid, Position),
            ("update", eid, Position),
            ("remove", eid, Position),
        ]


class TestDeferredChanges:
    """Test the queued create/destroy step applied by maintain()."""

    def test_queued_create_waits_for_maintain(self, entity_manager):
        entity_manager.queue_create(Position(3, 4), Player())

        assert entity_manager.entities == {}

        created = entity_manager.maintain()

        assert len(created) == 1
        pos = entity_manager.get_component(created[0], Position)
        assert (pos.x, pos.y) == (3, 4)
        assert entity_manager.has_component(created[0], Player)

    def test_queued_destroy(self, entity_manager):
        eid = entity_manager.create_entity()
        entity_manager.add_component(eid, Position(0, 0))
        entity_manager.queue_destroy(eid)

        assert eid in entity_manager.entities

        entity_manager.maintain()

        assert eid not in entity_manager.entities

    def test_maintain_with_empty_queue(self, entity_manager):
        assert entity_manager.maintain() == []
        assert len(entity_manager.pending) == 0


class TestEntityFactory:
    """Test entity templates."""

    def test_create_player(self, entity_wrapper):
        """Test player entity creation with all required components."""
        player_eid = entity_wrapper.factory.create_player(40, 25)
        em = entity_wrapper.entity_manager

        assert em.has_component(player_eid, Position)
        assert em.has_component(player_eid, Render)
        assert em.has_component(player_eid, Player)

        render = em.get_component(player_eid, Render)
        assert render.char == "@"
        assert render.fg_color == (255, 255, 0)
        assert render.bg_color == (0, 0, 0)

    def test_get_players(self, entity_wrapper):
        """Test retrieving every player-tagged entity."""
        assert entity_wrapper.get_players() == []

        first = entity_wrapper.factory.create_player(5, 5)
        second = entity_wrapper.factory.create_player(6, 5)

        assert entity_wrapper.get_players() == [first, second]
