# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for source positions."""

from genro_astnode import Location, Node, Position, PositionTracker


class TestPositionTracker:
    """Tests for PositionTracker."""

    def test_initial_location(self):
        tracker = PositionTracker()
        assert tracker.location == Location(1, 1)

    def test_advance_same_line(self):
        tracker = PositionTracker()
        tracker.advance('abc')
        assert tracker.location == Location(1, 4)

    def test_advance_newlines(self):
        """Test the column restarts after the last newline."""
        tracker = PositionTracker()
        tracker.advance('ab\ncd\nefg')
        assert tracker.location == Location(3, 4)
        tracker.advance('\n')
        assert tracker.location == Location(4, 1)

    def test_position_wrapper(self):
        """Test the wrapper stamps start and end on the node."""
        tracker = PositionTracker('input.txt')
        tracker.advance('x')
        pos = tracker.position()
        tracker.advance('foo\nba')
        node = pos(Node('foo', 'text'))
        assert node.position == Position(Location(1, 2), Location(2, 3), 'input.txt')

    def test_position_at_construction(self):
        """Test the wrapper can be passed to the Node constructor."""
        tracker = PositionTracker()
        pos = tracker.position()
        tracker.advance('*')
        node = Node('*', 'star', position=pos)
        assert node.value == '*'
        assert node.type == 'star'
        assert node.position.start == Location(1, 1)
        assert node.position.end == Location(1, 2)
        assert node.position.source is None

    def test_position_with_mapping(self):
        tracker = PositionTracker()
        node = Node({'value': '*', 'type': 'star'}, position=tracker.position())
        assert node.position.start == node.position.end
        assert 'position' in node.to_dict()
