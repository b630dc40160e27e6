# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Source positions for AST nodes.

A parser keeps a PositionTracker in step with the text it consumes. Before
matching a token it calls ``position()`` to capture the start location; once
the node is built, calling the returned wrapper with the node stamps
``node.position`` with the start and the current (end) location.

Example:
    >>> tracker = PositionTracker('input.txt')
    >>> pos = tracker.position()
    >>> tracker.advance('foo\\nba')
    >>> node = Node('foo', 'text', position=pos)
    >>> node.position.start, node.position.end
    (Location(line=1, column=1), Location(line=2, column=3))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .node import Node


@dataclass(frozen=True, slots=True)
class Location:
    """A 1-based line/column pair."""

    line: int = 1
    column: int = 1


@dataclass(frozen=True, slots=True)
class Position:
    """A span of source text.

    Attributes:
        start: Location of the first character.
        end: Location just past the last character.
        source: Optional name of the source (file name, URL, ...).
    """

    start: Location
    end: Location
    source: str | None = None


class PositionTracker:
    """Cursor over the text consumed by a parser."""

    __slots__ = ('source', 'line', 'column')

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        self.line = 1
        self.column = 1

    def __repr__(self) -> str:
        return f"PositionTracker({self.source!r}, line={self.line}, column={self.column})"

    @property
    def location(self) -> Location:
        """The current cursor location."""
        return Location(self.line, self.column)

    def advance(self, text: str) -> None:
        """Move the cursor past ``text``.

        Args:
            text: The consumed text; every newline starts a new line at
                column 1.
        """
        newlines = text.count('\n')
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rindex('\n')
        else:
            self.column += len(text)

    def position(self) -> Callable[[Node], Node]:
        """Capture the current location and return a position wrapper.

        Returns:
            A callable that sets ``node.position`` to a Position spanning
            from the captured location to the location at call time, and
            returns the node.
        """
        start = self.location

        def wrap(node: Node) -> Node:
            node.position = Position(start, self.location, self.source)
            return node

        return wrap
