# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-AstNode - Syntax tree nodes with parent/child navigation.

A lightweight library providing the Node class that parsers build and
compilers read: children ownership, weak parent links, sibling navigation
and type-based child search.
"""

__version__ = "0.1.0"

from .exceptions import (
    AstNodeError,
    InvalidArgumentError,
    InvalidOperationError,
)
from .matcher import MatcherKind, TypeMatcher, compile_matcher, matches_type
from .node import Node
from .position import Location, Position, PositionTracker

__all__ = [
    # Core classes
    "Node",
    # Type matching
    "MatcherKind",
    "TypeMatcher",
    "compile_matcher",
    "matches_type",
    # Positions
    "Location",
    "Position",
    "PositionTracker",
    # Exceptions
    "AstNodeError",
    "InvalidArgumentError",
    "InvalidOperationError",
]
