# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Type matchers for Node search and predicate operations.

A type matcher is what callers pass to ``find``, ``is_type``, ``has_type``
and ``is_inside``. Three shapes are accepted:

    - str: exact equality with the node type
    - re.Pattern: ``pattern.search(node.type)``
    - list/tuple/set/frozenset of matchers: any of them matches (recursive)

Raw matchers are compiled once into a TypeMatcher so that scanning a child
list does not re-inspect the matcher shape for every child.

Example:
    >>> matcher = compile_matcher(['star', re.compile(r'^brace')])
    >>> matcher.matches('brace.open')
    True
    >>> matcher.matches('text')
    False
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from .exceptions import InvalidArgumentError

RawMatcher = Union[str, re.Pattern, list, tuple, set, frozenset]

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class MatcherKind(Enum):
    """The three shapes a compiled matcher can take."""

    STRING = auto()
    PATTERN = auto()
    ANY_OF = auto()


@dataclass(frozen=True, slots=True)
class TypeMatcher:
    """A compiled type matcher.

    Attributes:
        kind: Which shape this matcher has (see MatcherKind).
        target: The string for STRING, the compiled pattern for PATTERN,
            a tuple of TypeMatcher for ANY_OF.
    """

    kind: MatcherKind
    target: str | re.Pattern | tuple[TypeMatcher, ...]

    def matches(self, node_type: str | None) -> bool:
        """Test a node type against this matcher."""
        if self.kind is MatcherKind.STRING:
            return node_type == self.target
        if self.kind is MatcherKind.PATTERN:
            if not isinstance(node_type, str):
                return False
            return self.target.search(node_type) is not None
        return any(sub.matches(node_type) for sub in self.target)

    def __call__(self, node_type: str | None) -> bool:
        return self.matches(node_type)


def compile_matcher(matcher: RawMatcher | TypeMatcher) -> TypeMatcher:
    """Compile a raw type matcher.

    Args:
        matcher: A string, a compiled regular expression, a sequence of
            those (nested sequences allowed), or an already compiled
            TypeMatcher.

    Returns:
        The compiled TypeMatcher.

    Raises:
        InvalidArgumentError: If the matcher (or any element of a sequence)
            has an unsupported shape.
    """
    if isinstance(matcher, TypeMatcher):
        return matcher
    if isinstance(matcher, str):
        return TypeMatcher(MatcherKind.STRING, matcher)
    if isinstance(matcher, re.Pattern):
        return TypeMatcher(MatcherKind.PATTERN, matcher)
    if isinstance(matcher, _SEQUENCE_TYPES):
        return TypeMatcher(
            MatcherKind.ANY_OF, tuple(compile_matcher(item) for item in matcher)
        )
    raise InvalidArgumentError(
        "expected type matcher to be a string, pattern, or sequence, "
        f"not {type(matcher).__name__}"
    )


def matches_type(matcher: RawMatcher | TypeMatcher, node_type: str | None) -> bool:
    """Compile ``matcher`` and test ``node_type`` against it."""
    return compile_matcher(matcher).matches(node_type)
