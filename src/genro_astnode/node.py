# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""AST node class.

This module provides Node, the tree element produced by parsers and read by
compilers. A Node owns its children (``nodes``) and keeps a weak, non-owning
reference to its parent. Relationships such as ``index``, ``siblings``,
``prev`` and ``next`` are computed from the current tree on every read.

Construction:
    - ``Node({'type': 'star', 'value': '*'})``: fields from a mapping
    - ``Node('*', 'star')``: scalar value plus type
    - ``Node('*', parent_node)``: scalar value plus parent, no type

Example:
    >>> root = Node({'type': 'root'})
    >>> root.push(Node('*', 'star'))
    1
    >>> root.find('star').value
    '*'
    >>> root.first.index
    0
"""

from __future__ import annotations

import copy
import logging
import weakref
from collections.abc import Mapping
from typing import Any, Callable, Iterable

from .exceptions import InvalidArgumentError, InvalidOperationError
from .matcher import RawMatcher, TypeMatcher, compile_matcher

logger = logging.getLogger(__name__)


def _reject_assignment(name: str) -> Callable[[Node, Any], None]:
    """Build a property setter that refuses any assignment."""
    def setter(self: Node, value: Any) -> None:
        raise InvalidOperationError(f"'{name}' getter cannot be set")
    return setter


class Node:
    """A node in an abstract syntax tree.

    Each node has:
    - type: Tag identifying the node variant (used for search/matching)
    - value: Optional scalar payload, usually only on leaf nodes
    - nodes: Ordered list of children, None until the first child is added
    - parent: Weak back-reference to the owning node
    - attr: Extra attributes merged from construction fields

    Extra attributes are also reachable as plain attributes, so a parser can
    write ``node.position = ...`` and read it back the same way.

    The parent link does not keep the parent alive: once nothing else
    references a parent, its children report ``parent`` as None. Keep the
    root of a tree in a variable while navigating it, e.g.
    ``copy = root.clone(); child = copy.first`` rather than
    ``root.clone().first``.

    Example:
        >>> node = Node('*', 'star')
        >>> node.type, node.value
        ('star', '*')
        >>> Node({'type': 'text', 'value': 'a', 'line': 3}).line
        3
    """

    __slots__ = ('type', 'value', 'nodes', 'attr', '_parent', '_index', '__weakref__')

    __astnode__ = True

    # Position of a node that is not in its parent's children.
    DETACHED = -1

    # Names of computed properties; never overwritten by construction fields.
    computed_names: frozenset[str] = frozenset(
        {'siblings', 'index', 'prev', 'next', 'first', 'last', 'scope'}
    )

    def __init__(
        self,
        value: Any = None,
        type: str | Node | None = None,
        parent: Node | None = None,
        *,
        position: Callable[[Node], Any] | None = None,
    ) -> None:
        """Initialize a Node.

        Args:
            value: Either a mapping of fields to merge onto the node, or the
                scalar payload.
            type: The node type. Ignored when ``value`` is a mapping.
                Otherwise, if it is not a string it is taken as the parent.
            parent: The owning node. Stored immediately, even though the
                node is not yet part of the parent's children.
            position: Optional callable invoked with the new node, typically
                the wrapper returned by PositionTracker.position().

        Raises:
            InvalidArgumentError: If the parent or any child given in the
                fields is not a node.
        """
        self.attr: dict[str, Any] = {}
        self.type: str | None = None
        self.value: Any = None
        self.nodes: list[Node] | None = None
        self._parent: weakref.ref[Node] | None = None
        self._index = self.DETACHED

        if isinstance(value, Mapping):
            self._merge_fields(value)
        else:
            if type is not None and not isinstance(type, str):
                parent, type = type, None
            self.type = type
            self.value = value

        if parent is not None:
            self.parent = parent

        if position is not None:
            position(self)

    def _merge_fields(self, fields: Mapping[str, Any]) -> None:
        """Merge a mapping of construction fields onto this node."""
        children: Iterable[Any] | None = None
        for key, val in fields.items():
            if key in self.computed_names:
                logger.debug("Dropping computed property %r from node fields", key)
            elif key == 'type':
                self.type = val
            elif key in ('value', 'val'):
                self.value = val
            elif key in ('nodes', 'children'):
                children = val
            elif key == 'parent':
                if val is not None:
                    self.parent = val
            else:
                self.attr[key] = val

        if children is not None:
            children = list(children)
            for child in children:
                self._check_node(child, 'nodes')
            for child in children:
                self.push(child)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        parts = [f"type={self.type!r}"]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.nodes:
            parts.append(f"nodes={len(self.nodes)}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def __getattr__(self, name: str) -> Any:
        """Read extra attributes as plain attributes.

        Raises:
            AttributeError: If no extra attribute has that name.
        """
        if name.startswith('__'):
            raise AttributeError(name)
        try:
            attr = object.__getattribute__(self, 'attr')
            return attr[name]
        except (AttributeError, KeyError):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        """Route unknown attribute names to the extra attributes dict."""
        if hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.attr[name] = value

    # ==================== Identity ====================

    @staticmethod
    def is_node(value: Any) -> bool:
        """True if ``value`` is a node instance.

        Checks the class marker rather than isinstance(), so nodes built by
        another loaded copy of this package are recognized too. Node classes
        carry the marker as well and are rejected.
        """
        if isinstance(value, type):
            return False
        return getattr(value, '__astnode__', False) is True

    def _check_node(self, value: Any, action: str) -> None:
        if not self.is_node(value):
            raise InvalidArgumentError(
                f"expected {action}() to receive a Node, not {type(value).__name__}"
            )

    # ==================== Fields ====================

    @property
    def val(self) -> Any:
        """Alias of ``value``."""
        return self.value

    @val.setter
    def val(self, value: Any) -> None:
        self.value = value

    @property
    def children(self) -> list[Node] | None:
        """Alias of ``nodes``."""
        return self.nodes

    @property
    def parent(self) -> Node | None:
        """The owning node, or None for a root (or a collected parent)."""
        ref = self._parent
        return ref() if ref is not None else None

    @parent.setter
    def parent(self, node: Node | None) -> None:
        if node is None:
            self._parent = None
            return
        self._check_node(node, 'parent')
        self._parent = weakref.ref(node)

    def get_attr(self, attr: str | None = None, default: Any = None) -> Any:
        """Get extra attribute value or all extra attributes.

        Args:
            attr: Attribute name. If None, returns all attributes.
            default: Default value if attribute not found.
        """
        if attr is None:
            return self.attr
        return self.attr.get(attr, default)

    def set_attr(self, _attr: dict[str, Any] | None = None, **kwargs: Any) -> None:
        """Set extra attributes, skipping computed property names.

        Args:
            _attr: Dictionary of attributes to set.
            **kwargs: Additional attributes as keyword arguments.
        """
        for key, val in {**(_attr or {}), **kwargs}.items():
            if key in self.computed_names:
                logger.debug("Dropping computed property %r from attributes", key)
                continue
            self.attr[key] = val

    # ==================== Mutation ====================

    def push(self, node: Node) -> int:
        """Append a child node.

        Args:
            node: The node to append. Its parent is set to this node.

        Returns:
            The new number of children.

        Raises:
            InvalidArgumentError: If ``node`` is not a node.
        """
        self._check_node(node, 'push')
        if self.nodes is None:
            self.nodes = []
        node.parent = self
        node.index = len(self.nodes)
        self.nodes.append(node)
        return len(self.nodes)

    def unshift(self, node: Node) -> int:
        """Prepend a child node.

        Returns:
            The new number of children.

        Raises:
            InvalidArgumentError: If ``node`` is not a node.
        """
        self._check_node(node, 'unshift')
        if self.nodes is None:
            self.nodes = []
        node.parent = self
        node.index = 0
        self.nodes.insert(0, node)
        return len(self.nodes)

    def pop(self) -> Node | None:
        """Remove and return the last child, or None if there are none.

        The removed node keeps its parent reference and cached index.
        """
        if not self.nodes:
            return None
        return self.nodes.pop()

    def shift(self) -> Node | None:
        """Remove and return the first child, or None if there are none.

        The removed node keeps its parent reference and cached index.
        """
        if not self.nodes:
            return None
        return self.nodes.pop(0)

    def remove(self, node: Node) -> Node | None:
        """Remove a child node.

        The removed node's index is reset to DETACHED; its parent reference
        is left in place.

        Args:
            node: The child to remove.

        Returns:
            The removed node, or None if it is not a child of this node.

        Raises:
            InvalidArgumentError: If ``node`` is not a node.
        """
        self._check_node(node, 'remove')
        idx = node.index if node.parent is self else self.DETACHED
        if idx == self.DETACHED:
            logger.debug("remove(): %r is not a child of %r", node, self)
            return None
        del self.nodes[idx]
        node.index = self.DETACHED
        return node

    # ==================== Relations ====================

    @property
    def siblings(self) -> list[Node] | None:
        """The parent's children (including this node), or None."""
        parent = self.parent
        if parent is None:
            return None
        return parent.nodes

    siblings = siblings.setter(_reject_assignment('siblings'))

    @property
    def index(self) -> int:
        """Position of this node among its siblings, or DETACHED.

        The cached position is trusted only if the sibling found there is
        this very node; otherwise the siblings are rescanned.
        """
        siblings = self.siblings
        if siblings is None:
            return self.DETACHED
        cached = self._index
        if 0 <= cached < len(siblings) and siblings[cached] is self:
            return cached
        logger.debug("Index cache miss for %r, rescanning siblings", self)
        for idx, sibling in enumerate(siblings):
            if sibling is self:
                self._index = idx
                return idx
        self._index = self.DETACHED
        return self.DETACHED

    @index.setter
    def index(self, value: int) -> None:
        # Only a hint: the next read revalidates it.
        self._index = value

    @property
    def prev(self) -> Node | None:
        """The sibling before this node, or None if this node is first.

        Unlike ``next``, this does not cross subtree boundaries: the first
        child does not fall back to its parent's ``prev``.
        """
        siblings = self.siblings
        if not siblings:
            return None
        idx = self.index
        if idx > 0:
            return siblings[idx - 1]
        return None

    prev = prev.setter(_reject_assignment('prev'))

    @property
    def next(self) -> Node | None:
        """The node after this one in document order.

        That is the next sibling or, for the last sibling, the parent's
        next node. None for a root or a detached node.
        """
        siblings = self.siblings
        if not siblings:
            return None
        idx = self.index
        if idx == self.DETACHED:
            return None
        if idx + 1 < len(siblings):
            return siblings[idx + 1]
        return self.parent.next

    next = next.setter(_reject_assignment('next'))

    @property
    def first(self) -> Node | None:
        """The first child, or None."""
        return self.nodes[0] if self.nodes else None

    first = first.setter(_reject_assignment('first'))

    @property
    def last(self) -> Node | None:
        """The last child, or None."""
        return self.nodes[-1] if self.nodes else None

    last = last.setter(_reject_assignment('last'))

    @property
    def scope(self) -> Node | None:
        """This node if it has a truthy ``is_scope`` attribute, else the parent."""
        if self.attr.get('is_scope'):
            return self
        return self.parent

    scope = scope.setter(_reject_assignment('scope'))

    # ==================== Search ====================

    def find(self, matcher: int | RawMatcher | TypeMatcher) -> Node | None:
        """Find a child by position or by type.

        Args:
            matcher: An int selects a child by position; negative or
                out-of-range positions give None. Anything else is a type matcher (str, re.Pattern, or a
                sequence of those) and the first matching child is returned.

        Returns:
            The child found, or None.

        Raises:
            InvalidArgumentError: If the matcher has an unsupported shape.
        """
        if isinstance(matcher, int) and not isinstance(matcher, bool):
            if not self.nodes or not 0 <= matcher < len(self.nodes):
                return None
            return self.nodes[matcher]
        compiled = compile_matcher(matcher)
        for node in self.nodes or ():
            if compiled.matches(node.type):
                return node
        return None

    def is_type(self, matcher: RawMatcher | TypeMatcher) -> bool:
        """True if this node's type satisfies ``matcher``."""
        return compile_matcher(matcher).matches(self.type)

    def has_type(self, matcher: RawMatcher | TypeMatcher) -> bool:
        """True if any child's type satisfies ``matcher``."""
        compiled = compile_matcher(matcher)
        return any(compiled.matches(node.type) for node in self.nodes or ())

    def is_inside(self, matcher: RawMatcher | TypeMatcher) -> bool:
        """True if any ancestor's type satisfies ``matcher``."""
        compiled = compile_matcher(matcher)
        parent = self.parent
        while parent is not None:
            if compiled.matches(parent.type):
                return True
            parent = parent.parent
        return False

    def is_empty(self, predicate: Callable[[Node], Any] | None = None) -> bool:
        """True if neither this node nor any descendant carries a value.

        Args:
            predicate: Optional callable invoked on this node and then on
                each descendant; a falsy result makes the node non-empty.
        """
        if predicate is not None and not predicate(self):
            return False
        if self.value is not None and self.value != '':
            return False
        return all(node.is_empty(predicate) for node in self.nodes or ())

    # ==================== Copy & Export ====================

    def clone(self) -> Node:
        """Return a deep, independent copy of this node and its subtree.

        The copy is a root: its parent is None.
        """
        node = self.__class__()
        node.type = self.type
        node.value = copy.deepcopy(self.value)
        node.attr = copy.deepcopy(self.attr)
        if self.nodes is not None:
            node.nodes = []
            for child in self.nodes:
                node.push(child.clone())
        return node

    def to_dict(self) -> dict[str, Any]:
        """Return the subtree as nested plain dicts.

        Keys: ``type``, ``value`` (when set), the extra attributes, and
        ``nodes`` (when the node has a children list).
        """
        data: dict[str, Any] = {'type': self.type}
        if self.value is not None:
            data['value'] = self.value
        data.update(self.attr)
        if self.nodes is not None:
            data['nodes'] = [node.to_dict() for node in self.nodes]
        return data
