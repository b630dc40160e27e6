#!/usr/bin/env python3
# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Build a Node tree for a brace pattern like 'a{b,c}d'.

Shows how a scanner drives PositionTracker and builds the tree with
push(), then walks it with find(), next and is_inside().
"""

from __future__ import annotations

from genro_astnode import Node, PositionTracker

TOKENS = {'{': 'brace.open', '}': 'brace.close', ',': 'comma'}


def build(pattern: str) -> Node:
    """Build the tree for ``pattern``."""
    tracker = PositionTracker('<pattern>')
    root = Node({'type': 'root', 'is_scope': True})
    stack = [root]

    for char in pattern:
        pos = tracker.position()
        tracker.advance(char)
        node_type = TOKENS.get(char, 'text')

        if node_type == 'brace.open':
            brace = Node({'type': 'brace', 'is_scope': True})
            stack[-1].push(brace)
            stack.append(brace)
            brace.push(Node(char, node_type, position=pos))
        elif node_type == 'brace.close':
            brace = stack.pop()
            brace.push(Node(char, node_type, position=pos))
        else:
            stack[-1].push(Node(char, node_type, position=pos))

    return root


def main() -> None:
    root = build('a{b,c}d')
    brace = root.find('brace')
    print(root.to_dict())
    print('brace at index', brace.index)
    print('last in brace:', brace.last, '-> next:', brace.last.next)
    print('comma inside brace:', brace.find('comma').is_inside('brace'))
    print('scope of b:', brace.find(1).scope)


if __name__ == '__main__':
    main()
