# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""AstNode exceptions."""

from __future__ import annotations


class AstNodeError(Exception):
    """Base exception for AstNode errors."""

    pass


class InvalidArgumentError(AstNodeError, TypeError):
    """Raised when an operation receives a value of the wrong shape.

    Typical causes are a non-node passed to push/unshift/remove, or a
    type matcher that is not a string, pattern, or sequence.
    """

    pass


class InvalidOperationError(AstNodeError, AttributeError):
    """Raised when assigning to a read-only computed property."""

    pass
