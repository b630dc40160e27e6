# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for type matchers."""

import re

import pytest

from genro_astnode import (
    InvalidArgumentError,
    MatcherKind,
    TypeMatcher,
    compile_matcher,
    matches_type,
)


class TestCompileMatcher:
    """Tests for compile_matcher."""

    def test_string(self):
        matcher = compile_matcher('star')
        assert matcher.kind is MatcherKind.STRING
        assert matcher.target == 'star'

    def test_pattern(self):
        pattern = re.compile('^brace')
        matcher = compile_matcher(pattern)
        assert matcher.kind is MatcherKind.PATTERN
        assert matcher.target is pattern

    def test_sequence(self):
        """Test sequences compile recursively into ANY_OF."""
        matcher = compile_matcher(['a', ('b', re.compile('c'))])
        assert matcher.kind is MatcherKind.ANY_OF
        assert matcher.target[0].kind is MatcherKind.STRING
        assert matcher.target[1].kind is MatcherKind.ANY_OF
        assert matcher.target[1].target[1].kind is MatcherKind.PATTERN

    def test_already_compiled(self):
        matcher = compile_matcher('a')
        assert compile_matcher(matcher) is matcher

    @pytest.mark.parametrize('value', [None, 1, 1.5, {'type': 'a'}, object()])
    def test_invalid(self, value):
        with pytest.raises(InvalidArgumentError, match='string, pattern, or sequence'):
            compile_matcher(value)

    def test_invalid_nested(self):
        with pytest.raises(InvalidArgumentError):
            compile_matcher(['a', 3])


class TestTypeMatcher:
    """Tests for TypeMatcher.matches."""

    def test_string_is_exact(self):
        assert matches_type('star', 'star')
        assert not matches_type('star', 'stars')
        assert not matches_type('star', None)

    def test_pattern_searches(self):
        assert matches_type(re.compile('open'), 'brace.open')
        assert not matches_type(re.compile('^open'), 'brace.open')

    def test_pattern_ignores_missing_type(self):
        assert not matches_type(re.compile('.*'), None)

    def test_any_of(self):
        matcher = compile_matcher({'a', 'b'})
        assert matcher('a')
        assert matcher('b')
        assert not matcher('c')

    def test_empty_sequence_matches_nothing(self):
        assert not matches_type([], 'a')

    def test_is_frozen(self):
        matcher = TypeMatcher(MatcherKind.STRING, 'a')
        with pytest.raises(AttributeError):
            matcher.target = 'b'
