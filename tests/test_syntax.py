"""Tests for syntax types, categories, and syntax string parsing."""

import pytest

from semccg.ccg.syntax import (
    CCGDirection, CCGSyntaxTypeParsingError, CCGPrimitiveSyntaxType, CCGComposedSyntaxType, CCGCoordinationSyntaxType,
    EMPTY_SYNTAX, is_coordination_of_type, parse_syntax_type
)
from semccg.ccg.category import Category, EMPTY_CATEGORY


class TestParseSyntaxType:
    """Tests for parse_syntax_type and CCGSyntaxSystem lookups."""

    def test_primitive(self, syntax_system):
        """A bare name parses to the registered primitive type."""
        s = syntax_system['NP']
        assert isinstance(s, CCGPrimitiveSyntaxType)
        assert s.is_value
        assert str(s) == 'NP'

    def test_slashes_are_left_associative(self, syntax_system):
        """S\\NP/NP is (S\\NP)/NP."""
        s = syntax_system['S\\NP/NP']
        assert isinstance(s, CCGComposedSyntaxType)
        assert s.direction is CCGDirection.FORWARD
        assert s.sub == syntax_system['NP']
        assert s.main == syntax_system['S\\NP']
        assert s.main.direction is CCGDirection.BACKWARD
        assert s.arity == 2
        assert s.flatten() == [syntax_system['S'], syntax_system['NP'], syntax_system['NP']]

    def test_parenthesized_argument(self, syntax_system):
        """A complex argument keeps its parentheses in the canonical string."""
        s = syntax_system['S/(S/NP)']
        assert s.sub == syntax_system['S/NP']
        assert str(s) == 'S/(S/NP)'
        assert syntax_system[str(s)] == s

    def test_redundant_parentheses(self, syntax_system):
        """(S/NP)/NP and S/NP/NP are the same type."""
        assert syntax_system['(S/NP)/NP'] == syntax_system['S/NP/NP']
        assert hash(syntax_system['(S/NP)/NP']) == hash(syntax_system['S/NP/NP'])

    def test_coordination(self, syntax_system):
        """C[T] parses to a coordination of T."""
        s = syntax_system['C[NP]']
        assert isinstance(s, CCGCoordinationSyntaxType)
        assert s.is_coordination
        assert is_coordination_of_type(s, syntax_system['NP'])
        assert not is_coordination_of_type(s, syntax_system['N'])
        assert not is_coordination_of_type(syntax_system['NP'], syntax_system['NP'])

    def test_coordination_of_complex_type(self, syntax_system):
        s = syntax_system['C[N/N]']
        assert s.coordinated == syntax_system['N/N']
        assert str(s) == 'C[N/N]'

    def test_empty(self, syntax_system):
        """EMPTY is always known."""
        assert syntax_system['EMPTY'] is EMPTY_SYNTAX

    def test_unknown_primitive_raises(self, syntax_system):
        with pytest.raises(CCGSyntaxTypeParsingError):
            syntax_system['S/XYZ']

    def test_unbalanced_parentheses_raise(self):
        with pytest.raises(CCGSyntaxTypeParsingError):
            parse_syntax_type('(S/NP')
        with pytest.raises(CCGSyntaxTypeParsingError):
            parse_syntax_type('S/NP)')

    def test_empty_string_raises(self):
        with pytest.raises(CCGSyntaxTypeParsingError):
            parse_syntax_type('S/')

    def test_without_syntax_system(self):
        """Without a syntax system, every name is a primitive type."""
        s = parse_syntax_type('X/Y')
        assert s.main == CCGPrimitiveSyntaxType('X')
        assert s.sub == CCGPrimitiveSyntaxType('Y')

    def test_slash_operators(self, syntax_system):
        S, NP = syntax_system['S'], syntax_system['NP']
        assert S / NP == syntax_system['S/NP']
        assert S // NP == syntax_system['S\\NP']


class TestCategory:
    """Tests for categories."""

    def test_structural_equality(self, syntax_system):
        a = Category(syntax_system['NP'], 'cube')
        b = Category.create(syntax_system['NP'], 'cube')
        assert a == b
        assert hash(a) == hash(b)
        assert a != Category(syntax_system['NP'], 'sphere')
        assert a != Category(syntax_system['N'], 'cube')

    def test_str(self, syntax_system):
        assert str(Category(syntax_system['NP'], 'cube')) == 'NP : cube'
        assert str(Category(syntax_system['NP'])) == 'NP'

    def test_empty_category(self):
        assert EMPTY_CATEGORY.is_empty
        assert EMPTY_CATEGORY.semantics is None
        assert EMPTY_CATEGORY == Category(parse_syntax_type('EMPTY'))
