#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : syntax.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/02/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Data structures for syntax types in a linguistic CCG."""

from typing import Optional, Union, List
from jacinle.utils.enum import JacEnum
from jacinle.utils.meta import repr_from_str
from jacinle.utils.printing import indent_text

from semccg.errors import SemCCGError

__all__ = [
    'CCGDirection', 'CCGSyntaxTypeParsingError',
    'CCGSyntaxType', 'CCGPrimitiveSyntaxType', 'CCGConjSyntaxType', 'CCGComposedSyntaxType', 'CCGCoordinationSyntaxType',
    'EMPTY_SYNTAX', 'is_coordination_of_type',
    'CCGSyntaxSystem', 'parse_syntax_type'
]


class CCGDirection(JacEnum):
    """Directions of slashes and of combination rules."""
    FORWARD = 'forward'
    BACKWARD = 'backward'


class CCGSyntaxTypeParsingError(SemCCGError):
    """Raised when the parsing of a syntax type string fails."""


class CCGSyntaxType(object):
    """Syntax types for CCG.

    There are four types of syntax types:

        - Primitive syntax types: `N`, `S`, `NP`, etc.
        - Composed syntax types: `S/NP`, `S\\NP`, etc.
        - Conjunction syntax types: `CONJ`.
        - Coordination syntax types: `C[NP]`, a partial coordination of `NP` items.

    Syntax types are immutable values. Two syntax types are equal iff their canonical strings are equal.
    """

    def __init__(self, typename: Optional[str] = None):
        self.typename = typename

    @property
    def is_conj(self) -> bool:
        return False

    @property
    def is_coordination(self) -> bool:
        """Whether the syntax type is a (partial) coordination structure."""
        return False

    @property
    def arity(self) -> int:
        """The arity of the syntax type. That is, the number of arguments it needs to combine before it becomes a primitive syntax type."""
        return 0

    @property
    def is_function(self) -> bool:
        """Whether the syntax type is a function type. That is, whether it can do function application with another syntax type."""
        return False

    @property
    def is_value(self) -> bool:
        """Whether the syntax type is a value type. That is, whether it is a primitive syntax type."""
        return False

    @property
    def parenthesis_typename(self) -> str:
        """Return the typename with parenthesis."""
        return self.typename

    def __str__(self) -> str:
        return str(self.typename)

    __repr__ = repr_from_str

    def __truediv__(self, other: 'CCGSyntaxType') -> 'CCGSyntaxType':
        """Construct a `A/B` syntax type."""
        return CCGComposedSyntaxType(self, other, direction=CCGDirection.FORWARD)

    def __floordiv__(self, other: 'CCGSyntaxType') -> 'CCGSyntaxType':
        """Construct a `A\\B` syntax type."""
        return CCGComposedSyntaxType(self, other, direction=CCGDirection.BACKWARD)

    def __eq__(self, other: object) -> bool:
        """Return whether two syntax types are equal."""
        if not isinstance(other, CCGSyntaxType):
            return False
        return self.typename == other.typename

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.typename)


class CCGPrimitiveSyntaxType(CCGSyntaxType):
    """The primitive syntax types (e.g., NP)."""

    @property
    def is_value(self) -> bool:
        return True


class CCGConjSyntaxType(CCGSyntaxType):
    """A conjunction syntax type."""

    @property
    def is_conj(self):
        return True


class CCGComposedSyntaxType(CCGSyntaxType):
    """A composed syntax type (e.g., S/NP)."""

    def __init__(self, main: CCGSyntaxType, sub: CCGSyntaxType, direction: Union[str, CCGDirection]):
        """Initialize the composed syntax type.

        Args:
            main: the main (result) syntax type (e.g., S).
            sub: the sub (argument) syntax type (e.g., NP).
            direction: the slash direction (e.g., FORWARD).
        """

        self.main = main
        self.sub = sub
        self.direction = CCGDirection.from_string(direction)

        if self.direction is CCGDirection.FORWARD:
            typename = self.main.typename + '/' + self.sub.parenthesis_typename
        else:
            typename = self.main.typename + '\\' + self.sub.parenthesis_typename
        super().__init__(typename)

    @property
    def arity(self) -> int:
        return self.main.arity + 1

    @property
    def is_function(self) -> bool:
        return True

    @property
    def parenthesis_typename(self) -> str:
        return '(' + self.typename + ')'

    def flatten(self) -> List[CCGSyntaxType]:
        """Flatten the arguments of the syntax type. For example, ``S\\NP/NP`` is flattened into ``[S, NP, NP]``."""
        if isinstance(self.main, CCGComposedSyntaxType):
            return self.main.flatten() + [self.sub]
        return [self.main, self.sub]


class CCGCoordinationSyntaxType(CCGSyntaxType):
    """The syntax type of a partial coordination, written as ``C[T]``. For example, the phrase "and blue" has type ``C[N/N]``."""

    def __init__(self, coordinated: CCGSyntaxType):
        self.coordinated = coordinated
        super().__init__('C[' + coordinated.typename + ']')

    @property
    def is_coordination(self) -> bool:
        return True


EMPTY_SYNTAX = CCGPrimitiveSyntaxType('EMPTY')
"""The syntax of skipped tokens."""


def is_coordination_of_type(syntax: CCGSyntaxType, argument_type: CCGSyntaxType) -> bool:
    """Test whether a syntax type denotes a coordination structure of type ``argument_type``."""
    return isinstance(syntax, CCGCoordinationSyntaxType) and syntax.coordinated == argument_type


class CCGSyntaxSystem(object):
    """A data structure that keeps track of a set of primitive and conjunction syntax types allowed in a grammar."""

    def __init__(self):
        self.types = dict()

    def define_primitive_type(self, stype: Union[CCGSyntaxType, str]):
        """Define a primitive syntax type.

        Args:
            stype: The syntax type to be defined.
        """
        if isinstance(stype, CCGSyntaxType):
            self.types[stype.typename] = stype
        elif isinstance(stype, str):
            self.types[stype] = CCGPrimitiveSyntaxType(stype)
        else:
            raise TypeError(f'Invalid type: {stype}.')

    def define_conj_type(self, stype: Union[CCGSyntaxType, str]):
        """Define a conj syntax type.

        Args:
            stype: The syntax type to be defined.
        """
        if isinstance(stype, CCGSyntaxType):
            self.types[stype.typename] = stype
        elif isinstance(stype, str):
            self.types[stype] = CCGConjSyntaxType(stype)
        else:
            raise TypeError(f'Invalid type: {stype}.')

    def __getitem__(self, item: Optional[Union[CCGSyntaxType, str]]) -> CCGSyntaxType:
        """A syntax sugar for `parse_syntax_type`.

        - When the string is `None`, return `None`.
        - When the string is a `CCGSyntaxType`, return the type itself.

        Args:
            item: The string to be parsed.

        Returns:
            CCGSyntaxType: The parsed syntax type.
        """
        if item is None:
            return CCGSyntaxType(None)
        if isinstance(item, CCGSyntaxType):
            return item
        return parse_syntax_type(item, syntax_system=self)

    def __str__(self) -> str:
        return 'CCGSyntaxSystem(' + ', '.join([str(x) for x in self.types.keys()]) + ')'

    __repr__ = __str__

    def format_summary(self) -> str:
        fmt = 'Primitive and Conjunction types:\n'
        for type in self.types.values():
            fmt += '  ' + str(type) + '\n'
        fmt = 'CCGSyntaxSystem:\n' + indent_text(fmt.rstrip())
        return fmt

    def print_summary(self):
        print(self.format_summary())

    @classmethod
    def make_default(cls, primitive_types=('S', 'NP', 'N', 'PP'), conj_types=('CONJ', )) -> 'CCGSyntaxSystem':
        """Make a syntax system with the given primitive and conjunction types."""
        system = cls()
        for t in primitive_types:
            system.define_primitive_type(t)
        for t in conj_types:
            system.define_conj_type(t)
        return system


def parse_syntax_type(string: str, syntax_system: Optional[CCGSyntaxSystem] = None) -> CCGSyntaxType:
    """Parse a string to a syntax type. Slashes are left-associative, so ``S\\NP/NP`` is ``(S\\NP)/NP``.

    Args:
        string: The string to be parsed.
        syntax_system: The syntax system to be used. When given, primitive types must have been defined in it.

    Returns:
        CCGSyntaxType: The parsed syntax type.
    """

    def parse_inner(current):
        current = current.strip()
        if current == '':
            raise CCGSyntaxTypeParsingError('Invalid syntax type string (got empty type): {}.'.format(string))
        nr_parenthesis = 0
        last_op = None
        for i, c in enumerate(current):
            if c in r'\/':
                if nr_parenthesis == 0:
                    last_op = i
            if c in '([':
                nr_parenthesis += 1
            elif c in ')]':
                nr_parenthesis -= 1
                if nr_parenthesis < 0:
                    raise CCGSyntaxTypeParsingError('Invalid parenthesis (extra ")"): {}.'.format(string))
        if nr_parenthesis != 0:
            raise CCGSyntaxTypeParsingError('Invalid parenthesis (extra "("): {}.'.format(string))

        if last_op is None:
            if current[0] == '(' and current[-1] == ')':
                return parse_inner(current[1:-1])
            if current.startswith('C[') and current[-1] == ']':
                return CCGCoordinationSyntaxType(parse_inner(current[2:-1]))
            if current == EMPTY_SYNTAX.typename:
                return EMPTY_SYNTAX
            if syntax_system is None:
                return CCGPrimitiveSyntaxType(current)
            if current in syntax_system.types:
                return syntax_system.types[current]
            raise CCGSyntaxTypeParsingError('Unknown primitive syntax type {} during parsing {}.'.format(current, string))

        last_op_value = CCGDirection.FORWARD if current[last_op] == '/' else CCGDirection.BACKWARD
        return CCGComposedSyntaxType(
            parse_inner(current[:last_op]),
            parse_inner(current[last_op + 1:]),
            direction=last_op_value
        )

    return parse_inner(string)
