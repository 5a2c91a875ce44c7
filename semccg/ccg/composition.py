#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : composition.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/04/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Base classes for CCG combination rules.

A combination rule is a pure function from one or two categories to zero or one derived category. Rules never raise on
ill-fitting input: a non-match is an empty tuple. The two main classes are :class:`CCGBinaryRule` and :class:`CCGUnaryRule`.
"""

from typing import Any, Optional, Union, Callable, Tuple
from dataclasses import dataclass

from jacinle.logging import get_logger

from semccg.ccg.syntax import CCGDirection
from semccg.ccg.category import Category

logger = get_logger(__file__)

__all__ = [
    'CCGDirection', 'RuleName', 'CCGRuleResult', 'CCGRule', 'CCGBinaryRule', 'CCGUnaryRule',
    'is_hashable_semantics', 'call_semantics_operation'
]


@dataclass(frozen=True)
class RuleName(object):
    """The name of a combination rule: a label and a direction. For example, ``>apply`` is the forward application."""

    label: str
    """The label of the rule, e.g., ``apply``, ``comp``, ``cx``."""

    direction: CCGDirection = CCGDirection.FORWARD
    """The direction of the rule."""

    @classmethod
    def create(cls, label: str, direction: Union[str, CCGDirection] = CCGDirection.FORWARD) -> 'RuleName':
        return cls(label, CCGDirection.from_string(direction))

    @property
    def is_forward(self) -> bool:
        return self.direction is CCGDirection.FORWARD

    def __str__(self) -> str:
        return ('>' if self.direction is CCGDirection.FORWARD else '<') + self.label


LEXICAL_RULE_NAME = RuleName('lex', CCGDirection.FORWARD)
"""The pseudo rule name attached to lexical cells."""


@dataclass(frozen=True)
class CCGRuleResult(object):
    """The result of a successful rule application."""

    rule_name: RuleName
    category: Category

    def __str__(self) -> str:
        return f'{self.rule_name}: {self.category}'


class CCGRule(object):
    """The base class of all combination rules. Rules holding no other state than their name compare equal by class and name."""

    def __init__(self, name: RuleName):
        self.name = name

    def _state(self) -> Tuple[Any, ...]:
        return tuple()

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.name == other.name and self._state() == other._state()

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self), self.name, self._state()))

    def __str__(self) -> str:
        return f'{type(self).__name__}[{self.name}]'

    __repr__ = __str__


class CCGBinaryRule(CCGRule):
    """A rule combining two adjacent categories."""

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        """Combine the left and the right category.

        Returns:
            a tuple of results. It is empty when the rule does not fire.
        """
        raise NotImplementedError()

    def __call__(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        return self.apply(left, right)


class CCGUnaryRule(CCGRule):
    """A rule rewriting a single category over the same span."""

    def apply(self, category: Category) -> Tuple[CCGRuleResult, ...]:
        raise NotImplementedError()

    def __call__(self, category: Category) -> Tuple[CCGRuleResult, ...]:
        return self.apply(category)


def is_hashable_semantics(semantics: Any) -> bool:
    """Whether a meaning representation can be stored in a chart. Cells are deduplicated by hashing their categories."""
    try:
        hash(semantics)
    except TypeError:
        return False
    return True


def call_semantics_operation(rule_name: RuleName, operation: Callable[..., Any], *args: Any) -> Optional[Any]:
    """Run a semantic operation on behalf of a rule.

    An exception raised by the operation, or an unhashable return value, is a non-match: the function returns None and
    the failure is logged at the debug level.
    """
    try:
        semantics = operation(*args)
    except Exception as e:
        logger.debug(f'Semantic operation of rule {rule_name} failed: {type(e).__name__}: {e}')
        return None
    if semantics is not None and not is_hashable_semantics(semantics):
        logger.debug(f'Semantic operation of rule {rule_name} returned an unhashable {type(semantics).__name__}.')
        return None
    return semantics
