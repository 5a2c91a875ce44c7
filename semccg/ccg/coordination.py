#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : coordination.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/05/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Coordination rules and the coordination semantics services.

Coordination is built bottom-up in three steps. Take "likes red and blue" as an example:

    - ``c1``: ``and : CONJ`` + ``blue : N`` gives ``and blue : C[N]``, a partial coordination.
    - ``c2``: ``red : N`` + ``and blue : C[N]`` gives ``red and blue : N``, a completed coordination.
    - ``cx``: ``likes : S/N`` + ``and blue : C[N]`` gives ``likes and blue : S``, distributing the function over the
      coordinated items (argument coordination).
"""

from typing import Optional, Any, Callable, Dict, Tuple, List
from dataclasses import dataclass

from semccg.ccg.syntax import CCGDirection, CCGComposedSyntaxType, CCGCoordinationSyntaxType, EMPTY_SYNTAX, is_coordination_of_type
from semccg.ccg.category import Category
from semccg.ccg.semantics import SemanticsServices, CallableSemanticsServices
from semccg.ccg.composition import RuleName, CCGRuleResult, CCGBinaryRule, call_semantics_operation

__all__ = [
    'CoordinationValue', 'CoordinationServices', 'SimpleCoordinationServices',
    'C1Rule', 'C2Rule', 'CXRule', 'make_coordination_rules'
]


@dataclass(frozen=True)
class CoordinationValue(object):
    """The semantics of a partial coordination: a conjunction and the coordinated items (in surface order)."""

    conj: Any
    items: Tuple[Any, ...]

    def __str__(self):
        return f'{self.conj}(' + ', '.join(str(x) for x in self.items) + ')'


class CoordinationServices(object):
    """The interface for coordination semantics. Every method returns None when the combination is not defined."""

    def initiate(self, conj: Any, item: Any) -> Optional[Any]:
        """Start a partial coordination from a conjunction and its right-most item."""
        raise NotImplementedError()

    def expand(self, item: Any, coordination: Any) -> Optional[Any]:
        """Complete a partial coordination with an item on its left."""
        raise NotImplementedError()

    def apply_coordination(self, function: Any, coordination: Any) -> Optional[Any]:
        """Apply a function to a partial coordination of its arguments."""
        raise NotImplementedError()


class SimpleCoordinationServices(CoordinationServices):
    """Coordination over :class:`CoordinationValue` instances.

    The conjunction semantics are keys of ``conj_impls``. Each implementation reduces the list of coordinated values
    into a single value, e.g., ``{'and': frozenset}`` or ``{'or': lambda xs: any(xs)}``.
    """

    def __init__(self, conj_impls: Dict[Any, Callable[[List[Any]], Any]], semantics_services: Optional[SemanticsServices] = None):
        self.conj_impls = conj_impls
        self.semantics_services = semantics_services if semantics_services is not None else CallableSemanticsServices()

    def initiate(self, conj: Any, item: Any) -> Optional[Any]:
        if item is None or not self._is_known_conj(conj):
            return None
        return CoordinationValue(conj, (item, ))

    def expand(self, item: Any, coordination: Any) -> Optional[Any]:
        if item is None or not isinstance(coordination, CoordinationValue):
            return None
        return self._reduce(coordination.conj, [item, *coordination.items])

    def apply_coordination(self, function: Any, coordination: Any) -> Optional[Any]:
        if function is None or not isinstance(coordination, CoordinationValue):
            return None
        results = list()
        for item in coordination.items:
            result = self.semantics_services.apply(function, item)
            if result is None:
                return None
            results.append(result)
        return self._reduce(coordination.conj, results)

    def _is_known_conj(self, conj: Any) -> bool:
        try:
            return conj in self.conj_impls
        except TypeError:
            return False

    def _reduce(self, conj: Any, values: List[Any]) -> Optional[Any]:
        if not self._is_known_conj(conj):
            return None
        return self.conj_impls[conj](values)


class _CoordinationRule(CCGBinaryRule):
    def __init__(self, name: RuleName, coordination_services: CoordinationServices):
        super().__init__(name)
        self.coordination_services = coordination_services

    def _state(self):
        return (self.coordination_services, )


class C1Rule(_CoordinationRule):
    """``CONJ  T  =>  C[T]``."""

    def __init__(self, coordination_services: CoordinationServices):
        super().__init__(RuleName('c1', CCGDirection.FORWARD), coordination_services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not left.syntax.is_conj:
            return tuple()
        if right.syntax.is_conj or right.syntax.is_coordination or right.syntax == EMPTY_SYNTAX:
            return tuple()
        semantics = None
        if left.semantics is not None or right.semantics is not None:
            semantics = call_semantics_operation(self.name, self.coordination_services.initiate, left.semantics, right.semantics)
            if semantics is None:
                return tuple()
        return (CCGRuleResult(self.name, Category(CCGCoordinationSyntaxType(right.syntax), semantics)), )


class C2Rule(_CoordinationRule):
    """``T  C[T]  =>  T``."""

    def __init__(self, coordination_services: CoordinationServices):
        super().__init__(RuleName('c2', CCGDirection.BACKWARD), coordination_services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not is_coordination_of_type(right.syntax, left.syntax):
            return tuple()
        semantics = None
        if left.semantics is not None or right.semantics is not None:
            semantics = call_semantics_operation(self.name, self.coordination_services.expand, left.semantics, right.semantics)
            if semantics is None:
                return tuple()
        return (CCGRuleResult(self.name, Category(left.syntax, semantics)), )


class CXRule(_CoordinationRule):
    """Argument coordination: ``A/T  C[T]  =>  A``. The semantics of the left category is distributed over the coordinated items."""

    def __init__(self, coordination_services: CoordinationServices):
        super().__init__(RuleName('cx', CCGDirection.FORWARD), coordination_services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not isinstance(left.syntax, CCGComposedSyntaxType) or left.syntax.direction is not CCGDirection.FORWARD:
            return tuple()
        if left.semantics is None or right.semantics is None:
            return tuple()
        if not is_coordination_of_type(right.syntax, left.syntax.sub):
            return tuple()
        semantics = call_semantics_operation(self.name, self.coordination_services.apply_coordination, left.semantics, right.semantics)
        if semantics is None:
            return tuple()
        return (CCGRuleResult(self.name, Category.create(left.syntax.main, semantics)), )


def make_coordination_rules(coordination_services: CoordinationServices) -> List[CCGBinaryRule]:
    """Make the three coordination rules ``c1``, ``c2``, and ``cx``."""
    return [C1Rule(coordination_services), C2Rule(coordination_services), CXRule(coordination_services)]
