#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : rules.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/04/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Standard CCG combination rules (application, composition, skipping, and unary syntax shifting), and the
:class:`CCGRuleSet` that the chart parser evaluates for every pair of adjacent cells."""

from typing import Optional, Any, Iterable, Callable, Tuple, List

from jacinle.logging import get_logger
from jacinle.utils.printing import indent_text

from semccg.ccg.syntax import CCGDirection, CCGSyntaxType, CCGComposedSyntaxType, EMPTY_SYNTAX
from semccg.ccg.category import Category
from semccg.ccg.semantics import SemanticsServices, CallableSemanticsServices
from semccg.ccg.composition import RuleName, CCGRuleResult, CCGRule, CCGBinaryRule, CCGUnaryRule, is_hashable_semantics, call_semantics_operation

logger = get_logger(__file__)

__all__ = [
    'ForwardApplicationRule', 'BackwardApplicationRule', 'ForwardCompositionRule', 'BackwardCompositionRule',
    'SkippingRule', 'SyntaxShiftingRule', 'CCGRuleSet'
]


def _combine_semantics(rule_name: RuleName, left: Category, right: Category, combine: Callable[[], Any]) -> Tuple[bool, Any]:
    # Syntax-only categories combine into syntax-only categories.
    if left.semantics is None and right.semantics is None:
        return True, None
    if left.semantics is None or right.semantics is None:
        return False, None
    semantics = call_semantics_operation(rule_name, combine)
    return semantics is not None, semantics


def _is_function_of_direction(syntax: CCGSyntaxType, direction: CCGDirection) -> bool:
    return syntax.is_function and syntax.direction is direction


def _apply_rule(rule: CCGRule, *categories: Category) -> List[CCGRuleResult]:
    try:
        results = rule.apply(*categories)
    except Exception as e:
        logger.debug(f'Rule {rule.name} failed on {", ".join(str(c) for c in categories)}: {type(e).__name__}: {e}')
        return list()
    return [r for r in results if is_hashable_semantics(r.category.semantics)]


class _SemanticsRule(CCGBinaryRule):
    def __init__(self, name: RuleName, services: Optional[SemanticsServices] = None):
        super().__init__(name)
        self.services = services if services is not None else CallableSemanticsServices()

    def _state(self):
        return (self.services, )


class ForwardApplicationRule(_SemanticsRule):
    """``X/Y  Y  =>  X``."""

    def __init__(self, services: Optional[SemanticsServices] = None):
        super().__init__(RuleName('apply', CCGDirection.FORWARD), services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not _is_function_of_direction(left.syntax, CCGDirection.FORWARD) or left.syntax.sub != right.syntax:
            return tuple()
        success, semantics = _combine_semantics(self.name, left, right, lambda: self.services.apply(left.semantics, right.semantics))
        if not success:
            return tuple()
        return (CCGRuleResult(self.name, Category(left.syntax.main, semantics)), )


class BackwardApplicationRule(_SemanticsRule):
    """``Y  X\\Y  =>  X``."""

    def __init__(self, services: Optional[SemanticsServices] = None):
        super().__init__(RuleName('apply', CCGDirection.BACKWARD), services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not _is_function_of_direction(right.syntax, CCGDirection.BACKWARD) or right.syntax.sub != left.syntax:
            return tuple()
        success, semantics = _combine_semantics(self.name, left, right, lambda: self.services.apply(right.semantics, left.semantics))
        if not success:
            return tuple()
        return (CCGRuleResult(self.name, Category(right.syntax.main, semantics)), )


class ForwardCompositionRule(_SemanticsRule):
    """``X/Y  Y/Z  =>  X/Z``."""

    def __init__(self, services: Optional[SemanticsServices] = None):
        super().__init__(RuleName('comp', CCGDirection.FORWARD), services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not _is_function_of_direction(left.syntax, CCGDirection.FORWARD) or not _is_function_of_direction(right.syntax, CCGDirection.FORWARD):
            return tuple()
        if left.syntax.sub != right.syntax.main:
            return tuple()
        success, semantics = _combine_semantics(self.name, left, right, lambda: self.services.compose(left.semantics, right.semantics))
        if not success:
            return tuple()
        syntax = CCGComposedSyntaxType(left.syntax.main, right.syntax.sub, CCGDirection.FORWARD)
        return (CCGRuleResult(self.name, Category(syntax, semantics)), )


class BackwardCompositionRule(_SemanticsRule):
    """``Y\\Z  X\\Y  =>  X\\Z``."""

    def __init__(self, services: Optional[SemanticsServices] = None):
        super().__init__(RuleName('comp', CCGDirection.BACKWARD), services)

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if not _is_function_of_direction(left.syntax, CCGDirection.BACKWARD) or not _is_function_of_direction(right.syntax, CCGDirection.BACKWARD):
            return tuple()
        if right.syntax.sub != left.syntax.main:
            return tuple()
        success, semantics = _combine_semantics(self.name, left, right, lambda: self.services.compose(right.semantics, left.semantics))
        if not success:
            return tuple()
        syntax = CCGComposedSyntaxType(right.syntax.main, left.syntax.sub, CCGDirection.BACKWARD)
        return (CCGRuleResult(self.name, Category(syntax, semantics)), )


class SkippingRule(CCGBinaryRule):
    """Absorb a skipped token. The forward rule is ``EMPTY  X  =>  X``; the backward rule is ``X  EMPTY  =>  X``."""

    def __init__(self, direction: CCGDirection = CCGDirection.FORWARD):
        super().__init__(RuleName('skip', CCGDirection.from_string(direction)))

    def apply(self, left: Category, right: Category) -> Tuple[CCGRuleResult, ...]:
        if self.name.direction is CCGDirection.FORWARD:
            if left.syntax == EMPTY_SYNTAX:
                return (CCGRuleResult(self.name, right), )
        else:
            if right.syntax == EMPTY_SYNTAX:
                return (CCGRuleResult(self.name, left), )
        return tuple()


class SyntaxShiftingRule(CCGUnaryRule):
    """A unary rule that changes the syntax of a category, e.g., turning a bare noun ``N`` into ``NP``.

    The optional ``semantics_function`` maps the semantics of the child; returning None rejects the shift.
    """

    def __init__(self, label: str, source: CCGSyntaxType, target: CCGSyntaxType, semantics_function: Optional[Callable[[Any], Any]] = None):
        super().__init__(RuleName(label, CCGDirection.FORWARD))
        self.source = source
        self.target = target
        self.semantics_function = semantics_function

    def _state(self):
        return (self.source, self.target, self.semantics_function)

    def apply(self, category: Category) -> Tuple[CCGRuleResult, ...]:
        if category.syntax != self.source:
            return tuple()
        semantics = category.semantics
        if self.semantics_function is not None and semantics is not None:
            semantics = call_semantics_operation(self.name, self.semantics_function, semantics)
            if semantics is None:
                return tuple()
        return (CCGRuleResult(self.name, Category(self.target, semantics)), )


class CCGRuleSet(object):
    """An ordered collection of binary and unary rules."""

    def __init__(self, binary_rules: Iterable[CCGBinaryRule] = tuple(), unary_rules: Iterable[CCGUnaryRule] = tuple()):
        self.binary_rules: List[CCGBinaryRule] = list()
        self.unary_rules: List[CCGUnaryRule] = list()

        for rule in binary_rules:
            self.add_binary_rule(rule)
        for rule in unary_rules:
            self.add_unary_rule(rule)

    def add_binary_rule(self, rule: CCGBinaryRule):
        if rule not in self.binary_rules:
            self.binary_rules.append(rule)

    def add_unary_rule(self, rule: CCGUnaryRule):
        if rule not in self.unary_rules:
            self.unary_rules.append(rule)

    @property
    def has_skipping(self) -> bool:
        return any(isinstance(rule, SkippingRule) for rule in self.binary_rules)

    def with_skipping(self) -> 'CCGRuleSet':
        """Return a new rule set that additionally contains the two skipping rules."""
        return CCGRuleSet(
            self.binary_rules + [SkippingRule(CCGDirection.FORWARD), SkippingRule(CCGDirection.BACKWARD)],
            self.unary_rules
        )

    def apply_binary(self, left: Category, right: Category) -> List[CCGRuleResult]:
        """Apply all binary rules. A rule that raises, or that produces unhashable semantics, contributes no result."""
        results = list()
        for rule in self.binary_rules:
            results.extend(_apply_rule(rule, left, right))
        return results

    def apply_unary(self, category: Category) -> List[CCGRuleResult]:
        results = list()
        for rule in self.unary_rules:
            results.extend(_apply_rule(rule, category))
        return results

    @classmethod
    def make_function_application(cls, services: Optional[SemanticsServices] = None) -> 'CCGRuleSet':
        """Forward and backward application only."""
        return cls([ForwardApplicationRule(services), BackwardApplicationRule(services)])

    @classmethod
    def make_categorial_grammar(cls, services: Optional[SemanticsServices] = None, coordination_services: Optional[Any] = None) -> 'CCGRuleSet':
        """Application and composition. When ``coordination_services`` is given, also the coordination rules ``c1``, ``c2``, and ``cx``."""
        rules = [
            ForwardApplicationRule(services), BackwardApplicationRule(services),
            ForwardCompositionRule(services), BackwardCompositionRule(services)
        ]
        if coordination_services is not None:
            from semccg.ccg.coordination import make_coordination_rules
            rules.extend(make_coordination_rules(coordination_services))
        return cls(rules)

    def __len__(self) -> int:
        return len(self.binary_rules) + len(self.unary_rules)

    def format_summary(self) -> str:
        fmt = 'Binary rules:\n'
        for rule in self.binary_rules:
            fmt += '  ' + str(rule) + '\n'
        fmt += 'Unary rules:\n'
        for rule in self.unary_rules:
            fmt += '  ' + str(rule) + '\n'
        return 'CCGRuleSet:\n' + indent_text(fmt.rstrip())

    def print_summary(self):
        print(self.format_summary())
