#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : scorers.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/06/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Scorers map an item (usually a :class:`~semccg.ccg.lexicon.LexicalEntry`) to a real number. They are used to
initialize the weights of new lexical entries.

Scorers can be created from string parameters with :func:`create_scorer`. For example:

.. code-block:: python

    resources = {'base': UniformScorer(-0.1)}
    scorer = create_scorer({'type': 'scorer.lex.skipping', 'cost': '-2.0', 'baseScorer': 'base'}, resources)

Malformed parameters raise :class:`~semccg.errors.ScorerConfigurationError` immediately.
"""

from typing import Any, Optional, Mapping, Callable, Dict

from semccg.errors import ScorerConfigurationError
from semccg.ccg.category import Category, EMPTY_CATEGORY

__all__ = [
    'Scorer', 'ScaledScorer', 'UniformScorer', 'LengthLexicalEntryScorer', 'SkippingSensitiveLexicalEntryScorer',
    'EMPTY_CATEGORY_RESOURCE', 'register_scorer', 'create_scorer'
]

EMPTY_CATEGORY_RESOURCE = 'empty_category'
"""The resource name of the empty category. When it is absent, :data:`~semccg.ccg.category.EMPTY_CATEGORY` is used."""


class Scorer(object):
    """The base class of scorers."""

    def score(self, item: Any) -> float:
        raise NotImplementedError()

    def __call__(self, item: Any) -> float:
        return self.score(item)

    @classmethod
    def from_params(cls, params: Mapping[str, Any], resources: Optional[Mapping[str, Any]] = None) -> 'Scorer':
        raise NotImplementedError()


class ScaledScorer(Scorer):
    def __init__(self, scale: float, base: Scorer):
        self.scale = scale
        self.base = base

    def score(self, item: Any) -> float:
        return self.scale * self.base.score(item)

    @classmethod
    def from_params(cls, params, resources=None):
        return cls(_get_float(params, 'scale'), _get_resource(params, 'baseScorer', resources))

    def __str__(self):
        return f'ScaledScorer({self.scale} * {self.base})'


class UniformScorer(Scorer):
    """Assign the same score to all items."""

    def __init__(self, value: float):
        self.value = value

    def score(self, item: Any) -> float:
        return self.value

    @classmethod
    def from_params(cls, params, resources=None):
        return _maybe_scaled(params, cls(_get_float(params, 'value')))

    def __str__(self):
        return f'UniformScorer({self.value})'


class LengthLexicalEntryScorer(Scorer):
    """Score a lexical entry by its number of tokens: ``coefficient * len(tokens) ** exponent``."""

    def __init__(self, coefficient: float, exponent: float = 1.0):
        self.coefficient = coefficient
        self.exponent = exponent

    def score(self, item: Any) -> float:
        return self.coefficient * len(item.tokens) ** self.exponent

    @classmethod
    def from_params(cls, params, resources=None):
        return _maybe_scaled(params, cls(_get_float(params, 'coef'), _get_float(params, 'exp', 1.0)))

    def __str__(self):
        return f'LengthLexicalEntryScorer({self.coefficient} * len ** {self.exponent})'


class SkippingSensitiveLexicalEntryScorer(Scorer):
    """A lexical entry scorer that is aware of the empty entries used to skip words.

    Entries whose category equals the empty category get the skipping cost, which is usually negative. All other
    entries are scored by the base scorer.
    """

    def __init__(self, empty_category: Category, skipping_cost: float, base_scorer: Scorer):
        self.empty_category = empty_category
        self.skipping_cost = skipping_cost
        self.base_scorer = base_scorer

    def score(self, item: Any) -> float:
        if item.category == self.empty_category:
            return self.skipping_cost
        return self.base_scorer.score(item)

    @classmethod
    def from_params(cls, params, resources=None):
        empty_category = EMPTY_CATEGORY if resources is None else resources.get(EMPTY_CATEGORY_RESOURCE, EMPTY_CATEGORY)
        return _maybe_scaled(params, cls(empty_category, _get_float(params, 'cost'), _get_resource(params, 'baseScorer', resources)))

    def __str__(self):
        return f'SkippingSensitiveLexicalEntryScorer(cost={self.skipping_cost}, base={self.base_scorer})'


_scorer_registry: Dict[str, Callable[[Mapping[str, Any], Optional[Mapping[str, Any]]], Scorer]] = dict()


def register_scorer(typename: str, factory: Callable[[Mapping[str, Any], Optional[Mapping[str, Any]]], Scorer]):
    """Register a scorer factory under a type name, so that it can be created by :func:`create_scorer`."""
    _scorer_registry[typename] = factory


def create_scorer(params: Mapping[str, Any], resources: Optional[Mapping[str, Any]] = None) -> Scorer:
    """Create a scorer from string parameters. The ``type`` parameter selects the scorer.

    Args:
        params: the parameters, e.g., ``{'type': 'scorer.uniform', 'value': '0.5'}``.
        resources: named resources that parameters may refer to, e.g., other scorers.

    Raises:
        ScorerConfigurationError: if the type is unknown or a parameter is missing or malformed.
    """
    typename = params.get('type', None)
    if typename not in _scorer_registry:
        raise ScorerConfigurationError(f'Unknown scorer type: {typename}.')
    return _scorer_registry[typename](params, resources)


register_scorer('scorer.uniform', UniformScorer.from_params)
register_scorer('scorer.scaled', ScaledScorer.from_params)
register_scorer('scorer.lex.length', LengthLexicalEntryScorer.from_params)
register_scorer('scorer.lex.skipping', SkippingSensitiveLexicalEntryScorer.from_params)


def _get_float(params: Mapping[str, Any], key: str, default: Optional[float] = None) -> float:
    if key not in params:
        if default is None:
            raise ScorerConfigurationError(f'Missing scorer parameter: {key}.')
        return default
    try:
        return float(params[key])
    except (TypeError, ValueError) as e:
        raise ScorerConfigurationError(f'Invalid value for scorer parameter {key}: {params[key]!r}.') from e


def _get_resource(params: Mapping[str, Any], key: str, resources: Optional[Mapping[str, Any]]) -> Scorer:
    if key not in params:
        raise ScorerConfigurationError(f'Missing scorer parameter: {key}.')
    value = params[key]
    if isinstance(value, Scorer):
        return value
    if resources is None or value not in resources:
        raise ScorerConfigurationError(f'Unknown resource for scorer parameter {key}: {value!r}.')
    return resources[value]


def _maybe_scaled(params: Mapping[str, Any], scorer: Scorer) -> Scorer:
    if 'scale' in params:
        return ScaledScorer(_get_float(params, 'scale'), scorer)
    return scorer
