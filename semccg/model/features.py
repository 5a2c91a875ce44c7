#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : features.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/06/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Feature sets. A feature set maps a parsing step (a lexical entry, a rule application, or an execution step) to a
sparse feature vector, and scores it against the parameter vector ``theta``.

All feature keys start with the name of the feature set, so that different feature sets never share a weight.
"""

from collections.abc import Sized
from typing import Any, Optional, Tuple

from semccg.ccg.lexicon import LexicalEntry
from semccg.ccg.composition import RuleName
from semccg.model.vector import FeatureKey, SparseVector
from semccg.model.scorers import Scorer, UniformScorer

__all__ = [
    'LexicalFeatureSet', 'ParseFeatureSet', 'RuleUsageFeatureSet',
    'JointFeatureSet', 'ExecutionIndicatorFeatureSet'
]


class LexicalFeatureSet(object):
    """One indicator feature per lexical entry in the model.

    The weight of an entry is initialized by ``initial_scorer`` when the entry is added to the model. Entries that
    are not (yet) in the model, e.g., candidates proposed during lexical induction or the empty entries used to skip
    words, fire no feature and are scored by ``initial_scorer`` directly.
    """

    def __init__(self, name: str = 'LEX', initial_scorer: Optional[Scorer] = None):
        self.name = name
        self.initial_scorer = initial_scorer if initial_scorer is not None else UniformScorer(0.0)

    def feature_key(self, entry: LexicalEntry) -> FeatureKey:
        return (self.name, ' '.join(entry.tokens), str(entry.category))

    def compute_features(self, entry: LexicalEntry, theta: SparseVector) -> SparseVector:
        key = self.feature_key(entry)
        if key in theta:
            return SparseVector({key: 1.0})
        return SparseVector()

    def score(self, entry: LexicalEntry, theta: SparseVector) -> float:
        key = self.feature_key(entry)
        if key in theta:
            return theta[key]
        return self.initial_scorer.score(entry)

    def on_lexical_entry_added(self, entry: LexicalEntry, theta: SparseVector) -> bool:
        """Initialize the weight of a newly added entry. Returns False if the weight already exists."""
        key = self.feature_key(entry)
        if key in theta:
            return False
        theta[key] = self.initial_scorer.score(entry)
        return True

    def __str__(self):
        return f'LexicalFeatureSet[{self.name}](init={self.initial_scorer})'


class ParseFeatureSet(object):
    """The base class of feature sets over rule applications."""

    def compute_features(self, rule_name: RuleName, theta: SparseVector) -> SparseVector:
        raise NotImplementedError()

    def score(self, rule_name: RuleName, theta: SparseVector) -> float:
        return theta.dot(self.compute_features(rule_name, theta))


class RuleUsageFeatureSet(ParseFeatureSet):
    """One indicator feature per rule name, e.g., ``('RULE', '>cx')``."""

    def __init__(self, name: str = 'RULE', scale: float = 1.0):
        self.name = name
        self.scale = scale

    def compute_features(self, rule_name: RuleName, theta: SparseVector) -> SparseVector:
        return SparseVector({(self.name, str(rule_name)): self.scale})

    def __str__(self):
        return f'RuleUsageFeatureSet[{self.name}]'


class JointFeatureSet(object):
    """The base class of feature sets over execution steps. An execution step is a pair ``(semantics, result)``."""

    def compute_features(self, step: Tuple[Any, Any], theta: SparseVector, data_item: Any = None) -> SparseVector:
        raise NotImplementedError()

    def score(self, step: Tuple[Any, Any], theta: SparseVector, data_item: Any = None) -> float:
        return theta.dot(self.compute_features(step, theta, data_item))


class ExecutionIndicatorFeatureSet(JointFeatureSet):
    """Fires ``('EXEC', 'EMPTY_RESULT')`` when the execution result is an empty collection."""

    def __init__(self, name: str = 'EXEC', scale: float = 1.0):
        self.name = name
        self.scale = scale

    def compute_features(self, step: Tuple[Any, Any], theta: SparseVector, data_item: Any = None) -> SparseVector:
        _, result = step
        if isinstance(result, Sized) and not isinstance(result, str) and len(result) == 0:
            return SparseVector({(self.name, 'EMPTY_RESULT'): self.scale})
        return SparseVector()

    def __str__(self):
        return f'ExecutionIndicatorFeatureSet[{self.name}]'
