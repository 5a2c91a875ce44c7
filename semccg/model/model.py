#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : model.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/07/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""The linear parsing model. The model owns the lexicon and the parameter vector ``theta``; both are mutated only
through :meth:`Model.add_lex_entry` and by the learners between parses."""

from typing import Any, Optional, Iterable, Tuple, List

from jacinle.utils.printing import indent_text

from semccg.ccg.lexicon import LexicalEntry, Lexicon
from semccg.ccg.composition import RuleName
from semccg.model.vector import SparseVector
from semccg.model.features import LexicalFeatureSet, ParseFeatureSet, JointFeatureSet

__all__ = ['Model', 'DataItemModel']


class Model(object):
    """A linear model over lexical, rule, and execution features."""

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        lexical_features: Optional[Iterable[LexicalFeatureSet]] = None,
        parse_features: Iterable[ParseFeatureSet] = tuple(),
        joint_features: Iterable[JointFeatureSet] = tuple(),
        theta: Optional[SparseVector] = None
    ):
        """Initialize the model.

        Args:
            lexicon: the initial lexicon. Entries already in the lexicon get their weights initialized.
            lexical_features: the lexical feature sets. Defaults to a single :class:`LexicalFeatureSet`.
            parse_features: feature sets over rule applications.
            joint_features: feature sets over execution steps.
            theta: the initial parameter vector.
        """
        self.lexical_features = list(lexical_features) if lexical_features is not None else [LexicalFeatureSet()]
        self.parse_features = list(parse_features)
        self.joint_features = list(joint_features)
        self.theta = theta if theta is not None else SparseVector()
        self.lexicon = Lexicon()

        if lexicon is not None:
            for entry in lexicon:
                self.add_lex_entry(entry)

    def add_lex_entry(self, entry: LexicalEntry) -> bool:
        """Add a lexical entry to the model and initialize its weights. This operation is idempotent.

        Returns:
            True if the entry was not in the model before.
        """
        if not self.lexicon.add(entry):
            return False
        for feature_set in self.lexical_features:
            feature_set.on_lexical_entry_added(entry, self.theta)
        return True

    def has_lex_entry(self, entry: LexicalEntry) -> bool:
        return self.lexicon.contains(entry)

    def compute_features(self, entry: LexicalEntry) -> SparseVector:
        return SparseVector.sum(f.compute_features(entry, self.theta) for f in self.lexical_features)

    def score(self, entry: LexicalEntry) -> float:
        return sum(f.score(entry, self.theta) for f in self.lexical_features)

    def compute_rule_features(self, rule_name: RuleName) -> SparseVector:
        return SparseVector.sum(f.compute_features(rule_name, self.theta) for f in self.parse_features)

    def score_rule(self, rule_name: RuleName) -> float:
        return sum(f.score(rule_name, self.theta) for f in self.parse_features)

    def compute_execution_features(self, step: Tuple[Any, Any], data_item: Any = None) -> SparseVector:
        return SparseVector.sum(f.compute_features(step, self.theta, data_item) for f in self.joint_features)

    def score_execution(self, step: Tuple[Any, Any], data_item: Any = None) -> float:
        return sum(f.score(step, self.theta, data_item) for f in self.joint_features)

    def create_data_item_model(self, data_item: Any) -> 'DataItemModel':
        return DataItemModel(self, data_item)

    def format_summary(self, max_entries: Optional[int] = None) -> str:
        fmt = 'Feature sets:\n'
        for f in self.lexical_features + self.parse_features + self.joint_features:
            fmt += '  ' + str(f) + '\n'
        fmt += f'Theta ({len(self.theta)} features).\n'
        fmt += f'Lexicon ({len(self.lexicon)} entries):\n'
        for i, entry in enumerate(self.lexicon):
            if max_entries is not None and i >= max_entries:
                fmt += '  ...\n'
                break
            fmt += f'  {entry} [{self.score(entry):.4f}]\n'
        return 'Model:\n' + indent_text(fmt.rstrip())

    def print_summary(self, max_entries: Optional[int] = None):
        print(self.format_summary(max_entries))


class DataItemModel(object):
    """A read-only view of a :class:`Model` for parsing one data item. Reads go through to the underlying model."""

    def __init__(self, model: Model, data_item: Any):
        self.model = model
        self.data_item = data_item

    @property
    def lexicon(self) -> Lexicon:
        return self.model.lexicon

    @property
    def theta(self) -> SparseVector:
        return self.model.theta

    def score_lexical_entry(self, entry: LexicalEntry) -> float:
        return self.model.score(entry)

    def compute_features(self, entry: LexicalEntry) -> SparseVector:
        return self.model.compute_features(entry)

    def score_rule(self, rule_name: RuleName) -> float:
        return self.model.score_rule(rule_name)

    def compute_rule_features(self, rule_name: RuleName) -> SparseVector:
        return self.model.compute_rule_features(rule_name)

    def score_execution(self, step: Tuple[Any, Any]) -> float:
        return self.model.score_execution(step, self.data_item)

    def compute_execution_features(self, step: Tuple[Any, Any]) -> SparseVector:
        return self.model.compute_execution_features(step, self.data_item)

    def compute_cell_features(self, cell: Any) -> SparseVector:
        """Compute the features of the derivation rooted at a chart cell: the sum of the features of its lexical entries
        and rule applications."""
        output = SparseVector()
        stack: List[Any] = [cell]
        while len(stack) > 0:
            c = stack.pop()
            if c.lexical_entry is not None:
                output.add_times_inplace(1.0, self.compute_features(c.lexical_entry))
            else:
                output.add_times_inplace(1.0, self.compute_rule_features(c.rule_name))
                stack.extend(c.children)
        return output
