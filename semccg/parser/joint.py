#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : joint.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/10/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Joint parsing: parse a sentence, then execute each derivation against the state of the data item.

The result of a joint parse is a pair ``(semantics, execution_result)``, and its score is the score of the base
derivation plus the score of the execution step. Derivations whose execution fails are dropped.
"""

import time
from typing import Any, Optional, Callable, Tuple, List

from jacinle.logging import get_logger

from semccg.errors import ExecutionError
from semccg.ccg.lexicon import LexicalEntry, LexiconBase
from semccg.ccg.composition import RuleName
from semccg.model.vector import SparseVector
from semccg.model.model import DataItemModel
from semccg.parser.cky import CKYDerivation, CKYParserOutput, CKYParser

logger = get_logger(__file__)

__all__ = ['Executor', 'JointParse', 'JointOutput', 'JointParser']

Executor = Callable[[Any, Any], Any]
"""An executor maps ``(semantics, state)`` to an execution result. It returns None or raises
:class:`~semccg.errors.ExecutionError` when the semantics can not be executed."""


class JointParse(object):
    """A base derivation and the result of executing it."""

    def __init__(self, base_parse: CKYDerivation, execution_result: Any, data_item_model: DataItemModel):
        self.base_parse = base_parse
        self.execution_result = execution_result
        self.data_item_model = data_item_model
        self.execution_score = data_item_model.score_execution(self.execution_step)
        self.score = base_parse.score + self.execution_score

    @property
    def semantics(self) -> Any:
        return self.base_parse.result

    @property
    def execution_step(self) -> Tuple[Any, Any]:
        return self.base_parse.result, self.execution_result

    @property
    def result(self) -> Tuple[Any, Any]:
        """The pair ``(semantics, execution_result)``."""
        return self.execution_step

    def get_max_lexical_entries(self) -> List[LexicalEntry]:
        return self.base_parse.get_max_lexical_entries()

    def get_max_rules_used(self) -> List[RuleName]:
        return self.base_parse.get_max_rules_used()

    def get_average_max_feature_vector(self) -> SparseVector:
        """The features of the base derivation plus the features of the execution step."""
        return self.base_parse.get_average_max_feature_vector() + self.data_item_model.compute_execution_features(self.execution_step)

    def format_summary(self) -> str:
        return f'=> {self.execution_result} [exec_score={self.execution_score:.4f}]\n' + self.base_parse.format_summary()

    def __str__(self) -> str:
        return f'JointParse({self.base_parse.category} => {self.execution_result}, score={self.score:.4f})'

    __repr__ = __str__


class JointOutput(object):
    def __init__(self, base_output: CKYParserOutput, joint_parses: List[JointParse], parsing_time: float):
        self.base_output = base_output
        self.parsing_time = parsing_time
        self._joint_parses = sorted(joint_parses, key=lambda p: -p.score)

    def get_all_parses(self) -> List[JointParse]:
        """All joint parses, sorted by score (descending)."""
        return list(self._joint_parses)

    def get_best_parses(self) -> List[JointParse]:
        if len(self._joint_parses) == 0:
            return list()
        best = self._joint_parses[0].score
        return [p for p in self._joint_parses if p.score == best]

    def get_parses_with_result(self, result: Any) -> List[JointParse]:
        return [p for p in self._joint_parses if p.result == result]


class JointParser(object):
    """Parse with a :class:`~semccg.parser.cky.CKYParser` and execute the derivations with an executor."""

    def __init__(self, base_parser: CKYParser, executor: Executor):
        self.base_parser = base_parser
        self.executor = executor

    def parse(
        self, data_item: Any, data_item_model: DataItemModel,
        restrict_to_model_lexicon: bool = True, extra_lexicon: Optional[LexiconBase] = None, beam_size: Optional[int] = None
    ) -> JointOutput:
        """Parse a data item and execute its derivations.

        Args:
            data_item: the data item. Its ``tokens`` are parsed and its ``state`` (None if absent) is passed to the executor.
            data_item_model: the model view.
            restrict_to_model_lexicon: see :meth:`~semccg.parser.cky.CKYParser.parse`.
            extra_lexicon: see :meth:`~semccg.parser.cky.CKYParser.parse`.
            beam_size: see :meth:`~semccg.parser.cky.CKYParser.parse`.
        """
        start_time = time.time()
        base_output = self.base_parser.parse(
            data_item, data_item_model,
            restrict_to_model_lexicon=restrict_to_model_lexicon, extra_lexicon=extra_lexicon, beam_size=beam_size
        )

        state = getattr(data_item, 'state', None)
        joint_parses = list()
        for derivation in base_output.get_all_parses():
            if derivation.result is None:
                continue
            try:
                execution_result = self.executor(derivation.result, state)
            except ExecutionError as e:
                logger.debug(f'Execution failed for {derivation.category}: {e}')
                continue
            if execution_result is None:
                continue
            joint_parses.append(JointParse(derivation, execution_result, data_item_model))

        return JointOutput(base_output, joint_parses, time.time() - start_time)
