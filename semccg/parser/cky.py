#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : cky.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/09/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""The beam-pruned CKY parser.

The parser fills the chart bottom-up by span length. Spans of the same length only read from shorter (already
finalized) spans, so they can be processed concurrently; see :attr:`CKYParserConfig.num_workers`.

.. code-block:: python

    parser = CKYParser(CCGRuleSet.make_categorial_grammar(), CKYParserConfig(beam_size=20, root_syntax='S'))
    output = parser.parse('blue cube', model.create_data_item_model(None))
    for derivation in output.get_best_parses():
        print(derivation.category, derivation.score)
"""

import time
import itertools
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional, Union, Sequence, Tuple, List

from jacinle.logging import get_logger
from jacinle.utils.printing import indent_text

from semccg.errors import ConfigurationError
from semccg.options import options
from semccg.ccg.syntax import CCGSyntaxType, parse_syntax_type
from semccg.ccg.category import Category, EMPTY_CATEGORY
from semccg.ccg.composition import RuleName
from semccg.ccg.rules import CCGRuleSet
from semccg.ccg.lexicon import LexicalEntryOrigin, LexicalEntry, LexiconBase, canonize_tokens
from semccg.model.vector import SparseVector
from semccg.model.model import DataItemModel
from semccg.parser.chart import Cell, CellFactory, Chart

logger = get_logger(__file__)

__all__ = ['CKYParserConfig', 'CKYDerivation', 'CKYParserOutput', 'CKYParser', 'get_tokens']

_profile = getattr(__builtins__, 'profile', lambda x: x)


@dataclass
class CKYParserConfig(object):
    """Configurations for the CKY parser."""

    beam_size: int = 50
    """The maximum number of cells kept for each span."""

    root_syntax: Optional[Union[str, CCGSyntaxType]] = None
    """The syntax type of full parses. If None, any syntax type except EMPTY and partial coordinations is accepted."""

    allow_word_skipping: bool = False
    """Whether to add an EMPTY lexical cell for every token, so that unknown or irrelevant words can be skipped."""

    num_workers: int = 1
    """The number of threads used to fill the spans of the same length. 1 means sequential parsing."""

    def __post_init__(self):
        if self.beam_size <= 0:
            raise ConfigurationError(f'beam_size must be positive, got {self.beam_size}.')
        if self.num_workers <= 0:
            raise ConfigurationError(f'num_workers must be positive, got {self.num_workers}.')
        if isinstance(self.root_syntax, str):
            self.root_syntax = parse_syntax_type(self.root_syntax)


def get_tokens(sentence: Any) -> Tuple[str, ...]:
    """Get the tokens of a data item (anything with a ``tokens`` attribute), a string, or a sequence of strings."""
    if hasattr(sentence, 'tokens'):
        return tuple(sentence.tokens)
    return canonize_tokens(sentence)


class CKYDerivation(object):
    """All full-parse cells that share the same category. The score of the derivation is the maximum score of its cells."""

    def __init__(self, category: Category, cells: Sequence[Cell], data_item_model: DataItemModel):
        self.category = category
        self.cells = tuple(cells)
        self.data_item_model = data_item_model
        self.score = max(c.score for c in self.cells)
        self.max_cells = tuple(c for c in self.cells if c.score == self.score)

    @property
    def result(self) -> Any:
        """The meaning representation of the derivation."""
        return self.category.semantics

    def get_max_lexical_entries(self) -> List[LexicalEntry]:
        """The lexical entries used by the max-scoring cells, deduplicated, in order of first use."""
        return list(OrderedDict((e, None) for c in self.max_cells for e in c.get_lexical_entries()).keys())

    def get_max_rules_used(self) -> List[RuleName]:
        return list(OrderedDict((r, None) for c in self.max_cells for r in c.get_rules_used()).keys())

    def get_average_max_feature_vector(self) -> SparseVector:
        """The mean feature vector of the max-scoring cells."""
        return SparseVector.mean(self.data_item_model.compute_cell_features(c) for c in self.max_cells)

    def format_summary(self) -> str:
        fmt = f'{self.category} [score={self.score:.4f}, cells={len(self.cells)}, max_cells={len(self.max_cells)}]\n'
        for entry in self.get_max_lexical_entries():
            fmt += '  ' + str(entry) + '\n'
        fmt += '  rules: ' + ', '.join(str(r) for r in self.get_max_rules_used())
        return fmt

    def __str__(self) -> str:
        return f'CKYDerivation({self.category}, score={self.score:.4f})'

    __repr__ = __str__


class CKYParserOutput(object):
    """The output of :meth:`CKYParser.parse`."""

    def __init__(self, chart: Chart, parsing_time: float, data_item_model: DataItemModel):
        self.chart = chart
        self.parsing_time = parsing_time
        self.data_item_model = data_item_model

        cells_by_category = OrderedDict()
        for cell in chart.get_full_parses():
            cells_by_category.setdefault(cell.category, list()).append(cell)
        derivations = [CKYDerivation(category, cells, data_item_model) for category, cells in cells_by_category.items()]
        # sorted() is stable: ties keep the chart order.
        self._derivations = sorted(derivations, key=lambda d: -d.score)

    chart: Chart
    parsing_time: float
    """The wall-clock time of the parse, in seconds."""

    def get_all_parses(self) -> List[CKYDerivation]:
        """All derivations, sorted by score (descending)."""
        return list(self._derivations)

    def get_best_parses(self) -> List[CKYDerivation]:
        """All derivations that attain the maximum score."""
        if len(self._derivations) == 0:
            return list()
        best = self._derivations[0].score
        return [d for d in self._derivations if d.score == best]

    def get_parses_with_result(self, result: Any) -> List[CKYDerivation]:
        return [d for d in self._derivations if d.result == result]

    def format_summary(self) -> str:
        fmt = f'CKYParserOutput(parses={len(self._derivations)}, time={self.parsing_time:.3f}s):\n'
        return fmt + indent_text('\n'.join(d.format_summary() for d in self._derivations))


class CKYParser(object):
    """A beam-pruned CKY chart parser."""

    def __init__(
        self,
        rule_set: CCGRuleSet,
        config: Optional[CKYParserConfig] = None,
        *,
        cell_factory: Optional[CellFactory] = None,
        empty_category: Category = EMPTY_CATEGORY
    ):
        """Initialize the parser.

        Args:
            rule_set: the combination rules.
            config: the parser configuration.
            cell_factory: the factory of chart cells. Use :class:`~semccg.parser.chart.ScoreSensitiveCellFactory` to rank cells
                by a task-sensitive score.
            empty_category: the category of skipped words.
        """
        self.config = config if config is not None else CKYParserConfig()
        self.rule_set = rule_set
        if self.config.allow_word_skipping and not self.rule_set.has_skipping:
            self.rule_set = self.rule_set.with_skipping()
        self.cell_factory = cell_factory if cell_factory is not None else CellFactory()
        self.empty_category = empty_category

    config: CKYParserConfig
    rule_set: CCGRuleSet
    cell_factory: CellFactory
    empty_category: Category

    def parse(
        self, sentence: Any, data_item_model: DataItemModel,
        restrict_to_model_lexicon: bool = True, extra_lexicon: Optional[LexiconBase] = None, beam_size: Optional[int] = None
    ) -> CKYParserOutput:
        """Parse a sentence.

        Args:
            sentence: a data item with a ``tokens`` attribute, a string, or a sequence of tokens.
            data_item_model: the model view used to score lexical entries and rules. It must not be mutated during the call.
            restrict_to_model_lexicon: if True, only the entries of the model lexicon are used. Otherwise, the entries of
                ``extra_lexicon`` are used as well.
            extra_lexicon: the additional lexicon, e.g., candidates generated for lexical induction.
            beam_size: overrides the beam size of the configuration.

        Returns:
            the parser output. It has no parses if the sentence can not be parsed.
        """
        start_time = time.time()
        tokens = get_tokens(sentence)
        chart = Chart(len(tokens), beam_size if beam_size is not None else self.config.beam_size, self.config.root_syntax)

        lexicon = data_item_model.lexicon
        if not restrict_to_model_lexicon and extra_lexicon is not None:
            lexicon = lexicon.union(extra_lexicon)

        if len(tokens) > 0:
            self._add_lexical_cells(chart, tokens, lexicon, data_item_model)
            if self.config.num_workers > 1:
                with ThreadPoolExecutor(max_workers=self.config.num_workers) as pool:
                    self._fill_chart(chart, data_item_model, pool)
            else:
                self._fill_chart(chart, data_item_model, None)

        output = CKYParserOutput(chart, time.time() - start_time, data_item_model)

        if options.debug_print:
            chart.print_summary(verbose=True)
        if options.log_chart_summary:
            logger.info(chart.format_summary())
        return output

    def _add_lexical_cells(self, chart: Chart, tokens: Tuple[str, ...], lexicon: LexiconBase, data_item_model: DataItemModel):
        n = len(tokens)
        max_length = min(n, lexicon.max_entry_length)
        for begin in range(n):
            for end in range(begin + 1, min(n, begin + max_length) + 1):
                for entry in lexicon.get(tokens[begin:end]):
                    self._insert_lexical_cell(chart, entry, begin, end, data_item_model)

        if self.config.allow_word_skipping:
            for i in range(n):
                entry = LexicalEntry(tokens[i:i + 1], self.empty_category, LexicalEntryOrigin.SKIPPING)
                self._insert_lexical_cell(chart, entry, i, i + 1, data_item_model)

    def _insert_lexical_cell(self, chart: Chart, entry: LexicalEntry, begin: int, end: int, data_item_model: DataItemModel):
        cell = self.cell_factory.create_lexical_cell(
            entry, begin, end, data_item_model.score_lexical_entry(entry),
            is_full_parse=chart.check_full_parse(begin, end, entry.category)
        )
        chart.insert(cell)

    def _fill_chart(self, chart: Chart, data_item_model: DataItemModel, pool: Optional[ThreadPoolExecutor]):
        n = chart.num_tokens
        for length in range(1, n + 1):
            spans = [(begin, begin + length) for begin in range(0, n - length + 1)]
            if pool is None or len(spans) == 1:
                for begin, end in spans:
                    self._fill_span(chart, begin, end, data_item_model)
            else:
                # list() re-raises the exceptions of the workers.
                list(pool.map(lambda span: self._fill_span(chart, span[0], span[1], data_item_model), spans))

    @_profile
    def _fill_span(self, chart: Chart, begin: int, end: int, data_item_model: DataItemModel):
        for split in range(begin + 1, end):
            lefts = chart.get_cells(begin, split)
            rights = chart.get_cells(split, end)
            for left, right in itertools.product(lefts, rights):
                for result in self.rule_set.apply_binary(left.category, right.category):
                    self._insert_derived_cell(chart, result.category, result.rule_name, (left, right), data_item_model)

        # Unary rules are applied once to the cells of the span; their outputs are not rewritten again.
        if len(self.rule_set.unary_rules) > 0:
            for cell in chart.get_cells(begin, end):
                for result in self.rule_set.apply_unary(cell.category):
                    self._insert_derived_cell(chart, result.category, result.rule_name, (cell, ), data_item_model)

    def _insert_derived_cell(self, chart: Chart, category: Category, rule_name: RuleName, children: Tuple[Cell, ...], data_item_model: DataItemModel):
        score = sum(c.score for c in children) + data_item_model.score_rule(rule_name)
        begin, end = children[0].begin, children[-1].end
        cell = self.cell_factory.create_derived_cell(
            category, rule_name, children, score,
            is_full_parse=chart.check_full_parse(begin, end, category)
        )
        chart.insert(cell)
