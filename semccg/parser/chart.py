#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : chart.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/08/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""The chart of the CKY parser: a table from spans to beams of cells.

A cell is one candidate derivation over a half-open span ``[begin, end)``. Each span keeps at most ``beam_size`` cells,
ranked by ``prune_score`` (descending), then by ``second_prune_score`` (descending), then by insertion order (earlier first).
Writes to a span are serialized by a per-span lock, so that all spans of the same length can be filled concurrently.
"""

import bisect
import threading
from typing import Any, Optional, Iterator, Callable, Sequence, Tuple, List, Dict

from jacinle.utils.printing import indent_text

from semccg.ccg.syntax import CCGSyntaxType, EMPTY_SYNTAX
from semccg.ccg.category import Category
from semccg.ccg.composition import RuleName, LEXICAL_RULE_NAME
from semccg.ccg.lexicon import LexicalEntry

__all__ = ['Cell', 'ScoreSensitiveCell', 'CellFactory', 'ScoreSensitiveCellFactory', 'ChartCellView', 'Chart']

_UNSET = object()


class Cell(object):
    """A node in the chart: either a lexical cell wrapping a lexical entry, or a derived cell produced by a rule from one
    or two child cells. Cells are immutable."""

    def __init__(
        self, category: Category, rule_name: RuleName, children: Tuple['Cell', ...], begin: int, end: int,
        score: float, lexical_entry: Optional[LexicalEntry] = None, is_full_parse: bool = False
    ):
        if not begin < end:
            raise ValueError(f'Invalid cell span: [{begin}, {end}).')
        self.category = category
        self.rule_name = rule_name
        self.children = children
        self.begin = begin
        self.end = end
        self.score = score
        self.lexical_entry = lexical_entry
        self.is_full_parse = is_full_parse

    category: Category
    """The category of the cell."""

    rule_name: RuleName
    """The rule that produced the cell. Lexical cells use the pseudo rule name ``>lex``."""

    children: Tuple['Cell', ...]
    """The child cells. Empty for lexical cells."""

    score: float
    """The structural (Viterbi) score: the sum of the scores of the lexical entries and rules in the best derivation."""

    lexical_entry: Optional[LexicalEntry]
    """The lexical entry, for lexical cells."""

    is_full_parse: bool
    """Whether the cell covers the whole input and has the root syntax."""

    @property
    def span(self) -> Tuple[int, int]:
        return self.begin, self.end

    @property
    def is_lexical(self) -> bool:
        return self.lexical_entry is not None

    @property
    def syntax(self) -> CCGSyntaxType:
        return self.category.syntax

    @property
    def semantics(self) -> Any:
        return self.category.semantics

    @property
    def prune_score(self) -> float:
        """The primary pruning score."""
        return self.score

    @property
    def second_prune_score(self) -> float:
        """The secondary pruning score, used to break ties of the primary one."""
        return 0.0

    @property
    def signature(self) -> Tuple[Any, ...]:
        """Two cells with the same signature are the same derivation step. Children are compared by identity."""
        if self.lexical_entry is not None:
            return (self.category, self.lexical_entry, self.begin, self.end)
        return (self.category, self.rule_name, tuple(id(c) for c in self.children))

    def iter_lexical_cells(self) -> Iterator['Cell']:
        stack = [self]
        while len(stack) > 0:
            cell = stack.pop()
            if cell.lexical_entry is not None:
                yield cell
            else:
                stack.extend(reversed(cell.children))

    def get_lexical_entries(self) -> List[LexicalEntry]:
        """The lexical entries used by the derivation, from left to right."""
        return [c.lexical_entry for c in self.iter_lexical_cells()]

    def get_rules_used(self) -> List[RuleName]:
        """The rules used by the derivation, in pre-order."""
        output = list()
        stack = [self]
        while len(stack) > 0:
            cell = stack.pop()
            if cell.lexical_entry is None:
                output.append(cell.rule_name)
                stack.extend(reversed(cell.children))
        return output

    def format_tree(self) -> str:
        if self.lexical_entry is not None:
            return f'{self.lexical_entry} [{self.begin}, {self.end})'
        fmt = f'{self.rule_name} {self.category} [{self.begin}, {self.end})\n'
        for child in self.children:
            fmt += indent_text(child.format_tree()) + '\n'
        return fmt.rstrip()

    def __str__(self) -> str:
        return f'Cell[{self.begin}, {self.end}]({self.category}, {self.rule_name}, score={self.score:.4f})'

    __repr__ = __str__


class ScoreSensitiveCell(Cell):
    """A cell with an additional task-sensitive score, computed from its semantics by a scoring function.

    The task score is computed lazily on first read and memoized. The scoring function is invoked at most once per cell,
    even when the score is read from several threads.
    """

    def __init__(self, *args, scoring_function: Callable[[Any], float], task_score_primary: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self._scoring_function = scoring_function
        self._task_score_primary = task_score_primary
        self._task_score = _UNSET
        self._task_score_lock = threading.Lock()

    @property
    def task_score(self) -> float:
        if self._task_score is _UNSET:
            with self._task_score_lock:
                if self._task_score is _UNSET:
                    semantics = self.category.semantics
                    self._task_score = 0.0 if semantics is None else float(self._scoring_function(semantics))
        return self._task_score

    @property
    def prune_score(self) -> float:
        return self.task_score if self._task_score_primary else self.score

    @property
    def second_prune_score(self) -> float:
        return self.score if self._task_score_primary else self.task_score


class CellFactory(object):
    """Creates the cells of a chart."""

    def create_lexical_cell(self, entry: LexicalEntry, begin: int, end: int, score: float, is_full_parse: bool = False) -> Cell:
        return Cell(entry.category, LEXICAL_RULE_NAME, tuple(), begin, end, score, lexical_entry=entry, is_full_parse=is_full_parse)

    def create_derived_cell(self, category: Category, rule_name: RuleName, children: Sequence[Cell], score: float, is_full_parse: bool = False) -> Cell:
        begin, end = _derived_span(children)
        return Cell(category, rule_name, tuple(children), begin, end, score, is_full_parse=is_full_parse)


class ScoreSensitiveCellFactory(CellFactory):
    """Creates :class:`ScoreSensitiveCell` instances.

    Args:
        scoring_function: maps the semantics of a cell to its task score.
        task_score_primary: if True, the task score is the primary pruning score and the structural score breaks ties.
            Otherwise, the roles are swapped.
    """

    def __init__(self, scoring_function: Callable[[Any], float], task_score_primary: bool = True):
        self.scoring_function = scoring_function
        self.task_score_primary = task_score_primary

    def create_lexical_cell(self, entry: LexicalEntry, begin: int, end: int, score: float, is_full_parse: bool = False) -> Cell:
        return ScoreSensitiveCell(
            entry.category, LEXICAL_RULE_NAME, tuple(), begin, end, score, lexical_entry=entry, is_full_parse=is_full_parse,
            scoring_function=self.scoring_function, task_score_primary=self.task_score_primary
        )

    def create_derived_cell(self, category: Category, rule_name: RuleName, children: Sequence[Cell], score: float, is_full_parse: bool = False) -> Cell:
        begin, end = _derived_span(children)
        return ScoreSensitiveCell(
            category, rule_name, tuple(children), begin, end, score, is_full_parse=is_full_parse,
            scoring_function=self.scoring_function, task_score_primary=self.task_score_primary
        )


def _derived_span(children: Sequence[Cell]) -> Tuple[int, int]:
    if len(children) == 0:
        raise ValueError('A derived cell needs at least one child.')
    for left, right in zip(children[:-1], children[1:]):
        if left.end != right.begin:
            raise ValueError(f'Children of a derived cell must be contiguous: {left.span} and {right.span}.')
    return children[0].begin, children[-1].end


class ChartCellView(object):
    """A read-only, restartable sequence of the cells of a span, in ranked order. It is a snapshot: later insertions to
    the span are not visible."""

    def __init__(self, cells: Tuple[Cell, ...]):
        self._cells = cells

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, item):
        return self._cells[item]

    def __bool__(self) -> bool:
        return len(self._cells) > 0

    def __str__(self) -> str:
        return 'ChartCellView(' + ', '.join(str(c) for c in self._cells) + ')'

    __repr__ = __str__


class _ChartSpan(object):
    def __init__(self):
        self.lock = threading.Lock()
        self.keys: List[Tuple[float, float, int]] = list()
        self.cells: List[Cell] = list()
        self.signatures: Dict[Tuple[Any, ...], Cell] = dict()
        self.counter = 0


class Chart(object):
    """A CKY chart over ``num_tokens`` tokens."""

    def __init__(self, num_tokens: int, beam_size: int, root_syntax: Optional[CCGSyntaxType] = None):
        """Initialize the chart.

        Args:
            num_tokens: the number of input tokens.
            beam_size: the maximum number of cells per span.
            root_syntax: the syntax type of full parses. If None, any syntax except EMPTY and partial coordinations is accepted.
        """
        if beam_size <= 0:
            raise ValueError(f'Beam size must be positive, got {beam_size}.')
        self.num_tokens = num_tokens
        self.beam_size = beam_size
        self.root_syntax = root_syntax
        self._spans = {(i, j): _ChartSpan() for i in range(num_tokens) for j in range(i + 1, num_tokens + 1)}

    def _get_span(self, begin: int, end: int) -> _ChartSpan:
        span = self._spans.get((begin, end), None)
        if span is None:
            raise ValueError(f'Invalid span [{begin}, {end}) for a chart over {self.num_tokens} tokens.')
        return span

    def is_full_span(self, begin: int, end: int) -> bool:
        return begin == 0 and end == self.num_tokens

    def is_root_syntax(self, syntax: CCGSyntaxType) -> bool:
        if self.root_syntax is None:
            return syntax != EMPTY_SYNTAX and not syntax.is_coordination
        return syntax == self.root_syntax

    def check_full_parse(self, begin: int, end: int, category: Category) -> bool:
        return self.is_full_span(begin, end) and self.is_root_syntax(category.syntax)

    def is_full_parse(self, cell: Cell) -> bool:
        return self.check_full_parse(cell.begin, cell.end, cell.category)

    def insert(self, cell: Cell) -> bool:
        """Insert a cell into the beam of its span.

        Returns:
            whether the cell is retained. A cell with the same signature as a retained one is not inserted. When the beam
            is full, the cell is retained only if it ranks above the current lowest-ranked cell, which is then evicted.
        """
        span = self._get_span(cell.begin, cell.end)
        primary, secondary = cell.prune_score, cell.second_prune_score

        with span.lock:
            signature = cell.signature
            if signature in span.signatures:
                return False

            key = (-primary, -secondary, span.counter)
            span.counter += 1
            if len(span.cells) >= self.beam_size and key >= span.keys[-1]:
                return False

            index = bisect.bisect_right(span.keys, key)
            span.keys.insert(index, key)
            span.cells.insert(index, cell)
            span.signatures[signature] = cell

            while len(span.cells) > self.beam_size:
                span.keys.pop()
                evicted = span.cells.pop()
                del span.signatures[evicted.signature]
        return True

    def get_cells(self, begin: int, end: int) -> ChartCellView:
        """The cells of a span, ranked by primary score (descending)."""
        span = self._get_span(begin, end)
        with span.lock:
            return ChartCellView(tuple(span.cells))

    def span_size(self, begin: int, end: int) -> int:
        return len(self._get_span(begin, end).cells)

    def get_full_parses(self) -> List[Cell]:
        if self.num_tokens == 0:
            return list()
        return [c for c in self.get_cells(0, self.num_tokens) if c.is_full_parse]

    def iter_spans(self) -> Iterator[Tuple[int, int]]:
        for length in range(1, self.num_tokens + 1):
            for begin in range(0, self.num_tokens - length + 1):
                yield begin, begin + length

    def __len__(self) -> int:
        return sum(len(span.cells) for span in self._spans.values())

    def format_summary(self, verbose: bool = False) -> str:
        fmt = ''
        for begin, end in self.iter_spans():
            cells = self.get_cells(begin, end)
            if len(cells) == 0:
                continue
            fmt += f'[{begin}, {end}): {len(cells)} cells\n'
            if verbose:
                for cell in cells:
                    fmt += '  ' + str(cell) + '\n'
        return f'Chart(num_tokens={self.num_tokens}, beam_size={self.beam_size}, cells={len(self)}):\n' + indent_text(fmt.rstrip())

    def print_summary(self, verbose: bool = False):
        print(self.format_summary(verbose))
