#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : data.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/11/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Training data for weakly supervised learning.

Each data item carries a sentence, the state it is situated in, a validator over parse results, and a lexicon generator
that proposes candidate lexical entries for lexical induction. The learners never see gold derivations; an optional
``label`` is used for debugging output only.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union, Iterable, Iterator, Sequence, Callable, Tuple, List

from semccg.ccg.category import Category
from semccg.ccg.lexicon import LexicalEntryOrigin, LexicalEntry, Lexicon, canonize_tokens

__all__ = ['LexGenValidationDataItem', 'DataCollection', 'TemplateLexiconGenerator']


@dataclass(frozen=True, eq=False)
class LexGenValidationDataItem(object):
    """A training example validated by a predicate over parse results."""

    sentence: Union[str, Sequence[str]]
    """The sentence, as a string (split by whitespaces) or a sequence of tokens."""

    state: Any = None
    """The state the sentence is situated in, passed to the executor of a joint parser."""

    label: Any = None
    """The gold result, if known. Used for debugging output only."""

    lexicon_generator: Optional[Callable[['LexGenValidationDataItem'], Lexicon]] = None
    """Generates candidate lexical entries for this item."""

    validator: Optional[Callable[[Any], bool]] = None
    """Decides whether a parse result is correct. Defaults to comparing the result with the label."""

    @property
    def tokens(self) -> Tuple[str, ...]:
        return canonize_tokens(self.sentence)

    def get_input(self) -> Tuple[Tuple[str, ...], Any]:
        return self.tokens, self.state

    def generate_lexicon(self) -> Lexicon:
        if self.lexicon_generator is None:
            return Lexicon()
        return self.lexicon_generator(self)

    def is_valid(self, result: Any) -> bool:
        if self.validator is not None:
            return bool(self.validator(result))
        if self.label is None:
            return False
        return result == self.label

    def __str__(self) -> str:
        fmt = ' '.join(self.tokens)
        if self.label is not None:
            fmt += f' => {self.label}'
        return fmt


class DataCollection(object):
    """An ordered, sized collection of data items. Iteration preserves the input order."""

    def __init__(self, items: Iterable[LexGenValidationDataItem] = tuple()):
        self._items = list(items)

    def __iter__(self) -> Iterator[LexGenValidationDataItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> LexGenValidationDataItem:
        return self._items[index]

    def __str__(self) -> str:
        return f'DataCollection(size={len(self)})'

    __repr__ = __str__


LexicalTemplate = Union[Category, Callable[[Tuple[str, ...]], Optional[Category]]]


class TemplateLexiconGenerator(object):
    """Propose one entry per n-gram of the sentence and per template.

    A template is either a :class:`~semccg.ccg.category.Category`, or a function mapping the n-gram tokens to a category
    (or None to skip the n-gram). For example, ``lambda tokens: Category(NP, '_'.join(tokens))``.

    Args:
        templates: the templates.
        max_ngram: the maximum number of tokens of a generated entry.
        link_siblings: if True, every entry generated for an n-gram is linked to the other entries of the same n-gram, so
            that adding one of them to the model adds all of them.
        ignored_tokens: tokens for which no entry is generated, e.g., tokens that are already covered by the fixed lexicon.
    """

    def __init__(self, templates: Iterable[LexicalTemplate], max_ngram: int = 1, link_siblings: bool = False, ignored_tokens: Iterable[str] = tuple()):
        self.templates = list(templates)
        self.max_ngram = max_ngram
        self.link_siblings = link_siblings
        self.ignored_tokens = frozenset(ignored_tokens)

    def __call__(self, data_item: LexGenValidationDataItem) -> Lexicon:
        return self.generate(data_item.tokens)

    def generate(self, tokens: Sequence[str]) -> Lexicon:
        tokens = tuple(tokens)
        lexicon = Lexicon()
        for length in range(1, self.max_ngram + 1):
            for begin in range(0, len(tokens) - length + 1):
                ngram = tokens[begin:begin + length]
                if any(t in self.ignored_tokens for t in ngram):
                    continue
                entries = self._generate_ngram(ngram)
                if self.link_siblings:
                    entries = [
                        LexicalEntry(e.tokens, e.category, e.origin, [s for s in entries if s is not e])
                        for e in entries
                    ]
                lexicon.add_all(entries)
        return lexicon

    def _generate_ngram(self, ngram: Tuple[str, ...]) -> List[LexicalEntry]:
        entries = list()
        for template in self.templates:
            category = template(ngram) if callable(template) else template
            if category is not None:
                entries.append(LexicalEntry(ngram, category, LexicalEntryOrigin.GENERATED))
        return entries
