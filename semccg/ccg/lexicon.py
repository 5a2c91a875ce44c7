#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : lexicon.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/03/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Data structures for lexical entries and lexicons."""

import itertools
from collections import OrderedDict
from typing import Any, Optional, Union, Iterable, Iterator, Sequence, Tuple

from jacinle.utils.enum import JacEnum
from jacinle.utils.printing import indent_text

from semccg.ccg.syntax import CCGSyntaxType, CCGSyntaxSystem, parse_syntax_type
from semccg.ccg.category import Category

__all__ = ['LexicalEntryOrigin', 'LexicalEntry', 'LexiconBase', 'Lexicon', 'LexiconUnion', 'canonize_tokens']


class LexicalEntryOrigin(JacEnum):
    """Where a lexical entry comes from."""
    FIXED = 'fixed'
    LEARNED = 'learned'
    GENERATED = 'generated'
    SKIPPING = 'skipping'


def canonize_tokens(tokens: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    """Convert a string (split by whitespaces) or a sequence of strings into a tuple of tokens."""
    if isinstance(tokens, str):
        return tuple(tokens.split())
    return tuple(tokens)


class LexicalEntry(object):
    """A lexical entry maps a sequence of surface tokens to a category.

    Lexical entries are immutable. Two entries are equal iff they have the same tokens and the same category;
    the origin and the linked entries are provenance information only.
    """

    __slots__ = ('_tokens', '_category', '_origin', '_linked_entries', '_hash')

    def __init__(
        self, tokens: Union[str, Sequence[str]], category: Category,
        origin: Union[str, LexicalEntryOrigin] = LexicalEntryOrigin.FIXED,
        linked_entries: Iterable['LexicalEntry'] = tuple()
    ):
        """Initialize the lexical entry.

        Args:
            tokens: the surface tokens.
            category: the category.
            origin: the origin of the entry.
            linked_entries: entries that share lexical material with this entry (e.g., produced together by a lexical generator).
                When a learner adds this entry to a model, it also adds the linked entries.
        """
        self._tokens = canonize_tokens(tokens)
        self._category = category
        self._origin = LexicalEntryOrigin.from_string(origin)
        self._linked_entries = tuple(linked_entries)
        self._hash = hash((self._tokens, self._category))

    @property
    def tokens(self) -> Tuple[str, ...]:
        return self._tokens

    @property
    def category(self) -> Category:
        return self._category

    @property
    def syntax(self) -> CCGSyntaxType:
        return self._category.syntax

    @property
    def semantics(self) -> Any:
        return self._category.semantics

    @property
    def origin(self) -> LexicalEntryOrigin:
        return self._origin

    @property
    def linked_entries(self) -> Tuple['LexicalEntry', ...]:
        return self._linked_entries

    def clone_with_origin(self, origin: Union[str, LexicalEntryOrigin]) -> 'LexicalEntry':
        """Create a copy of the entry with a different origin. The linked entries are carried over."""
        return type(self)(self._tokens, self._category, origin, self._linked_entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LexicalEntry):
            return False
        return self._tokens == other._tokens and self._category == other._category

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self):
        return self._hash

    def __str__(self) -> str:
        return '[' + ' '.join(self._tokens) + ' :- ' + str(self._category) + ' {' + self._origin.value + '}]'

    def __repr__(self) -> str:
        return 'LexicalEntry' + str(self)


class LexiconBase(object):
    """The read interface shared by :class:`Lexicon` and :class:`LexiconUnion`."""

    def get(self, tokens: Union[str, Sequence[str]]) -> Tuple[LexicalEntry, ...]:
        raise NotImplementedError()

    def contains(self, entry: LexicalEntry) -> bool:
        raise NotImplementedError()

    @property
    def max_entry_length(self) -> int:
        """The maximum number of tokens of an entry in the lexicon."""
        raise NotImplementedError()

    def __iter__(self) -> Iterator[LexicalEntry]:
        raise NotImplementedError()

    def __len__(self) -> int:
        raise NotImplementedError()

    def __contains__(self, entry: LexicalEntry) -> bool:
        return self.contains(entry)

    def union(self, other: 'LexiconBase') -> 'LexiconUnion':
        """Return a read-only view over this lexicon and another one."""
        return LexiconUnion(self, other)

    def format_summary(self) -> str:
        fmt = f'Lexicon Entries ({len(self)}):\n'
        for entry in self:
            fmt += indent_text(str(entry)) + '\n'
        return fmt.rstrip()

    def print_summary(self):
        print(self.format_summary())


class Lexicon(LexiconBase):
    """A mutable lexicon, mapping token sequences to insertion-ordered sets of lexical entries."""

    def __init__(self, entries: Optional[Iterable[LexicalEntry]] = None):
        self._entries = OrderedDict()
        self._size = 0
        self._max_entry_length = 0

        if entries is not None:
            self.add_all(entries)

    def add(self, entry: LexicalEntry) -> bool:
        """Add a lexical entry. This operation is idempotent.

        Returns:
            True if the entry was not in the lexicon before.
        """
        entries = self._entries.setdefault(entry.tokens, OrderedDict())
        if entry in entries:
            return False
        entries[entry] = None
        self._size += 1
        self._max_entry_length = max(self._max_entry_length, len(entry.tokens))
        return True

    def add_all(self, entries: Iterable[LexicalEntry]) -> int:
        """Add a collection of lexical entries and return the number of newly added ones."""
        return sum(int(self.add(entry)) for entry in entries)

    def add_entry_simple(
        self, tokens: Union[str, Sequence[str]],
        syntax: Union[str, CCGSyntaxType], semantics: Any = None,
        syntax_system: Optional[CCGSyntaxSystem] = None,
        origin: Union[str, LexicalEntryOrigin] = LexicalEntryOrigin.FIXED
    ) -> LexicalEntry:
        """Add a lexical entry with a syntax type and a semantic form.

        Args:
            tokens: the surface tokens. A string will be split by whitespaces.
            syntax: the syntax type. It can be a string (parsed by the syntax system) or a :class:`CCGSyntaxType` instance.
            semantics: the meaning representation.
            syntax_system: the syntax system used to parse the syntax string.
            origin: the origin of the entry.

        Returns:
            The created entry.
        """
        if syntax_system is None:
            syntax = syntax if isinstance(syntax, CCGSyntaxType) else parse_syntax_type(syntax)
        else:
            syntax = syntax_system[syntax]
        entry = LexicalEntry(tokens, Category(syntax, semantics), origin)
        self.add(entry)
        return entry

    def get(self, tokens: Union[str, Sequence[str]]) -> Tuple[LexicalEntry, ...]:
        entries = self._entries.get(canonize_tokens(tokens), None)
        if entries is None:
            return tuple()
        return tuple(entries.keys())

    def contains(self, entry: LexicalEntry) -> bool:
        entries = self._entries.get(entry.tokens, None)
        return entries is not None and entry in entries

    def clear_entries(self, tokens: Union[str, Sequence[str]]):
        """Remove all entries for a token sequence."""
        entries = self._entries.pop(canonize_tokens(tokens), None)
        if entries is not None:
            self._size -= len(entries)
            self._max_entry_length = max((len(k) for k in self._entries), default=0)

    @property
    def max_entry_length(self) -> int:
        return self._max_entry_length

    def __iter__(self) -> Iterator[LexicalEntry]:
        return itertools.chain.from_iterable(entries.keys() for entries in self._entries.values())

    def __len__(self) -> int:
        return self._size

    def __str__(self) -> str:
        return f'Lexicon(size={len(self)})'

    __repr__ = __str__


class LexiconUnion(LexiconBase):
    """A read-only view over several lexicons. Entries are deduplicated; the first lexicon wins on duplicates."""

    def __init__(self, *lexicons: LexiconBase):
        self.lexicons = lexicons

    def get(self, tokens: Union[str, Sequence[str]]) -> Tuple[LexicalEntry, ...]:
        tokens = canonize_tokens(tokens)
        return _unique(itertools.chain.from_iterable(lexicon.get(tokens) for lexicon in self.lexicons))

    def contains(self, entry: LexicalEntry) -> bool:
        return any(lexicon.contains(entry) for lexicon in self.lexicons)

    @property
    def max_entry_length(self) -> int:
        return max((lexicon.max_entry_length for lexicon in self.lexicons), default=0)

    def __iter__(self) -> Iterator[LexicalEntry]:
        return iter(_unique(itertools.chain.from_iterable(self.lexicons)))

    def __len__(self) -> int:
        return len(_unique(itertools.chain.from_iterable(self.lexicons)))

    def __str__(self) -> str:
        return 'LexiconUnion(' + ', '.join(str(x) for x in self.lexicons) + ')'

    __repr__ = __str__


def _unique(entries: Iterable[LexicalEntry]) -> Tuple[LexicalEntry, ...]:
    return tuple(OrderedDict((e, None) for e in entries).keys())
