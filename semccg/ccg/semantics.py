#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : semantics.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/03/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Semantic composition services used by the combination rules.

The parser treats meaning representations as opaque values. All semantic operations go through a
:class:`SemanticsServices` instance. The default implementation, :class:`CallableSemanticsServices`, represents
functions as Python callables and everything else as values, which is enough for small domains and tests.
"""

from typing import Any, Optional, Callable, Tuple
from dataclasses import dataclass

__all__ = ['SemanticsServices', 'CallableSemanticsServices', 'ComposedFunction']


class SemanticsServices(object):
    """The interface for semantic composition. Every method returns None when the composition is not defined.

    Meaning representations must be hashable, since chart cells are deduplicated by their categories. The combination
    rules treat an unhashable result, or an exception raised by a service, as a non-match.
    """

    def apply(self, function: Any, argument: Any) -> Optional[Any]:
        """Apply a functional meaning representation to an argument."""
        raise NotImplementedError()

    def compose(self, primary: Any, secondary: Any) -> Optional[Any]:
        """Compose two functional meaning representations: ``lambda x: primary(secondary(x))``."""
        raise NotImplementedError()


@dataclass(frozen=True)
class ComposedFunction(object):
    """A hashable composition of two callables, ``primary(secondary(x))``."""

    primary: Callable
    secondary: Callable

    def __call__(self, argument):
        return self.primary(self.secondary(argument))

    def __str__(self):
        return f'({_format_function(self.primary)} . {_format_function(self.secondary)})'


class CallableSemanticsServices(SemanticsServices):
    """Meaning representations are Python values; functional meaning representations are callables.

    A callable may reject an argument by returning None or by raising one of the ``rejection_exceptions``.
    """

    def __init__(self, rejection_exceptions: Tuple[type, ...] = (TypeError, ValueError, KeyError, IndexError)):
        self.rejection_exceptions = rejection_exceptions

    def apply(self, function: Any, argument: Any) -> Optional[Any]:
        if not callable(function):
            return None
        try:
            return function(argument)
        except self.rejection_exceptions:
            return None

    def compose(self, primary: Any, secondary: Any) -> Optional[Any]:
        if not callable(primary) or not callable(secondary):
            return None
        return ComposedFunction(primary, secondary)

    def __eq__(self, other):
        return type(self) is type(other) and self.rejection_exceptions == other.rejection_exceptions

    def __hash__(self):
        return hash((type(self), self.rejection_exceptions))


def _format_function(function):
    name = getattr(function, '__name__', None)
    if name is None:
        return str(function)
    # Anonymous functions are told apart by identity.
    if name == '<lambda>':
        return repr(function)
    return name
