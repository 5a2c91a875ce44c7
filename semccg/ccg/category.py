#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : category.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/02/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Categories: pairs of a syntax type and an (opaque) meaning representation."""

from typing import Any, Optional
from dataclasses import dataclass

from semccg.ccg.syntax import CCGSyntaxType, EMPTY_SYNTAX

__all__ = ['Category', 'EMPTY_CATEGORY']


@dataclass(frozen=True)
class Category(object):
    """A CCG category. Categories are immutable; equality and hashing are structural.
    The semantics can be any hashable value, or None for syntax-only categories."""

    syntax: CCGSyntaxType
    """The syntax type of the category."""

    semantics: Optional[Any] = None
    """The meaning representation. It is treated as an opaque value by the parser."""

    @classmethod
    def create(cls, syntax: CCGSyntaxType, semantics: Optional[Any] = None) -> 'Category':
        return cls(syntax, semantics)

    @property
    def is_empty(self) -> bool:
        return self.syntax == EMPTY_SYNTAX

    def __str__(self) -> str:
        if self.semantics is None:
            return str(self.syntax)
        return f'{self.syntax} : {self.semantics}'

    def __repr__(self) -> str:
        return f'Category[{str(self)}]'


EMPTY_CATEGORY = Category(EMPTY_SYNTAX, None)
"""The category assigned to skipped tokens."""
