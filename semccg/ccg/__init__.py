#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : __init__.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/02/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Syntax types, categories, lexicons and combination rules for Combinatory Categorial Grammars."""

from .syntax import (
    CCGDirection, CCGSyntaxTypeParsingError, CCGSyntaxType, CCGPrimitiveSyntaxType, CCGConjSyntaxType, CCGComposedSyntaxType,
    CCGCoordinationSyntaxType, EMPTY_SYNTAX, is_coordination_of_type, CCGSyntaxSystem, parse_syntax_type
)
from .category import Category, EMPTY_CATEGORY
from .semantics import SemanticsServices, CallableSemanticsServices, ComposedFunction
from .composition import RuleName, CCGRuleResult, CCGRule, CCGBinaryRule, CCGUnaryRule
from .rules import ForwardApplicationRule, BackwardApplicationRule, ForwardCompositionRule, BackwardCompositionRule, SkippingRule, SyntaxShiftingRule, CCGRuleSet
from .coordination import CoordinationValue, CoordinationServices, SimpleCoordinationServices, C1Rule, C2Rule, CXRule, make_coordination_rules
from .lexicon import LexicalEntryOrigin, LexicalEntry, LexiconBase, Lexicon, LexiconUnion, canonize_tokens

__all__ = [
    'CCGDirection', 'CCGSyntaxTypeParsingError', 'CCGSyntaxType', 'CCGPrimitiveSyntaxType', 'CCGConjSyntaxType', 'CCGComposedSyntaxType',
    'CCGCoordinationSyntaxType', 'EMPTY_SYNTAX', 'is_coordination_of_type', 'CCGSyntaxSystem', 'parse_syntax_type',
    'Category', 'EMPTY_CATEGORY',
    'SemanticsServices', 'CallableSemanticsServices', 'ComposedFunction',
    'RuleName', 'CCGRuleResult', 'CCGRule', 'CCGBinaryRule', 'CCGUnaryRule',
    'ForwardApplicationRule', 'BackwardApplicationRule', 'ForwardCompositionRule', 'BackwardCompositionRule',
    'SkippingRule', 'SyntaxShiftingRule', 'CCGRuleSet',
    'CoordinationValue', 'CoordinationServices', 'SimpleCoordinationServices', 'C1Rule', 'C2Rule', 'CXRule', 'make_coordination_rules',
    'LexicalEntryOrigin', 'LexicalEntry', 'LexiconBase', 'Lexicon', 'LexiconUnion', 'canonize_tokens',
]
