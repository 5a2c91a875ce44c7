#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : __init__.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/06/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Sparse vectors, scorers, feature sets, and the linear parsing model."""

from .vector import FeatureKey, SparseVector
from .scorers import Scorer, ScaledScorer, UniformScorer, LengthLexicalEntryScorer, SkippingSensitiveLexicalEntryScorer, register_scorer, create_scorer
from .features import LexicalFeatureSet, ParseFeatureSet, RuleUsageFeatureSet, JointFeatureSet, ExecutionIndicatorFeatureSet
from .model import Model, DataItemModel

__all__ = [
    'FeatureKey', 'SparseVector',
    'Scorer', 'ScaledScorer', 'UniformScorer', 'LengthLexicalEntryScorer', 'SkippingSensitiveLexicalEntryScorer', 'register_scorer', 'create_scorer',
    'LexicalFeatureSet', 'ParseFeatureSet', 'RuleUsageFeatureSet', 'JointFeatureSet', 'ExecutionIndicatorFeatureSet',
    'Model', 'DataItemModel',
]
