#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : __init__.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/02/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Semantic parsing with Combinatory Categorial Grammars, learned from weak supervision.

Here's a quick summary of the sub-modules:

- :mod:`semccg.ccg` contains syntax types, categories, lexicons and combination rules (including coordination).
- :mod:`semccg.parser` contains the beam-pruned CKY chart parser and the joint (parse + execute) parser.
- :mod:`semccg.model` contains sparse parameter vectors, feature sets, scorers and the model that owns the lexicon.
- :mod:`semccg.learn` contains training data items and the online (validation-based) learners.
"""

__version__ = '0.1.0'
