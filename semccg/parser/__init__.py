#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : __init__.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/08/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""The CKY chart parser and the joint (parse + execute) parser."""

from .chart import Cell, ScoreSensitiveCell, CellFactory, ScoreSensitiveCellFactory, ChartCellView, Chart
from .cky import CKYParserConfig, CKYDerivation, CKYParserOutput, CKYParser, get_tokens
from .joint import Executor, JointParse, JointOutput, JointParser

__all__ = [
    'Cell', 'ScoreSensitiveCell', 'CellFactory', 'ScoreSensitiveCellFactory', 'ChartCellView', 'Chart',
    'CKYParserConfig', 'CKYDerivation', 'CKYParserOutput', 'CKYParser', 'get_tokens',
    'Executor', 'JointParse', 'JointOutput', 'JointParser',
]
