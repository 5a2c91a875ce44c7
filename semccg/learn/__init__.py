#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : __init__.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/11/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Training data, online learners, statistics, and observers."""

from .data import LexGenValidationDataItem, DataCollection, TemplateLexiconGenerator
from .stats import OnlineLearningStats
from .observers import LearnerObserver, LoggingObserver, RecordingObserver
from .learner import OnlineLearnerConfig, ValidationPerceptronConfig, AbstractOnlineLearner, ValidationPerceptronLearner

__all__ = [
    'LexGenValidationDataItem', 'DataCollection', 'TemplateLexiconGenerator',
    'OnlineLearningStats',
    'LearnerObserver', 'LoggingObserver', 'RecordingObserver',
    'OnlineLearnerConfig', 'ValidationPerceptronConfig', 'AbstractOnlineLearner', 'ValidationPerceptronLearner',
]
