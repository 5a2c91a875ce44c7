#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : stats.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/11/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Statistics of online learning."""

import collections
from typing import Optional, Dict

from tabulate import tabulate
from jacinle.utils.meter import GroupMeters

__all__ = ['OnlineLearningStats']


class OnlineLearningStats(object):
    """Per-epoch counters and parsing-time meters, written by the learner.

    Counters are keyed by epoch. The processed count of an epoch excludes the skipped examples.
    """

    COUNTERS = ('processed', 'skipped', 'new_lexical_entries', 'parameter_updates')

    def __init__(self, num_epochs: int, num_examples: int):
        self.num_epochs = num_epochs
        self.num_examples = num_examples
        self._counters: Dict[int, collections.Counter] = collections.defaultdict(collections.Counter)
        self._new_entries_per_example: Dict[int, Dict[int, int]] = collections.defaultdict(dict)
        self.meters = GroupMeters()

    def processed(self, example_index: int, epoch: int):
        self._counters[epoch]['processed'] += 1

    def skipped(self, example_index: int, epoch: int):
        self._counters[epoch]['skipped'] += 1

    def num_new_lexical_entries(self, example_index: int, epoch: int, count: int):
        self._counters[epoch]['new_lexical_entries'] += count
        self._new_entries_per_example[epoch][example_index] = count

    def parameter_update(self, example_index: int, epoch: int):
        self._counters[epoch]['parameter_updates'] += 1

    def record_model_parsing(self, seconds: float):
        self.meters.update('model_parsing_time', seconds)

    def record_generation_parsing(self, seconds: float):
        self.meters.update('generation_parsing_time', seconds)

    def get(self, name: str, epoch: Optional[int] = None) -> int:
        """Get a counter of an epoch, or the sum over all epochs if ``epoch`` is None."""
        if name not in self.COUNTERS:
            raise KeyError(f'Unknown counter: {name}.')
        if epoch is not None:
            return self._counters[epoch][name] if epoch in self._counters else 0
        return sum(c[name] for c in self._counters.values())

    def get_num_processed(self, epoch: Optional[int] = None) -> int:
        return self.get('processed', epoch)

    def get_num_skipped(self, epoch: Optional[int] = None) -> int:
        return self.get('skipped', epoch)

    def get_num_new_lexical_entries(self, epoch: Optional[int] = None) -> int:
        return self.get('new_lexical_entries', epoch)

    def get_num_parameter_updates(self, epoch: Optional[int] = None) -> int:
        return self.get('parameter_updates', epoch)

    def get_new_lexical_entries_of_example(self, example_index: int, epoch: int) -> int:
        return self._new_entries_per_example.get(epoch, dict()).get(example_index, 0)

    def format_summary(self) -> str:
        rows = list()
        for epoch in sorted(self._counters):
            rows.append([epoch] + [self._counters[epoch][name] for name in self.COUNTERS])
        fmt = tabulate(rows, headers=['epoch'] + list(self.COUNTERS))
        fmt += f'\nExamples: {self.num_examples}, epochs: {self.num_epochs}.'
        if len(self.meters.count) > 0:
            fmt += '\n' + self.meters.format_simple('Average parsing time (s):', 'avg', compressed=False)
        return fmt

    def print_summary(self):
        print(self.format_summary())

    def __str__(self):
        return self.format_summary()
