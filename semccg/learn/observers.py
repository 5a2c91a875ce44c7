#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : observers.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/12/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Observers of the online learners. The learners call the hooks at fixed points of the training loop and never format
log messages themselves; :class:`LoggingObserver` writes them to the package logger."""

from typing import Any, Optional, Sequence, List

from jacinle.logging import get_logger

from semccg.options import options
from semccg.ccg.lexicon import LexicalEntry
from semccg.model.vector import SparseVector

logger = get_logger(__file__)

__all__ = ['LearnerObserver', 'LoggingObserver', 'RecordingObserver']


class LearnerObserver(object):
    """The base observer. All hooks are no-ops."""

    def on_epoch_start(self, learner, epoch: int):
        pass

    def on_example_start(self, learner, example_index: int, epoch: int, data_item):
        pass

    def on_example_skipped(self, learner, example_index: int, epoch: int, data_item, reason: str):
        pass

    def on_generation_output(self, learner, example_index: int, epoch: int, data_item, generated_lexicon, output, valid_parses: Sequence[Any], best_parses: Sequence[Any]):
        """Called after the parse for lexical induction. ``output`` is None when the generated lexicon is empty."""
        pass

    def on_lexical_entry_added(self, learner, example_index: int, epoch: int, entry: LexicalEntry, linked: bool):
        pass

    def on_model_output(self, learner, example_index: int, epoch: int, data_item, output):
        pass

    def on_parameter_update(self, learner, example_index: int, epoch: int, data_item, delta: SparseVector, step_size: float):
        pass

    def on_example_end(self, learner, example_index: int, epoch: int, data_item, seconds: float):
        pass

    def on_epoch_end(self, learner, epoch: int):
        pass


class LoggingObserver(LearnerObserver):
    """Write the progress of training to the logger. Parses whose result equals the gold label are marked with ``*``."""

    def __init__(self, max_logged_parses: int = 5):
        self.max_logged_parses = max_logged_parses

    def on_epoch_start(self, learner, epoch):
        logger.info('=========================')
        logger.info(f'Training epoch {epoch}')
        logger.info('=========================')

    def on_example_start(self, learner, example_index, epoch, data_item):
        logger.info(f'{example_index} : ================== [{epoch}]')
        logger.info(f'Sample type: {type(data_item).__name__}')
        logger.info(str(data_item))

    def on_example_skipped(self, learner, example_index, epoch, data_item, reason):
        logger.warning(f'Training sample skipped: {reason}.')

    def on_generation_output(self, learner, example_index, epoch, data_item, generated_lexicon, output, valid_parses, best_parses):
        logger.info(f'Generated lexicon size = {len(generated_lexicon)}')
        if output is None:
            logger.info('Skipped lexical induction. No generated lexical entries.')
            return
        all_parses = output.get_all_parses()
        logger.info(f'Lexicon induction parsing time: {output.parsing_time:.4f}sec')
        logger.info(f'Created {len(all_parses)} lexicon generation parses for training sample')
        logger.info(f'Removed {len(all_parses) - len(valid_parses)} invalid parses')
        logger.info(f'{len(best_parses)} valid best parses for lexical generation:')
        for parse in best_parses:
            self.log_parse(learner, data_item, parse, valid=True, verbose=options.log_verbose_parses)

    def on_lexical_entry_added(self, learner, example_index, epoch, entry, linked):
        theta = learner.model.theta
        prefix = 'Added (linked) LexicalEntry to model' if linked else 'Added LexicalEntry to model'
        logger.info(f'{prefix}: {entry} [{theta.format_values(learner.model.compute_features(entry))}]')

    def on_model_output(self, learner, example_index, epoch, data_item, output):
        all_parses = output.get_all_parses()
        logger.info(f'Created {len(all_parses)} model parses for training sample')
        logger.info(f'Model parsing time: {output.parsing_time:.4f}sec')
        for parse in all_parses[:self.max_logged_parses]:
            self.log_parse(learner, data_item, parse, valid=data_item.is_valid(parse.result), verbose=False)

    def on_parameter_update(self, learner, example_index, epoch, data_item, delta, step_size):
        logger.info(f'Update (step={step_size:.4f}): {delta.format_values()}')

    def on_example_end(self, learner, example_index, epoch, data_item, seconds):
        logger.info(f'Total sample handling time: {seconds:.4f}sec')

    def on_epoch_end(self, learner, epoch):
        logger.info('Epoch stats:\n' + learner.stats.format_summary())

    def log_parse(self, learner, data_item, parse, valid: Optional[bool] = None, verbose: bool = False, tag: Optional[str] = None):
        gold = '* ' if learner.is_gold_debug_correct(data_item, parse.result) else '  '
        tag = '' if tag is None else tag + ' '
        validity = '' if valid is None else (', V' if valid else ', X')
        logger.info(f'{gold}{tag}[{parse.score:.2f}{validity}] {parse}')
        if verbose:
            theta = learner.model.theta
            for entry in parse.get_max_lexical_entries():
                logger.info(f'\t[{learner.model.score(entry):.4f}] {entry} [{theta.format_values(learner.model.compute_features(entry))}]')
            logger.info('Rules used: ' + ', '.join(str(r) for r in parse.get_max_rules_used()))
            logger.info(theta.format_values(parse.get_average_max_feature_vector()))


class RecordingObserver(LearnerObserver):
    """Record the events of training as tuples ``(hook_name, epoch, example_index)``. Mostly useful for tests."""

    def __init__(self):
        self.events: List[tuple] = list()
        self.added_entries: List[LexicalEntry] = list()

    def on_epoch_start(self, learner, epoch):
        self.events.append(('epoch_start', epoch, None))

    def on_example_start(self, learner, example_index, epoch, data_item):
        self.events.append(('example_start', epoch, example_index))

    def on_example_skipped(self, learner, example_index, epoch, data_item, reason):
        self.events.append(('example_skipped', epoch, example_index))

    def on_generation_output(self, learner, example_index, epoch, data_item, generated_lexicon, output, valid_parses, best_parses):
        self.events.append(('generation_output', epoch, example_index))

    def on_lexical_entry_added(self, learner, example_index, epoch, entry, linked):
        self.events.append(('lexical_entry_added', epoch, example_index))
        self.added_entries.append(entry)

    def on_model_output(self, learner, example_index, epoch, data_item, output):
        self.events.append(('model_output', epoch, example_index))

    def on_parameter_update(self, learner, example_index, epoch, data_item, delta, step_size):
        self.events.append(('parameter_update', epoch, example_index))

    def on_example_end(self, learner, example_index, epoch, data_item, seconds):
        self.events.append(('example_end', epoch, example_index))

    def on_epoch_end(self, learner, epoch):
        self.events.append(('epoch_end', epoch, None))

    def get_events(self, name: str) -> List[tuple]:
        return [e for e in self.events if e[0] == name]
