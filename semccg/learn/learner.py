#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# File   : learner.py
# Author : Jiayuan Mao
# Email  : maojiayuan@gmail.com
# Date   : 03/12/2026
#
# This file is part of Project SemCCG.
# Distributed under terms of the MIT license.

"""Online learners that alternate lexical induction and parameter updates under weak (validation-only) supervision.

For each epoch and each training example (in input order), the learner:

    1. skips the example if it is longer than ``max_sentence_length``;
    2. if lexical learning is enabled, runs lexical induction: it parses the example with the generated candidate
       entries under a wider beam, keeps the max-scoring valid parses (ties included), and adds the lexical entries they
       use (and the entries linked to them) to the model as LEARNED entries;
    3. parses the example with the (updated) model, and calls :meth:`AbstractOnlineLearner._parameter_update`.

The parser can be a :class:`~semccg.parser.cky.CKYParser` or a :class:`~semccg.parser.joint.JointParser`. The learner only
relies on ``parse(data_item, data_item_model, restrict_to_model_lexicon, extra_lexicon, beam_size)`` and on the ``result``,
``score``, ``get_max_lexical_entries``, and ``get_average_max_feature_vector`` of the parses.
"""

import time
from dataclasses import dataclass
from typing import Any, Optional, Iterable, Sequence, List

from semccg.errors import ConfigurationError
from semccg.ccg.lexicon import LexicalEntryOrigin
from semccg.model.vector import SparseVector
from semccg.model.model import Model, DataItemModel
from semccg.learn.data import LexGenValidationDataItem, DataCollection
from semccg.learn.stats import OnlineLearningStats
from semccg.learn.observers import LearnerObserver, LoggingObserver

__all__ = ['OnlineLearnerConfig', 'ValidationPerceptronConfig', 'AbstractOnlineLearner', 'ValidationPerceptronLearner']


@dataclass
class OnlineLearnerConfig(object):
    """Configurations for online learners."""

    num_epochs: int = 1
    """The number of passes over the training data."""

    max_sentence_length: int = 50
    """Examples with more tokens are skipped."""

    lexicon_generation_beam_size: int = 100
    """The beam size of the parse for lexical induction. It is usually larger than the beam size of the model parse."""

    lexicon_learning: bool = True
    """Whether to run lexical induction."""

    def __post_init__(self):
        if self.num_epochs <= 0:
            raise ConfigurationError(f'num_epochs must be positive, got {self.num_epochs}.')
        if self.max_sentence_length <= 0:
            raise ConfigurationError(f'max_sentence_length must be positive, got {self.max_sentence_length}.')
        if self.lexicon_generation_beam_size <= 0:
            raise ConfigurationError(f'lexicon_generation_beam_size must be positive, got {self.lexicon_generation_beam_size}.')


@dataclass
class ValidationPerceptronConfig(OnlineLearnerConfig):
    """Configurations for :class:`ValidationPerceptronLearner`."""

    learning_rate: float = 1.0
    """The initial step size."""

    margin: float = 0.0
    """Invalid parses scoring within ``margin`` of the best valid parse (or above it) are penalized."""

    decay: float = 0.0
    """The step size of the t-th update is ``learning_rate / (1 + decay * t)``."""

    def __post_init__(self):
        super().__post_init__()
        if self.learning_rate <= 0:
            raise ConfigurationError(f'learning_rate must be positive, got {self.learning_rate}.')
        if self.margin < 0:
            raise ConfigurationError(f'margin must be non-negative, got {self.margin}.')
        if self.decay < 0:
            raise ConfigurationError(f'decay must be non-negative, got {self.decay}.')


def _max_score_subset(parses: Sequence[Any]) -> List[Any]:
    if len(parses) == 0:
        return list()
    best = max(p.score for p in parses)
    return [p for p in parses if p.score == best]


class AbstractOnlineLearner(object):
    """The epoch loop and lexical induction. Subclasses implement :meth:`_parameter_update`."""

    def __init__(
        self,
        training_data: Iterable[LexGenValidationDataItem],
        parser: Any,
        config: Optional[OnlineLearnerConfig] = None,
        observers: Optional[Iterable[LearnerObserver]] = None
    ):
        """Initialize the learner.

        Args:
            training_data: the training examples.
            parser: a :class:`~semccg.parser.cky.CKYParser` or a :class:`~semccg.parser.joint.JointParser`.
            config: the learner configuration.
            observers: the observers of the training loop. Defaults to a single :class:`LoggingObserver`.
        """
        self.training_data = training_data if isinstance(training_data, DataCollection) else DataCollection(training_data)
        self.parser = parser
        self.config = config if config is not None else OnlineLearnerConfig()
        self.observers = list(observers) if observers is not None else [LoggingObserver()]
        self.stats = OnlineLearningStats(self.config.num_epochs, len(self.training_data))
        self.model: Optional[Model] = None

    training_data: DataCollection
    config: OnlineLearnerConfig
    observers: List[LearnerObserver]
    stats: OnlineLearningStats

    def _notify(self, hook: str, *args):
        for observer in self.observers:
            getattr(observer, hook)(self, *args)

    def train(self, model: Model) -> OnlineLearningStats:
        """Train the model in place.

        Returns:
            the statistics of training.
        """
        self.model = model
        for epoch in range(self.config.num_epochs):
            self._notify('on_epoch_start', epoch)
            for index, data_item in enumerate(self.training_data):
                self._train_example(model, data_item, index, epoch)
            self._notify('on_epoch_end', epoch)
        return self.stats

    def _train_example(self, model: Model, data_item: LexGenValidationDataItem, index: int, epoch: int):
        start_time = time.time()
        self._notify('on_example_start', index, epoch, data_item)

        if len(data_item.tokens) > self.config.max_sentence_length:
            self.stats.skipped(index, epoch)
            self._notify('on_example_skipped', index, epoch, data_item, f'{len(data_item.tokens)} tokens > max_sentence_length={self.config.max_sentence_length}')
            return

        data_item_model = model.create_data_item_model(data_item)

        if self.config.lexicon_learning:
            self._lexical_induction(data_item, data_item_model, model, index, epoch)

        output = self.parser.parse(data_item, data_item_model)
        self.stats.record_model_parsing(output.parsing_time)
        self._notify('on_model_output', index, epoch, data_item, output)

        self._parameter_update(output, data_item, data_item_model, model, index, epoch)

        self.stats.processed(index, epoch)
        self._notify('on_example_end', index, epoch, data_item, time.time() - start_time)

    def _lexical_induction(self, data_item: LexGenValidationDataItem, data_item_model: DataItemModel, model: Model, index: int, epoch: int):
        generated_lexicon = data_item.generate_lexicon()
        if len(generated_lexicon) == 0:
            self._notify('on_generation_output', index, epoch, data_item, generated_lexicon, None, list(), list())
            return

        output = self.parser.parse(
            data_item, data_item_model,
            restrict_to_model_lexicon=False, extra_lexicon=generated_lexicon, beam_size=self.config.lexicon_generation_beam_size
        )
        self.stats.record_generation_parsing(output.parsing_time)

        valid_parses = [p for p in output.get_all_parses() if data_item.is_valid(p.result)]
        best_parses = _max_score_subset(valid_parses)
        self._notify('on_generation_output', index, epoch, data_item, generated_lexicon, output, valid_parses, best_parses)

        nr_new_entries = 0
        for parse in best_parses:
            for entry in parse.get_max_lexical_entries():
                # Empty entries only exist to skip words; they are not lexical knowledge.
                if entry.origin is LexicalEntryOrigin.SKIPPING:
                    continue
                learned = entry.clone_with_origin(LexicalEntryOrigin.LEARNED)
                if model.add_lex_entry(learned):
                    nr_new_entries += 1
                    self._notify('on_lexical_entry_added', index, epoch, learned, False)
                for linked_entry in entry.linked_entries:
                    learned = linked_entry.clone_with_origin(LexicalEntryOrigin.LEARNED)
                    if model.add_lex_entry(learned):
                        nr_new_entries += 1
                        self._notify('on_lexical_entry_added', index, epoch, learned, True)
        self.stats.num_new_lexical_entries(index, epoch, nr_new_entries)

    def _parameter_update(self, output: Any, data_item: LexGenValidationDataItem, data_item_model: DataItemModel, model: Model, index: int, epoch: int):
        """Update the parameters of the model after the model parse of an example.

        Args:
            output: the output of the model parse.
            data_item: the example.
            data_item_model: the model view used for the parse.
            model: the model to update.
            index: the index of the example in the epoch.
            epoch: the epoch.
        """
        raise NotImplementedError()

    def is_gold_debug_correct(self, data_item: LexGenValidationDataItem, result: Any) -> bool:
        """Whether a result equals the gold label of the example (debugging output only)."""
        return data_item.label is not None and data_item.label == result


class ValidationPerceptronLearner(AbstractOnlineLearner):
    """A perceptron with validation-based supervision.

    Among the model parses of an example, the good parses are the max-scoring valid ones, and the bad parses are the
    invalid ones scoring at least ``best_valid_score - margin``. If both sets are non-empty, the update is

    .. code-block:: python

        theta += learning_rate / (1 + decay * t) * (mean(features(good)) - mean(features(bad)))

    where ``t`` is the number of updates so far. There is no update when no parse is valid, or when the best valid
    parse beats every invalid parse by more than the margin.
    """

    def __init__(
        self,
        training_data: Iterable[LexGenValidationDataItem],
        parser: Any,
        config: Optional[ValidationPerceptronConfig] = None,
        observers: Optional[Iterable[LearnerObserver]] = None
    ):
        super().__init__(training_data, parser, config if config is not None else ValidationPerceptronConfig(), observers)
        self.nr_updates = 0

    config: ValidationPerceptronConfig

    @property
    def step_size(self) -> float:
        return self.config.learning_rate / (1 + self.config.decay * self.nr_updates)

    def compute_update(self, parses: Sequence[Any], data_item: LexGenValidationDataItem) -> Optional[SparseVector]:
        """Compute the update direction for the parses of an example. Returns None if there is no update."""
        validity = [data_item.is_valid(p.result) for p in parses]
        valid_parses = [p for p, v in zip(parses, validity) if v]
        if len(valid_parses) == 0:
            return None

        good_parses = _max_score_subset(valid_parses)
        threshold = good_parses[0].score - self.config.margin
        bad_parses = [p for p, v in zip(parses, validity) if not v and p.score >= threshold]
        if len(bad_parses) == 0:
            return None

        delta = SparseVector.mean(p.get_average_max_feature_vector() for p in good_parses) - SparseVector.mean(p.get_average_max_feature_vector() for p in bad_parses)
        delta = delta.drop_zeros()
        if len(delta) == 0:
            return None
        return delta

    def _parameter_update(self, output, data_item, data_item_model, model, index, epoch):
        delta = self.compute_update(output.get_all_parses(), data_item)
        if delta is None:
            return

        step_size = self.step_size
        model.theta.add_times_inplace(step_size, delta)
        self.nr_updates += 1
        self.stats.parameter_update(index, epoch)
        self._notify('on_parameter_update', index, epoch, data_item, delta, step_size)
