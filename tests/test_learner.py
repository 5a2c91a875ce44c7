"""Tests for the online learners, data items, lexicon generators, statistics, and observers."""

import pytest

from semccg.errors import ConfigurationError
from semccg.ccg.category import Category, EMPTY_CATEGORY
from semccg.ccg.lexicon import LexicalEntryOrigin, LexicalEntry
from semccg.model.features import LexicalFeatureSet
from semccg.model.scorers import UniformScorer, SkippingSensitiveLexicalEntryScorer
from semccg.model.vector import SparseVector
from semccg.model.model import Model
from semccg.parser.cky import CKYParserConfig, CKYParser
from semccg.parser.joint import JointParser
from semccg.learn.data import LexGenValidationDataItem, DataCollection, TemplateLexiconGenerator
from semccg.learn.stats import OnlineLearningStats
from semccg.learn.observers import LoggingObserver, RecordingObserver
from semccg.learn.learner import OnlineLearnerConfig, ValidationPerceptronConfig, ValidationPerceptronLearner


class _CountingParser(object):
    def __init__(self, parser):
        self.parser = parser
        self.sentences = []

    def parse(self, data_item, data_item_model, **kwargs):
        self.sentences.append(data_item.tokens)
        return self.parser.parse(data_item, data_item_model, **kwargs)


@pytest.fixture
def generator(color_categories):
    return TemplateLexiconGenerator(color_categories, ignored_tokens=['cube', 'sphere'])


@pytest.fixture
def red_cube(generator):
    return LexGenValidationDataItem('red cube', label=('red', 'cube'), lexicon_generator=generator)


def _learner(items, parser, observer, **kwargs):
    return ValidationPerceptronLearner(items, parser, ValidationPerceptronConfig(**kwargs), observers=[observer])


class TestDataItem:
    """Tests for data items and lexicon generators."""

    def test_validation(self):
        labeled = LexGenValidationDataItem('red cube', label=('red', 'cube'))
        assert labeled.is_valid(('red', 'cube'))
        assert not labeled.is_valid(('blue', 'cube'))
        assert not LexGenValidationDataItem('red cube').is_valid(('red', 'cube'))

        validated = LexGenValidationDataItem('red cube', validator=lambda result: result[0] == 'red')
        assert validated.is_valid(('red', 'sphere'))
        assert validated.get_input() == (('red', 'cube'), None)

    def test_no_generator(self):
        assert len(LexGenValidationDataItem('red cube').generate_lexicon()) == 0

    def test_template_generator(self, generator, color_categories):
        lexicon = generator.generate(('red', 'cube'))
        assert len(lexicon) == 2
        assert all(e.origin is LexicalEntryOrigin.GENERATED for e in lexicon)
        assert lexicon.get('cube') == tuple()
        assert {e.category for e in lexicon.get('red')} == set(color_categories)

    def test_template_generator_ngrams(self, syntax_system):
        generator = TemplateLexiconGenerator([lambda tokens: Category(syntax_system['NP'], '_'.join(tokens))], max_ngram=2)
        lexicon = generator(LexGenValidationDataItem('big red cube'))
        assert len(lexicon) == 5
        assert lexicon.get('red cube')[0].semantics == 'red_cube'

    def test_linked_siblings(self, color_categories):
        generator = TemplateLexiconGenerator(color_categories, link_siblings=True)
        red, blue = generator.generate(('red', ))
        assert red.linked_entries == (blue, )
        assert blue.linked_entries == (red, )

    def test_data_collection(self, red_cube):
        data = DataCollection([red_cube, red_cube])
        assert len(data) == 2
        assert data[1] is red_cube
        assert list(data) == [red_cube, red_cube]


class TestConfigs:
    """Tests for learner configurations."""

    @pytest.mark.parametrize('kwargs', [
        {'num_epochs': 0},
        {'max_sentence_length': 0},
        {'lexicon_generation_beam_size': 0},
        {'learning_rate': 0.0},
        {'margin': -1.0},
        {'decay': -0.5},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            ValidationPerceptronConfig(**kwargs)

    def test_base_config(self):
        config = OnlineLearnerConfig(num_epochs=3)
        assert config.lexicon_learning
        assert config.num_epochs == 3


class TestLexicalInduction:
    """Tests for lexical induction inside the training loop."""

    def test_learns_entries_of_best_valid_parse(self, object_model, noun_parser, red_cube, red_fn, syntax_system):
        observer = RecordingObserver()
        stats = _learner([red_cube], noun_parser, observer).train(object_model)

        learned = LexicalEntry('red', Category(syntax_system['N/N'], red_fn))
        assert object_model.has_lex_entry(learned)
        assert [e.origin for e in object_model.lexicon.get('red')] == [LexicalEntryOrigin.LEARNED]
        assert len(object_model.lexicon) == 3
        assert observer.added_entries == [learned]
        assert stats.get_num_new_lexical_entries(0) == 1
        assert stats.get_new_lexical_entries_of_example(0, 0) == 1
        assert stats.get_num_processed(0) == 1
        assert stats.get_num_parameter_updates() == 0

    def test_induction_is_idempotent(self, object_model, noun_parser, red_cube):
        stats = _learner([red_cube], noun_parser, RecordingObserver(), num_epochs=2).train(object_model)
        assert stats.get_num_new_lexical_entries(0) == 1
        assert stats.get_num_new_lexical_entries(1) == 0
        assert len(object_model.lexicon) == 3

    def test_linked_entries_are_learned(self, object_model, noun_parser, color_categories):
        generator = TemplateLexiconGenerator(color_categories, link_siblings=True, ignored_tokens=['cube'])
        item = LexGenValidationDataItem('red cube', label=('red', 'cube'), lexicon_generator=generator)
        observer = RecordingObserver()
        stats = _learner([item], noun_parser, observer).train(object_model)

        assert {e.category for e in object_model.lexicon.get('red')} == set(color_categories)
        assert all(e.origin is LexicalEntryOrigin.LEARNED for e in object_model.lexicon.get('red'))
        assert stats.get_num_new_lexical_entries() == 2
        assert len(observer.get_events('lexical_entry_added')) == 2

    def test_no_valid_parse_learns_nothing(self, object_model, noun_parser, generator):
        item = LexGenValidationDataItem('red cube', label=('green', 'cube'), lexicon_generator=generator)
        stats = _learner([item], noun_parser, RecordingObserver()).train(object_model)
        assert len(object_model.lexicon) == 2
        assert stats.get_num_new_lexical_entries() == 0
        assert stats.get_num_processed() == 1

    def test_lexicon_learning_disabled(self, object_model, noun_parser, red_cube):
        stats = _learner([red_cube], noun_parser, RecordingObserver(), lexicon_learning=False).train(object_model)
        assert len(object_model.lexicon) == 2
        assert stats.get_num_new_lexical_entries() == 0

    def test_skipping_entries_are_not_learned(self, rule_set, object_lexicon, color_categories):
        scorer = SkippingSensitiveLexicalEntryScorer(EMPTY_CATEGORY, -1.0, UniformScorer(0.0))
        model = Model(object_lexicon, [LexicalFeatureSet(initial_scorer=scorer)])
        parser = CKYParser(rule_set, CKYParserConfig(root_syntax='N', allow_word_skipping=True))
        generator = TemplateLexiconGenerator(color_categories, ignored_tokens=['the', 'cube'])
        item = LexGenValidationDataItem('the red cube', label=('red', 'cube'), lexicon_generator=generator)

        _learner([item], parser, RecordingObserver(), lexicon_learning=True).train(model)
        assert all(e.category != EMPTY_CATEGORY for e in model.lexicon)
        assert model.lexicon.get('the') == tuple()
        assert len(model.lexicon.get('red')) == 1


class TestTrainingLoop:
    """Tests for the epoch loop, skipping, and statistics."""

    def test_over_length_example_is_skipped(self, object_model, noun_parser, red_cube, generator):
        long_item = LexGenValidationDataItem('a b c d e', label=('red', 'cube'), lexicon_generator=generator)
        parser = _CountingParser(noun_parser)
        observer = RecordingObserver()
        theta_before = object_model.theta.copy()

        stats = _learner([long_item], parser, observer, max_sentence_length=3).train(object_model)
        assert parser.sentences == []
        assert len(object_model.lexicon) == 2
        assert object_model.theta == theta_before
        assert stats.get_num_skipped(0) == 1
        assert stats.get_num_processed(0) == 0
        assert observer.get_events('example_skipped') == [('example_skipped', 0, 0)]
        assert observer.get_events('model_output') == []

        stats = _learner([long_item, red_cube], parser, RecordingObserver(), max_sentence_length=3).train(object_model)
        assert stats.get_num_processed(0) == 1
        assert stats.get_num_skipped(0) == 1
        assert all(tokens == ('red', 'cube') for tokens in parser.sentences)

    def test_examples_in_input_order(self, object_model, noun_parser, generator):
        items = [
            LexGenValidationDataItem('red cube', label=('red', 'cube'), lexicon_generator=generator),
            LexGenValidationDataItem('red sphere', label=('red', 'sphere'), lexicon_generator=generator),
        ]
        observer = RecordingObserver()
        _learner(items, noun_parser, observer, num_epochs=2).train(object_model)
        starts = observer.get_events('example_start')
        assert starts == [('example_start', 0, 0), ('example_start', 0, 1), ('example_start', 1, 0), ('example_start', 1, 1)]
        assert observer.events[0] == ('epoch_start', 0, None)
        assert observer.events[-1] == ('epoch_end', 1, None)

    def test_stats(self):
        stats = OnlineLearningStats(num_epochs=2, num_examples=3)
        stats.processed(0, 0)
        stats.processed(1, 0)
        stats.skipped(2, 0)
        stats.processed(0, 1)
        stats.num_new_lexical_entries(0, 0, 4)
        stats.parameter_update(1, 1)
        stats.record_model_parsing(0.5)
        assert stats.get_num_processed(0) == 2
        assert stats.get_num_processed() == 3
        assert stats.get_num_skipped(1) == 0
        assert stats.get_num_new_lexical_entries() == 4
        assert stats.get_num_parameter_updates(1) == 1
        assert stats.get_num_processed(5) == 0
        with pytest.raises(KeyError):
            stats.get('unknown')

        summary = stats.format_summary()
        assert 'processed' in summary
        assert 'parameter_updates' in summary
        assert 'model_parsing_time' in summary

    def test_logging_observer(self, object_model, noun_parser, red_cube, generator):
        """The default observer logs every stage of training without failing."""
        long_item = LexGenValidationDataItem('a b c d e', lexicon_generator=generator)
        learner = ValidationPerceptronLearner([red_cube, long_item], noun_parser, ValidationPerceptronConfig(max_sentence_length=3))
        assert isinstance(learner.observers[0], LoggingObserver)
        stats = learner.train(object_model)
        assert stats.get_num_processed() == 1


class TestValidationPerceptron:
    """Tests for the perceptron update."""

    @pytest.fixture
    def ambiguous_model(self, object_lexicon, color_categories):
        model = Model(object_lexicon)
        for category in color_categories:
            model.add_lex_entry(LexicalEntry('red', category))
        return model

    def test_update_direction(self, ambiguous_model, noun_parser, red_cube, color_categories):
        """The update rewards the valid parse and penalizes the tied invalid parse."""
        red, blue = [LexicalEntry('red', c) for c in color_categories]
        observer = RecordingObserver()
        learner = _learner([red_cube], noun_parser, observer, lexicon_learning=False)
        stats = learner.train(ambiguous_model)

        assert ambiguous_model.score(red) == pytest.approx(1.0)
        assert ambiguous_model.score(blue) == pytest.approx(-1.0)
        assert ambiguous_model.score(ambiguous_model.lexicon.get('cube')[0]) == 0.0
        assert stats.get_num_parameter_updates() == 1
        assert learner.nr_updates == 1
        assert observer.get_events('parameter_update') == [('parameter_update', 0, 0)]

    def test_no_update_once_separated(self, ambiguous_model, noun_parser, red_cube):
        learner = _learner([red_cube], noun_parser, RecordingObserver(), lexicon_learning=False, num_epochs=3)
        stats = learner.train(ambiguous_model)
        assert stats.get_num_parameter_updates(0) == 1
        assert stats.get_num_parameter_updates(1) == 0
        assert stats.get_num_parameter_updates(2) == 0

    def test_margin(self, ambiguous_model, noun_parser, red_cube):
        """With a margin, updates continue until the valid parse wins by more than the margin."""
        learner = _learner([red_cube], noun_parser, RecordingObserver(), lexicon_learning=False, num_epochs=3, margin=2.5)
        stats = learner.train(ambiguous_model)
        assert stats.get_num_parameter_updates(0) == 1
        assert stats.get_num_parameter_updates(1) == 1
        assert stats.get_num_parameter_updates(2) == 0

    def test_decay(self, ambiguous_model, noun_parser, red_cube, color_categories):
        learner = _learner([red_cube], noun_parser, RecordingObserver(), lexicon_learning=False, num_epochs=2, margin=10.0, decay=1.0, learning_rate=2.0)
        assert learner.step_size == pytest.approx(2.0)
        learner.train(ambiguous_model)
        assert learner.nr_updates == 2
        assert ambiguous_model.score(LexicalEntry('red', color_categories[0])) == pytest.approx(2.0 + 1.0)

    def test_compute_update(self, ambiguous_model, noun_parser, red_cube, color_categories):
        red, blue = [LexicalEntry('red', c) for c in color_categories]
        learner = _learner([red_cube], noun_parser, RecordingObserver())
        parses = noun_parser.parse(red_cube, ambiguous_model.create_data_item_model(red_cube)).get_all_parses()

        key = ambiguous_model.lexical_features[0].feature_key
        assert learner.compute_update(parses, red_cube) == SparseVector({key(red): 1.0, key(blue): -1.0})
        assert learner.compute_update(parses, LexGenValidationDataItem('red cube', label=('green', 'cube'))) is None
        assert learner.compute_update([p for p in parses if p.result == ('red', 'cube')], red_cube) is None
        assert learner.compute_update([], red_cube) is None

    def test_joint_parser(self, ambiguous_model, noun_parser, color_categories):
        """The learner trains through a joint parser, validating execution results."""
        def execute(semantics, state):
            return frozenset(k for k, v in state.items() if v == semantics)

        state = {'o1': ('red', 'cube'), 'o2': ('blue', 'sphere')}
        item = LexGenValidationDataItem('red cube', state=state, validator=lambda result: result[1] == frozenset({'o1'}))
        learner = _learner([item], JointParser(noun_parser, execute), RecordingObserver(), lexicon_learning=False)
        learner.train(ambiguous_model)

        red, blue = [LexicalEntry('red', c) for c in color_categories]
        assert ambiguous_model.score(red) > ambiguous_model.score(blue)
