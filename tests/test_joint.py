"""Tests for joint parsing and execution."""

import pytest

from semccg.errors import ExecutionError
from semccg.ccg.lexicon import LexicalEntry, Lexicon
from semccg.model.features import ExecutionIndicatorFeatureSet
from semccg.model.vector import SparseVector
from semccg.model.model import Model
from semccg.parser.joint import JointParser
from semccg.learn.data import LexGenValidationDataItem

STATE = {'o1': ('red', 'cube'), 'o2': ('blue', 'cube'), 'o3': ('red', 'sphere')}


def execute(semantics, state):
    if not isinstance(semantics, tuple):
        raise ExecutionError(f'Can not execute {semantics!r}.')
    return frozenset(k for k, v in state.items() if v == semantics)


@pytest.fixture
def color_model(object_lexicon, color_categories):
    model = Model(object_lexicon, joint_features=[ExecutionIndicatorFeatureSet()])
    for category in color_categories:
        model.add_lex_entry(LexicalEntry('red', category))
    return model


@pytest.fixture
def joint_parser(noun_parser):
    return JointParser(noun_parser, execute)


class TestJointParser:
    """Tests for JointParser."""

    def test_results_are_pairs(self, joint_parser, color_model):
        item = LexGenValidationDataItem('red cube', state=STATE)
        output = joint_parser.parse(item, color_model.create_data_item_model(item))
        results = {p.result for p in output.get_all_parses()}
        assert results == {
            (('red', 'cube'), frozenset({'o1'})),
            (('blue', 'cube'), frozenset({'o2'})),
        }
        for parse in output.get_all_parses():
            assert parse.semantics == parse.result[0]
            assert parse.execution_result == parse.result[1]
            assert parse.score == pytest.approx(parse.base_parse.score)

    def test_execution_score(self, joint_parser, color_model):
        """An execution step with an empty result is penalized through its feature weight."""
        color_model.theta[('EXEC', 'EMPTY_RESULT')] = -5.0
        item = LexGenValidationDataItem('red cube', state={'o1': ('red', 'cube')})
        output = joint_parser.parse(item, color_model.create_data_item_model(item))

        parses = output.get_all_parses()
        assert [p.semantics for p in parses] == [('red', 'cube'), ('blue', 'cube')]
        assert parses[1].execution_score == pytest.approx(-5.0)
        assert parses[1].score == pytest.approx(parses[1].base_parse.score - 5.0)
        assert output.get_best_parses() == parses[:1]

        features = parses[1].get_average_max_feature_vector()
        assert features[('EXEC', 'EMPTY_RESULT')] == 1.0
        assert features == parses[1].base_parse.get_average_max_feature_vector() + SparseVector({('EXEC', 'EMPTY_RESULT'): 1.0})

    def test_failed_execution_is_dropped(self, joint_parser, object_model):
        item = LexGenValidationDataItem('cube', state=STATE)
        output = joint_parser.parse(item, object_model.create_data_item_model(item))
        assert len(output.base_output.get_all_parses()) == 1
        assert output.get_all_parses() == []
        assert output.get_best_parses() == []

    def test_none_result_is_dropped(self, noun_parser, color_model):
        parser = JointParser(noun_parser, lambda semantics, state: None if semantics[0] == 'blue' else 'ok')
        item = LexGenValidationDataItem('red cube')
        output = parser.parse(item, color_model.create_data_item_model(item))
        assert [p.result for p in output.get_all_parses()] == [(('red', 'cube'), 'ok')]

    def test_syntax_only_derivations_are_not_executed(self, noun_parser, syntax_system):
        calls = []
        lexicon = Lexicon()
        lexicon.add_entry_simple('cube', 'N', None, syntax_system)
        parser = JointParser(noun_parser, lambda semantics, state: calls.append(semantics) or 'ok')
        output = parser.parse(LexGenValidationDataItem('cube'), Model(lexicon).create_data_item_model(None))
        assert output.get_all_parses() == []
        assert calls == []

    def test_state_is_optional(self, noun_parser, color_model):
        states = []
        parser = JointParser(noun_parser, lambda semantics, state: states.append(state) or 'ok')
        parser.parse('red cube', color_model.create_data_item_model(None))
        assert states == [None, None]

    def test_get_parses_with_result(self, joint_parser, color_model):
        item = LexGenValidationDataItem('red cube', state=STATE)
        output = joint_parser.parse(item, color_model.create_data_item_model(item))
        parses = output.get_parses_with_result((('blue', 'cube'), frozenset({'o2'})))
        assert len(parses) == 1
        assert parses[0].get_max_lexical_entries()[0].semantics is not None
