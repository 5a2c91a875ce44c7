"""Shared fixtures for the semccg test suite.

The toy domain describes objects by tuples: the phrase "red cube" means ``('red', 'cube')``.
"""

import pytest

from semccg.ccg.syntax import CCGSyntaxSystem
from semccg.ccg.category import Category
from semccg.ccg.semantics import CallableSemanticsServices
from semccg.ccg.coordination import SimpleCoordinationServices
from semccg.ccg.rules import CCGRuleSet
from semccg.ccg.lexicon import Lexicon
from semccg.model.model import Model
from semccg.parser.cky import CKYParserConfig, CKYParser


def red(x):
    if not isinstance(x, str):
        raise TypeError('red() applies to object names only.')
    return ('red', x)


def blue(x):
    if not isinstance(x, str):
        raise TypeError('blue() applies to object names only.')
    return ('blue', x)


def conj_and(values):
    return ('and', *values)


@pytest.fixture
def syntax_system():
    """Primitive types of the toy grammar, plus A and T for the coordination scenario."""
    return CCGSyntaxSystem.make_default(primitive_types=('S', 'NP', 'N', 'PP', 'A', 'T'))


@pytest.fixture
def services():
    return CallableSemanticsServices()


@pytest.fixture
def coordination_services(services):
    return SimpleCoordinationServices({'and': conj_and}, services)


@pytest.fixture
def rule_set(services, coordination_services):
    return CCGRuleSet.make_categorial_grammar(services, coordination_services)


@pytest.fixture
def red_fn():
    return red


@pytest.fixture
def blue_fn():
    return blue


@pytest.fixture
def object_lexicon(syntax_system):
    """Fixed entries for object names."""
    lexicon = Lexicon()
    lexicon.add_entry_simple('cube', 'N', 'cube', syntax_system)
    lexicon.add_entry_simple('sphere', 'N', 'sphere', syntax_system)
    return lexicon


@pytest.fixture
def color_categories(syntax_system):
    """The two candidate categories of an unknown adjective."""
    return [Category(syntax_system['N/N'], red), Category(syntax_system['N/N'], blue)]


@pytest.fixture
def noun_parser(rule_set):
    return CKYParser(rule_set, CKYParserConfig(beam_size=20, root_syntax='N'))


@pytest.fixture
def object_model(object_lexicon):
    return Model(object_lexicon)
