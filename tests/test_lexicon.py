"""Tests for lexical entries, lexicons, and lexicon unions."""

from semccg.ccg.category import Category
from semccg.ccg.lexicon import LexicalEntryOrigin, LexicalEntry, Lexicon, LexiconUnion, canonize_tokens


class TestLexicalEntry:
    """Tests for lexical entries."""

    def test_equality_ignores_origin(self, syntax_system):
        category = Category(syntax_system['N'], 'cube')
        fixed = LexicalEntry('cube', category)
        learned = LexicalEntry(('cube', ), category, LexicalEntryOrigin.LEARNED)
        assert fixed == learned
        assert hash(fixed) == hash(learned)
        assert fixed != LexicalEntry('box', category)

    def test_clone_with_origin(self, syntax_system):
        linked = LexicalEntry('cube', Category(syntax_system['NP'], 'cube'))
        entry = LexicalEntry('cube', Category(syntax_system['N'], 'cube'), 'generated', [linked])
        clone = entry.clone_with_origin(LexicalEntryOrigin.LEARNED)
        assert clone.origin is LexicalEntryOrigin.LEARNED
        assert entry.origin is LexicalEntryOrigin.GENERATED
        assert clone == entry
        assert clone.linked_entries == (linked, )

    def test_str(self, syntax_system):
        entry = LexicalEntry('red cube', Category(syntax_system['N'], 'cube'))
        assert str(entry) == '[red cube :- N : cube {fixed}]'

    def test_canonize_tokens(self):
        assert canonize_tokens('the  red cube') == ('the', 'red', 'cube')
        assert canonize_tokens(['red', 'cube']) == ('red', 'cube')


class TestLexicon:
    """Tests for the mutable lexicon."""

    def test_add_is_idempotent(self, syntax_system):
        lexicon = Lexicon()
        entry = LexicalEntry('cube', Category(syntax_system['N'], 'cube'))
        assert lexicon.add(entry)
        assert not lexicon.add(entry)
        assert not lexicon.add(entry.clone_with_origin(LexicalEntryOrigin.LEARNED))
        assert len(lexicon) == 1
        assert lexicon.get('cube')[0].origin is LexicalEntryOrigin.FIXED

    def test_get_in_insertion_order(self, syntax_system):
        lexicon = Lexicon()
        a = lexicon.add_entry_simple('red', 'N/N', 'a', syntax_system)
        b = lexicon.add_entry_simple('red', 'N\\N', 'b', syntax_system)
        assert lexicon.get('red') == (a, b)
        assert lexicon.get(('red', )) == (a, b)
        assert lexicon.get('blue') == tuple()

    def test_contains(self, object_lexicon, syntax_system):
        assert LexicalEntry('cube', Category(syntax_system['N'], 'cube')) in object_lexicon
        assert not object_lexicon.contains(LexicalEntry('cube', Category(syntax_system['NP'], 'cube')))

    def test_max_entry_length(self, syntax_system):
        lexicon = Lexicon()
        assert lexicon.max_entry_length == 0
        lexicon.add_entry_simple('cube', 'N', 'cube', syntax_system)
        lexicon.add_entry_simple('to the left of', 'PP/NP', 'left', syntax_system)
        assert lexicon.max_entry_length == 4
        lexicon.clear_entries('to the left of')
        assert lexicon.max_entry_length == 1
        assert len(lexicon) == 1

    def test_add_all(self, object_lexicon):
        lexicon = Lexicon()
        assert lexicon.add_all(object_lexicon) == 2
        assert lexicon.add_all(object_lexicon) == 0
        assert set(lexicon) == set(object_lexicon)

    def test_add_entry_simple_without_syntax_system(self):
        lexicon = Lexicon()
        entry = lexicon.add_entry_simple('cube', 'N', 'cube')
        assert str(entry.syntax) == 'N'
        assert entry.origin is LexicalEntryOrigin.FIXED


class TestLexiconUnion:
    """Tests for lexicon unions."""

    def test_union_reads_both(self, object_lexicon, syntax_system):
        extra = Lexicon()
        red = extra.add_entry_simple('red', 'N/N', 'red', syntax_system)
        union = object_lexicon.union(extra)
        assert isinstance(union, LexiconUnion)
        assert union.get('red') == (red, )
        assert len(union.get('cube')) == 1
        assert len(union) == 3
        assert union.contains(red)

    def test_union_deduplicates(self, object_lexicon, syntax_system):
        extra = Lexicon()
        extra.add_entry_simple('cube', 'N', 'cube', syntax_system, origin=LexicalEntryOrigin.GENERATED)
        union = LexiconUnion(object_lexicon, extra)
        entries = union.get('cube')
        assert len(entries) == 1
        assert entries[0].origin is LexicalEntryOrigin.FIXED
        assert len(union) == 2

    def test_union_does_not_modify_operands(self, object_lexicon, syntax_system):
        extra = Lexicon()
        extra.add_entry_simple('to the left of', 'PP/NP', 'left', syntax_system)
        union = object_lexicon.union(extra)
        assert union.max_entry_length == 4
        assert object_lexicon.max_entry_length == 1
        assert len(object_lexicon) == 2
