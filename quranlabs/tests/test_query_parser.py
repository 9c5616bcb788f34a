"""
Unit tests for quranlabs.query_parser.parse().
"""

import unittest

from quranlabs.models import Language
from quranlabs.query import (
    ChapterQuery,
    InvalidQuery,
    MultipleVersesQuery,
    QueryType,
    RandomChapterQuery,
    RandomVerseQuery,
    SearchQuery,
    VerseQuery,
    VerseRangeQuery,
)
from quranlabs.query_parser import parse


class TestEmptyInput(unittest.TestCase):
    def test_empty_string(self):
        self.assertEqual(parse(''), InvalidQuery(reason='Empty query'))

    def test_whitespace_only(self):
        self.assertEqual(parse('   '), InvalidQuery(reason='Empty query'))
        self.assertEqual(parse('\n\t'), InvalidQuery(reason='Empty query'))


class TestReferences(unittest.TestCase):
    def test_chapter_only(self):
        self.assertEqual(parse('36'), ChapterQuery(chapter=36))
        self.assertEqual(parse('  112 '), ChapterQuery(chapter=112))

    def test_single_verse_colon(self):
        self.assertEqual(parse('2:255'), VerseQuery(chapter=2, verse=255))

    def test_single_verse_space(self):
        self.assertEqual(parse('2 255'), VerseQuery(chapter=2, verse=255))
        self.assertEqual(parse('2 : 255'), VerseQuery(chapter=2, verse=255))

    def test_range(self):
        self.assertEqual(parse('18:1-10'), VerseRangeQuery(chapter=18, start=1, end=10))
        self.assertEqual(parse('18 1 10'), VerseRangeQuery(chapter=18, start=1, end=10))

    def test_range_keeps_reversed_bounds(self):
        self.assertEqual(parse('2:7-3'), VerseRangeQuery(chapter=2, start=7, end=3))

    def test_type_tags(self):
        self.assertEqual(parse('1').type, QueryType.CHAPTER)
        self.assertEqual(parse('1:1').type, QueryType.VERSE)
        self.assertEqual(parse('1:1-2').type, QueryType.VERSE_RANGE)


class TestVerseLists(unittest.TestCase):
    def test_same_chapter(self):
        self.assertEqual(parse('2:1,2:2'), MultipleVersesQuery(chapter=2, verses=(1, 2)))

    def test_segments_are_trimmed_and_order_kept(self):
        self.assertEqual(parse('2:5 , 2:2,2:8'), MultipleVersesQuery(chapter=2, verses=(5, 2, 8)))

    def test_mixed_chapters_rejected(self):
        query = parse('2:1,3:1')
        self.assertIsInstance(query, InvalidQuery)
        self.assertEqual(query.reason, 'Multiple chapters or ranges not supported in multipleVerses')

    def test_ranges_in_list_rejected(self):
        self.assertIsInstance(parse('2:1-3,2:5'), InvalidQuery)
        self.assertIsInstance(parse('2:1-3,2:5-6'), InvalidQuery)


class TestKeywordsAndSearch(unittest.TestCase):
    def test_random_chapter(self):
        self.assertEqual(parse('random chapter'), RandomChapterQuery())
        self.assertEqual(parse('  Random Chapter '), RandomChapterQuery())

    def test_random_verse(self):
        self.assertEqual(parse('RANDOM VERSE'), RandomVerseQuery())

    def test_fallback_search(self):
        self.assertEqual(parse('Mercy Full'), SearchQuery(term='mercy full', language=Language.ENGLISH, fuzzy=True))

    def test_search_uses_default_language(self):
        query = parse('rahman', Language.TURKISH)
        self.assertEqual(query.language, Language.TURKISH)
        self.assertTrue(query.fuzzy)

    def test_near_miss_references_are_searches(self):
        self.assertIsInstance(parse('2:'), SearchQuery)
        self.assertIsInstance(parse('2:1,'), SearchQuery)
        self.assertIsInstance(parse('random'), SearchQuery)

    def test_non_ascii_digits_are_not_references(self):
        self.assertIsInstance(parse('٢:٢٥٥'), SearchQuery)


class TestNumberOverflow(unittest.TestCase):
    def test_huge_number_is_invalid_not_error(self):
        huge = '9' * 5000
        for text in (huge, f'2:{huge}', f'{huge}:1-2', f'2:1,2:{huge}'):
            query = parse(text)
            self.assertIsInstance(query, InvalidQuery, text[:10])

    def test_just_above_64_bit(self):
        self.assertIsInstance(parse('9223372036854775808'), InvalidQuery)
        self.assertEqual(parse('9223372036854775807'), ChapterQuery(chapter=9223372036854775807))


if __name__ == '__main__':
    unittest.main()
