"""
Unit tests for quranlabs.corpus_store.CorpusStore.
"""

import json
import os
import tempfile
import unittest

from quranlabs.corpus_store import CorpusLoadError, CorpusStore
from quranlabs.models import Language, SecondaryLanguage
from quranlabs.tests import corpus_fixture


class TestLookups(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.store = corpus_fixture.build_store()

    def test_all_verses_keeps_input_order(self):
        verses = self.store.all_verses()
        self.assertEqual(len(verses), 572)
        self.assertEqual(verses[0].verse_id, '1:1')
        self.assertEqual(verses[-1].verse_id, '114:7')

    def test_verse_by_id(self):
        self.assertEqual(self.store.verse_by_id('2:3').verse_number, 3)
        self.assertIsNone(self.store.verse_by_id('2:300'))

    def test_verse_by_chapter_and_number(self):
        verse = self.store.verse(19, 1)
        self.assertEqual(verse.verse_id, '19:1')
        self.assertIsNone(self.store.verse(115, 1))

    def test_verses_in_chapter_ordered(self):
        verses = self.store.verses_in_chapter(36)
        self.assertEqual([v.verse_number for v in verses], [1, 2, 3, 4])

    def test_unknown_chapter_is_empty(self):
        self.assertEqual(self.store.verses_in_chapter(0), ())
        self.assertEqual(self.store.verses_in_chapter(999), ())

    def test_word_tokens_sorted_by_index(self):
        tokens = self.store.word_tokens_for_verse('1:1')
        self.assertEqual([t.word_index for t in tokens], [0, 1, 2])
        self.assertEqual(tokens[0].english_text, 'In the name')

    def test_word_tokens_missing_verse(self):
        self.assertEqual(self.store.word_tokens_for_verse('2:2'), ())

    def test_word_tokens_by_root_in_corpus_order(self):
        tokens = self.store.word_tokens_for_root('rhm')
        self.assertEqual([(t.verse_id, t.global_index) for t in tokens], [('1:1', 3), ('1:3', 7)])
        self.assertEqual(self.store.word_tokens_for_root('xyz'), ())


class TestChapters(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.store = corpus_fixture.build_store()

    def test_one_summary_per_chapter(self):
        chapters = self.store.chapters()
        self.assertEqual([c.chapter_number for c in chapters], list(range(1, 115)))

    def test_revelation_order_is_permutation(self):
        orders = sorted(c.revelation_order for c in self.store.chapters())
        self.assertEqual(orders, list(range(1, 115)))

    def test_sort_by_revelation_order(self):
        chapters = self.store.chapters(sort_by_revelation_order=True)
        self.assertEqual(chapters[0].chapter_number, 114)
        self.assertEqual(chapters[-1].chapter_number, 1)

    def test_summary_fields(self):
        chapter = self.store.chapter(2)
        self.assertEqual(chapter.chapter_verses, 5)
        self.assertEqual(chapter.chapter_title_transliterated, 'Al-Baqarah')
        self.assertIsNone(self.store.chapter(200))

    def test_foreign_title_with_fallback(self):
        chapter = self.store.chapter(1)
        self.assertEqual(chapter.title(Language.TURKISH), 'Fatiha')
        self.assertEqual(chapter.title(Language.GERMAN), 'The Opening')
        self.assertEqual(self.store.chapter(2).title(Language.TURKISH), 'The Cow')


class TestLocalizedText(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.store = corpus_fixture.build_store()

    def test_english(self):
        verse = self.store.verse_by_id('2:1')
        self.assertEqual(self.store.primary_text(verse), 'Those who are full of gratitude receive mercy.')

    def test_foreign_value(self):
        verse = self.store.verse_by_id('1:1')
        self.assertEqual(self.store.primary_text(verse, Language.TURKISH), "Rahman ve Rahim olan Allah'ın adıyla")
        self.assertEqual(self.store.localized(verse, 'verse_footnote', Language.TURKISH), 'Türkçe dipnot')
        self.assertEqual(self.store.localized(verse, 'chapter_title', Language.FRENCH), "L'ouverture")

    def test_null_field_falls_back_to_english(self):
        verse = self.store.verse_by_id('1:2')
        self.assertEqual(self.store.primary_text(verse, Language.FRENCH), verse.verse_text_english)

    def test_missing_overlay_falls_back_to_english(self):
        verse = self.store.verse_by_id('3:1')
        self.assertEqual(self.store.localized(verse, 'verse_subtitle', Language.RUSSIAN), 'The family of Imran')

    def test_absent_english_subtitle_stays_none(self):
        verse = self.store.verse_by_id('1:1')
        self.assertIsNone(self.store.localized(verse, 'verse_subtitle', Language.TURKISH))

    def test_unknown_field(self):
        verse = self.store.verse_by_id('1:1')
        with self.assertRaises(ValueError):
            self.store.localized(verse, 'verse_colour', Language.ENGLISH)

    def test_secondary_has_no_fallback(self):
        verse = self.store.verse_by_id('1:2')
        self.assertEqual(self.store.secondary_text(verse, SecondaryLanguage.GERMAN), 'Lob sei Gott')
        self.assertIsNone(self.store.secondary_text(verse, SecondaryLanguage.FRENCH))
        self.assertIsNone(self.store.secondary_text(self.store.verse_by_id('5:1'), SecondaryLanguage.TURKISH))
        self.assertIsNone(self.store.secondary_text(verse, SecondaryLanguage.NONE))
        self.assertEqual(self.store.secondary_text(verse, SecondaryLanguage.ENGLISH), verse.verse_text_english)


class TestLoading(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_load_from_directory(self):
        corpus_fixture.write_corpus(self.tmp.name)
        store = CorpusStore.load(self.tmp.name)
        self.assertEqual(len(store.all_verses()), 572)
        self.assertEqual(len(store.word_tokens_for_verse('1:1')), 3)

    def test_load_uses_environment_directory(self):
        corpus_fixture.write_corpus(self.tmp.name)
        previous = os.environ.get('QURANLABS_DATA_DIR')
        os.environ['QURANLABS_DATA_DIR'] = self.tmp.name
        try:
            store = CorpusStore.load()
        finally:
            if previous is None:
                del os.environ['QURANLABS_DATA_DIR']
            else:
                os.environ['QURANLABS_DATA_DIR'] = previous
        self.assertIsNotNone(store.verse(2, 1))

    def test_missing_file(self):
        with self.assertRaises(CorpusLoadError):
            CorpusStore.load(self.tmp.name)

    def test_malformed_json(self):
        corpus_fixture.write_corpus(self.tmp.name)
        with open(os.path.join(self.tmp.name, CorpusStore.FOREIGN_FILENAME), 'w', encoding='utf-8') as f:
            f.write('[{"verse_id": ')
        with self.assertRaises(CorpusLoadError):
            CorpusStore.load(self.tmp.name)

    def test_top_level_must_be_array(self):
        corpus_fixture.write_corpus(self.tmp.name)
        with open(os.path.join(self.tmp.name, CorpusStore.MAIN_FILENAME), 'w', encoding='utf-8') as f:
            json.dump({"verses": []}, f)
        with self.assertRaises(CorpusLoadError):
            CorpusStore.load(self.tmp.name)

    def test_invalid_record(self):
        main = corpus_fixture.main_records()
        main[4]['verse_number'] = 'five'
        with self.assertRaises(CorpusLoadError):
            CorpusStore.from_records(main, [], [])

    def test_duplicate_verse_id(self):
        main = corpus_fixture.main_records()
        main.append(dict(main[0]))
        with self.assertRaises(CorpusLoadError):
            CorpusStore.from_records(main, [], [])

    def test_duplicate_chapter_and_verse_number(self):
        main = corpus_fixture.main_records()
        extra = next(dict(r) for r in main if r['verse_id'] == '2:2')
        extra['verse_id'] = '2:2b'
        main.append(extra)
        with self.assertRaises(CorpusLoadError) as ctx:
            CorpusStore.from_records(main, [], [])
        self.assertIn('2:2b', str(ctx.exception))

    def test_gap_in_chapter_numbering(self):
        main = [r for r in corpus_fixture.main_records() if r['verse_id'] != '2:3']
        with self.assertRaises(CorpusLoadError):
            CorpusStore.from_records(main, [], [])

    def test_verse_count_must_match_chapter_verses(self):
        main = corpus_fixture.main_records()
        for record in main:
            if record['chapter_number'] == 2:
                record['chapter_verses'] = 6
        with self.assertRaises(CorpusLoadError):
            CorpusStore.from_records(main, [], [])

    def test_overlay_for_unknown_verse(self):
        with self.assertRaises(CorpusLoadError):
            CorpusStore.from_records(corpus_fixture.main_records(), [{"verse_id": "200:1"}], [])


if __name__ == '__main__':
    unittest.main()
