#!/usr/bin/env python3
"""
Unit tests for the quiz/repositories layer.

Run with:
    python -m pytest tests/test_repositories.py
"""
import json
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from quiz.errors import StoreLoadError
from quiz.repositories import LeaderboardRepository, QuestionRepository


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

QUESTIONS = {
    'science': [
        {'id': '1', 'question': 'Q?', 'options': ['A', 'B'], 'answer': 'A'},
    ],
}

LEADERBOARD = {
    '2023': [{'id': 'p1', 'name': 'Al', 'score': 5}],
    '2024': [
        {'id': 'p2', 'name': 'Bea', 'score': 1},
        {'id': 'p1', 'name': 'Al', 'score': 0},
    ],
}


class TmpDirMixin(unittest.TestCase):
    """Creates a fresh temp directory for each test and cd's into it."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self._orig = os.getcwd()
        os.chdir(self.tmp)

    def tearDown(self):
        os.chdir(self._orig)
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.tmp, name)

    def _write(self, name: str, data) -> str:
        path = self._path(name)
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh)
        return path

    def _read(self, name: str):
        with open(self._path(name), 'r', encoding='utf-8') as fh:
            return json.load(fh)


# ===========================================================================
# Loading
# ===========================================================================

class TestLoad(TmpDirMixin):

    def test_missing_file_raises(self):
        with self.assertRaises(StoreLoadError) as ctx:
            QuestionRepository(self._path('nope.json'))
        self.assertIn('nope.json', str(ctx.exception))

    def test_invalid_json_raises(self):
        path = self._path('questions.json')
        with open(path, 'w') as fh:
            fh.write('{not json')
        with self.assertRaises(StoreLoadError):
            QuestionRepository(path)

    def test_top_level_list_raises(self):
        path = self._write('leaderboard.json', [1, 2, 3])
        with self.assertRaises(StoreLoadError):
            LeaderboardRepository(path)

    def test_error_carries_path(self):
        path = self._path('gone.json')
        with self.assertRaises(StoreLoadError) as ctx:
            LeaderboardRepository(path)
        self.assertEqual(ctx.exception.path, path)

    def test_loads_document(self):
        repo = QuestionRepository(self._write('questions.json', QUESTIONS))
        self.assertEqual(repo.data, QUESTIONS)

    def test_default_path_is_relative_to_cwd(self):
        self._write('questions.json', QUESTIONS)
        self.assertEqual(QuestionRepository().categories(), ['science'])


# ===========================================================================
# Saving
# ===========================================================================

class TestSave(TmpDirMixin):

    def test_save_pretty_prints_with_two_spaces(self):
        repo = QuestionRepository(self._write('questions.json', QUESTIONS))
        repo.save()
        with open(self._path('questions.json'), encoding='utf-8') as fh:
            text = fh.read()
        self.assertIn('\n  "science": [', text)

    def test_save_keeps_non_ascii(self):
        repo = QuestionRepository(self._write('questions.json', {}))
        repo.append('général', {'id': 'x', 'question': 'Où?', 'options': [], 'answer': 'A'})
        with open(self._path('questions.json'), encoding='utf-8') as fh:
            self.assertIn('Où?', fh.read())

    def test_failed_write_leaves_file_and_no_temp(self):
        repo = QuestionRepository(self._write('questions.json', QUESTIONS))
        repo.data['history'] = []
        with patch('quiz.repositories.base.json.dump', side_effect=TypeError('boom')):
            with self.assertRaises(TypeError):
                repo.save()
        self.assertEqual(self._read('questions.json'), QUESTIONS)
        self.assertEqual([f for f in os.listdir(self.tmp) if f.endswith('.tmp')], [])


# ===========================================================================
# QuestionRepository
# ===========================================================================

class TestQuestionRepository(TmpDirMixin):

    def _make(self):
        return QuestionRepository(self._write('questions.json', QUESTIONS))

    def test_find_category(self):
        self.assertEqual(self._make().find_category('science')[0]['id'], '1')

    def test_find_missing_category_returns_none(self):
        self.assertIsNone(self._make().find_category('history'))

    def test_append_creates_category_and_persists(self):
        repo = self._make()
        repo.append('history', {'id': '2', 'question': 'When?', 'options': ['X'], 'answer': 'A'})
        self.assertEqual(repo.categories(), ['science', 'history'])
        self.assertEqual(self._read('questions.json')['history'][0]['id'], '2')

    def test_append_keeps_insertion_order(self):
        repo = self._make()
        repo.append('science', {'id': '2'})
        repo.append('science', {'id': '3'})
        self.assertEqual([q['id'] for q in repo.data['science']], ['1', '2', '3'])


# ===========================================================================
# LeaderboardRepository
# ===========================================================================

class TestLeaderboardRepository(TmpDirMixin):

    def _make(self, data=None):
        return LeaderboardRepository(self._write('leaderboard.json', data or LEADERBOARD))

    def test_find_player_returns_first_year_in_document_order(self):
        player = self._make().find_player('p1')
        self.assertEqual(player['score'], 5)

    def test_find_player_returns_live_record(self):
        repo = self._make()
        repo.find_player('p2')['score'] = 42
        self.assertEqual(repo.data['2024'][0]['score'], 42)

    def test_find_unknown_player_returns_none(self):
        self.assertIsNone(self._make().find_player('ghost'))

    def test_first_match_within_a_year(self):
        repo = self._make({'2024': [
            {'id': 'dup', 'name': 'First', 'score': 0},
            {'id': 'dup', 'name': 'Second', 'score': 0},
        ]})
        self.assertEqual(repo.find_player('dup')['name'], 'First')

    def test_rebuild_index_after_manual_change(self):
        repo = self._make()
        repo.data['2025'] = [{'id': 'p9', 'name': 'Di', 'score': 0}]
        self.assertIsNone(repo.find_player('p9'))
        repo.rebuild_index()
        self.assertEqual(repo.find_player('p9')['name'], 'Di')

    def test_year_returns_records(self):
        self.assertEqual(len(self._make().year('2024')), 2)

    def test_unknown_year_is_empty(self):
        self.assertEqual(self._make().year('1999'), [])

    def test_null_year_is_empty(self):
        self.assertEqual(self._make({'2020': None}).year('2020'), [])

    def test_ids_match_by_kind_and_value(self):
        repo = self._make({'2024': [
            {'id': 1, 'name': 'Num', 'score': 0},
            {'id': 'true', 'name': 'Text', 'score': 0},
        ]})
        self.assertIsNone(repo.find_player(True))
        self.assertIsNone(repo.find_player('1'))
        self.assertEqual(repo.find_player(1)['name'], 'Num')
        self.assertEqual(repo.find_player(1.0)['name'], 'Num')
        self.assertEqual(repo.find_player('true')['name'], 'Text')

    def test_boolean_id_matches_only_boolean(self):
        repo = self._make({'2024': [{'id': True, 'name': 'Yes', 'score': 0}]})
        self.assertIsNone(repo.find_player(1))
        self.assertEqual(repo.find_player(True)['name'], 'Yes')

    def test_unhashable_lookup_is_a_miss(self):
        repo = self._make()
        self.assertIsNone(repo.find_player({'x': 1}))
        self.assertIsNone(repo.find_player(['p1']))

    def test_non_object_record_raises_on_load(self):
        with self.assertRaises(StoreLoadError):
            self._make({'2024': ['p1']})

    def test_non_list_year_raises_on_load(self):
        with self.assertRaises(StoreLoadError):
            self._make({'2024': {'id': 'p1'}})

    def test_non_scalar_id_raises_on_load(self):
        with self.assertRaises(StoreLoadError) as ctx:
            self._make({'2024': [{'id': ['p1'], 'name': 'Al', 'score': 0}]})
        self.assertIn('leaderboard.json', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
