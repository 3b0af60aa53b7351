"""
Unit tests for the hackathon storage backends.
"""

import json
import os
import tempfile
import unittest

import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database_utils import DatabaseManager
from hackathon_models import Hackathon, HackathonLinks
from hackathon_repository import (
    InMemoryHackathonStore, JsonDirectoryHackathonStore, SqlHackathonStore, get_hackathon_store
)


def make_hackathon(hackathon_id, **kwargs):
    kwargs.setdefault('name', hackathon_id.replace('-', ' ').title())
    kwargs.setdefault('url', f'https://{hackathon_id}.dev')
    return Hackathon(id=hackathon_id, source='test', last_updated='2026-01-01', confidence=0.8, **kwargs)


class StoreContractMixin:
    """Behaviour every backend must share."""

    def make_store(self):
        raise NotImplementedError

    def test_empty_store(self):
        self.assertEqual(self.make_store().load_all(), [])

    def test_upsert_and_load_sorted_by_id(self):
        store = self.make_store()
        store.upsert(make_hackathon('zeta-hack'))
        store.upsert(make_hackathon('alpha-hack'))

        self.assertEqual([h.id for h in store.load_all()], ['alpha-hack', 'zeta-hack'])

    def test_upsert_replaces_by_id(self):
        store = self.make_store()
        store.upsert(make_hackathon('alpha-hack', status='upcoming'))
        store.upsert(make_hackathon('alpha-hack', status='active'))

        hackathons = store.load_all()

        self.assertEqual(len(hackathons), 1)
        self.assertEqual(hackathons[0].status, 'active')

    def test_round_trip_preserves_fields(self):
        store = self.make_store()
        original = make_hackathon(
            'alpha-hack', organizer='Alpha', submission_deadline='2026-03-01', categories=['ai'],
            links=HackathonLinks(discord='https://discord.gg/alpha'), extra={'featured': True},
        )
        store.upsert(original)

        self.assertEqual(store.get('alpha-hack'), original)

    def test_get_missing(self):
        self.assertIsNone(self.make_store().get('nope'))

    def test_upsert_many(self):
        store = self.make_store()

        count = store.upsert_many([make_hackathon('a-hack'), make_hackathon('b-hack')])

        self.assertEqual(count, 2)
        self.assertEqual(len(store.load_all()), 2)


class TestInMemoryHackathonStore(StoreContractMixin, unittest.TestCase):
    """Test cases for InMemoryHackathonStore."""

    def make_store(self):
        return InMemoryHackathonStore()

    def test_loaded_records_are_copies(self):
        store = InMemoryHackathonStore([make_hackathon('alpha-hack', categories=['ai'])])

        store.load_all()[0].categories.append('mutated')

        self.assertEqual(store.get('alpha-hack').categories, ['ai'])
        self.assertEqual(len(store), 1)


class TestJsonDirectoryHackathonStore(StoreContractMixin, unittest.TestCase):
    """Test cases for JsonDirectoryHackathonStore."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.data_dir = os.path.join(self.temp_dir.name, 'hackathons')

    def make_store(self):
        return JsonDirectoryHackathonStore(self.data_dir)

    def test_file_layout(self):
        """One pretty-printed camelCase file per record, newline terminated."""
        self.make_store().upsert(make_hackathon('alpha-hack', submission_deadline='2026-03-01'))

        path = os.path.join(self.data_dir, 'alpha-hack.json')
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        self.assertTrue(content.endswith('}\n'))
        self.assertIn('\n  "id": "alpha-hack"', content)
        self.assertEqual(json.loads(content)['submissionDeadline'], '2026-03-01')
        self.assertEqual(os.listdir(self.data_dir), ['alpha-hack.json'])

    def test_invalid_files_are_skipped(self):
        store = self.make_store()
        store.upsert(make_hackathon('alpha-hack'))
        with open(os.path.join(self.data_dir, 'broken.json'), 'w', encoding='utf-8') as f:
            f.write('{not json')
        with open(os.path.join(self.data_dir, 'no-id.json'), 'w', encoding='utf-8') as f:
            json.dump({'name': 'No Id'}, f)

        self.assertEqual([h.id for h in store.load_all()], ['alpha-hack'])

    def test_non_json_files_ignored(self):
        store = self.make_store()
        store.upsert(make_hackathon('alpha-hack'))
        with open(os.path.join(self.data_dir, 'README.md'), 'w', encoding='utf-8') as f:
            f.write('notes')

        self.assertEqual(len(store.load_all()), 1)


class TestSqlHackathonStore(StoreContractMixin, unittest.TestCase):
    """Test cases for SqlHackathonStore."""

    def make_store(self):
        manager = DatabaseManager('sqlite://')
        manager.create_tables()
        return SqlHackathonStore(manager)

    def test_database_stats(self):
        store = self.make_store()
        store.upsert(make_hackathon('a-hack', status='active'))
        store.upsert(make_hackathon('b-hack', status='active'))
        store.upsert(make_hackathon('c-hack', status='completed'))

        stats = store.db_manager.get_database_stats()

        self.assertEqual(stats['hackathons_count'], 3)
        self.assertEqual(stats['by_status'], {'active': 2, 'completed': 1})


class TestGetHackathonStore(unittest.TestCase):
    """Test cases for the backend factory."""

    def test_backends(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertIsInstance(get_hackathon_store('json', temp_dir), JsonDirectoryHackathonStore)
        self.assertIsInstance(get_hackathon_store('memory'), InMemoryHackathonStore)
        self.assertIsInstance(get_hackathon_store('SQL', database_url='sqlite://'), SqlHackathonStore)

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            get_hackathon_store('redis')


if __name__ == '__main__':
    unittest.main()
