"""
Unit tests for the hackathon data model.
"""

import unittest

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hackathon_models import (
    Hackathon, HackathonCandidate, HackathonLinks, PrizePool, Requirements, TeamSize
)


class TestHackathonSerialization(unittest.TestCase):
    """Test cases for Hackathon.to_dict and Hackathon.from_dict."""

    def setUp(self):
        """Set up test fixtures."""
        self.record = {
            'id': 'eth-global-paris',
            'name': 'ETHGlobal Paris',
            'url': 'https://ethglobal.com/events/paris',
            'status': 'active',
            'organizer': 'ETHGlobal',
            'format': 'in-person',
            'registrationDeadline': '2026-07-01',
            'submissionDeadline': '2026-07-20',
            'prizePool': {'total': 250000, 'currency': 'USD', 'breakdown': {'first': 10000}},
            'categories': ['defi', 'zk'],
            'requirements': {'techStack': ['solidity'], 'teamSize': {'min': 1, 'max': 5}},
            'links': {'apply': 'https://apply.example', 'pastWinners': 'https://winners.example'},
            'source': 'ethglobal',
            'lastUpdated': '2026-05-01',
            'confidence': 0.92,
            'sponsorTier': 'gold',
        }

    def test_from_dict_reads_camel_case(self):
        hackathon = Hackathon.from_dict(self.record)

        self.assertEqual(hackathon.registration_deadline, '2026-07-01')
        self.assertEqual(hackathon.submission_deadline, '2026-07-20')
        self.assertEqual(hackathon.prize_pool, PrizePool(total=250000, currency='USD', breakdown={'first': 10000}))
        self.assertEqual(hackathon.requirements.team_size, TeamSize(min=1, max=5))
        self.assertEqual(hackathon.links.past_winners, 'https://winners.example')
        self.assertEqual(hackathon.last_updated, '2026-05-01')
        self.assertIsNone(hackathon.results_date)

    def test_unknown_keys_survive(self):
        """Keys this model does not know are written back untouched."""
        hackathon = Hackathon.from_dict(self.record)

        self.assertEqual(hackathon.extra, {'sponsorTier': 'gold'})
        self.assertEqual(hackathon.to_dict()['sponsorTier'], 'gold')

    def test_to_dict_uses_camel_case(self):
        data = Hackathon.from_dict(self.record).to_dict()

        self.assertEqual(data['lastUpdated'], '2026-05-01')
        self.assertEqual(data['submissionDeadline'], '2026-07-20')
        self.assertEqual(data['requirements']['techStack'], ['solidity'])
        self.assertEqual(data['links']['pastWinners'], 'https://winners.example')
        self.assertNotIn('last_updated', data)

    def test_defaults_for_minimal_record(self):
        hackathon = Hackathon.from_dict({'id': 'x', 'name': 'X', 'url': 'https://x.dev'})

        self.assertEqual(hackathon.status, 'registration_open')
        self.assertEqual(hackathon.categories, [])
        self.assertEqual(hackathon.confidence, 0.0)
        self.assertFalse(hackathon.has_any_date())

    def test_missing_id_raises(self):
        with self.assertRaises(KeyError):
            Hackathon.from_dict({'name': 'No Id'})

    def test_has_any_date(self):
        self.assertTrue(Hackathon(id='x', name='X', url='', results_date='2026-01-01').has_any_date())


class TestHackathonCandidate(unittest.TestCase):
    """Test cases for HackathonCandidate."""

    def test_from_dict_accepts_both_key_styles(self):
        candidate = HackathonCandidate.from_dict({
            'name': 'Hack',
            'submissionDeadline': '2026-03-01',
            'registration_open': '2026-01-01',
            'links': {'discord': 'https://discord.gg/hack'},
            'confidence': 0.7,
        })

        self.assertEqual(candidate.submission_deadline, '2026-03-01')
        self.assertEqual(candidate.registration_open, '2026-01-01')
        self.assertEqual(candidate.links, HackathonLinks(discord='https://discord.gg/hack'))
        self.assertIsNone(candidate.categories)

    def test_to_dict(self):
        candidate = HackathonCandidate(name='Hack', requirements=Requirements(constraints='students only'),
                                       confidence=0.4)

        data = candidate.to_dict()

        self.assertEqual(data['name'], 'Hack')
        self.assertEqual(data['requirements']['constraints'], 'students only')
        self.assertIsNone(data['categories'])
        self.assertEqual(data['confidence'], 0.4)


if __name__ == '__main__':
    unittest.main()
