"""
Unit tests for the lifecycle engine.
"""

import unittest
from datetime import date
from unittest.mock import patch

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config_loader import ReconciliationSettings
from hackathon_models import Hackathon
from lifecycle import UnknownStatusError, compute_status, group_by_status, update_hackathon_status


def make_hackathon(status='registration_open', **dates):
    return Hackathon(id='test-hack', name='Test Hack', url='https://test.dev', status=status,
                     last_updated='2026-01-01', **dates)


class TestComputeStatus(unittest.TestCase):
    """Test cases for compute_status."""

    def setUp(self):
        """Set up test fixtures."""
        self.settings = ReconciliationSettings()

    def status(self, hackathon, current_date):
        return compute_status(hackathon, current_date, self.settings)

    def test_results_passed_is_completed(self):
        hackathon = make_hackathon(submission_deadline='2026-03-01', results_date='2026-03-10')

        self.assertEqual(self.status(hackathon, '2026-03-11'), 'completed')

    def test_before_results_after_submission_is_judging(self):
        hackathon = make_hackathon(submission_deadline='2026-03-01', results_date='2026-04-30')

        self.assertEqual(self.status(hackathon, '2026-04-20'), 'judging')
        self.assertEqual(self.status(hackathon, '2026-04-30'), 'judging')

    def test_implicit_judging_window(self):
        """Without a results date, judging lasts fourteen days after submission."""
        hackathon = make_hackathon(submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, '2026-03-02'), 'judging')
        self.assertEqual(self.status(hackathon, '2026-03-15'), 'judging')
        self.assertEqual(self.status(hackathon, '2026-03-16'), 'completed')

    def test_submission_day_is_still_active(self):
        hackathon = make_hackathon(registration_deadline='2026-02-01', submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, '2026-03-01'), 'active')

    def test_registration_closed_submissions_open(self):
        hackathon = make_hackathon(registration_open='2026-01-01', registration_deadline='2026-02-01',
                                   submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, '2026-02-15'), 'active')

    def test_registration_open_on_opening_day(self):
        hackathon = make_hackathon(registration_open='2026-01-10', submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, '2026-01-10'), 'registration_open')

    def test_before_registration_opens_is_upcoming(self):
        hackathon = make_hackathon(registration_open='2026-01-10', submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, '2026-01-09'), 'upcoming')

    def test_only_registration_deadline(self):
        hackathon = make_hackathon(registration_deadline='2026-02-01')

        self.assertEqual(self.status(hackathon, '2026-02-01'), 'registration_open')
        self.assertEqual(self.status(hackathon, '2026-02-02'), 'active')

    def test_only_submission_deadline_in_future(self):
        hackathon = make_hackathon(status='upcoming', submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, '2026-02-01'), 'active')

    def test_no_dates_keeps_stored_status(self):
        """Missing dates are not evidence that the event is over."""
        for stored in ('upcoming', 'registration_open', 'active', 'judging', 'completed'):
            with self.subTest(stored=stored):
                self.assertEqual(self.status(make_hackathon(status=stored), '2030-01-01'), stored)

    def test_unparseable_dates_count_as_absent(self):
        hackathon = make_hackathon(status='upcoming', submission_deadline='TBD', results_date='soon')

        self.assertEqual(self.status(hackathon, '2026-03-01'), 'upcoming')

    def test_only_future_results_date(self):
        hackathon = make_hackathon(status='upcoming', results_date='2026-06-01')

        self.assertEqual(self.status(hackathon, '2026-05-01'), 'completed')

    def test_accepts_date_objects(self):
        hackathon = make_hackathon(submission_deadline='2026-03-01')

        self.assertEqual(self.status(hackathon, date(2026, 2, 1)), 'active')

    def test_custom_judging_window(self):
        hackathon = make_hackathon(submission_deadline='2026-03-01')
        settings = ReconciliationSettings(judging_window_days=3)

        self.assertEqual(compute_status(hackathon, '2026-03-04', settings), 'judging')
        self.assertEqual(compute_status(hackathon, '2026-03-05', settings), 'completed')

    def test_invalid_reference_date(self):
        with self.assertRaises(ValueError):
            compute_status(make_hackathon(), 'not-a-date', self.settings)

    def test_repeated_classification_is_stable(self):
        hackathon = make_hackathon(registration_open='2026-01-01', submission_deadline='2026-03-01')

        first = update_hackathon_status(hackathon, '2026-02-01', self.settings)
        second = update_hackathon_status(first, '2026-02-01', self.settings)

        self.assertIs(second, first)


class TestUpdateHackathonStatus(unittest.TestCase):
    """Test cases for update_hackathon_status."""

    def test_unchanged_returns_same_object(self):
        hackathon = make_hackathon(status='active', submission_deadline='2026-03-01')

        result = update_hackathon_status(hackathon, '2026-02-01', ReconciliationSettings())

        self.assertIs(result, hackathon)
        self.assertEqual(result.last_updated, '2026-01-01')

    def test_changed_status_returns_copy(self):
        hackathon = make_hackathon(status='active', submission_deadline='2026-03-01')

        with patch('shared_utils.today', return_value='2026-03-07'):
            result = update_hackathon_status(hackathon, '2026-03-05', ReconciliationSettings())

        self.assertIsNot(result, hackathon)
        self.assertEqual(result.status, 'judging')
        self.assertEqual(result.last_updated, '2026-03-07')
        self.assertEqual(hackathon.status, 'active')

    def test_past_reference_date_does_not_rewind_last_updated(self):
        """Classifying against an earlier date stamps the mutation date, not the reference date."""
        hackathon = make_hackathon(status='completed', submission_deadline='2026-03-01')
        hackathon.last_updated = '2026-10-01'

        with patch('shared_utils.today', return_value='2026-10-19'):
            result = update_hackathon_status(hackathon, '2025-01-01', ReconciliationSettings())

        self.assertEqual(result.status, 'active')
        self.assertEqual(result.last_updated, '2026-10-19')


class TestGroupByStatus(unittest.TestCase):
    """Test cases for group_by_status."""

    def test_groups_in_lifecycle_order(self):
        hackathons = [make_hackathon(status='completed'), make_hackathon(status='upcoming'),
                      make_hackathon(status='completed')]

        groups = group_by_status(hackathons)

        self.assertEqual(list(groups), ['upcoming', 'registration_open', 'active', 'judging', 'completed'])
        self.assertEqual(len(groups['completed']), 2)
        self.assertEqual(len(groups['upcoming']), 1)
        self.assertEqual(groups['active'], [])

    def test_unknown_status_raises(self):
        with self.assertRaises(UnknownStatusError) as ctx:
            group_by_status([make_hackathon(status='cancelled')])

        self.assertEqual(ctx.exception.status, 'cancelled')
        self.assertIsInstance(ctx.exception, ValueError)


if __name__ == '__main__':
    unittest.main()
