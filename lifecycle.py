"""
Lifecycle Engine - derives a hackathon's status from its calendar dates.

There is no stored state machine with explicit transitions: every call
reclassifies the record from scratch against the given date, so running the
classification again without new data never changes anything.
"""

from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Union

from config_loader import ReconciliationSettings, get_settings
from hackathon_models import HACKATHON_STATUSES, Hackathon
from shared_utils import DateParser, touch_date


class UnknownStatusError(ValueError):
    """Raised when a record carries a status outside the known lifecycle states."""

    def __init__(self, hackathon_id: str, status: str):
        self.hackathon_id = hackathon_id
        self.status = status
        super().__init__(f"Hackathon '{hackathon_id}' has unknown status '{status}'")


def _as_date(value: Union[date, str, None]) -> date:
    if value is None:
        return date.today()
    parsed = DateParser.parse_to_date(value)
    if parsed is None:
        raise ValueError(f"Invalid reference date: {value!r}")
    return parsed


def compute_status(hackathon: Hackathon, current_date: Union[date, str, None] = None,
                   settings: Optional[ReconciliationSettings] = None) -> str:
    """
    Classify a hackathon into one of the five lifecycle states.

    Dates that cannot be parsed count as absent. A record with no usable
    date keeps the status it already has: missing dates are not evidence
    that the event is over.

    Args:
        hackathon: Record to classify
        current_date: Reference date (defaults to today)
        settings: Provides the implicit judging window

    Returns:
        Status string
    """
    settings = settings or get_settings()
    now = _as_date(current_date)

    reg_open = DateParser.parse_to_date(hackathon.registration_open)
    reg_close = DateParser.parse_to_date(hackathon.registration_deadline)
    submit_close = DateParser.parse_to_date(hackathon.submission_deadline)
    results = DateParser.parse_to_date(hackathon.results_date)

    if results and now > results:
        return 'completed'

    if submit_close and now > submit_close:
        if results and now <= results:
            return 'judging'
        judging_end = submit_close + timedelta(days=settings.judging_window_days)
        return 'judging' if now <= judging_end else 'completed'

    # Registration closed, submissions still open
    if reg_close and now > reg_close:
        return 'active'

    if reg_open:
        return 'registration_open' if now >= reg_open else 'upcoming'

    if reg_close and now <= reg_close:
        return 'registration_open'

    if submit_close and now <= submit_close:
        return 'active'

    if not (reg_open or reg_close or submit_close or results):
        return hackathon.status

    return 'completed'


def update_hackathon_status(hackathon: Hackathon, current_date: Union[date, str, None] = None,
                            settings: Optional[ReconciliationSettings] = None) -> Hackathon:
    """
    Apply compute_status to a record.

    Returns the same object when the status is unchanged, so callers can skip
    the write; otherwise a copy with the new status. current_date only drives
    the classification: lastUpdated is stamped with today.
    """
    now = _as_date(current_date)
    new_status = compute_status(hackathon, now, settings)
    if new_status == hackathon.status:
        return hackathon

    return replace(hackathon, status=new_status, last_updated=touch_date(hackathon.last_updated))


def group_by_status(hackathons: Iterable[Hackathon]) -> Dict[str, List[Hackathon]]:
    """
    Group records by status, in lifecycle order.

    Raises:
        UnknownStatusError: if any record has a status outside the known states
    """
    groups = {status: [] for status in HACKATHON_STATUSES}
    for hackathon in hackathons:
        if hackathon.status not in groups:
            raise UnknownStatusError(hackathon.id, hackathon.status)
        groups[hackathon.status].append(hackathon)
    return groups
