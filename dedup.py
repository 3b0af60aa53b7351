"""
Duplicate detection for incoming hackathon candidates.

Records are scanned in the order given and the first record that matches
wins; there is no search for a globally best match. Per record:

1. Normalized URLs equal -> duplicate with similarity 1.0.
2. Case-folded name similarity above the corroborated threshold and either
   the organizers agree or both carry the same submission deadline.
3. Case-folded name similarity above the name-only threshold.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from config_loader import ReconciliationSettings, get_settings
from hackathon_models import Hackathon, HackathonCandidate
from shared_utils import normalize_url
from similarity import jaro_winkler


@dataclass
class DedupResult:
    """Outcome of checking one candidate against the stored records."""
    is_duplicate: bool
    match_id: Optional[str]
    similarity: float


def _same_organizer(candidate: HackathonCandidate, entry: Hackathon) -> bool:
    if candidate.organizer is None or entry.organizer is None:
        return False
    return candidate.organizer.lower() == entry.organizer.lower()


def _same_deadline(candidate: HackathonCandidate, entry: Hackathon) -> bool:
    return bool(candidate.submission_deadline and entry.submission_deadline
                and candidate.submission_deadline == entry.submission_deadline)


def name_similarity(candidate: HackathonCandidate, entry: Hackathon) -> float:
    return jaro_winkler((candidate.name or '').lower(), (entry.name or '').lower())


class DuplicateResolver:
    """
    Duplicate checks against a fixed record list.

    Normalized URLs are indexed once, so a URL hit only needs the fuzzy name
    pass over the records that precede it. Results are identical to a plain
    linear scan.
    """

    def __init__(self, existing: Iterable[Hackathon], settings: Optional[ReconciliationSettings] = None):
        self.settings = settings or get_settings()
        self.records: List[Hackathon] = list(existing)
        self._url_index: Dict[str, int] = {}
        for position, entry in enumerate(self.records):
            self._url_index.setdefault(normalize_url(entry.url), position)

    def _fuzzy_match(self, candidate: HackathonCandidate, entry: Hackathon) -> Optional[float]:
        similarity = name_similarity(candidate, entry)

        corroborated = _same_organizer(candidate, entry) or _same_deadline(candidate, entry)
        if similarity > self.settings.name_threshold and corroborated:
            return similarity

        if similarity > self.settings.name_only_threshold:
            return similarity

        return None

    def check(self, candidate: HackathonCandidate) -> DedupResult:
        """Return the first record the candidate duplicates, by URL or by name."""
        candidate_url = normalize_url(candidate.url)
        url_position = self._url_index.get(candidate_url) if candidate_url else None
        limit = len(self.records) if url_position is None else url_position

        for entry in self.records[:limit]:
            similarity = self._fuzzy_match(candidate, entry)
            if similarity is not None:
                return DedupResult(is_duplicate=True, match_id=entry.id, similarity=similarity)

        if url_position is not None:
            return DedupResult(is_duplicate=True, match_id=self.records[url_position].id, similarity=1.0)

        return DedupResult(is_duplicate=False, match_id=None, similarity=0.0)


def check_duplicate(candidate: HackathonCandidate, existing: Iterable[Hackathon],
                    settings: Optional[ReconciliationSettings] = None) -> DedupResult:
    """
    Decide whether a candidate duplicates one of the existing records.

    Args:
        candidate: Incoming candidate
        existing: Stored records, scanned in order
        settings: Thresholds (defaults to the global settings)

    Returns:
        DedupResult naming the first matching record, or a non-duplicate result
    """
    return DuplicateResolver(existing, settings).check(candidate)
