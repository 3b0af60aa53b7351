"""
Merge Engine - folds candidate data into hackathon records.

Merging fills forward: a candidate value replaces the stored one only when
the candidate actually carries it, so a sparse re-scrape never blanks out
data collected earlier.
"""

from dataclasses import replace
from typing import Collection, List, Optional

from config import DEFAULT_STATUS, SLUG_MAX_LENGTH
from hackathon_models import Hackathon, HackathonCandidate, HackathonLinks
from shared_utils import slugify, touch_date

# Optional fields where a present candidate value wins
FILL_FORWARD_FIELDS = (
    'organizer', 'format', 'description',
    'registration_open', 'registration_deadline', 'submission_deadline', 'results_date',
    'prize_pool', 'requirements', 'blockchain', 'location',
)


def merge_categories(existing: List[str], extra: Optional[List[str]]) -> List[str]:
    """Order-preserving set union of two tag lists."""
    merged = []
    for tag in list(existing or []) + list(extra or []):
        if tag not in merged:
            merged.append(tag)
    return merged


def merge_links(existing: Optional[HackathonLinks],
                extra: Optional[HackathonLinks]) -> Optional[HackathonLinks]:
    """Shallow merge: link kinds present on the candidate overwrite, the rest are kept."""
    if extra is None:
        return existing
    if existing is None:
        return replace(extra)

    return HackathonLinks(**{
        kind: getattr(extra, kind) if getattr(extra, kind) is not None else getattr(existing, kind)
        for kind in HackathonLinks.KINDS
    })


def merge_hackathon(existing: Hackathon, candidate: HackathonCandidate) -> Hackathon:
    """
    Merge new candidate data into an existing hackathon.

    id, name, url, source and status are left alone; status is recomputed
    separately by the lifecycle engine. lastUpdated becomes today and never
    moves backwards.

    Args:
        existing: Stored record the candidate was matched to
        candidate: Incoming candidate

    Returns:
        A new Hackathon; neither argument is modified
    """
    updates = {
        name: getattr(candidate, name)
        for name in FILL_FORWARD_FIELDS
        if getattr(candidate, name) is not None
    }

    return replace(
        existing,
        categories=merge_categories(existing.categories, candidate.categories),
        links=merge_links(existing.links, candidate.links),
        confidence=max(existing.confidence, candidate.confidence),
        last_updated=touch_date(existing.last_updated),
        extra=dict(existing.extra),
        **updates,
    )


def candidate_to_hackathon(candidate: HackathonCandidate, source: str,
                           hackathon_id: Optional[str] = None) -> Hackathon:
    """
    Convert a non-duplicate candidate into a full Hackathon record.

    The status starts out as registration_open and is corrected by the next
    lifecycle pass.
    """
    return Hackathon(
        id=hackathon_id or slugify(candidate.name or ''),
        name=candidate.name or '',
        url=candidate.url or '',
        status=DEFAULT_STATUS,
        organizer=candidate.organizer,
        format=candidate.format,
        description=candidate.description,
        registration_open=candidate.registration_open,
        registration_deadline=candidate.registration_deadline,
        submission_deadline=candidate.submission_deadline,
        results_date=candidate.results_date,
        prize_pool=candidate.prize_pool,
        categories=list(candidate.categories or []),
        requirements=candidate.requirements,
        blockchain=candidate.blockchain,
        location=candidate.location,
        links=candidate.links,
        source=source,
        last_updated=touch_date(),
        confidence=candidate.confidence,
    )


def unique_hackathon_id(base_id: str, taken: Collection[str]) -> str:
    """
    Return base_id, or base_id with the first free numeric suffix when it is taken.

    Two distinct hackathons can slugify to the same id; suffixing keeps the
    later one from overwriting the earlier record.
    """
    if base_id not in taken:
        return base_id

    counter = 2
    while True:
        suffix = f"-{counter}"
        candidate_id = f"{base_id[:SLUG_MAX_LENGTH - len(suffix)]}{suffix}"
        if candidate_id not in taken:
            return candidate_id
        counter += 1
