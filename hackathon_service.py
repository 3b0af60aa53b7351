"""
Hackathon Service Layer - reconciliation of candidates into the record store.

reconcile() is the pure core: resolve duplicates, then merge or create.
HackathonService wraps it into the batch flow used by collectors and the
CLI: gate the candidate, reload the store, reconcile, classify the status
and persist, one candidate at a time, so each resolution sees every record
written earlier in the same run.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple, Union

from config_loader import ReconciliationSettings, get_settings
from candidate_filters import meets_confidence_threshold, normalize_candidate, validate_candidate
from dedup import check_duplicate
from hackathon_merge import candidate_to_hackathon, merge_hackathon, unique_hackathon_id
from hackathon_models import Hackathon, HackathonCandidate
from hackathon_repository import HackathonStore
from lifecycle import group_by_status, update_hackathon_status
from shared_utils import DateParser, logger, slugify

ReconcileAction = Literal['created', 'merged']
ProcessAction = Literal['created', 'merged', 'skipped']


def reference_date(as_of: Union[date, str, None] = None) -> str:
    """Validate a reference date and return it as YYYY-MM-DD (defaults to today)."""
    as_of_iso = DateParser.format_to_iso(as_of or date.today())
    if as_of_iso is None:
        raise ValueError(f"Invalid reference date: {as_of!r}")
    return as_of_iso


class ReconciliationError(Exception):
    """The resolver matched a record id that is not in the existing record set."""

    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__(f"Matched duplicate '{match_id}' does not exist in the existing records")


@dataclass
class ReconciliationResult:
    """What reconcile() did with a candidate."""
    action: ReconcileAction
    hackathon: Hackathon
    similarity: float = 0.0


@dataclass
class ProcessResult:
    """Outcome of pushing one candidate through the service."""
    action: ProcessAction
    hackathon: Optional[Hackathon]
    reason: Optional[str] = None
    similarity: float = 0.0


def reconcile(candidate: HackathonCandidate, source: str, existing: List[Hackathon],
              settings: Optional[ReconciliationSettings] = None) -> ReconciliationResult:
    """
    Reconcile a candidate against the existing records.

    Status is not computed here; callers run the lifecycle engine afterwards.

    Args:
        candidate: Validated candidate
        source: Identifier of the collector that produced it
        existing: Records as loaded from the store
        settings: Dedup thresholds

    Returns:
        ReconciliationResult with action 'merged' or 'created'

    Raises:
        ReconciliationError: if the resolver's match is missing from existing
    """
    dedup = check_duplicate(candidate, existing, settings)

    if dedup.is_duplicate:
        match = next((h for h in existing if h.id == dedup.match_id), None)
        if match is None:
            raise ReconciliationError(dedup.match_id)
        merged = merge_hackathon(match, candidate)
        return ReconciliationResult(action='merged', hackathon=merged, similarity=dedup.similarity)

    taken = {h.id for h in existing}
    base_id = slugify(candidate.name or '')
    hackathon_id = unique_hackathon_id(base_id, taken)
    if hackathon_id != base_id:
        logger.log("warning", "Id collision, assigning suffixed id", base_id=base_id, id=hackathon_id)

    hackathon = candidate_to_hackathon(candidate, source, hackathon_id=hackathon_id)
    return ReconciliationResult(action='created', hackathon=hackathon)


class HackathonService:
    """
    Service layer for hackathon reconciliation.

    Handles gating, reconciliation, status classification and persistence
    for candidates coming from collectors.
    """

    def __init__(self, store: HackathonStore, settings: Optional[ReconciliationSettings] = None):
        """Initialize service with a record store."""
        self.store = store
        self.settings = settings or get_settings()

    def process_candidate(self, candidate: HackathonCandidate, source: str,
                          as_of: Union[date, str, None] = None) -> ProcessResult:
        """
        Gate, reconcile, classify and persist a single candidate.

        Args:
            candidate: Raw candidate from a collector
            source: Collector identifier
            as_of: Reference date for status classification (defaults to today)

        Returns:
            ProcessResult; skipped candidates carry the reason

        Raises:
            ReconciliationError: on an inconsistent resolver match
            ValueError: if as_of is not a date
        """
        as_of_iso = reference_date(as_of)

        candidate = normalize_candidate(candidate)
        validation = validate_candidate(candidate)
        if not validation.is_valid:
            reason = '; '.join(validation.errors)
            logger.log("info", "Skipped invalid candidate", name=candidate.name, source=source, errors=reason)
            return ProcessResult(action='skipped', hackathon=None, reason=reason)

        for warning in validation.warnings:
            logger.log("debug", warning, name=candidate.name, source=source)

        if not meets_confidence_threshold(candidate, self.settings.min_confidence):
            reason = f"confidence {candidate.confidence} below {self.settings.min_confidence}"
            logger.log("info", "Low confidence, skipping", name=candidate.name, source=source,
                       confidence=candidate.confidence)
            return ProcessResult(action='skipped', hackathon=None, reason=reason)

        # Reload so this candidate sees everything persisted earlier in the run
        existing = self.store.load_all()
        result = reconcile(candidate, source, existing, self.settings)

        hackathon = update_hackathon_status(result.hackathon, as_of_iso, self.settings)
        self.store.upsert(hackathon)

        logger.log("info", f"{result.action.capitalize()}: {hackathon.name}", id=hackathon.id,
                   source=source, status=hackathon.status, confidence=hackathon.confidence)
        return ProcessResult(action=result.action, hackathon=hackathon, similarity=result.similarity)

    def process_batch(self, items: Iterable[Tuple[HackathonCandidate, str]],
                      as_of: Union[date, str, None] = None) -> Dict[str, int]:
        """
        Process candidates sequentially; one failing candidate never aborts the batch.

        Args:
            items: (candidate, source) pairs
            as_of: Reference date

        Returns:
            Counts of created, merged, skipped and errored candidates

        Raises:
            ValueError: if as_of is not a date; nothing is processed then
        """
        as_of = reference_date(as_of)
        counts = {'created': 0, 'merged': 0, 'skipped': 0, 'errors': 0}

        for candidate, source in items:
            try:
                result = self.process_candidate(candidate, source, as_of)
                counts[result.action] += 1
            except ReconciliationError as e:
                logger.log("error", "Inconsistent duplicate match, candidate skipped",
                           name=candidate.name, source=source, match_id=e.match_id)
                counts['errors'] += 1
            except Exception as e:
                logger.log("error", "Failed to process candidate", name=candidate.name,
                           source=source, error=str(e))
                counts['errors'] += 1

        logger.log("info", "Batch complete", **counts)
        return counts

    def update_statuses(self, as_of: Union[date, str, None] = None) -> Dict[str, int]:
        """
        Re-run the lifecycle engine over every stored record.

        Only records whose status changes are written back.
        """
        as_of = reference_date(as_of)
        hackathons = self.store.load_all()
        updated = 0

        for hackathon in hackathons:
            refreshed = update_hackathon_status(hackathon, as_of, self.settings)
            if refreshed is hackathon:
                continue
            self.store.upsert(refreshed)
            updated += 1
            logger.log("info", f"{hackathon.name}: {hackathon.status} -> {refreshed.status}")

        logger.log("info", f"Lifecycle update complete. {updated}/{len(hackathons)} hackathons updated.")
        return {'checked': len(hackathons), 'updated': updated}

    def get_statistics(self) -> Dict[str, Any]:
        """
        Totals by status and source plus average confidence.

        Raises:
            UnknownStatusError: if a stored record has an unknown status
        """
        hackathons = self.store.load_all()

        by_status = {status: len(group) for status, group in group_by_status(hackathons).items()}
        by_source: Dict[str, int] = {}
        for hackathon in hackathons:
            by_source[hackathon.source] = by_source.get(hackathon.source, 0) + 1

        return {
            'total_hackathons': len(hackathons),
            'by_status': by_status,
            'by_source': by_source,
            'average_confidence': (
                sum(h.confidence for h in hackathons) / len(hackathons) if hackathons else 0.0
            ),
        }
