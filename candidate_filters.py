"""
Candidate Filters - cleaning and validation of collector output.

Candidates are untrusted. Everything that reaches the reconciliation core
has to be either well-formed or absent, so malformed values are normalized
away or the whole candidate is rejected here, before reconciliation.
"""

import re
from dataclasses import dataclass, replace
from typing import List, Optional

from config import MIN_NAME_LENGTH, MAX_NAME_LENGTH
from hackathon_models import DATE_FIELDS, HACKATHON_FORMATS, HackathonCandidate
from shared_utils import DateParser, logger, slugify

URL_PATTERN = re.compile(
    r'^https?://'  # http:// or https://
    r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,63}\.?|'  # domain...
    r'localhost|'  # localhost...
    r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # ...or ip
    r'(?::\d+)?'  # optional port
    r'(?:/?|[/?]\S+)$', re.IGNORECASE)


@dataclass
class CandidateValidationResult:
    """Result of candidate validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_candidate(candidate: HackathonCandidate) -> HackathonCandidate:
    """
    Clean a candidate: trim text, convert dates to YYYY-MM-DD and dedupe categories.

    Dates that cannot be parsed are dropped rather than passed on.
    """
    updates = {
        field_name: _clean_text(getattr(candidate, field_name))
        for field_name in ('name', 'organizer', 'url', 'description', 'location')
    }

    for field_name in DATE_FIELDS:
        raw = getattr(candidate, field_name)
        iso = DateParser.format_to_iso(raw)
        if raw and iso is None:
            logger.log("warning", f"Dropping unparseable {field_name}", value=raw, name=candidate.name)
        updates[field_name] = iso

    if candidate.format is not None:
        updates['format'] = str(candidate.format).strip().lower()

    if candidate.categories is not None:
        categories = []
        for tag in candidate.categories:
            tag = _clean_text(tag)
            if tag and tag not in categories:
                categories.append(tag)
        updates['categories'] = categories

    return replace(candidate, **updates)


def validate_candidate(candidate: HackathonCandidate) -> CandidateValidationResult:
    """
    Validate candidate data according to business rules.

    Args:
        candidate: Candidate, ideally already normalized

    Returns:
        Validation result
    """
    errors = []
    warnings = []

    # Required fields
    name = candidate.name
    if not name:
        errors.append("Hackathon name is required")
    elif len(name) < MIN_NAME_LENGTH:
        errors.append(f"Hackathon name must be at least {MIN_NAME_LENGTH} characters")
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"Hackathon name must not exceed {MAX_NAME_LENGTH} characters")
    elif not slugify(name):
        errors.append("Hackathon name must contain letters or digits")

    if not candidate.url:
        errors.append("Hackathon URL is required")
    elif not URL_PATTERN.match(candidate.url):
        errors.append("Invalid URL format")

    confidence = candidate.confidence
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)) or not 0.0 <= confidence <= 1.0:
        errors.append(f"Confidence must be between 0 and 1, got {confidence!r}")

    if candidate.format is not None and candidate.format not in HACKATHON_FORMATS:
        errors.append(f"Unknown format '{candidate.format}'")

    for field_name in DATE_FIELDS:
        value = getattr(candidate, field_name)
        if value is not None and not DateParser.is_valid_date(value):
            errors.append(f"Invalid {field_name} date '{value}'")

    if candidate.prize_pool is not None and candidate.prize_pool.total < 0:
        errors.append("Prize pool total cannot be negative")

    if not candidate.organizer:
        warnings.append("Organizer is missing")

    if not any(getattr(candidate, field_name) for field_name in DATE_FIELDS):
        warnings.append("No dates found; status cannot be derived")

    reg_close = DateParser.parse_to_date(candidate.registration_deadline)
    submit_close = DateParser.parse_to_date(candidate.submission_deadline)
    if reg_close and submit_close and reg_close > submit_close:
        warnings.append("Registration deadline falls after the submission deadline")

    return CandidateValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings
    )


def meets_confidence_threshold(candidate: HackathonCandidate, minimum: float) -> bool:
    """Check that a candidate's extraction confidence reaches the gate."""
    return candidate.confidence >= minimum
