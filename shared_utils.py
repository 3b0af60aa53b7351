import re
import logging
from datetime import datetime, date
from typing import Optional, Union
from urllib.parse import urlparse

from config import LOG_LEVEL, LOG_FORMAT, SLUG_MAX_LENGTH


# Unified Logger with context
class Logger:
    def __init__(self):
        logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO), format=LOG_FORMAT)
        self.logger = logging.getLogger("HackathonTracker")

    def log(self, level: str, msg: str, **ctx):
        context = " | ".join(f"{k}={v}" for k, v in ctx.items()) if ctx else ""
        message = f"{msg} | {context}" if context else msg
        getattr(self.logger, level.lower())(message)

# Global instances
logger = Logger()


class DateParser:
    """
    Unified date parsing class. Every date that reaches the reconciliation
    core goes through here, so a single place decides what counts as a
    usable calendar date.
    """

    SUPPORTED_FORMATS = [
        # ISO and standard formats
        '%Y-%m-%d',           # 2026-01-15 (ISO format - preferred)
        '%Y-%m-%dT%H:%M:%S',  # 2026-01-15T14:30:00
        '%Y-%m-%d %H:%M:%S',  # 2026-01-15 14:30:00
        '%Y/%m/%d',           # 2026/01/15

        # Written month formats
        '%B %d, %Y',          # January 15, 2026
        '%b %d, %Y',          # Jan 15, 2026
        '%B %d %Y',           # January 15 2026
        '%b %d %Y',           # Jan 15 2026
        '%d %B %Y',           # 15 January 2026
        '%d %b %Y',           # 15 Jan 2026
    ]

    PLACEHOLDERS = ('TBD', 'TBA', 'N/A', 'NONE', 'NULL')

    @classmethod
    def parse_to_date(cls, value: Union[str, date, None]) -> Optional[date]:
        """
        Parse a date string (or date object) to a datetime.date.

        Args:
            value: Date string, date or datetime

        Returns:
            datetime.date object or None if parsing fails
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not value or not isinstance(value, str):
            return None

        value = value.strip()
        if not value or value.upper() in cls.PLACEHOLDERS:
            return None

        # Trailing timezone designators are irrelevant for calendar dates
        value = re.sub(r'(Z|[+-]\d{2}:?\d{2})$', '', value)

        for fmt in cls.SUPPORTED_FORMATS:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue

        return None

    @classmethod
    def format_to_iso(cls, value: Union[str, date, None]) -> Optional[str]:
        """Parse a date and return it as YYYY-MM-DD, or None if unparseable."""
        parsed_date = cls.parse_to_date(value)
        if parsed_date:
            return parsed_date.strftime('%Y-%m-%d')
        return None

    @classmethod
    def is_valid_date(cls, value: Union[str, date, None]) -> bool:
        """Check if a date can be successfully parsed."""
        return cls.parse_to_date(value) is not None


def today() -> str:
    """Current calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def touch_date(previous: Optional[str] = None) -> str:
    """lastUpdated for a record mutated now: today, never earlier than the previous stamp."""
    current = today()
    return max(current, previous) if previous else current


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', trim separators, truncate."""
    slug = re.sub(r'[^a-z0-9]+', '-', (text or '').lower())
    return slug.strip('-')[:max_length]


def normalize_url(url: Optional[str]) -> str:
    """
    Reduce a URL to lower-cased host + path without scheme or trailing slash.

    "https://Example.com/Event/" and "http://example.com/event" both become
    "example.com/event".
    """
    if not url:
        return ''

    url = url.strip()
    try:
        parsed = urlparse(url if '://' in url else f'//{url}')
        hostname = parsed.hostname
    except ValueError:
        # Malformed netloc such as an unclosed IPv6 bracket
        return url.rstrip('/').lower()

    if not parsed.netloc:
        return url.rstrip('/').lower()

    return f"{hostname or ''}{parsed.path}".rstrip('/').lower()
