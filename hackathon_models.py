"""
Hackathon data model.

A Hackathon is a persisted, deduplicated record; a HackathonCandidate is the
untrusted, possibly incomplete output of a collector that still has to be
reconciled against the stored records. Both serialize to the camelCase JSON
shape used by the data files (registrationOpen, prizePool, lastUpdated, ...).
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Literal, Optional

HackathonStatus = Literal['upcoming', 'registration_open', 'active', 'judging', 'completed']
HackathonFormat = Literal['virtual', 'in-person', 'hybrid']

HACKATHON_STATUSES = ('upcoming', 'registration_open', 'active', 'judging', 'completed')
HACKATHON_FORMATS = ('virtual', 'in-person', 'hybrid')

# Calendar dates driving the lifecycle, in timeline order
DATE_FIELDS = ('registration_open', 'registration_deadline', 'submission_deadline', 'results_date')


def to_camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _pick(data: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Read a field by snake_case name, falling back to its camelCase key."""
    if name in data:
        return data[name]
    return data.get(to_camel(name), default)


@dataclass
class PrizePool:
    total: float
    currency: str
    breakdown: Optional[Dict[str, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'total': self.total, 'currency': self.currency, 'breakdown': self.breakdown}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['PrizePool']:
        if not data:
            return None
        return cls(total=data.get('total', 0), currency=data.get('currency', 'USD'),
                   breakdown=data.get('breakdown'))


@dataclass
class TeamSize:
    min: int
    max: int

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['TeamSize']:
        if not data:
            return None
        return cls(min=data['min'], max=data['max'])


@dataclass
class Requirements:
    tech_stack: Optional[List[str]] = None
    team_size: Optional[TeamSize] = None
    constraints: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'techStack': self.tech_stack,
            'teamSize': self.team_size.to_dict() if self.team_size else None,
            'constraints': self.constraints,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Requirements']:
        if not data:
            return None
        return cls(
            tech_stack=_pick(data, 'tech_stack'),
            team_size=TeamSize.from_dict(_pick(data, 'team_size')),
            constraints=data.get('constraints'),
        )


@dataclass
class BlockchainInfo:
    chain: str
    ecosystem: Optional[str] = None
    token_prize: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'chain': self.chain, 'ecosystem': self.ecosystem, 'tokenPrize': self.token_prize}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['BlockchainInfo']:
        if not data:
            return None
        return cls(chain=data.get('chain', ''), ecosystem=data.get('ecosystem'),
                   token_prize=_pick(data, 'token_prize'))


@dataclass
class HackathonLinks:
    apply: Optional[str] = None
    discord: Optional[str] = None
    twitter: Optional[str] = None
    past_winners: Optional[str] = None

    KINDS = ('apply', 'discord', 'twitter', 'past_winners')

    def to_dict(self) -> Dict[str, Any]:
        return {to_camel(kind): getattr(self, kind) for kind in self.KINDS}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['HackathonLinks']:
        if not data:
            return None
        return cls(**{kind: _pick(data, kind) for kind in cls.KINDS})


def _common_to_dict(obj) -> Dict[str, Any]:
    """Serialize the fields shared by Hackathon and HackathonCandidate."""
    return {
        'name': obj.name,
        'organizer': obj.organizer,
        'url': obj.url,
        'format': obj.format,
        'description': obj.description,
        'registrationOpen': obj.registration_open,
        'registrationDeadline': obj.registration_deadline,
        'submissionDeadline': obj.submission_deadline,
        'resultsDate': obj.results_date,
        'prizePool': obj.prize_pool.to_dict() if obj.prize_pool else None,
        'categories': list(obj.categories) if obj.categories is not None else None,
        'requirements': obj.requirements.to_dict() if obj.requirements else None,
        'blockchain': obj.blockchain.to_dict() if obj.blockchain else None,
        'location': obj.location,
        'links': obj.links.to_dict() if obj.links else None,
    }


def _common_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the fields shared by Hackathon and HackathonCandidate."""
    parsed = {name: _pick(data, name) for name in
              ('name', 'organizer', 'url', 'format', 'description', 'location') + DATE_FIELDS}
    parsed.update(
        prize_pool=PrizePool.from_dict(_pick(data, 'prize_pool')),
        requirements=Requirements.from_dict(data.get('requirements')),
        blockchain=BlockchainInfo.from_dict(data.get('blockchain')),
        links=HackathonLinks.from_dict(data.get('links')),
        categories=_pick(data, 'categories'),
    )
    return parsed


@dataclass
class Hackathon:
    """Persisted hackathon record."""
    id: str
    name: str
    url: str
    status: HackathonStatus = 'registration_open'
    organizer: Optional[str] = None
    format: Optional[HackathonFormat] = None
    description: Optional[str] = None
    registration_open: Optional[str] = None
    registration_deadline: Optional[str] = None
    submission_deadline: Optional[str] = None
    results_date: Optional[str] = None
    prize_pool: Optional[PrizePool] = None
    categories: List[str] = field(default_factory=list)
    requirements: Optional[Requirements] = None
    blockchain: Optional[BlockchainInfo] = None
    location: Optional[str] = None
    links: Optional[HackathonLinks] = None
    source: str = ''
    last_updated: str = ''
    confidence: float = 0.0
    # Keys this version does not interpret, written back untouched
    extra: Dict[str, Any] = field(default_factory=dict)

    def has_any_date(self) -> bool:
        return any(getattr(self, name) for name in DATE_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        data = {'id': self.id, 'status': self.status}
        data.update(_common_to_dict(self))
        data.update(source=self.source, lastUpdated=self.last_updated, confidence=self.confidence)
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Hackathon':
        """Create a Hackathon from a stored dictionary, keeping unknown keys in extra."""
        known = {to_camel(f.name) for f in fields(cls)} | {f.name for f in fields(cls)}
        parsed = _common_from_dict(data)
        parsed['categories'] = list(parsed['categories'] or [])

        return cls(
            id=data['id'],
            status=data.get('status', 'registration_open'),
            source=data.get('source', ''),
            last_updated=_pick(data, 'last_updated', ''),
            confidence=data.get('confidence', 0.0),
            extra={k: v for k, v in data.items() if k not in known},
            **parsed,
        )


@dataclass
class HackathonCandidate:
    """Untrusted collector output awaiting reconciliation; everything may be missing."""
    name: Optional[str] = None
    organizer: Optional[str] = None
    url: Optional[str] = None
    format: Optional[HackathonFormat] = None
    description: Optional[str] = None
    registration_open: Optional[str] = None
    registration_deadline: Optional[str] = None
    submission_deadline: Optional[str] = None
    results_date: Optional[str] = None
    prize_pool: Optional[PrizePool] = None
    categories: Optional[List[str]] = None
    requirements: Optional[Requirements] = None
    blockchain: Optional[BlockchainInfo] = None
    location: Optional[str] = None
    links: Optional[HackathonLinks] = None
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = _common_to_dict(self)
        data['confidence'] = self.confidence
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HackathonCandidate':
        return cls(confidence=data.get('confidence', 0.0), **_common_from_dict(data))
