"""Core module for rostermatch."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ExtractedName:
    """A name read from one row of a ledger page."""

    name: str
    position: int  # 1-based row number on the page


@dataclass
class RosterMember:
    """Represents a known member from the member database."""

    id: str
    surname: str
    first_name: str
    other_names: str = ''
    known_position: Optional[int] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.other_names, self.surname]
        return ' '.join(p for p in parts if p)


@dataclass
class ScoredCandidate:
    """A roster member together with its match score for one extracted name."""

    member: RosterMember
    score: float  # 0.0 – 1.0


@dataclass
class MatchResult:
    """Result of reconciling one extracted name against the roster."""

    extracted_name: str
    position: int
    matched_member: Optional[RosterMember]
    confidence: float  # 0.0 – 1.0
    alternatives: list[ScoredCandidate] = field(default_factory=list)
    is_from_alias: bool = False
