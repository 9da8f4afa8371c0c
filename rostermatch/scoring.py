"""Match scoring between an extracted name and a roster member."""

from typing import Optional

from rostermatch import MatchResult, RosterMember, ScoredCandidate
from rostermatch.aliases import ALIAS_CONFIDENCE, index_roster, resolve_alias
from rostermatch.ghanaian import ghanaian_token_similarity, has_surname_variant
from rostermatch.position import MAX_POSITION_BOOST, member_position, position_boost
from rostermatch.similarity import similarity, token_similarity

SIMPLE = 'simple'
ENRICHED = 'enriched'

# Generic rosters: no culture-specific normalization
WEIGHTS_SIMPLE: dict[str, float] = {
    'levenshtein': 0.55,
    'token': 0.35,
    'position': 0.10,
}

# Ghanaian rosters: titles, day names and surname spellings folded
WEIGHTS_ENRICHED: dict[str, float] = {
    'levenshtein': 0.40,
    'token': 0.25,
    'culture_token': 0.20,
    'position': 0.10,
    'surname_variant': 0.05,
}

SCHEMES: dict[str, dict[str, float]] = {
    SIMPLE: WEIGHTS_SIMPLE,
    ENRICHED: WEIGHTS_ENRICHED,
}

DEFAULT_SCHEME = ENRICHED

ACCEPT_THRESHOLD = 0.5
ALTERNATIVE_THRESHOLD = 0.4
MAX_ALTERNATIVES = 3


def get_weights(scheme: str) -> dict[str, float]:
    """Return the weights of a scoring scheme.

    Raises:
        ValueError: If the scheme is unknown.
    """
    try:
        return SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown scoring scheme {scheme!r}, expected one of: {', '.join(SCHEMES)}"
        ) from None


def check_threshold(name: str, value: float) -> None:
    """Raise ValueError unless ``value`` lies in [0, 1]."""
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value!r}")


def name_renderings(member: RosterMember) -> list[str]:
    """Build the name orderings a member may be written in.

    Returns surname+first, first+surname, the full name (surname, first,
    other names) and its reverse, lower-cased and without duplicates.
    """
    surname = (member.surname or '').strip()
    first = (member.first_name or '').strip()
    parts = [p for p in (surname, first, (member.other_names or '').strip()) if p]

    candidates = [
        f"{surname} {first}".strip(),
        f"{first} {surname}".strip(),
        ' '.join(parts),
        ' '.join(reversed(parts)),
    ]

    renderings: list[str] = []
    for candidate in candidates:
        candidate = candidate.lower()
        if candidate and candidate not in renderings:
            renderings.append(candidate)
    return renderings


def score_components(
    extracted_name: str,
    member: RosterMember,
    position: Optional[int] = None,
    position_map: Optional[dict[str, int]] = None,
    scheme: str = DEFAULT_SCHEME,
) -> dict[str, float]:
    """Compute the individual similarity signals for one pair.

    Every value lies in [0, 1]; the position signal is the positional boost
    scaled by its maximum.

    Args:
        extracted_name: Raw extracted name.
        member: Roster member to compare against.
        position: Row at which the name was read.
        position_map: Expected positions keyed by lower-cased member id.
        scheme: SIMPLE or ENRICHED; decides which signals are computed.

    Returns:
        Dict keyed like the weights of ``scheme``.
    """
    weights = get_weights(scheme)
    name = extracted_name.lower().strip()
    renderings = name_renderings(member)

    components = {
        'levenshtein': max((similarity(name, r) for r in renderings), default=0.0),
        'token': max((token_similarity(name, r) for r in renderings), default=0.0),
        'position': position_boost(
            position, member_position(member, position_map),
        ) / MAX_POSITION_BOOST,
    }

    if 'culture_token' in weights:
        components['culture_token'] = max(
            (ghanaian_token_similarity(name, r) for r in renderings), default=0.0,
        )
    if 'surname_variant' in weights:
        components['surname_variant'] = (
            1.0 if has_surname_variant(name, member.surname or '') else 0.0
        )

    return components


def score_member(
    extracted_name: str,
    member: RosterMember,
    position: Optional[int] = None,
    position_map: Optional[dict[str, int]] = None,
    scheme: str = DEFAULT_SCHEME,
) -> float:
    """Calculate the match score for an extracted name and a roster member.

    Weighted sum of the signals from :func:`score_components`, clamped to
    [0, 1] and rounded to four decimals so that equal inputs always produce
    equal scores.

    Returns:
        Score between 0.0 and 1.0.
    """
    weights = get_weights(scheme)
    components = score_components(extracted_name, member, position, position_map, scheme)
    score = sum(weights[key] * components[key] for key in weights)
    return round(min(1.0, max(0.0, score)), 4)


def rank_members(
    extracted_name: str,
    roster: list[RosterMember],
    position: Optional[int] = None,
    position_map: Optional[dict[str, int]] = None,
    scheme: str = DEFAULT_SCHEME,
) -> list[ScoredCandidate]:
    """Score every member and sort best first (roster order breaks ties)."""
    scored = [
        ScoredCandidate(member, score_member(extracted_name, member, position, position_map, scheme))
        for member in roster
    ]
    scored.sort(key=lambda c: c.score, reverse=True)
    return scored


def find_best_match(
    extracted_name: str,
    roster: list[RosterMember],
    position: Optional[int] = None,
    position_map: Optional[dict[str, int]] = None,
    alias_map: Optional[dict[str, str]] = None,
    scheme: str = DEFAULT_SCHEME,
    accept_threshold: float = ACCEPT_THRESHOLD,
) -> MatchResult:
    """Find the best member for a single name, independent of any batch.

    Intended for ad-hoc lookups such as search-as-you-type. Several calls
    may return the same member; use
    :func:`rostermatch.assignment.reconcile` for a whole ledger page.

    Args:
        extracted_name: Raw extracted name.
        roster: Members to search.
        position: Row at which the name was read.
        position_map: Expected positions keyed by lower-cased member id.
        alias_map: Learned aliases keyed by normalized name.
        scheme: Scoring scheme (SIMPLE or ENRICHED).
        accept_threshold: Minimum score for a match to be returned.

    Returns:
        MatchResult with ``matched_member`` None when nothing clears the
        threshold.
    """
    check_threshold('accept_threshold', accept_threshold)
    result_position = position if position is not None else 0

    member = resolve_alias(alias_map, extracted_name, index_roster(roster))
    if member is not None:
        return MatchResult(
            extracted_name=extracted_name,
            position=result_position,
            matched_member=member,
            confidence=ALIAS_CONFIDENCE,
            is_from_alias=True,
        )

    ranked = rank_members(extracted_name, roster, position, position_map, scheme)
    if not ranked:
        return MatchResult(extracted_name, result_position, None, 0.0)

    best = ranked[0]
    alternatives = [
        c for c in ranked[1:MAX_ALTERNATIVES + 1] if c.score >= ALTERNATIVE_THRESHOLD
    ]
    return MatchResult(
        extracted_name=extracted_name,
        position=result_position,
        matched_member=best.member if best.score >= accept_threshold else None,
        confidence=best.score,
        alternatives=alternatives,
    )
