"""Positional prior: ledger rows tend to follow roster order."""

import math
from numbers import Real
from typing import Optional

from rostermatch import RosterMember
from rostermatch.aliases import normalize_member_id

# (max distance, boost), checked in order
POSITION_BOOSTS: list[tuple[int, float]] = [
    (0, 0.15),
    (2, 0.08),
    (5, 0.03),
]

MAX_POSITION_BOOST = POSITION_BOOSTS[0][1]


def _valid_position(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value > 0


def position_boost(
    extracted_position: Optional[float],
    known_position: Optional[float],
) -> float:
    """Confidence boost for a member expected near the extracted row.

    Missing, non-positive, NaN or non-numeric positions on either side mean
    "no position data" and give no boost.

    Args:
        extracted_position: Row at which the name was read.
        known_position: Expected position of the roster member.

    Returns:
        0.15 for the same position, 0.08 within 2 rows, 0.03 within 5 rows,
        otherwise 0.
    """
    if not _valid_position(extracted_position) or not _valid_position(known_position):
        return 0.0

    distance = abs(extracted_position - known_position)
    for max_distance, boost in POSITION_BOOSTS:
        if distance <= max_distance:
            return boost
    return 0.0


def member_position(
    member: RosterMember,
    position_map: Optional[dict[str, int]] = None,
) -> Optional[int]:
    """Expected position of a member: position map first, then the record."""
    if position_map:
        position = position_map.get(normalize_member_id(member.id))
        if position is not None:
            return position
    return member.known_position
