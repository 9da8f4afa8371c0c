"""Lookup of learned name aliases (noisy name -> member id)."""

import logging
from typing import Optional

from rostermatch import RosterMember

log = logging.getLogger(__name__)

ALIAS_CONFIDENCE = 0.98


def normalize_alias_key(name: str) -> str:
    """Normalize a name for alias-map lookup."""
    return name.strip().lower()


def normalize_member_id(member_id: str) -> str:
    """Normalize a member id for case-insensitive comparison."""
    return str(member_id).strip().lower()


def index_roster(roster: list[RosterMember]) -> dict[str, RosterMember]:
    """Index roster members by normalized id.

    Raises:
        ValueError: If two members share an id (case-insensitive).
    """
    index: dict[str, RosterMember] = {}
    for member in roster:
        key = normalize_member_id(member.id)
        if key in index:
            raise ValueError(f"Duplicate member id in roster: {member.id!r}")
        index[key] = member
    return index


def lookup(alias_map: Optional[dict[str, str]], name: str) -> Optional[str]:
    """Return the member id learned for ``name``, if any."""
    if not alias_map:
        return None
    return alias_map.get(normalize_alias_key(name))


def resolve_alias(
    alias_map: Optional[dict[str, str]],
    name: str,
    roster_by_id: dict[str, RosterMember],
) -> Optional[RosterMember]:
    """Resolve an extracted name to a roster member through the alias map.

    Args:
        alias_map: Learned aliases keyed by normalized name.
        name: Raw extracted name.
        roster_by_id: Roster indexed by normalized member id.

    Returns:
        The aliased member, or None if there is no alias or the alias points
        at a member that is no longer on the roster.
    """
    member_id = lookup(alias_map, name)
    if member_id is None:
        return None

    member = roster_by_id.get(normalize_member_id(member_id))
    if member is None:
        log.debug("Alias for %r points at unknown member %r", name, member_id)
    return member
