"""Review gate: decide which reconciled rows a person has to look at."""

from dataclasses import replace
from typing import Optional, Sequence

from rostermatch import MatchResult, RosterMember
from rostermatch.scoring import check_threshold

REVIEW_THRESHOLD = 0.6
MANUAL_CONFIDENCE = 1.0

# Share of the name match and of the amount reading in a row's confidence
MATCH_WEIGHT = 0.6
AMOUNT_WEIGHT = 0.4


def combined_confidence(
    match_confidence: float,
    amount_confidence: Optional[float] = None,
    matched: bool = True,
) -> float:
    """Blend name-match and amount confidence into one row confidence.

    A matched row weighs the name match at 0.6 and the amount reading at 0.4.
    Without an amount confidence, or for a row with no matched member, the
    match confidence is returned unchanged.
    """
    if amount_confidence is None or not matched:
        return match_confidence
    return round(MATCH_WEIGHT * match_confidence + AMOUNT_WEIGHT * amount_confidence, 4)


def needs_review(
    result: MatchResult,
    threshold: float = REVIEW_THRESHOLD,
    amount_confidence: Optional[float] = None,
) -> bool:
    """Check whether a result must be confirmed by a person.

    Unmatched rows always need review; matched rows need it when their
    confidence is below ``threshold``. Passing ``amount_confidence`` gates on
    the combined row confidence instead of the match confidence alone.
    """
    check_threshold('threshold', threshold)
    if result.matched_member is None:
        return True
    return combined_confidence(result.confidence, amount_confidence) < threshold


def _aligned_amounts(
    results: Sequence[MatchResult],
    amount_confidences: Optional[Sequence[Optional[float]]],
) -> Sequence[Optional[float]]:
    if amount_confidences is None:
        return [None] * len(results)
    if len(amount_confidences) != len(results):
        raise ValueError(
            f"Got {len(amount_confidences)} amount confidences for {len(results)} results"
        )
    return amount_confidences


def partition_for_review(
    results: list[MatchResult],
    threshold: float = REVIEW_THRESHOLD,
    amount_confidences: Optional[Sequence[Optional[float]]] = None,
) -> tuple[list[MatchResult], list[MatchResult]]:
    """Split results into (confident, needs review), keeping their order.

    ``amount_confidences``, when given, holds one entry per result (None for
    rows without an amount reading).
    """
    confident: list[MatchResult] = []
    review: list[MatchResult] = []
    for result, amount in zip(results, _aligned_amounts(results, amount_confidences)):
        (review if needs_review(result, threshold, amount) else confident).append(result)
    return confident, review


def override_match(result: MatchResult, member: RosterMember) -> MatchResult:
    """Apply a manual correction from the review screen.

    The chosen member replaces the match with full confidence. The result is
    not marked as an alias match; persisting the correction as a new alias
    is up to the caller.
    """
    return replace(
        result,
        matched_member=member,
        confidence=MANUAL_CONFIDENCE,
        is_from_alias=False,
    )
