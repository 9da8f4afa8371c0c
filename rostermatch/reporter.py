"""Summary statistics for reconciliation results."""

from typing import Optional, Sequence

from rostermatch import MatchResult
from rostermatch.confidence import REVIEW_THRESHOLD, partition_for_review


def compute_stats(
    results: list[MatchResult],
    review_threshold: float = REVIEW_THRESHOLD,
    amount_confidences: Optional[Sequence[Optional[float]]] = None,
) -> dict:
    """Compute summary statistics from match results."""
    total = len(results)
    matched = sum(1 for r in results if r.matched_member is not None)
    alias = sum(1 for r in results if r.is_from_alias)
    _, review = partition_for_review(results, review_threshold, amount_confidences)

    return {
        'total': total,
        'matched': matched,
        'alias': alias,
        'fuzzy': matched - alias,
        'unmatched': total - matched,
        'needs_review': len(review),
    }


def print_summary(
    results: list[MatchResult],
    title: str = '',
    review_threshold: float = REVIEW_THRESHOLD,
    amount_confidences: Optional[Sequence[Optional[float]]] = None,
) -> None:
    """Print a summary of match results to stdout.

    Args:
        results: List of match results.
        title: Name of the ledger page or batch.
        review_threshold: Confidence below which a match counts as needing review.
        amount_confidences: Optional per-row amount confidence, aligned with
            ``results``, blended into the review decision.
    """
    stats = compute_stats(results, review_threshold, amount_confidences)

    print(f"\n=== Match report: {title} ===")
    print(f"Extracted names:           {stats['total']:>5}")
    print(f"Matched:                   {stats['matched']:>5}")
    print(f"  - via learned alias:     {stats['alias']:>5}")
    print(f"  - via fuzzy matching:    {stats['fuzzy']:>5}")
    print(f"No match found:            {stats['unmatched']:>5}")
    print("---")
    print(f"Needs review (< {review_threshold:.2f}):    {stats['needs_review']:>5}")
    print()
