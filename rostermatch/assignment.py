"""Globally optimal one-to-one reconciliation of ledger names with the roster.

Matching every extracted name independently lets two rows claim the same
member. Instead all (row, member) pairs are scored into one matrix and the
assignment maximizing the total score is solved with the Hungarian
algorithm (``scipy.optimize.linear_sum_assignment``), which handles
rectangular matrices directly: ledgers rarely list exactly as many rows as
the roster has members.

Stages:
1. Learned aliases (exact lookup, removed from the pool)
2. Score matrix over the remaining rows and members
3. Optimal assignment
4. Threshold, alternatives → MatchResult per row
"""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment

from rostermatch import ExtractedName, MatchResult, RosterMember, ScoredCandidate
from rostermatch.aliases import (
    ALIAS_CONFIDENCE,
    index_roster,
    normalize_member_id,
    resolve_alias,
)
from rostermatch.scoring import (
    ACCEPT_THRESHOLD,
    ALTERNATIVE_THRESHOLD,
    DEFAULT_SCHEME,
    MAX_ALTERNATIVES,
    check_threshold,
    get_weights,
    score_member,
)

log = logging.getLogger(__name__)


def build_score_matrix(
    names: Sequence[ExtractedName],
    roster: Sequence[RosterMember],
    position_map: Optional[dict[str, int]] = None,
    scheme: str = DEFAULT_SCHEME,
) -> np.ndarray:
    """Score every extracted name against every roster member.

    Returns:
        Array of shape (len(names), len(roster)) with scores in [0, 1].
    """
    matrix = np.zeros((len(names), len(roster)))
    for i, item in enumerate(names):
        for j, member in enumerate(roster):
            matrix[i, j] = score_member(item.name, member, item.position, position_map, scheme)
    return matrix


def solve_assignment(score_matrix) -> list[Optional[int]]:
    """Find the one-to-one assignment with the highest total score.

    Rows and columns may differ in number. When there are more rows than
    columns the surplus rows stay unassigned; when there are more columns
    some columns stay unused. A single row or column is resolved directly.

    Args:
        score_matrix: N x M scores (higher is better), array or nested lists.

    Returns:
        List of length N; entry i is the column assigned to row i, or None.
    """
    matrix = np.asarray(score_matrix, dtype=float)
    if matrix.size == 0:
        return [None] * (matrix.shape[0] if matrix.ndim == 2 else 0)

    n_rows, n_cols = matrix.shape

    if n_rows == 1:
        return [int(np.argmax(matrix[0]))]

    if n_cols == 1:
        best_row = int(np.argmax(matrix[:, 0]))
        return [0 if i == best_row else None for i in range(n_rows)]

    row_ind, col_ind = linear_sum_assignment(matrix, maximize=True)

    assignment: list[Optional[int]] = [None] * n_rows
    for row, col in zip(row_ind, col_ind):
        assignment[int(row)] = int(col)
    return assignment


def assignment_score(score_matrix, assignment: Sequence[Optional[int]]) -> float:
    """Total score of an assignment (unassigned rows contribute nothing)."""
    matrix = np.asarray(score_matrix, dtype=float)
    return float(sum(
        matrix[row, col] for row, col in enumerate(assignment) if col is not None
    ))


def _alternatives(
    scores: np.ndarray,
    pool: Sequence[RosterMember],
    exclude: Optional[int],
) -> list[ScoredCandidate]:
    """Best other candidates for one row, taken from the score matrix."""
    order = sorted(range(len(pool)), key=lambda j: (-scores[j], j))
    alternatives: list[ScoredCandidate] = []
    for j in order:
        if len(alternatives) >= MAX_ALTERNATIVES or scores[j] < ALTERNATIVE_THRESHOLD:
            break
        if j != exclude:
            alternatives.append(ScoredCandidate(pool[j], float(scores[j])))
    return alternatives


def _build_result(
    item: ExtractedName,
    pool: Sequence[RosterMember],
    scores: np.ndarray,
    column: Optional[int],
    accept_threshold: float,
) -> MatchResult:
    """Turn one solved row into a MatchResult."""
    if not pool:
        return MatchResult(item.name, item.position, None, 0.0)

    matched: Optional[RosterMember] = None
    if column is not None:
        confidence = float(scores[column])
        if confidence >= accept_threshold:
            matched = pool[column]
    else:
        # Surplus row: report its best score for diagnostics only
        confidence = float(scores.max())

    return MatchResult(
        extracted_name=item.name,
        position=item.position,
        matched_member=matched,
        confidence=confidence,
        alternatives=_alternatives(scores, pool, column if matched is not None else None),
    )


def reconcile(
    extracted: Sequence[ExtractedName],
    roster: Sequence[RosterMember],
    alias_map: Optional[dict[str, str]] = None,
    position_map: Optional[dict[str, int]] = None,
    scheme: str = DEFAULT_SCHEME,
    accept_threshold: float = ACCEPT_THRESHOLD,
) -> list[MatchResult]:
    """Reconcile extracted ledger names with the roster.

    No member is matched to more than one row. Learned aliases win over
    fuzzy scoring (confidence 0.98) and take their member out of the pool;
    the remaining rows are assigned optimally as a whole.

    Args:
        extracted: Names read from the ledger, with their row positions.
        roster: Known members; ids must be unique.
        alias_map: Learned aliases (normalized noisy name -> member id).
        position_map: Expected positions keyed by lower-cased member id.
        scheme: Scoring scheme (``'simple'`` or ``'enriched'``).
        accept_threshold: Minimum score for an assignment to be kept.

    Returns:
        One MatchResult per extracted name, in input order.

    Raises:
        ValueError: On duplicate roster ids, an unknown scheme or a
            threshold outside [0, 1].
    """
    check_threshold('accept_threshold', accept_threshold)
    get_weights(scheme)
    roster_by_id = index_roster(list(roster))

    results: list[Optional[MatchResult]] = [None] * len(extracted)
    claimed: set[str] = set()

    # Stage 1: learned aliases
    for i, item in enumerate(extracted):
        member = resolve_alias(alias_map, item.name, roster_by_id)
        if member is None:
            continue
        key = normalize_member_id(member.id)
        if key in claimed:
            log.debug("Alias for %r ignored, member %s already claimed", item.name, member.id)
            continue
        claimed.add(key)
        results[i] = MatchResult(
            extracted_name=item.name,
            position=item.position,
            matched_member=member,
            confidence=ALIAS_CONFIDENCE,
            is_from_alias=True,
        )
        log.debug("Alias match: %r -> %s", item.name, member.id)

    # Stage 2–3: optimal assignment over what is left
    open_rows = [i for i, r in enumerate(results) if r is None]
    pool = [m for m in roster if normalize_member_id(m.id) not in claimed]
    names = [extracted[i] for i in open_rows]

    matrix = build_score_matrix(names, pool, position_map, scheme)
    assignment = solve_assignment(matrix)

    # Stage 4: thresholds and alternatives
    for row, (i, column) in enumerate(zip(open_rows, assignment)):
        results[i] = _build_result(extracted[i], pool, matrix[row], column, accept_threshold)

    final: list[MatchResult] = [r for r in results if r is not None]
    log.info(
        "Reconciliation finished: %d names, %d matched (%d via alias)",
        len(final),
        sum(1 for r in final if r.matched_member is not None),
        len(claimed),
    )
    return final
