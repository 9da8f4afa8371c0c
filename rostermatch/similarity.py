"""String and token similarity metrics for name matching."""

from rapidfuzz.distance import Levenshtein

# Fuzzy token matches must clear this similarity to count at all
TOKEN_FUZZY_THRESHOLD = 0.75
TOKEN_FUZZY_FACTOR = 0.9
INITIAL_SCORE = 0.7


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost edit distance (insert, delete, substitute)."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalized, case-insensitive similarity between two strings.

    Args:
        a: First string.
        b: Second string.

    Returns:
        1.0 for equal strings, 0.0 if either is empty, otherwise
        ``1 - distance / max(len(a), len(b))``.
    """
    s1 = a.lower().strip()
    s2 = b.lower().strip()

    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    distance = levenshtein_distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))


def _is_initial(token: str) -> bool:
    return len(token) <= 2 and (len(token) == 1 or token.endswith('.'))


def token_similarity(a: str, b: str) -> float:
    """Token-based similarity that tolerates reordering and initials.

    Each token of ``a`` greedily claims the best unclaimed token of ``b``:
    an exact match scores 1.0, an initial ("J." for "John") 0.7 and a close
    spelling ``similarity * 0.9``.

    Args:
        a: Name to score (usually the extracted name).
        b: Name to score against (usually a roster rendering).

    Returns:
        Sum of token scores divided by the larger token count.
    """
    tokens1 = a.lower().split()
    tokens2 = b.lower().split()

    if not tokens1 or not tokens2:
        return 0.0

    total = 0.0
    used: set[int] = set()

    for t1 in tokens1:
        initial = _is_initial(t1)
        clean1 = t1.rstrip('.')

        best_score = 0.0
        best_index = -1

        for i, t2 in enumerate(tokens2):
            if i in used:
                continue

            if clean1 == t2.rstrip('.'):
                candidate = 1.0
            elif initial and clean1 and t2.startswith(clean1):
                candidate = INITIAL_SCORE
            else:
                sim = similarity(clean1, t2)
                candidate = sim * TOKEN_FUZZY_FACTOR if sim > TOKEN_FUZZY_THRESHOLD else 0.0

            if candidate > best_score:
                best_score = candidate
                best_index = i

        if best_index >= 0:
            total += best_score
            used.add(best_index)

    return total / max(len(tokens1), len(tokens2))
