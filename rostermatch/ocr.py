"""Clean-up of raw OCR output before reconciliation."""

import logging
import re
from typing import Any, Iterable, Mapping, Optional

from rostermatch import ExtractedName
from rostermatch.ghanaian import TITLE_ALIASES

log = logging.getLogger(__name__)

_ARTIFACT_RE = re.compile(r'[|\\/\[\]{}]')
_WHITESPACE_RE = re.compile(r'\s+')
_EDGE_PUNCT_RE = re.compile(r'^[.,;:\-_]+|[.,;:\-_]+$')

# Letters commonly misread for digits in handwritten amounts
DIGIT_SUBSTITUTIONS: dict[str, str] = {
    'O': '0', 'o': '0',
    'I': '1', 'l': '1', 'i': '1',
    'S': '5', 's': '5',
    'B': '8', 'b': '8',
    'G': '6', 'g': '6',
    'Z': '2', 'z': '2',
    'T': '7',
}

COMMON_TITHE_AMOUNTS = [
    5, 10, 20, 30, 40, 50, 60, 70, 80, 100, 150, 200, 250, 300, 400, 500,
    1000, 2000, 5000,
]

# Rows per set in a tithe book; the last rows of a set are usually new members
MEMBERS_PER_SET = 31


def clean_ocr_name(raw_name: Optional[str]) -> str:
    """Remove common OCR artifacts from a handwritten name.

    Strips stray bars, slashes and brackets, collapses whitespace and trims
    leading/trailing punctuation.
    """
    if not raw_name:
        return ''
    cleaned = _ARTIFACT_RE.sub('', raw_name)
    cleaned = _WHITESPACE_RE.sub(' ', cleaned)
    cleaned = _EDGE_PUNCT_RE.sub('', cleaned.strip())
    return cleaned.strip()


def normalize_title(title: str) -> str:
    """Map a title abbreviation to its canonical upper-case form."""
    if not title:
        return ''
    upper = title.strip().upper().rstrip('.')
    for canonical, aliases in TITLE_ALIASES.items():
        if upper == canonical or upper in aliases:
            return canonical
    return upper


def correct_ocr_digits(raw_text: Optional[str]) -> Optional[int]:
    """Read an amount, fixing letters commonly misread for digits.

    "1OO" becomes 100 and "5O" becomes 50. Thousands separators and spaces
    are ignored.

    Returns:
        The corrected amount, or None if the text is not a number even after
        substitution.
    """
    if not raw_text:
        return None
    text = raw_text.strip().replace(',', '').replace(' ', '')
    corrected = ''.join(DIGIT_SUBSTITUTIONS.get(ch, ch) for ch in text)
    if not corrected.isdigit():
        return None
    if corrected != text:
        log.debug("OCR digits corrected: %r -> %s", raw_text, corrected)
    return int(corrected)


def amount_confidence(
    amount: float,
    legibility: int = 3,
    raw_text: Optional[str] = None,
    ink_color: Optional[str] = None,
    cell_condition: Optional[str] = None,
    row_no: Optional[int] = None,
) -> float:
    """Estimate how reliable an extracted amount is.

    Args:
        amount: Extracted amount.
        legibility: Legibility reported by the OCR model (1–5).
        raw_text: Raw text of the cell.
        ink_color: Ink color of the cell; red ink usually belongs to totals.
        cell_condition: 'clean', 'corrected' or 'smudged'.
        row_no: Row number in the tithe book.

    Returns:
        Confidence between 0.1 and 0.98.
    """
    if amount == 0:
        # An empty cell or dash is unambiguous
        return 0.95

    confidence = 0.5
    confidence += (legibility - 1) / 4 * 0.35

    if raw_text:
        numeric_ratio = sum(ch.isdigit() for ch in raw_text) / len(raw_text)
        if numeric_ratio == 1:
            confidence += 0.12
        elif numeric_ratio < 0.5:
            confidence -= 0.1

    if amount in COMMON_TITHE_AMOUNTS:
        confidence += 0.08
    elif any(abs(common - amount) / common < 0.05 for common in COMMON_TITHE_AMOUNTS):
        confidence += 0.04

    if ink_color == 'red':
        confidence -= 0.15

    if cell_condition == 'corrected':
        confidence -= 0.1
    elif cell_condition == 'smudged':
        confidence -= 0.2
    elif cell_condition == 'clean':
        confidence += 0.05

    if row_no:
        position_in_set = (row_no - 1) % MEMBERS_PER_SET + 1
        if position_in_set <= 20:
            confidence += 0.05
        elif position_in_set > 28:
            confidence -= 0.03

    return round(min(0.98, max(0.1, confidence)), 4)


def _row_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def build_extracted_names(rows: Iterable[Mapping[str, Any]]) -> list[ExtractedName]:
    """Convert raw OCR rows into cleaned ExtractedName records.

    Each row is a mapping with a ``"Name"`` and optionally a ``"No."`` row
    number. Missing or invalid row numbers fall back to the 1-based index of
    the row.
    """
    names: list[ExtractedName] = []
    for index, row in enumerate(rows, start=1):
        position = _row_number(row.get('No.'))
        if position is None:
            position = index
        names.append(ExtractedName(clean_ocr_name(row.get('Name')), position))
    return names
