"""Name normalization tuned to Ghanaian naming patterns.

Ghanaian ledgers mix church and traditional titles into names
("Elder Kofi Mensah", "Nana Ama Owusu"), use Akan day-of-birth names with
several regional spellings (Kwesi/Kwasi, Kojo/Kwadwo) and carry surnames
that are written in many ways (Mensah/Mensa). This module folds those
differences away before token comparison.

Targeting another naming culture means replacing ``TITLES``, ``DAY_NAMES``
and ``SURNAME_VARIANTS``; ``ghanaian_token_similarity`` keeps the contract
``(str, str) -> float`` in [0, 1].
"""

import re

# Ledger abbreviations by canonical title
TITLE_ALIASES: dict[str, list[str]] = {
    'DEACONESS': ['DCNS', 'DEAC', 'DCN', 'DEAS', 'DEACONESS'],
    'ELDER': ['ELD', 'ELDR', 'ELDER'],
    'PASTOR': ['PST', 'PS', 'PASTOR', 'PTR'],
    'APOSTLE': ['APT', 'APST', 'APOSTLE'],
    'OVERSEER': ['OVS', 'OVSR', 'OVERSEER'],
    'DEACON': ['DCN', 'DEAC', 'DEACON'],
    'EVANGELIST': ['EVG', 'EVNG', 'EVANGELIST'],
    'REVEREND': ['REV', 'REVD', 'REVEREND'],
    'SISTER': ['SIS', 'SR', 'SISTER'],
    'BROTHER': ['BRO', 'BR', 'BROTHER'],
    'MR': ['MR'],
    'MRS': ['MRS'],
    'MISS': ['MISS', 'MS'],
    'MADAM': ['MADAM', 'MDM'],
    'MAAME': ['MAAME'],
}

TITLES: frozenset[str] = frozenset({
    # Church offices without a ledger abbreviation
    'prophet', 'prophetess', 'bishop',
    # Traditional titles
    'nii', 'naa', 'nana', 'maame', 'mama', 'papa', 'opanyin', 'obaapanyin',
    'togbe', 'torgbe', 'nene',
    # Civil titles
    'dr', 'prof',
}) | frozenset(
    title.lower()
    for canonical, aliases in TITLE_ALIASES.items()
    for title in [canonical, *aliases]
)

DAY_NAMES: dict[str, dict[str, list[str]]] = {
    'sunday': {
        'male': ['kwasi', 'kwesi', 'akwasi', 'kosi'],
        'female': ['akosua', 'esi', 'kosi'],
    },
    'monday': {
        'male': ['kwadwo', 'kojo', 'kodwo', 'cudjoe'],
        'female': ['adwoa', 'adjoa', 'ajua'],
    },
    'tuesday': {
        'male': ['kwabena', 'kobina', 'kobena', 'ebo'],
        'female': ['abena', 'araba', 'abenaa'],
    },
    'wednesday': {
        'male': ['kwaku', 'kweku', 'kuuku'],
        'female': ['akua', 'ekua', 'kukua'],
    },
    'thursday': {
        'male': ['yaw', 'ekow', 'yawo'],
        'female': ['yaa', 'aba', 'yaaba'],
    },
    'friday': {
        'male': ['kofi', 'fiifi'],
        'female': ['afua', 'efua', 'afi'],
    },
    'saturday': {
        'male': ['kwame', 'kwami', 'kwamena'],
        'female': ['ama', 'amma', 'amoah'],
    },
}

SURNAME_VARIANTS: dict[str, list[str]] = {
    'mensah': ['mensa', 'mensaa', 'mensah'],
    'owusu': ['owusu', 'owusu-ansah', 'owusu-boateng'],
    'aryeetey': ['aryeetey', 'aryetey', 'ariyetey'],
    'wilson': ['wilson', 'willson'],
    'lamptey': ['lamptey', 'lampte', 'lamtey'],
    'addai': ['addai', 'adai', 'addey'],
    'addo': ['addo', 'ado'],
    'boateng': ['boateng', 'boatng', 'boating'],
    'asante': ['asante', 'asantey', 'asanti'],
    'ababio': ['ababio', 'ababyo'],
    'adjei': ['adjei', 'adgei', 'adjey'],
    'amoah': ['amoah', 'amoa', 'amuah'],
    'ansah': ['ansah', 'ansa', 'ansar'],
    'appiah': ['appiah', 'apia', 'apiah'],
    'tetteh': ['tetteh', 'teteh', 'tete'],
    'twumasi': ['twumasi', 'tumasi', 'twumase'],
    'asare': ['asare', 'asarey', 'asareh'],
}

DAY_NAME_SCORE = 0.9
PHONETIC_SCORE = 0.85
PREFIX_SCORE = 0.7
PREFIX_MIN_LENGTH = 4

# Applied in order before encoding: Agyeman -> Ajeman, Kwame -> Kame
_DIGRAPHS = [
    ('dw', 'd'), ('tw', 't'), ('gy', 'j'), ('ey', 'e'), ('ny', 'n'), ('kw', 'k'),
    ('oo', 'o'), ('ee', 'e'), ('aa', 'a'), ('ii', 'i'), ('uu', 'u'),
]

_SOUNDEX_CODES = {
    **dict.fromkeys('bfpv', '1'),
    **dict.fromkeys('cgjkqsxz', '2'),
    **dict.fromkeys('dt', '3'),
    'l': '4',
    **dict.fromkeys('mn', '5'),
    'r': '6',
}

_TOKEN_SPLIT_RE = re.compile(r'[\s.]+')

_DAY_LOOKUP: dict[str, str] = {
    name: day
    for day, variants in DAY_NAMES.items()
    for name in variants['male'] + variants['female']
}

_SURNAME_LOOKUP: dict[str, str] = {
    variant: canonical
    for canonical, variants in SURNAME_VARIANTS.items()
    for variant in variants
}


def is_title(word: str) -> bool:
    """Check whether a word is an honorific, with or without a trailing period."""
    return word.lower().rstrip('.') in TITLES


def strip_titles(name: str) -> str:
    """Remove honorific titles from a name and lower-case it."""
    words = name.lower().split()
    return ' '.join(w for w in words if not is_title(w))


def are_day_name_variants(name1: str, name2: str) -> bool:
    """Check if two names are spellings of the same Akan day name."""
    day1 = _DAY_LOOKUP.get(name1.lower().strip())
    day2 = _DAY_LOOKUP.get(name2.lower().strip())
    return day1 is not None and day1 == day2


def ghanaian_phonetic(name: str) -> str:
    """Soundex-style phonetic code adapted to Ghanaian spelling patterns.

    Common digraphs are folded first (``gy`` -> ``j``, ``kw`` -> ``k``,
    doubled vowels collapsed), then consonants are encoded Soundex-style,
    keeping the first letter and padding to six characters.

    Args:
        name: A single name token.

    Returns:
        Six-character code, or an empty string for empty input.
    """
    normalized = name.lower().strip()
    if not normalized:
        return ''

    for digraph, replacement in _DIGRAPHS:
        normalized = normalized.replace(digraph, replacement)

    code = normalized[0].upper()
    last_code = _SOUNDEX_CODES.get(normalized[0], '')

    for char in normalized[1:]:
        if len(code) >= 6:
            break
        char_code = _SOUNDEX_CODES.get(char, '')
        if char_code and char_code != last_code:
            code += char_code
            last_code = char_code
        elif not char_code:
            # Vowels separate repeated consonant codes
            last_code = ''

    return (code + '00000')[:6]


def are_phonetically_similar(name1: str, name2: str) -> bool:
    """Check if two names share a phonetic code (or its first four characters)."""
    code1 = ghanaian_phonetic(name1)
    code2 = ghanaian_phonetic(name2)
    if not code1 or not code2:
        return False
    return code1 == code2 or code1[:4] == code2[:4]


def tokenize_ghanaian_name(name: str) -> list[str]:
    """Split a name into lower-cased tokens with titles removed."""
    stripped = strip_titles(name)
    return [p for p in _TOKEN_SPLIT_RE.split(stripped) if p]


def _token_score(t1: str, t2: str) -> float:
    if t1 == t2:
        return 1.0
    if are_day_name_variants(t1, t2):
        return DAY_NAME_SCORE
    if are_phonetically_similar(t1, t2):
        return PHONETIC_SCORE
    if len(t1) >= PREFIX_MIN_LENGTH and len(t2) >= PREFIX_MIN_LENGTH:
        if t1.startswith(t2) or t2.startswith(t1):
            return PREFIX_SCORE
    return 0.0


def ghanaian_token_similarity(name1: str, name2: str) -> float:
    """Token overlap aware of titles, day names and phonetic spellings.

    Each token of ``name1`` claims the first unclaimed token of ``name2``
    that matches exactly (1.0), as a day-name variant (0.9), phonetically
    (0.85) or by prefix (0.7). Single-letter initials are ignored.

    Args:
        name1: Name to score.
        name2: Name to score against.

    Returns:
        Sum of token scores divided by the larger token count.
    """
    tokens1 = tokenize_ghanaian_name(name1)
    tokens2 = tokenize_ghanaian_name(name2)

    if not tokens1 or not tokens2:
        return 0.0

    total = 0.0
    used: set[int] = set()

    for t1 in tokens1:
        if len(t1) == 1:
            continue
        for j, t2 in enumerate(tokens2):
            if j in used or len(t2) == 1:
                continue
            score = _token_score(t1, t2)
            if score > 0:
                total += score
                used.add(j)
                break

    return total / max(len(tokens1), len(tokens2))


def normalize_surname(surname: str) -> str:
    """Map a surname spelling to its canonical form (or itself if unknown)."""
    lower = surname.lower().strip()
    return _SURNAME_LOOKUP.get(lower, lower)


def are_surname_variants(s1: str, s2: str) -> bool:
    """Check if two surnames are known spellings of the same name."""
    return normalize_surname(s1) == normalize_surname(s2)


def has_surname_variant(name: str, surname: str) -> bool:
    """Check if any token of ``name`` is a recognized variant of ``surname``.

    Only surnames in ``SURNAME_VARIANTS`` count, so an unknown surname never
    matches through plain equality here.
    """
    canonical = normalize_surname(surname)
    if canonical not in SURNAME_VARIANTS:
        return False
    return any(
        normalize_surname(token) == canonical
        for token in tokenize_ghanaian_name(name)
    )
