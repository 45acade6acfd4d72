# ═════════════════════════════════════════════════════════════════════════════════
# DEFAULT LEXICAL TABLES
# ═════════════════════════════════════════════════════════════════════════════════
#
# Every table is matched case-insensitively by the parser. Tables are tuples
# rather than sets because their order is the order of the regex alternation
# built from them:
# 1. SUFFIXES: Ordinary suffixes, may carry trailing dots ("Jr.", "Esq.")
# 2. NUMERAL_SUFFIXES: Generational numerals, never followed by dots
# 3. PREFIXES: Last name particles, multi-word entries listed before their heads
# 4. ACADEMIC_TITLES: Titles that may open a name, never the last word
# 5. FORCED_CASE: Words whose casing survives the fix-case pass verbatim
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

SUFFIXES = (
    "esq",
    "esquire",
    "jr",
    "sr",
    "phd",
)

NUMERAL_SUFFIXES = (
    "2",
    "iii",
    "ii",
    "iv",
    "v",
)

PREFIXES = (
    "bar",
    "ben",
    "bin",
    "da",
    "dal",
    "de la",  # must precede "de"
    "de",
    "del",
    "der",
    "di",
    "ibn",
    "la",
    "le",
    "san",
    "st",
    "ste",
    "van der",  # must precede "van"
    "van den",
    "van",
    "vel",
    "von",
)

ACADEMIC_TITLES = (
    "ms",
    "miss",
    "mrs",
    "mr",
    "prof",
    "dr",
)

FORCED_CASE = (
    # Particles and conjunctions
    "e",
    "y",
    "av",
    "af",
    "da",
    "dal",
    "de",
    "del",
    "der",
    "di",
    "la",
    "le",
    "van",
    "den",
    "vel",
    "von",
    # Roman numerals
    "II",
    "III",
    "IV",
    "V",
    # Degrees
    "J.D.",
    "LL.M.",
    "M.D.",
    "D.O.",
    "D.C.",
    "Ph.D.",
)

# ───────── Result selectors ─────────
DEFAULT_PART = "all"

NAME_PARTS = frozenset(
    {
        "all",
        "title",
        "first",
        "middle",
        "last",
        "nick",
        "suffix",
        "error",
    }
)

# selector -> ParsedName attribute
PART_ATTRIBUTES = MappingProxyType(
    {
        "title": "academic_title",
        "first": "first_name",
        "middle": "middle_name",
        "last": "last_name",
        "nick": "nicknames",
        "suffix": "suffix",
        "error": "errors",
    }
)

# ───────── Error messages ─────────
ERROR_MESSAGES = MappingProxyType(
    {
        "incorrect_input": "Incorrect input to parse.",
        "first_name_not_found": "Couldn't find a first name.",
        "last_name_not_found": "Couldn't find a last name.",
        "flip_failure": "Can't flip around multiple '{delimiter}' characters in name string '{full_name}'.",
        "multiple_matches": "The regex being used has multiple matches.",
        "many_middle_names": "Warning: {count} middle names",
    }
)


def _assert_no_duplicates(table_name, table):
    """Validate that no entry appears twice in a lexical table (case-insensitive)."""
    seen = set()
    for entry in table:
        key = entry.lower()
        if key in seen:
            raise ValueError(f"Duplicate entry in {table_name}: {entry}")
        seen.add(key)


_assert_no_duplicates("SUFFIXES", SUFFIXES)
_assert_no_duplicates("NUMERAL_SUFFIXES", NUMERAL_SUFFIXES)
_assert_no_duplicates("PREFIXES", PREFIXES)
_assert_no_duplicates("ACADEMIC_TITLES", ACADEMIC_TITLES)
_assert_no_duplicates("FORCED_CASE", FORCED_CASE)

# Precomputed lookup for the fix-case pass: lowercase word -> canonical casing
FORCED_CASE_LOOKUP = MappingProxyType({entry.lower(): entry for entry in FORCED_CASE})
