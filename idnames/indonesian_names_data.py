# ═════════════════════════════════════════════════════════════════════════════════
# STATIC DATA FOR INDONESIAN NAME DETECTION
# ═════════════════════════════════════════════════════════════════════════════════
#
# The large word lists (first names, last names, cultural patterns, prefixes,
# suffixes) live in plain text files under idnames/data/ and are loaded once at
# startup. This module holds the small, fixed tables the detector needs on top
# of those lists:
# 1. EVIDENCE TAGS: the five kinds of observation a classification can record
# 2. LEXICON FILES: which text file feeds which lexicon set
# 3. TITLES: honorifics stripped from the ends of a raw name
# 4. WHOLE NAME PATTERNS: substrings that signal an Indonesian naming convention
# 5. CONFIDENCE INCREMENTS: per-tag contribution to the confidence score
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Evidence tags, in the order they are checked for each token
FIRST_NAME_TAG = "first_name"
LAST_NAME_TAG = "last_name"
PATTERN_TAG = "pattern"
AFFIX_TAG = "affix"
# Whole-string rule, recorded without a token
INDONESIAN_PATTERN_TAG = "indonesian_pattern"

EVIDENCE_TAGS = (FIRST_NAME_TAG, LAST_NAME_TAG, PATTERN_TAG, AFFIX_TAG, INDONESIAN_PATTERN_TAG)

# Lexicon set name -> file name inside the data directory
LEXICON_FILES = MappingProxyType(
    {
        "first_names": "first_names.txt",
        "last_names": "last_names.txt",
        "common_patterns": "common_patterns.txt",
        "prefixes": "prefixes.txt",
        "suffixes": "suffixes.txt",
    }
)

COMMENT_MARKER = "#"

# Titles and honorifics, compared lowercase with trailing dots removed.
# Only whole leading or trailing words are stripped.
TITLES = frozenset(
    {
        # Professional and academic titles
        "dr",
        "drs",
        "prof",
        "ir",
        "st",
        "mt",
        "s.kom",
        "s.t",
        "s.e",
        "s.h",
        "s.si",
        "s.pd",
        "m.kom",
        "m.t",
        "m.m",
        "m.si",
        "m.sc",
        "ph.d",
        "phd",
        "mba",
        "cpa",
        "ca",
        # Generational suffixes
        "jr",
        "sr",
        "ii",
        "iii",
    }
)

# Substrings of the lowercase, space-joined name that signal an Indonesian
# naming convention. Trailing spaces keep particles from matching mid-word.
WHOLE_NAME_PATTERNS = (
    "bin ",  # Arabic patronymic
    "binti ",
    "van ",  # Dutch colonial particles
    "de ",
    "abdul",  # Arabic names common across the archipelago
    "muhammad",
    "ahmad",
)

# Balinese birth-order names are often written after the honorific "I"
# (I Made, I Gede, I Wayan ...)
HONORIFIC_INITIAL = "i"

CONFIDENCE_INCREMENTS = MappingProxyType(
    {
        FIRST_NAME_TAG: 0.4,
        LAST_NAME_TAG: 0.4,
        PATTERN_TAG: 0.3,
        AFFIX_TAG: 0.2,
        INDONESIAN_PATTERN_TAG: 0.1,
    }
)

# Sample names for the benchmark in indonesian_names.run_performance_test
SAMPLE_INDONESIAN_NAMES = (
    "Budi Santoso",
    "Siti Nurhaliza",
    "Ahmad Dhani",
    "Dewi Sartika",
    "Joko Widodo",
    "Megawati Soekarnoputri",
    "Susilo Bambang Yudhoyono",
    "Prabowo Subianto",
    "Tri Rismaharini",
    "Sri Mulyani Indrawati",
    "I Made Pastika",
    "Nyoman Nuarta",
    "Ketut Liyer",
    "Abdullah Rahman",
    "Rizki Pratama",
)

SAMPLE_NON_INDONESIAN_NAMES = (
    "John Smith",
    "Michael Johnson",
    "Zhang Wei",
    "Hiroshi Tanaka",
    "Emily Clarke",
    "Pierre Dubois",
)
