"""
Indonesian Name Detection Module

This module decides whether a full-name string looks Indonesian, using a lexicon of
first names, last names, cultural patterns, prefixes and suffixes together with
positional weighting and whole-name convention checks.

## Overview

The core functionality is provided by the `IndonesianNameDetector` class, which runs a
short pipeline for every name:

1. **Input Repair**: Fixes mojibake and HTML entities left behind by page extraction
2. **Normalization**: Collapses whitespace, strips titles, drops stray punctuation
3. **Token Scoring**: Weighs each token against the five lexicon sets
4. **Whole-Name Conventions**: Patronymics, colonial particles, the Balinese "I" honorific
5. **Decision and Confidence**: Applies a length-dependent threshold and maps evidence to [0, 1]

## Architecture

- **LexiconStore**: Immutable container for the five lexicon sets
- **LexiconLoadingService**: Reads the line-delimited lexicon files, all or nothing
- **NormalizationService**: Raw string to token tuple, plus lookup-key folding
- **ConfidenceMapper**: Saturating evidence-to-score mapping
- **IndonesianNameDetector**: Scoring engine wiring the services together
- **IndonesianNameConfig**: Weights, thresholds, titles, patterns and paths

## Scoring

Each token is checked independently against every set, and the checks add up:

| Check                  | Weight                               | Evidence       |
|------------------------|--------------------------------------|----------------|
| first-name set         | 3 at the first position, 2 elsewhere | `first_name:X` |
| last-name set          | 3 at the last position, 2 elsewhere  | `last_name:X`  |
| cultural-pattern set   | 2                                    | `pattern:X`    |
| prefix or suffix match | 1                                    | `affix:X`      |

The whole name then earns 1 more point (`indonesian_pattern`) if it contains one of the
configured convention substrings or starts with the honorific "I". Names of three or more
tokens need a score of 2, shorter names a score of 1.

## Usage Examples

```python
from idnames.indonesian_names import is_indonesian_name

is_indonesian_name("Budi Santoso")
# Returns: (True, ["first_name:Budi", "pattern:Budi", "last_name:Santoso"])

is_indonesian_name("John Smith")
# Returns: (False, [])

from idnames.indonesian_names import IndonesianNameDetector

detector = IndonesianNameDetector()
result = detector.is_indonesian_name("Dr. Ahmad Dhani")
result.is_indonesian  # True
result.match_reasons  # ["first_name:Ahmad", "affix:Dhani", "indonesian_pattern"]
```

## Error Handling

- `LexiconLoadError`: a lexicon file is missing or unreadable; raised from the detector
  constructor, no partially loaded detector is ever returned
- Empty or degenerate names are not errors: they classify as negative with no evidence

## Thread Safety

All lexicon data is frozen after loading and classification keeps no state between calls,
so one detector can be shared by any number of threads.
"""

from __future__ import annotations
import logging
import re
import time
import unicodedata
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union
from dataclasses import dataclass, field, fields, replace

import ftfy
from unidecode import unidecode
from idnames.indonesian_names_data import (
    AFFIX_TAG,
    COMMENT_MARKER,
    CONFIDENCE_INCREMENTS,
    EVIDENCE_TAGS,
    FIRST_NAME_TAG,
    HONORIFIC_INITIAL,
    INDONESIAN_PATTERN_TAG,
    LAST_NAME_TAG,
    LEXICON_FILES,
    PATTERN_TAG,
    SAMPLE_INDONESIAN_NAMES,
    SAMPLE_NON_INDONESIAN_NAMES,
    TITLES,
    WHOLE_NAME_PATTERNS,
)

DATA_PATH = Path(__file__).resolve().parent / "data"


# ════════════════════════════════════════════════════════════════════════════════
# COMPILED REGEX PATTERNS
# ════════════════════════════════════════════════════════════════════════════════

# Two to four capitalised words in running text
_CANDIDATE_NAME_PATTERN = r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,3}\b"
_WHITESPACE_PATTERN = r"\s+"

# Characters kept besides letters and whitespace
_NAME_PUNCTUATION = frozenset("-'")


def _is_latin_script(text: str) -> bool:
    return all(not c.isalpha() or unicodedata.name(c, "").startswith("LATIN") for c in text)


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS AND RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


class LexiconLoadError(OSError):
    """A lexicon source could not be read. The store is not built."""

    def __init__(self, path: Path, reason: Exception):
        super().__init__(f"failed to load lexicon source {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class Evidence:
    """One tagged observation explaining part of a classification score."""

    tag: str
    token: Optional[str] = None  # None for whole-name rules

    def __str__(self) -> str:
        if self.token is None:
            return self.tag
        return f"{self.tag}:{self.token}"

    @classmethod
    def parse(cls, reason: str) -> "Evidence":
        """Inverse of str(): "first_name:Budi" -> Evidence("first_name", "Budi")."""
        tag, sep, token = reason.partition(":")
        return cls(tag=tag, token=token if sep else None)


@dataclass(frozen=True)
class ClassificationResult:
    """Decision, the evidence behind it, the raw score and the derived confidence."""

    is_indonesian: bool
    evidence: Tuple[Evidence, ...]
    score: int
    confidence: float

    @classmethod
    def no_match(cls) -> "ClassificationResult":
        return cls(is_indonesian=False, evidence=(), score=0, confidence=0.0)

    @property
    def match_reasons(self) -> List[str]:
        return [str(item) for item in self.evidence]

    def as_tuple(self) -> Tuple[bool, List[str]]:
        return (self.is_indonesian, self.match_reasons)


@dataclass(frozen=True)
class NameMatch:
    """A name that classified as Indonesian, ready for ranking."""

    name: str
    match_reasons: Tuple[str, ...]
    confidence: float


@dataclass(frozen=True)
class LexiconStats:
    """Entry counts per lexicon set."""

    first_names: int
    last_names: int
    common_patterns: int
    prefixes: int
    suffixes: int

    @property
    def total(self) -> int:
        return self.first_names + self.last_names + self.common_patterns + self.prefixes + self.suffixes

    def as_dict(self) -> Dict[str, int]:
        stats = {f.name: getattr(self, f.name) for f in fields(self)}
        stats["total"] = self.total
        return stats


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ScoringWeights:
    """Weights and thresholds of the scoring pass."""

    first_name_leading: int = 3
    first_name_other: int = 2
    last_name_trailing: int = 3
    last_name_other: int = 2
    pattern: int = 2
    affix: int = 1
    whole_name_pattern: int = 1

    # Names longer than max_short_name_tokens need long_name_threshold
    short_name_threshold: int = 1
    long_name_threshold: int = 2
    max_short_name_tokens: int = 2

    def threshold_for(self, token_count: int) -> int:
        if token_count > self.max_short_name_tokens:
            return self.long_name_threshold
        return self.short_name_threshold


@dataclass(frozen=True)
class IndonesianNameConfig:
    """Immutable configuration for lexicon loading, normalization and scoring."""

    # Lexicon sources
    data_dir: Path
    lexicon_files: Mapping[str, str]
    comment_marker: str

    # Normalization
    titles: FrozenSet[str]
    fold_accents: bool
    whitespace_pattern: re.Pattern[str]
    candidate_name_pattern: re.Pattern[str]

    # Whole-name conventions
    whole_name_patterns: Tuple[str, ...]
    honorific_initial: str

    # Scoring and confidence
    weights: ScoringWeights
    confidence_increments: Mapping[str, float]
    max_confidence: float

    @classmethod
    def create_default(cls) -> "IndonesianNameConfig":
        return cls(
            data_dir=DATA_PATH,
            lexicon_files=LEXICON_FILES,
            comment_marker=COMMENT_MARKER,
            titles=TITLES,
            fold_accents=True,
            whitespace_pattern=re.compile(_WHITESPACE_PATTERN),
            candidate_name_pattern=re.compile(_CANDIDATE_NAME_PATTERN),
            whole_name_patterns=WHOLE_NAME_PATTERNS,
            honorific_initial=HONORIFIC_INITIAL,
            weights=ScoringWeights(),
            confidence_increments=CONFIDENCE_INCREMENTS,
            max_confidence=1.0,
        )

    def with_data_dir(self, new_data_dir: Path) -> "IndonesianNameConfig":
        return replace(self, data_dir=Path(new_data_dir))

    def with_whole_name_patterns(self, patterns: Iterable[str]) -> "IndonesianNameConfig":
        return replace(self, whole_name_patterns=tuple(p.lower() for p in patterns))

    def with_weights(self, weights: ScoringWeights) -> "IndonesianNameConfig":
        return replace(self, weights=weights)


# ════════════════════════════════════════════════════════════════════════════════
# NORMALIZATION SERVICE
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NormalizedInput:
    """Raw name and the token sequence derived from it."""

    raw: str  # Original input: "Dr. Ahmad  Dhani"
    cleaned: str  # Titles and punctuation removed: "Ahmad Dhani"
    tokens: Tuple[str, ...]  # ("Ahmad", "Dhani")

    @classmethod
    def empty(cls, raw: str = "") -> "NormalizedInput":
        return cls(raw, "", ())


class NormalizationService:
    """Turns raw candidate names into token tuples and lookup keys."""

    def __init__(self, config: IndonesianNameConfig):
        self._config = config

    def apply(self, raw_name: str) -> NormalizedInput:
        """
        Raw name -> normalized tokens.

        Steps: repair text, collapse whitespace, strip leading/trailing titles,
        drop everything but letters, whitespace, hyphens and apostrophes, split.
        """
        if not raw_name or not raw_name.strip():
            return NormalizedInput.empty(raw_name or "")

        repaired = ftfy.fix_text(raw_name)
        collapsed = self._config.whitespace_pattern.sub(" ", repaired).strip()

        words = self._strip_titles(collapsed.split())
        kept = "".join(c for c in " ".join(words) if c.isalpha() or c.isspace() or c in _NAME_PUNCTUATION)
        tokens = tuple(kept.split())

        if not tokens:
            return NormalizedInput.empty(raw_name)

        return NormalizedInput(raw=raw_name, cleaned=" ".join(tokens), tokens=tokens)

    def normalize(self, raw_name: str) -> Tuple[str, ...]:
        return self.apply(raw_name).tokens

    def is_title(self, word: str) -> bool:
        return word.lower().rstrip(".,") in self._config.titles

    def match_key(self, text: str) -> str:
        """
        Lookup key: accents transliterated (when enabled), lowercased.

        Only Latin-script text is transliterated; unidecode would turn other scripts
        into romanized syllables that can collide with lexicon entries.
        """
        if self._config.fold_accents and _is_latin_script(text):
            text = unidecode(text)
        return text.strip().lower()

    def _strip_titles(self, words: List[str]) -> List[str]:
        start, end = 0, len(words)
        while start < end and self.is_title(words[start]):
            start += 1
        while end > start and self.is_title(words[end - 1]):
            end -= 1
        return words[start:end]


# ════════════════════════════════════════════════════════════════════════════════
# LEXICON STORE AND LOADING SERVICE
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class LexiconSources:
    """Paths of the five line-delimited lexicon files."""

    first_names: Path
    last_names: Path
    common_patterns: Path
    prefixes: Path
    suffixes: Path

    @classmethod
    def in_directory(cls, data_dir: Path, file_names: Mapping[str, str] = LEXICON_FILES) -> "LexiconSources":
        return cls(**{kind: Path(data_dir) / file_name for kind, file_name in file_names.items()})

    def items(self) -> Tuple[Tuple[str, Path], ...]:
        return tuple((f.name, getattr(self, f.name)) for f in fields(self))


@dataclass(frozen=True)
class LexiconStore:
    """Immutable container for the five lexicon sets (lowercase match keys)."""

    first_names: FrozenSet[str]
    last_names: FrozenSet[str]
    common_patterns: FrozenSet[str]
    prefixes: FrozenSet[str]
    suffixes: FrozenSet[str]

    # Must be the function the entries were keyed with at load time
    key_function: Callable[[str], str] = field(default=str.lower, repr=False, compare=False)

    # Tuples so str.startswith/str.endswith can test all affixes in one call
    _prefix_tuple: Tuple[str, ...] = field(init=False, repr=False, compare=False)
    _suffix_tuple: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_prefix_tuple", tuple(sorted(self.prefixes)))
        object.__setattr__(self, "_suffix_tuple", tuple(sorted(self.suffixes)))

    def contains(self, kind: str, token: str) -> bool:
        """Exact, case-insensitive membership in one of the five sets."""
        if kind not in LEXICON_FILES:
            raise ValueError(f"unknown lexicon set: {kind!r}")
        return self.key_function(token) in getattr(self, kind)

    def has_affix(self, token: str) -> bool:
        """True if the token starts with any prefix or ends with any suffix. Linear in the affix count."""
        key = self.key_function(token)
        return key.startswith(self._prefix_tuple) or key.endswith(self._suffix_tuple)

    def get_stats(self) -> LexiconStats:
        return LexiconStats(
            first_names=len(self.first_names),
            last_names=len(self.last_names),
            common_patterns=len(self.common_patterns),
            prefixes=len(self.prefixes),
            suffixes=len(self.suffixes),
        )


class LexiconLoadingService:
    """Builds a LexiconStore from line-delimited text files."""

    def __init__(self, config: IndonesianNameConfig, normalizer: NormalizationService):
        self._config = config
        self._normalizer = normalizer

    def default_sources(self) -> LexiconSources:
        return LexiconSources.in_directory(self._config.data_dir, self._config.lexicon_files)

    def load(self, sources: Optional[LexiconSources] = None) -> LexiconStore:
        """Load all five sources. Any unreadable source raises LexiconLoadError."""
        sources = sources or self.default_sources()

        start_time = time.perf_counter()
        entries = {kind: self._load_entries(path) for kind, path in sources.items()}
        store = LexiconStore(**entries, key_function=self._normalizer.match_key)
        load_time = time.perf_counter() - start_time

        logging.info(f"Loaded {store.get_stats().total} lexicon entries in {load_time:.3f}s")
        return store

    def _load_entries(self, path: Path) -> FrozenSet[str]:
        entries: Set[str] = set()
        try:
            with Path(path).open(encoding="utf-8") as f:
                for line in f:
                    entry = line.strip()
                    if not entry or entry.startswith(self._config.comment_marker):
                        continue
                    key = self._normalizer.match_key(entry)
                    if key:
                        entries.add(key)
        except (OSError, UnicodeDecodeError) as e:
            raise LexiconLoadError(path, e) from e

        if not entries:
            logging.warning(f"Lexicon source {path} has no entries")
        else:
            logging.debug(f"Read {len(entries)} entries from {path}")
        return frozenset(entries)


# ════════════════════════════════════════════════════════════════════════════════
# CONFIDENCE MAPPER
# ════════════════════════════════════════════════════════════════════════════════


class ConfidenceMapper:
    """Sums fixed per-tag increments and clamps at max_confidence (saturating, not averaging)."""

    def __init__(self, config: IndonesianNameConfig):
        unknown_tags = set(config.confidence_increments) - set(EVIDENCE_TAGS)
        if unknown_tags:
            raise ValueError(f"confidence increments for unknown evidence tags: {sorted(unknown_tags)}")
        self._increments = config.confidence_increments
        self._max_confidence = config.max_confidence

    def score(self, evidence: Iterable[Union[Evidence, str]]) -> float:
        total = 0.0
        for item in evidence:
            if isinstance(item, str):
                item = Evidence.parse(item)
            total += self._increments.get(item.tag, 0.0)
        return min(total, self._max_confidence)


# ════════════════════════════════════════════════════════════════════════════════
# MAIN INDONESIAN NAME DETECTOR CLASS
# ════════════════════════════════════════════════════════════════════════════════


class IndonesianNameDetector:
    """Main Indonesian name detection service."""

    def __init__(self, config: Optional[IndonesianNameConfig] = None, lexicon: Optional[LexiconStore] = None):
        self._config = config or IndonesianNameConfig.create_default()
        self._normalizer = NormalizationService(self._config)
        self._loader = LexiconLoadingService(self._config, self._normalizer)
        self._confidence = ConfidenceMapper(self._config)

        # Load once up front; a failure propagates and no detector is created
        self._lexicon = lexicon if lexicon is not None else self._loader.load()
        logging.info(f"Loaded Indonesian names lexicon: {self._lexicon.get_stats().as_dict()}")

    @property
    def config(self) -> IndonesianNameConfig:
        return self._config

    @property
    def lexicon(self) -> LexiconStore:
        return self._lexicon

    @property
    def normalizer(self) -> NormalizationService:
        return self._normalizer

    def get_stats(self) -> LexiconStats:
        return self._lexicon.get_stats()

    def calculate_confidence(self, evidence: Iterable[Union[Evidence, str]]) -> float:
        return self._confidence.score(evidence)

    def is_indonesian_name(self, raw_name: str) -> ClassificationResult:
        """
        Main API method: normalize a raw name and classify it.

        Returns a ClassificationResult; evidence is filled in even when the
        decision is negative.
        """
        return self.classify(self._normalizer.normalize(raw_name))

    def classify(self, tokens: Sequence[str]) -> ClassificationResult:
        """Score an already normalized token sequence."""
        tokens = tuple(tokens)
        if not tokens:
            return ClassificationResult.no_match()

        weights = self._config.weights
        lexicon = self._lexicon
        last_index = len(tokens) - 1

        score = 0
        evidence: List[Evidence] = []

        for i, token in enumerate(tokens):
            key = self._normalizer.match_key(token)

            if key in lexicon.first_names:
                score += weights.first_name_leading if i == 0 else weights.first_name_other
                evidence.append(Evidence(FIRST_NAME_TAG, token))

            if key in lexicon.last_names:
                score += weights.last_name_trailing if i == last_index else weights.last_name_other
                evidence.append(Evidence(LAST_NAME_TAG, token))

            if key in lexicon.common_patterns:
                score += weights.pattern
                evidence.append(Evidence(PATTERN_TAG, token))

            # Independent of the set checks above; a token can earn several tags
            if lexicon.has_affix(key):
                score += weights.affix
                evidence.append(Evidence(AFFIX_TAG, token))

        if self._has_whole_name_pattern(tokens):
            score += weights.whole_name_pattern
            evidence.append(Evidence(INDONESIAN_PATTERN_TAG))

        frozen_evidence = tuple(evidence)
        return ClassificationResult(
            is_indonesian=score >= weights.threshold_for(len(tokens)),
            evidence=frozen_evidence,
            score=score,
            confidence=self._confidence.score(frozen_evidence),
        )

    def match_names(self, names: Iterable[str], seen: Optional[Set[str]] = None) -> List[NameMatch]:
        """
        Classify a batch of extracted names.

        Names already in `seen` are skipped; every positive match is added to it,
        so the same set can be shared across several calls for one page.
        """
        if seen is None:
            seen = set()

        matches = []
        for raw_name in names:
            name = raw_name.strip()
            if not name or name in seen:
                continue

            result = self.is_indonesian_name(name)
            if result.is_indonesian:
                matches.append(
                    NameMatch(name=name, match_reasons=tuple(result.match_reasons), confidence=result.confidence)
                )
                seen.add(name)

        return matches

    def find_names_in_text(self, text: str, seen: Optional[Set[str]] = None) -> List[NameMatch]:
        """Scan plain text for runs of 2-4 capitalised words and classify each."""
        if not text:
            return []
        return self.match_names(self._config.candidate_name_pattern.findall(text), seen)

    def _has_whole_name_pattern(self, tokens: Tuple[str, ...]) -> bool:
        # Case-folded only, never transliterated
        joined = " ".join(tokens).lower()
        if any(pattern in joined for pattern in self._config.whole_name_patterns):
            return True
        # "I Made ...": the honorific needs a name after it
        return len(tokens) > 1 and tokens[0].lower() == self._config.honorific_initial


def deduplicate_matches(matches: Iterable[NameMatch]) -> List[NameMatch]:
    """
    One match per case-insensitive name, keeping the highest confidence.

    Ties keep the first occurrence; the result is sorted by descending confidence.
    """
    best: Dict[str, NameMatch] = {}
    for match in matches:
        key = match.name.lower()
        existing = best.get(key)
        if existing is None or match.confidence > existing.confidence:
            best[key] = match
    return sorted(best.values(), key=lambda m: m.confidence, reverse=True)


# ════════════════════════════════════════════════════════════════════════════════
# PERFORMANCE TESTING
# ════════════════════════════════════════════════════════════════════════════════


def run_performance_test(repeat: int = 200) -> None:
    """Time classification of a fixed mix of Indonesian and non-Indonesian names."""
    detector = IndonesianNameDetector()
    names = list(SAMPLE_INDONESIAN_NAMES + SAMPLE_NON_INDONESIAN_NAMES) * repeat

    print(f"Testing with {len(names)} names...")
    start = time.perf_counter()
    positives = sum(1 for name in names if detector.is_indonesian_name(name).is_indonesian)
    elapsed = time.perf_counter() - start

    rate = len(names) / elapsed
    time_per_name = (elapsed / len(names)) * 1_000_000

    print(f"Classified {len(names)} names in {elapsed:.3f}s ({positives} Indonesian)")
    print(f"Rate: {rate:.0f} names/second")
    print(f"Time per name: {time_per_name:.1f} microseconds")


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global detector instance for module-level functions
_global_detector: Optional[IndonesianNameDetector] = None


def _get_global_detector() -> IndonesianNameDetector:
    """Get or create the global detector instance."""
    global _global_detector
    if _global_detector is None:
        _global_detector = IndonesianNameDetector()
    return _global_detector


def is_indonesian_name(name: str) -> Tuple[bool, List[str]]:
    """
    Module-level convenience function for Indonesian name detection.

    Args:
        name: Input name string

    Returns:
        Tuple of (is_indonesian: bool, match_reasons: list of "<tag>:<token>" strings)
    """
    return _get_global_detector().is_indonesian_name(name).as_tuple()


def calculate_confidence(match_reasons: Iterable[Union[Evidence, str]]) -> float:
    """Confidence in [0, 1] for a list of match reasons."""
    return _get_global_detector().calculate_confidence(match_reasons)


def get_stats() -> Dict[str, int]:
    """Entry counts of the global detector's lexicon, with a grand total."""
    return _get_global_detector().get_stats().as_dict()


# CLI entry point
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_performance_test()
