"""
Korean Name Transliteration Module

This module converts personal names written in Latin-derived scripts (with or without
diacritics) into Korean Hangul, and produces a matching Revised Romanization string.
It is fully rule-based and deterministic: no external service is involved.

## Overview

The core functionality is provided by the `KoreanNameConverter` class, which runs a
multi-stage pipeline for every name:

1. **Validation**: Rejects blank and over-long input
2. **Script Routing**: Hangul passes through, Han/Kana/Cyrillic/Greek are turned into Latin
3. **Normalization**: Lowercasing, diacritic folding, punctuation stripping, whitespace collapsing
4. **Classification**: One family-name segment (static surname table) and given-name segments
5. **Phonetic Pre-pass**: Ordered rewrite rules (Mc- → 맥, -son → 슨, ph → f, ...)
6. **Tokenization**: Greedy longest-match segmentation into (initial, vowel, final) triples
7. **Composition**: Unicode arithmetic `0xAC00 + initial*588 + vowel*28 + final`
8. **Romanization**: Decomposition back into jamo with coda neutralization

## Architecture

- **NormalizationService**: Pure text normalization, idempotent
- **PhoneticPreprocessor**: Ordered (pattern, replacement) rules producing an intermediate buffer
- **SyllableTokenizer**: Longest-match tokenizer over three `JamoTable` instances
- **SyllableComposer**: Triple → precomposed Hangul syllable
- **HangulRomanizer**: Hangul → Revised Romanization
- **LanguageDetector**: Script and language heuristics for routing
- **ScriptFallbackService**: Non-Latin → Latin conversion (pypinyin, pykakasi, unidecode)
- **KoreanNameConverter**: Orchestration with dependency injection of the services above

## Usage Examples

```python
from korean_names.transliteration import convert_name, romanize

success, result = convert_name("John Smith", "en")
# success == True
# result.korean_name == "스미스존"
# result.romanization == "seu-mi-seu jon"

romanize("김")
# Returns: "gim"

from korean_names.transliteration import KoreanNameConverter, InvalidInputError

converter = KoreanNameConverter()
converter.convert("María García").to_dict()
# Returns: {"koreanName": "가르시아마리아", "romanization": "ga-reu-si-a ma-ri-a", "breakdown": [...]}

converter.convert("")
# Raises: InvalidInputError("name is required")
```

## Error Handling

- `InvalidInputError`: blank input, input longer than `max_name_length`, input without any
  recognizable letters, or a tokenizer precondition breach (non-Latin text)
- Unmappable characters are not errors: they are replaced by the default vowel block and
  counted in `ConversionResult.substitutions`

## Thread Safety

All tables are immutable module-level constants and the services hold only immutable
configuration, so one converter can be shared by any number of threads.
"""

from __future__ import annotations

import logging
import re
import time
import unicodedata
from dataclasses import dataclass, replace
from functools import lru_cache
from itertools import groupby
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

import pykakasi
import pypinyin
from unidecode import unidecode

from korean_names.transliteration_data import (
    CODA_NEUTRALIZATION,
    DEFAULT_LANGUAGE,
    DEFAULT_VOWEL,
    FAMILY_NAME_FIRST_LANGUAGES,
    FINAL_INDEX,
    FINAL_JAMO,
    FINAL_ROMANIZATION,
    FINAL_SPELLINGS,
    FINALS_PER_VOWEL,
    HANGUL_BASE,
    HANGUL_LAST,
    INITIAL_INDEX,
    INITIAL_JAMO,
    INITIAL_ROMANIZATION,
    INITIAL_SPELLINGS,
    KNOWN_LETTERS,
    LANGUAGE_MARKERS,
    LETTER_FOLDING,
    NULL_INITIAL,
    PHONETIC_RULES,
    PLACEHOLDER_SURNAME,
    SCRIPT_RANGES,
    SURNAME_TABLE,
    SYLLABLES_PER_INITIAL,
    VOWEL_INDEX,
    VOWEL_JAMO,
    VOWEL_ROMANIZATION,
    VOWEL_SPELLINGS,
)

# Segment roles reported in CharacterBreakdown
FAMILY = "family"
GIVEN = "given"
SYLLABLE = "syllable"

# Jamo table roles
INITIAL = "initial"
VOWEL = "vowel"
FINAL = "final"

# Script families returned by LanguageDetector.detect_script
HANGUL = "hangul"
HAN = "han"
KANA = "kana"
CYRILLIC = "cyrillic"
GREEK = "greek"
LATIN = "latin"
UNKNOWN = "unknown"

_FALLBACK_SCRIPTS = frozenset({HAN, KANA, CYRILLIC, GREEK})

_ROLE_JAMO: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        INITIAL: frozenset(INITIAL_INDEX),
        VOWEL: frozenset(VOWEL_INDEX),
        FINAL: frozenset(FINAL_INDEX),
    }
)


def is_hangul_syllable(char: str) -> bool:
    return HANGUL_BASE <= ord(char) <= HANGUL_LAST


def _is_latin_letter(char: str) -> bool:
    return char.isalpha() and unicodedata.name(char, "").startswith("LATIN")


def _char_script(char: str) -> str:
    code = ord(char)
    for script, ranges in SCRIPT_RANGES:
        if any(low <= code <= high for low, high in ranges):
            return script
    if _is_latin_letter(char):
        return LATIN
    return UNKNOWN


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS AND RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


class KoreanNameError(ValueError):
    """Base class for all conversion errors."""


class InvalidInputError(KoreanNameError):
    """The name cannot be converted (blank, too long, or nothing recognizable)."""


@dataclass(frozen=True)
class CharacterBreakdown:
    """One converted name segment."""

    hangul: str
    romanization: str
    role: str  # FAMILY, GIVEN or SYLLABLE

    def to_dict(self) -> Dict[str, str]:
        return {"hangul": self.hangul, "romanization": self.romanization, "type": self.role}


@dataclass(frozen=True)
class ConversionResult:
    """Immutable result of one conversion call."""

    korean_name: str
    romanization: str
    breakdown: Tuple[CharacterBreakdown, ...]
    source_language: str = DEFAULT_LANGUAGE
    substitutions: int = 0  # characters no table could map

    def to_dict(self) -> Dict[str, object]:
        """JSON shape returned to HTTP clients."""
        return {
            "koreanName": self.korean_name,
            "romanization": self.romanization,
            "breakdown": [segment.to_dict() for segment in self.breakdown],
        }


@dataclass(frozen=True)
class ConversionOutcome:
    """Either-like wrapper used by callers that do not want exceptions."""

    success: bool
    result: Optional[ConversionResult]
    error_message: Optional[str] = None

    @classmethod
    def success_with_result(cls, result: ConversionResult) -> "ConversionOutcome":
        return cls(success=True, result=result, error_message=None)

    @classmethod
    def failure(cls, error_message: str) -> "ConversionOutcome":
        return cls(success=False, result=None, error_message=error_message)


@dataclass(frozen=True)
class JamoMatch:
    jamo: str
    length: int


@dataclass(frozen=True)
class SyllableTriple:
    """One tokenizer step: the jamo of a single syllable block and the text it covers."""

    initial: Optional[str]
    vowel: str
    final: Optional[str]
    source: str
    substituted: bool = False


@dataclass(frozen=True)
class NamePart:
    """One whitespace- or script-separated piece of a name."""

    text: str
    is_hangul: bool = False


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class KoreanNameConfig:
    """Immutable configuration shared by all services."""

    max_name_length: int
    placeholder_surname: str
    default_vowel: str
    null_initial: str
    max_pattern_length: int
    collapse_repeats: bool
    family_name_first_languages: FrozenSet[str]

    # Precompiled regex patterns
    whitespace_pattern: re.Pattern[str]
    hangul_run_pattern: re.Pattern[str]
    repeated_syllable_pattern: re.Pattern[str]

    @classmethod
    def create_default(cls) -> "KoreanNameConfig":
        return cls(
            max_name_length=100,
            placeholder_surname=PLACEHOLDER_SURNAME,
            default_vowel=DEFAULT_VOWEL,
            null_initial=NULL_INITIAL,
            max_pattern_length=4,
            collapse_repeats=True,
            family_name_first_languages=FAMILY_NAME_FIRST_LANGUAGES,
            whitespace_pattern=re.compile(r"\s+"),
            hangul_run_pattern=re.compile("([가-힣]+)"),
            repeated_syllable_pattern=re.compile(r"(.)\1{2,}"),
        )

    def with_max_name_length(self, max_name_length: int) -> "KoreanNameConfig":
        return replace(self, max_name_length=max_name_length)

    def with_placeholder_surname(self, placeholder_surname: str) -> "KoreanNameConfig":
        if not placeholder_surname or not all(is_hangul_syllable(c) for c in placeholder_surname):
            raise ValueError(f"placeholder surname must be precomposed Hangul: {placeholder_surname!r}")
        return replace(self, placeholder_surname=placeholder_surname)


# ════════════════════════════════════════════════════════════════════════════════
# JAMO TABLES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class JamoTable:
    """Role-scoped Latin spelling table with longest-match lookup."""

    role: str
    spellings: Mapping[str, str]
    max_length: int

    @classmethod
    def from_spellings(cls, role: str, spellings: Mapping[str, str], max_pattern_length: int = 4) -> "JamoTable":
        allowed = _ROLE_JAMO[role]
        for key, jamo in spellings.items():
            if not 1 <= len(key) <= max_pattern_length:
                raise ValueError(f"{role} spelling '{key}' must be 1-{max_pattern_length} characters long")
            if jamo not in allowed:
                raise ValueError(f"'{jamo}' is not a valid {role} jamo (key '{key}')")
        longest = max((len(key) for key in spellings), default=0)
        return cls(role=role, spellings=MappingProxyType(dict(spellings)), max_length=longest)

    def match(self, text: str, offset: int) -> Optional[JamoMatch]:
        """Longest key matching `text` at `offset`, or None."""
        for length in range(min(self.max_length, len(text) - offset), 0, -1):
            jamo = self.spellings.get(text[offset : offset + length])
            if jamo is not None:
                return JamoMatch(jamo, length)
        return None


# ════════════════════════════════════════════════════════════════════════════════
# NORMALIZATION SERVICE
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NormalizedInput:
    raw: str
    normalized: str
    parts: Tuple[str, ...]

    @classmethod
    def empty(cls, raw: str = "") -> "NormalizedInput":
        return cls(raw, "", ())


class NormalizationService:
    """Pure, idempotent text normalization for Latin names."""

    def __init__(self, config: KoreanNameConfig):
        self._config = config

    def apply(self, raw_name: str) -> NormalizedInput:
        normalized = self.normalize(raw_name)
        if not normalized:
            return NormalizedInput.empty(raw_name)
        return NormalizedInput(raw=raw_name, normalized=normalized, parts=tuple(normalized.split(" ")))

    def normalize(self, text: str) -> str:
        """
        Lowercase, fold letters the tables do not know, drop everything that is not a
        Latin letter or whitespace, and collapse whitespace runs.
        """
        # NFKC folds fullwidth forms and ligatures ("Ａｎｎａ", "ﬁ") onto plain letters
        text = unicodedata.normalize("NFC", unicodedata.normalize("NFKC", text).lower())
        folded = "".join(self.fold_letter(char) for char in text)
        kept = "".join(char for char in folded if char.isspace() or _is_latin_letter(char))
        return self._config.whitespace_pattern.sub(" ", kept).strip()

    def fold_letter(self, char: str) -> str:
        if char in KNOWN_LETTERS:
            return char
        folded = LETTER_FOLDING.get(char)
        if folded is not None:
            return folded
        base = unicodedata.normalize("NFD", char)[0]
        if base != char and base in KNOWN_LETTERS:
            return base
        return char

    def strip_diacritics(self, text: str) -> str:
        return "".join(char for char in unicodedata.normalize("NFD", text) if not unicodedata.combining(char))

    def surname_keys(self, part: str) -> Tuple[str, ...]:
        """Lookup keys for the surname table, most specific first."""
        key = part.lower()
        stripped = self.strip_diacritics(key)
        return (key,) if stripped == key else (key, stripped)


# ════════════════════════════════════════════════════════════════════════════════
# PHONETIC PRE-PASS
# ════════════════════════════════════════════════════════════════════════════════


class PhoneticPreprocessor:
    """
    Applies ordered (pattern, replacement) rules to one word.

    The output buffer mixes Latin text with Hangul syllables that some rules insert
    directly (e.g. "mc" → "맥"). `segments` splits it so that only the Latin runs reach
    the tokenizer.
    """

    def __init__(self, config: KoreanNameConfig, rules: Sequence[Tuple[str, str]] = PHONETIC_RULES):
        self._config = config
        self._rules = tuple((re.compile(pattern), replacement) for pattern, replacement in rules)

    @property
    def rules(self) -> Tuple[Tuple[re.Pattern[str], str], ...]:
        return self._rules

    def apply(self, word: str) -> str:
        buffer = word
        for pattern, replacement in self._rules:
            buffer = pattern.sub(replacement, buffer)
        return buffer

    def segments(self, buffer: str) -> List[Tuple[bool, str]]:
        """Split a buffer into (is_hangul, text) runs, in order."""
        pieces = self._config.hangul_run_pattern.split(buffer)
        # re.split with one capture group puts the matched runs at odd indices
        return [(index % 2 == 1, piece) for index, piece in enumerate(pieces) if piece]


# ════════════════════════════════════════════════════════════════════════════════
# SYLLABLE TOKENIZER
# ════════════════════════════════════════════════════════════════════════════════


class SyllableTokenizer:
    """Segments a Latin word into (initial, vowel, final) triples using longest match."""

    def __init__(self, config: KoreanNameConfig, initials: JamoTable, vowels: JamoTable, finals: JamoTable):
        self._config = config
        self._initials = initials
        self._vowels = vowels
        self._finals = finals

    def tokenize(self, word: str) -> Tuple[SyllableTriple, ...]:
        """
        Cover the whole word with syllable triples, left to right.

        Args:
            word: One normalized Latin word (lowercase, no whitespace)

        Returns:
            Tuple of triples; empty for an empty word

        Raises:
            InvalidInputError: if the word contains whitespace or non-Latin letters
        """
        self._check_precondition(word)

        triples = []
        position = 0
        while position < len(word):
            triple, position = self._next_syllable(word, position)
            triples.append(triple)
        return tuple(triples)

    def resolve_unmapped(self, char: str) -> str:
        """Vowel used for a character that no table can map."""
        logging.debug(f"No jamo mapping for {char!r}, substituting default vowel {self._config.default_vowel}")
        return self._config.default_vowel

    def _check_precondition(self, word: str) -> None:
        for char in word:
            if char.isspace():
                raise InvalidInputError(f"tokenizer expects a single word, got {word!r}")
            if char.isalpha() and not _is_latin_letter(char):
                raise InvalidInputError(f"tokenizer only accepts Latin script, got {char!r} in {word!r}")

    def _next_syllable(self, word: str, start: int) -> Tuple[SyllableTriple, int]:
        position = start
        initial = None
        substituted = False

        onset = self._initials.match(word, position)
        if onset:
            initial = onset.jamo
            position += onset.length

        nucleus = self._vowels.match(word, position)
        if nucleus:
            vowel = nucleus.jamo
            position += nucleus.length
        elif initial is not None:
            # Bare consonant: add a vowel without consuming input
            vowel = self._config.default_vowel
        else:
            # Neither table matched: consume one character so the loop always advances
            vowel = self.resolve_unmapped(word[position])
            position += 1
            substituted = True

        final = None
        if position < len(word):
            coda = self._finals.match(word, position)
            # A consonant followed by a vowel is the next syllable's onset
            if coda and not self._begins_vowel(word, position + coda.length):
                final = coda.jamo
                position += coda.length

        return SyllableTriple(initial, vowel, final, word[start:position], substituted), position

    def _begins_vowel(self, word: str, position: int) -> bool:
        return position < len(word) and self._vowels.match(word, position) is not None


# ════════════════════════════════════════════════════════════════════════════════
# SYLLABLE COMPOSER
# ════════════════════════════════════════════════════════════════════════════════


class SyllableComposer:
    """Builds precomposed Hangul syllables from jamo."""

    def __init__(self, config: KoreanNameConfig):
        self._config = config

    def compose(self, triple: SyllableTriple) -> str:
        initial = triple.initial or self._config.null_initial
        final_index = FINAL_INDEX[triple.final] if triple.final else 0
        return self.compose_indices(INITIAL_INDEX[initial], VOWEL_INDEX[triple.vowel], final_index)

    def compose_all(self, triples: Sequence[SyllableTriple]) -> str:
        return "".join(self.compose(triple) for triple in triples)

    def compose_indices(self, initial_index: int, vowel_index: int, final_index: int = 0) -> str:
        if not 0 <= initial_index < len(INITIAL_JAMO):
            raise ValueError(f"initial index out of range: {initial_index}")
        if not 0 <= vowel_index < len(VOWEL_JAMO):
            raise ValueError(f"vowel index out of range: {vowel_index}")
        if not 0 <= final_index < len(FINAL_JAMO):
            raise ValueError(f"final index out of range: {final_index}")
        return chr(HANGUL_BASE + initial_index * SYLLABLES_PER_INITIAL + vowel_index * FINALS_PER_VOWEL + final_index)


# ════════════════════════════════════════════════════════════════════════════════
# ROMANIZER
# ════════════════════════════════════════════════════════════════════════════════


class HangulRomanizer:
    """Revised Romanization of precomposed Hangul with coda neutralization."""

    def decompose(self, syllable: str) -> Tuple[int, int, int]:
        """Invert the composition formula: (initial_index, vowel_index, final_index)."""
        if len(syllable) != 1 or not is_hangul_syllable(syllable):
            raise ValueError(f"not a precomposed Hangul syllable: {syllable!r}")
        code = ord(syllable) - HANGUL_BASE
        return (
            code // SYLLABLES_PER_INITIAL,
            (code % SYLLABLES_PER_INITIAL) // FINALS_PER_VOWEL,
            code % FINALS_PER_VOWEL,
        )

    def romanize_syllable(self, syllable: str) -> str:
        initial_index, vowel_index, final_index = self.decompose(syllable)
        final_jamo = FINAL_JAMO[final_index]
        coda = CODA_NEUTRALIZATION.get(final_jamo, FINAL_ROMANIZATION[final_index])
        return INITIAL_ROMANIZATION[initial_index] + VOWEL_ROMANIZATION[vowel_index] + coda

    def romanize(self, text: str) -> str:
        """Hyphen-join consecutive syllables; anything else passes through unchanged."""
        pieces = []
        previous_was_hangul = False
        for char in text:
            if is_hangul_syllable(char):
                if previous_was_hangul:
                    pieces.append("-")
                pieces.append(self.romanize_syllable(char))
                previous_was_hangul = True
            else:
                pieces.append(char)
                previous_was_hangul = False
        return "".join(pieces)


# ════════════════════════════════════════════════════════════════════════════════
# LANGUAGE DETECTION
# ════════════════════════════════════════════════════════════════════════════════


class LanguageDetector:
    """Character-range heuristics; good enough for routing, not for linguistics."""

    def __init__(self) -> None:
        self._markers = tuple((code, re.compile(pattern)) for code, pattern in LANGUAGE_MARKERS)

    def detect_language(self, text: str) -> str:
        lowered = text.lower()
        for code, pattern in self._markers:
            if pattern.search(lowered):
                return code
        return DEFAULT_LANGUAGE

    def detect_script(self, text: str) -> str:
        scripts = {_char_script(char) for char in text}
        for script, _ in SCRIPT_RANGES:
            if script in scripts:
                return script
        return LATIN if LATIN in scripts else UNKNOWN


# ════════════════════════════════════════════════════════════════════════════════
# SCRIPT FALLBACK
# ════════════════════════════════════════════════════════════════════════════════


@lru_cache(maxsize=4096)
def _han_to_pinyin(han_str: str) -> Tuple[str, ...]:
    try:
        return tuple(pypinyin.lazy_pinyin(han_str, style=pypinyin.Style.NORMAL))
    except (AttributeError, ValueError, TypeError) as e:
        logging.warning(f"Pypinyin failed for '{han_str}': {e}")
        return tuple(han_str)


class ScriptFallbackService:
    """
    Turns Han, kana, Cyrillic and Greek text into Latin letters for the main pipeline.

    Japanese text (any kana, or a "ja" language hint) is read with pykakasi, so Han
    characters get their Japanese reading. Other Han text is read as Mandarin with
    pypinyin. Cyrillic and Greek are transliterated with unidecode.
    """

    def __init__(self) -> None:
        self._kakasi = pykakasi.kakasi()

    def to_latin(self, text: str, language: str = DEFAULT_LANGUAGE) -> str:
        text = text.strip()
        japanese = language == "ja" or any(_char_script(char) == KANA for char in text)
        if japanese:
            return " ".join(self._japanese_to_latin(chunk) for chunk in text.split())

        # A space-less Han name starts with a one-character family name
        if len(text) > 1 and all(_char_script(char) == HAN for char in text):
            text = f"{text[0]} {text[1:]}"

        pieces = []
        for script, run in groupby(text, key=_char_script):
            chunk = "".join(run)
            if script == HAN:
                pieces.append("".join(_han_to_pinyin(chunk)))
            elif script in (CYRILLIC, GREEK):
                pieces.append(unidecode(chunk).lower())
            else:
                pieces.append(chunk)
        return "".join(pieces)

    def _japanese_to_latin(self, chunk: str) -> str:
        readings = [item["hepburn"] for item in self._kakasi.convert(chunk) if item["hepburn"].strip()]
        # pykakasi splits kanji at word boundaries, which for names separate family from given name
        separator = " " if any(_char_script(char) == HAN for char in chunk) else ""
        return separator.join(readings).lower()


# ════════════════════════════════════════════════════════════════════════════════
# MAIN CONVERTER
# ════════════════════════════════════════════════════════════════════════════════


class KoreanNameConverter:
    """Main name → Hangul conversion service."""

    def __init__(self, config: Optional[KoreanNameConfig] = None):
        self._config = config or KoreanNameConfig.create_default()
        max_length = self._config.max_pattern_length
        self._normalizer = NormalizationService(self._config)
        self._preprocessor = PhoneticPreprocessor(self._config)
        self._tokenizer = SyllableTokenizer(
            self._config,
            initials=JamoTable.from_spellings(INITIAL, INITIAL_SPELLINGS, max_length),
            vowels=JamoTable.from_spellings(VOWEL, VOWEL_SPELLINGS, max_length),
            finals=JamoTable.from_spellings(FINAL, FINAL_SPELLINGS, max_length),
        )
        self._composer = SyllableComposer(self._config)
        self._romanizer = HangulRomanizer()
        self._detector = LanguageDetector()
        self._fallback = ScriptFallbackService()

    @property
    def config(self) -> KoreanNameConfig:
        return self._config

    @property
    def tokenizer(self) -> SyllableTokenizer:
        return self._tokenizer

    @property
    def normalizer(self) -> NormalizationService:
        return self._normalizer

    def convert(
        self, raw_name: str, source_language: str = "auto", breakdown_by_syllable: bool = False
    ) -> ConversionResult:
        """
        Main API method: convert a personal name to Hangul.

        Args:
            raw_name: Name as typed by the user
            source_language: ISO 639-1 hint, or "auto" to detect it
            breakdown_by_syllable: Report given names one syllable per breakdown entry

        Returns:
            ConversionResult with the family segment first, then given segments in input order

        Raises:
            InvalidInputError: if the name is blank, too long or has nothing to convert
        """
        self._validate_raw_name(raw_name)
        language = self._resolve_language(raw_name, source_language)

        script = self._detector.detect_script(raw_name)
        if script == HANGUL:
            parts = self._mixed_parts(raw_name, language)
            if not parts:
                raise InvalidInputError("name contains no Hangul syllables")
        else:
            parts = self._latin_parts(raw_name, language)
            if script == HAN and not self._is_language_hint(source_language):
                parts, language = self._prefer_known_reading(raw_name, parts, language)
            if not parts:
                raise InvalidInputError("name contains no recognizable Latin characters")

        family_part, given_parts = self._classify_parts(parts, language)
        segments = [(FAMILY, self._family_hangul(family_part))]
        substitutions = 0
        for part in given_parts:
            hangul, count = self._given_hangul(part)
            segments.append((GIVEN, hangul))
            substitutions += count

        if substitutions:
            logging.info(f"Substituted {substitutions} unmappable character(s) in {raw_name!r}")
        return self._build_result(segments, language, substitutions, breakdown_by_syllable)

    def try_convert(
        self, raw_name: str, source_language: str = "auto", breakdown_by_syllable: bool = False
    ) -> ConversionOutcome:
        """Like convert(), but returns a failure outcome instead of raising."""
        try:
            return ConversionOutcome.success_with_result(
                self.convert(raw_name, source_language, breakdown_by_syllable=breakdown_by_syllable)
            )
        except InvalidInputError as e:
            return ConversionOutcome.failure(str(e))

    def romanize(self, hangul: str) -> str:
        return self._romanizer.romanize(hangul)

    def detect_language(self, text: str) -> str:
        return self._detector.detect_language(text)

    def lookup_surname(self, part: str) -> Optional[str]:
        for key in self._normalizer.surname_keys(part):
            hangul = SURNAME_TABLE.get(key)
            if hangul is not None:
                return hangul
        return None

    def _validate_raw_name(self, raw_name: str) -> None:
        if not isinstance(raw_name, str) or not raw_name.strip():
            raise InvalidInputError("name is required")
        if len(raw_name) > self._config.max_name_length:
            raise InvalidInputError(f"name is too long (max {self._config.max_name_length} characters)")

    def _resolve_language(self, raw_name: str, source_language: str) -> str:
        if not self._is_language_hint(source_language):
            return self._detector.detect_language(raw_name)
        return source_language.strip().lower()

    def _is_language_hint(self, source_language: Optional[str]) -> bool:
        hint = (source_language or "").strip().lower()
        return bool(hint) and hint != "auto"

    def _latin_parts(self, text: str, language: str) -> List[NamePart]:
        script = self._detector.detect_script(text)
        latin = self._fallback.to_latin(text, language) if script in _FALLBACK_SCRIPTS else text
        normalized = self._normalizer.apply(latin)
        logging.debug(f"Normalized {normalized.raw!r} to {normalized.normalized!r}")
        return [NamePart(part) for part in normalized.parts]

    def _mixed_parts(self, raw_name: str, language: str) -> List[NamePart]:
        """Hangul runs pass through as parts; everything between them takes the Latin path."""
        parts: List[NamePart] = []
        for chunk in raw_name.split():
            # re.split with one capture group puts the Hangul runs at odd indices
            for index, piece in enumerate(self._config.hangul_run_pattern.split(chunk)):
                if index % 2 == 1:
                    parts.append(NamePart(piece, is_hangul=True))
                elif piece:
                    parts.extend(self._latin_parts(piece, language))

        # "김민수": the first syllable is the family name
        if len(parts) == 1 and parts[0].is_hangul and len(parts[0].text) > 1:
            text = parts[0].text
            parts = [NamePart(text[0], is_hangul=True), NamePart(text[1:], is_hangul=True)]
        return parts

    def _prefer_known_reading(self, raw_name: str, parts: List[NamePart], language: str) -> Tuple[List[NamePart], str]:
        """Switch a Han name to its Japanese reading when only that reading has a known family name."""
        if parts and self.lookup_surname(parts[0].text) is not None:
            return parts, language
        japanese = self._latin_parts(raw_name, "ja")
        if japanese and self.lookup_surname(japanese[0].text) is not None:
            logging.debug(f"Reading {raw_name!r} as Japanese: {' '.join(part.text for part in japanese)}")
            return japanese, "ja"
        return parts, language

    def _is_known_family(self, part: NamePart) -> bool:
        return part.is_hangul or self.lookup_surname(part.text) is not None

    def _classify_parts(self, parts: List[NamePart], language: str) -> Tuple[NamePart, List[NamePart]]:
        """Pick the family-name part; the rest are given names in input order."""
        first, last = parts[0], parts[-1]
        # Western order ("John Smith", "John 김") is recognised only through known family names
        if (
            len(parts) > 1
            and (language not in self._config.family_name_first_languages or last.is_hangul)
            and not self._is_known_family(first)
            and self._is_known_family(last)
        ):
            return last, parts[:-1]
        return first, parts[1:]

    def _family_hangul(self, part: NamePart) -> str:
        if part.is_hangul:
            return part.text
        hangul = self.lookup_surname(part.text)
        if hangul is None:
            # TODO: convert unknown surnames phonetically once product signs off on it
            logging.debug(f"Surname {part.text!r} not in table, using placeholder {self._config.placeholder_surname}")
            return self._config.placeholder_surname
        return hangul

    def _given_hangul(self, part: NamePart) -> Tuple[str, int]:
        if part.is_hangul:
            return part.text, 0
        buffer = self._preprocessor.apply(part.text)

        pieces = []
        substitutions = 0
        for is_hangul, run in self._preprocessor.segments(buffer):
            if is_hangul:
                pieces.append(run)
                continue
            triples = self._tokenizer.tokenize(run)
            substitutions += sum(1 for triple in triples if triple.substituted)
            pieces.append(self._composer.compose_all(triples))

        hangul = "".join(pieces)
        if not hangul:
            logging.warning(f"Given name part {part.text!r} produced no syllables")
        elif self._config.collapse_repeats:
            hangul = self._config.repeated_syllable_pattern.sub(r"\1\1", hangul)
        return hangul, substitutions

    def _build_result(
        self, segments: List[Tuple[str, str]], language: str, substitutions: int, breakdown_by_syllable: bool
    ) -> ConversionResult:
        breakdown: List[CharacterBreakdown] = []
        romanizations = []
        for role, hangul in segments:
            romanization = self._romanizer.romanize(hangul)
            if romanization:
                romanizations.append(romanization)

            if breakdown_by_syllable and role == GIVEN:
                breakdown.extend(
                    CharacterBreakdown(syllable, self._romanizer.romanize(syllable), SYLLABLE) for syllable in hangul
                )
            else:
                breakdown.append(CharacterBreakdown(hangul, romanization, role))

        return ConversionResult(
            korean_name="".join(hangul for _, hangul in segments),
            romanization=" ".join(romanizations),
            breakdown=tuple(breakdown),
            source_language=language,
            substitutions=substitutions,
        )


# ════════════════════════════════════════════════════════════════════════════════
# PERFORMANCE CHECK
# ════════════════════════════════════════════════════════════════════════════════


def run_performance_test() -> None:
    """Time conversions over a fixed mix of names."""
    converter = KoreanNameConverter()
    names = [
        "John Smith",
        "María García",
        "Michael Jackson",
        "Zoë Müller",
        "Jean-Luc Picard",
        "Kim Minsu",
        "김민수",
        "Иван Петров",
        "王小明",
        "たなか ゆき",
    ] * 100

    start = time.perf_counter()
    for name in names:
        converter.convert(name)
    elapsed = time.perf_counter() - start

    print(f"Converted {len(names)} names in {elapsed:.3f}s")
    print(f"Rate: {len(names) / elapsed:.0f} names/second")
    print(f"Time per name: {elapsed / len(names) * 1_000_000:.1f} microseconds")


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global converter instance for module-level functions
_global_converter: Optional[KoreanNameConverter] = None


def _get_global_converter() -> KoreanNameConverter:
    global _global_converter
    if _global_converter is None:
        _global_converter = KoreanNameConverter()
    return _global_converter


def convert_name(name: str, source_language: str = "auto") -> Tuple[bool, Union[ConversionResult, str]]:
    """
    Module-level convenience function for name conversion.

    Returns:
        Tuple of (success: bool, ConversionResult or error message)
    """
    outcome = _get_global_converter().try_convert(name, source_language)
    if outcome.success and outcome.result is not None:
        return True, outcome.result
    return False, outcome.error_message or "conversion failed"


def romanize(hangul: str) -> str:
    """Revised Romanization of a Hangul string, syllables joined with hyphens."""
    return _get_global_converter().romanize(hangul)


def detect_language(text: str) -> str:
    return _get_global_converter().detect_language(text)


# CLI entry point
if __name__ == "__main__":
    run_performance_test()
