"""
Unit tests for the services behind KoreanNameConverter.

Each pipeline stage is tested on its own, then the converter is tested end to end for
routing, classification, configuration and error reporting.
"""

import sys
from pathlib import Path
import pytest

# Add the parent directory to path to import korean_names
sys.path.insert(0, str(Path(__file__).parent.parent))

from korean_names.transliteration import (
    FAMILY,
    GIVEN,
    SYLLABLE,
    HangulRomanizer,
    InvalidInputError,
    JamoMatch,
    JamoTable,
    KoreanNameConfig,
    KoreanNameConverter,
    KoreanNameError,
    LanguageDetector,
    NormalizationService,
    PhoneticPreprocessor,
    ScriptFallbackService,
    SyllableComposer,
    SyllableTriple,
    convert_name,
    detect_language,
    romanize,
)
from korean_names.transliteration_data import (
    FINAL_JAMO,
    INITIAL_JAMO,
    SURNAME_TABLE,
    VOWEL_JAMO,
)


@pytest.fixture(scope="module")
def config():
    return KoreanNameConfig.create_default()


@pytest.fixture(scope="module")
def converter():
    return KoreanNameConverter()


# ════════════════════════════════════════════════════════════════════════════════
# NORMALIZATION
# ════════════════════════════════════════════════════════════════════════════════

NORMALIZATION_CASES = [
    ("  John   SMITH ", "john smith"),
    ("O'Brien", "obrien"),
    ("Mary-Jane", "maryjane"),
    ("Łukasz", "lukasz"),
    ("Weiß", "weiss"),
    ("Dvořák", "dvorák"),
    ("Jo3hn", "john"),
    ("José", "josé"),
    ("Zoë\tMüller", "zoë müller"),
    ("Ａｎｎａ", "anna"),
    ("ﬁona", "fiona"),
    ("!!!", ""),
]


def test_normalization_cases(config):
    normalizer = NormalizationService(config)
    for raw, expected in NORMALIZATION_CASES:
        assert normalizer.normalize(raw) == expected, f"normalize({raw!r})"


def test_normalization_is_idempotent(config):
    normalizer = NormalizationService(config)
    for raw, _ in NORMALIZATION_CASES + [("Smith Əliyev", ""), ("ÆSIR ØRSTED", "")]:
        once = normalizer.normalize(raw)
        assert normalizer.normalize(once) == once, f"normalize is not idempotent for {raw!r}"


def test_normalization_apply_splits_parts(config):
    normalizer = NormalizationService(config)
    normalized = normalizer.apply("  María   García ")
    assert normalized.parts == ("maría", "garcía")
    assert normalized.raw == "  María   García "
    assert normalizer.apply("...").parts == ()


def test_surname_keys_strip_diacritics(config):
    normalizer = NormalizationService(config)
    assert normalizer.surname_keys("García") == ("garcía", "garcia")
    assert normalizer.surname_keys("smith") == ("smith",)


# ════════════════════════════════════════════════════════════════════════════════
# PHONETIC PRE-PASS
# ════════════════════════════════════════════════════════════════════════════════

PREPASS_CASES = [
    ("mcdonald", "맥donald"),
    ("macarthur", "맥arthur"),
    ("jackson", "jak슨"),
    ("hansen", "han센"),
    ("clinton", "clin톤"),
    ("john", "jon"),
    ("sarah", "sara"),
    ("phillip", "filip"),
    ("hugh", "hug"),
    ("frank", "frangk"),
    ("anna", "ana"),
    ("minsu", "minsu"),
]


def test_prepass_rules(config):
    preprocessor = PhoneticPreprocessor(config)
    for word, expected in PREPASS_CASES:
        assert preprocessor.apply(word) == expected, f"apply({word!r})"


def test_prepass_segments(config):
    preprocessor = PhoneticPreprocessor(config)
    assert preprocessor.segments("jak슨") == [(False, "jak"), (True, "슨")]
    assert preprocessor.segments("맥donald") == [(True, "맥"), (False, "donald")]
    assert preprocessor.segments("minsu") == [(False, "minsu")]
    assert preprocessor.segments("") == []


def test_prepass_custom_rules(config):
    preprocessor = PhoneticPreprocessor(config, rules=[(r"^x", "z")])
    assert preprocessor.apply("xavier") == "zavier"
    assert len(preprocessor.rules) == 1


# ════════════════════════════════════════════════════════════════════════════════
# JAMO TABLES AND TOKENIZER
# ════════════════════════════════════════════════════════════════════════════════


def test_jamo_table_longest_match():
    table = JamoTable.from_spellings("initial", {"t": "ㅌ", "th": "ㅅ"})
    assert table.match("th", 0) == JamoMatch("ㅅ", 2)
    assert table.match("ta", 0) == JamoMatch("ㅌ", 1)
    assert table.match("ath", 1) == JamoMatch("ㅅ", 2)
    assert table.match("xa", 0) is None
    assert table.match("t", 1) is None


def test_jamo_table_rejects_bad_entries():
    with pytest.raises(ValueError):
        JamoTable.from_spellings("vowel", {"a": "ㄱ"})
    with pytest.raises(ValueError):
        JamoTable.from_spellings("initial", {"tschx": "ㅊ"})


def test_tokenize_bare_consonant_cluster(converter):
    triples = converter.tokenizer.tokenize("th")
    assert triples == (SyllableTriple(initial="ㅅ", vowel="ㅓ", final=None, source="th"),)


def test_tokenize_final_lookahead(converter):
    # "r" in "mara" starts the second syllable instead of closing the first
    triples = converter.tokenizer.tokenize("mara")
    assert [(t.initial, t.vowel, t.final) for t in triples] == [("ㅁ", "ㅏ", None), ("ㄹ", "ㅏ", None)]

    triples = converter.tokenizer.tokenize("minsu")
    assert [(t.initial, t.vowel, t.final) for t in triples] == [("ㅁ", "ㅣ", "ㄴ"), ("ㅅ", "ㅜ", None)]


def test_tokenize_tries_only_the_longest_final(converter):
    # "ng" before a vowel is refused as a final, and the shorter "n" is not retried
    triples = converter.tokenizer.tokenize("angela")
    assert [t.source for t in triples] == ["a", "nge", "la"]
    assert [(t.initial, t.vowel, t.final) for t in triples] == [
        (None, "ㅏ", None),
        ("ㅇ", "ㅔ", None),
        ("ㄹ", "ㅏ", None),
    ]


def test_tokenize_covers_the_whole_word(converter):
    for word in ["michael", "donald", "filip", "xiaoming", "zoë", "ə", "schwarz", "tschirner"]:
        triples = converter.tokenizer.tokenize(word)
        assert "".join(t.source for t in triples) == word


def test_tokenize_empty_word(converter):
    assert converter.tokenizer.tokenize("") == ()


def test_tokenize_unmappable_character(converter):
    triples = converter.tokenizer.tokenize("ə")
    assert len(triples) == 1
    assert triples[0].vowel == "ㅓ"
    assert triples[0].initial is None
    assert triples[0].substituted is True
    assert converter.tokenizer.resolve_unmapped("ə") == "ㅓ"


def test_tokenize_rejects_non_latin_input(converter):
    with pytest.raises(InvalidInputError):
        converter.tokenizer.tokenize("иван")
    with pytest.raises(InvalidInputError):
        converter.tokenizer.tokenize("a b")


# ════════════════════════════════════════════════════════════════════════════════
# COMPOSER AND ROMANIZER
# ════════════════════════════════════════════════════════════════════════════════


def test_compose(config):
    composer = SyllableComposer(config)
    assert composer.compose_indices(0, 20, 16) == "김"
    assert composer.compose(SyllableTriple(initial=None, vowel="ㅏ", final=None, source="a")) == "아"
    assert composer.compose(SyllableTriple(initial="ㅈ", vowel="ㅗ", final="ㄴ", source="jon")) == "존"


def test_compose_out_of_range(config):
    composer = SyllableComposer(config)
    for indices in [(19, 0, 0), (0, 21, 0), (0, 0, 28), (-1, 0, 0)]:
        with pytest.raises(ValueError):
            composer.compose_indices(*indices)


def test_compose_decompose_every_syllable(config):
    composer = SyllableComposer(config)
    romanizer = HangulRomanizer()
    for i in range(len(INITIAL_JAMO)):
        for v in range(len(VOWEL_JAMO)):
            for f in range(len(FINAL_JAMO)):
                assert romanizer.decompose(composer.compose_indices(i, v, f)) == (i, v, f)


ROMANIZATION_CASES = [
    ("김", "gim"),
    ("스미스", "seu-mi-seu"),
    ("김민수", "gim-min-su"),
    ("밖", "bak"),
    ("닭", "dak"),
    ("앉", "an"),
    ("옷", "ot"),
    ("있", "it"),
    ("값", "gap"),
    ("좋", "jot"),
    ("꽃", "kkot"),
    ("왕", "wang"),
    ("김 John", "gim John"),
    ("", ""),
]


def test_romanization_cases():
    romanizer = HangulRomanizer()
    for hangul, expected in ROMANIZATION_CASES:
        assert romanizer.romanize(hangul) == expected, f"romanize({hangul!r})"
        assert romanize(hangul) == expected


def test_decompose_rejects_non_syllables():
    romanizer = HangulRomanizer()
    for text in ["a", "ㄱ", "김민"]:
        with pytest.raises(ValueError):
            romanizer.decompose(text)


# ════════════════════════════════════════════════════════════════════════════════
# LANGUAGE AND SCRIPT DETECTION
# ════════════════════════════════════════════════════════════════════════════════

LANGUAGE_CASES = [
    ("김민수", "ko"),
    ("Иван", "ru"),
    ("Γιώργος", "el"),
    ("たなか", "ja"),
    ("王小明", "zh"),
    ("José", "es"),
    ("François", "fr"),
    ("Weiß", "de"),
    ("John", "en"),
]

SCRIPT_CASES = [
    ("John", "latin"),
    ("김", "hangul"),
    ("王", "han"),
    ("たなか", "kana"),
    ("タナカ", "kana"),
    ("Иван", "cyrillic"),
    ("Νίκος", "greek"),
    ("123", "unknown"),
]


def test_language_detection():
    detector = LanguageDetector()
    for text, expected in LANGUAGE_CASES:
        assert detector.detect_language(text) == expected, f"detect_language({text!r})"
        assert detect_language(text) == expected


def test_script_detection():
    detector = LanguageDetector()
    for text, expected in SCRIPT_CASES:
        assert detector.detect_script(text) == expected, f"detect_script({text!r})"


def test_script_fallback_to_latin():
    fallback = ScriptFallbackService()
    assert fallback.to_latin("Иван Петров") == "ivan petrov"
    assert fallback.to_latin("たなか ゆき") == "tanaka yuki"
    assert fallback.to_latin("タナカ") == "tanaka"
    assert fallback.to_latin("がっこう") == "gakkou"
    assert fallback.to_latin("王小明") == "wang xiaoming"
    assert fallback.to_latin("Νίκος") == "nikos"


def test_script_fallback_reads_han_by_language():
    fallback = ScriptFallbackService()
    assert fallback.to_latin("田中", "ja") == "tanaka"
    assert fallback.to_latin("田中", "zh") == "tian zhong"
    # Kana anywhere in the name selects the Japanese reading for its Han characters too
    assert fallback.to_latin("田中 ゆき").split()[0] == "tanaka"


# ════════════════════════════════════════════════════════════════════════════════
# CONVERTER
# ════════════════════════════════════════════════════════════════════════════════


def test_convert_western_order(converter):
    result = converter.convert("John Smith", "en")
    assert result.korean_name == "스미스존"
    assert result.romanization == "seu-mi-seu jon"
    assert [(b.hangul, b.romanization, b.role) for b in result.breakdown] == [
        ("스미스", "seu-mi-seu", FAMILY),
        ("존", "jon", GIVEN),
    ]
    assert result.source_language == "en"
    assert result.substitutions == 0


def test_convert_family_first_language_keeps_order(converter):
    # Both parts are known surnames; a family-first hint keeps the first one as family
    result = converter.convert("Kim Park", "ko")
    assert result.breakdown[0].hangul == "김"
    assert result.breakdown[0].role == FAMILY


def test_convert_placeholder_surname(converter):
    result = converter.convert("Zyzzyva")
    assert result.korean_name == "김"
    assert result.romanization == "gim"
    assert (result.breakdown[0].hangul, result.breakdown[0].role) == ("김", FAMILY)
    assert "zyzzyva" not in SURNAME_TABLE


def test_convert_counts_substitutions(converter):
    result = converter.convert("Smith Əli")
    assert result.substitutions == 1
    assert result.breakdown[1].hangul == "어리"


def test_convert_hangul_passthrough(converter):
    result = converter.convert("김민수")
    assert result.korean_name == "김민수"
    assert result.romanization == "gim min-su"
    assert [(b.hangul, b.role) for b in result.breakdown] == [("김", FAMILY), ("민수", GIVEN)]
    assert result.source_language == "ko"

    spaced = converter.convert("김 민수")
    assert spaced.korean_name == "김민수"


MIXED_SCRIPT_CASES = ["John 김", "김 John", "김John"]


def test_convert_mixed_hangul_and_latin_keeps_every_part(converter):
    for name in MIXED_SCRIPT_CASES:
        result = converter.convert(name)
        assert [(b.hangul, b.romanization, b.role) for b in result.breakdown] == [
            ("김", "gim", FAMILY),
            ("존", "jon", GIVEN),
        ], f"convert({name!r})"
        assert result.korean_name == "김존"
        assert result.romanization == "gim jon"


def test_convert_han_name_with_japanese_reading(converter):
    for language in ["auto", "ja"]:
        result = converter.convert("田中 太郎", language)
        assert result.source_language == "ja"
        assert [b.role for b in result.breakdown] == [FAMILY, GIVEN]
        assert result.breakdown[0].hangul == "다나카"
        assert result.korean_name.startswith("다나카")

    chinese = converter.convert("王小明")
    assert chinese.source_language == "zh"
    assert chinese.breakdown[0].hangul == "왕"


def test_convert_fullwidth_latin(converter):
    assert converter.convert("Ｓｍｉｔｈ").korean_name == "스미스"


def test_convert_breakdown_by_syllable(converter):
    result = converter.convert("Kim Minsu", breakdown_by_syllable=True)
    assert [(b.hangul, b.romanization, b.role) for b in result.breakdown] == [
        ("김", "gim", FAMILY),
        ("민", "min", SYLLABLE),
        ("수", "su", SYLLABLE),
    ]
    assert result.romanization == "gim min-su"


def test_convert_to_dict(converter):
    result = converter.convert("John Smith")
    assert result.to_dict() == {
        "koreanName": "스미스존",
        "romanization": "seu-mi-seu jon",
        "breakdown": [
            {"hangul": "스미스", "romanization": "seu-mi-seu", "type": "family"},
            {"hangul": "존", "romanization": "jon", "type": "given"},
        ],
    }


def test_convert_is_deterministic(converter):
    first = converter.convert("María García")
    for _ in range(5):
        assert converter.convert("María García") == first
    assert KoreanNameConverter().convert("María García") == first


def test_convert_length_boundary(converter):
    assert converter.convert("a" * 100).korean_name == "김"
    with pytest.raises(InvalidInputError):
        converter.convert("a" * 101)


def test_convert_rejects_blank_and_empty_input(converter):
    for name in ["", "   ", "!!!", "42", "- '"]:
        with pytest.raises(InvalidInputError):
            converter.convert(name)


def test_invalid_input_error_hierarchy():
    assert issubclass(InvalidInputError, KoreanNameError)
    assert issubclass(KoreanNameError, ValueError)


def test_try_convert_reports_failure(converter):
    outcome = converter.try_convert("")
    assert outcome.success is False
    assert outcome.result is None
    assert outcome.error_message == "name is required"

    outcome = converter.try_convert("John Smith")
    assert outcome.success is True
    assert outcome.result.korean_name == "스미스존"


def test_module_level_convert_name():
    success, result = convert_name("John Smith", "en")
    assert success is True
    assert result.korean_name == "스미스존"

    success, message = convert_name("")
    assert success is False
    assert message == "name is required"


# ════════════════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ════════════════════════════════════════════════════════════════════════════════


def test_config_max_name_length(config):
    converter = KoreanNameConverter(config.with_max_name_length(10))
    assert converter.convert("Kim Minsu").korean_name == "김민수"
    with pytest.raises(InvalidInputError, match="max 10"):
        converter.convert("Smith Johnny")


def test_config_placeholder_surname(config):
    converter = KoreanNameConverter(config.with_placeholder_surname("이"))
    assert converter.convert("Zyzzyva").korean_name == "이"
    with pytest.raises(ValueError):
        config.with_placeholder_surname("Lee")


def test_config_is_immutable(config):
    with pytest.raises(AttributeError):
        config.max_name_length = 5
    assert config.with_max_name_length(5).max_name_length == 5
    assert config.max_name_length == 100


def test_config_collapse_repeats(config):
    from dataclasses import replace

    keep = KoreanNameConverter(replace(config, collapse_repeats=False))
    assert keep.convert("Smith Aaaa").korean_name == "스미스아아아아"
    assert KoreanNameConverter(config).convert("Smith Aaaa").korean_name == "스미스아아"
