# ═════════════════════════════════════════════════════════════════════════════════
# HANGUL TRANSLITERATION DATA
# ═════════════════════════════════════════════════════════════════════════════════
#
# Static tables used by korean_names.transliteration:
# 1. JAMO ORDERING: the 19 initials, 21 vowels and 28 finals in Unicode order
# 2. SPELLING TABLES: Latin spelling -> jamo, one table per syllable role
# 3. ROMANIZATION: Revised Romanization spellings and coda neutralization
# 4. NAME DATA: surname table and phonetic pre-pass rules
# 5. DETECTION: language markers and script code point ranges
#
# Every table is validated at import time and then frozen.
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# ═════════════════════════════════════════════════════════════════════════════════
# JAMO ORDERING
# ═════════════════════════════════════════════════════════════════════════════════

HANGUL_BASE = 0xAC00
HANGUL_LAST = 0xD7A3
SYLLABLES_PER_INITIAL = 588  # 21 vowels * 28 finals
FINALS_PER_VOWEL = 28

INITIAL_JAMO = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)  # fmt: skip

VOWEL_JAMO = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ", "ㅗ", "ㅘ", "ㅙ",
    "ㅚ", "ㅛ", "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ", "ㅡ", "ㅢ", "ㅣ",
)  # fmt: skip

# Index 0 is "no final consonant"
FINAL_JAMO = (
    "", "ㄱ", "ㄲ", "ㄳ", "ㄴ", "ㄵ", "ㄶ", "ㄷ", "ㄹ", "ㄺ",
    "ㄻ", "ㄼ", "ㄽ", "ㄾ", "ㄿ", "ㅀ", "ㅁ", "ㅂ", "ㅄ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)  # fmt: skip

INITIAL_INDEX = MappingProxyType({jamo: i for i, jamo in enumerate(INITIAL_JAMO)})
VOWEL_INDEX = MappingProxyType({jamo: i for i, jamo in enumerate(VOWEL_JAMO)})
FINAL_INDEX = MappingProxyType({jamo: i for i, jamo in enumerate(FINAL_JAMO) if jamo})

NULL_INITIAL = "ㅇ"  # silent onset used when a syllable starts with a vowel
DEFAULT_VOWEL = "ㅓ"  # inserted when a consonant has no vowel to attach to
PLACEHOLDER_SURNAME = "김"  # used for family names missing from SURNAME_TABLE

# ═════════════════════════════════════════════════════════════════════════════════
# SPELLING TABLES (Latin -> jamo)
# ═════════════════════════════════════════════════════════════════════════════════
#
# Keys are lowercase, NFC-composed and 1-4 characters long. Lookups always try
# the longest key first, so "th" and "sch" win over "t" and "s".

INITIAL_SPELLINGS = {
    "b": "ㅂ",
    "c": "ㅋ",
    "d": "ㄷ",
    "f": "ㅍ",
    "g": "ㄱ",
    "h": "ㅎ",
    "j": "ㅈ",
    "k": "ㅋ",
    "l": "ㄹ",
    "m": "ㅁ",
    "n": "ㄴ",
    "p": "ㅍ",
    "q": "ㅋ",
    "r": "ㄹ",
    "s": "ㅅ",
    "t": "ㅌ",
    "v": "ㅂ",
    "w": "ㅇ",
    "x": "ㅋ",
    "y": "ㅇ",
    "z": "ㅈ",
    "ç": "ㅅ",
    "ñ": "ㄴ",
    # Digraphs and longer clusters
    "ch": "ㅊ",
    "sh": "ㅅ",
    "th": "ㅅ",
    "ng": "ㅇ",
    "sch": "ㅅ",  # German Schmidt, Schneider
    "tch": "ㅊ",
    "tsch": "ㅊ",  # German Tschirner
}

VOWEL_SPELLINGS = {
    "a": "ㅏ",
    "e": "ㅔ",
    "i": "ㅣ",
    "o": "ㅗ",
    "u": "ㅜ",
    "y": "ㅣ",  # only reached after an onset; a leading y is an initial
    # English digraphs
    "ae": "ㅐ",
    "ai": "ㅐ",
    "ay": "ㅔ",
    "ea": "ㅣ",
    "ei": "ㅔ",
    "ie": "ㅣ",
    "oa": "ㅗ",
    "oe": "ㅗ",
    "oo": "ㅜ",
    "ou": "ㅜ",
    "oy": "ㅗ",
    "ue": "ㅜ",
    "ui": "ㅜ",
    "au": "ㅏ",
    "aw": "ㅏ",
    "eo": "ㅓ",
    "eu": "ㅓ",
    "ew": "ㅜ",
    "ey": "ㅔ",
    # y-glides
    "ya": "ㅑ",
    "ye": "ㅖ",
    "yo": "ㅛ",
    "yu": "ㅠ",
    # Language-specific vowels
    "ä": "ㅏ",
    "ö": "ㅓ",
    "ü": "ㅜ",
    "á": "ㅏ",
    "é": "ㅔ",
    "í": "ㅣ",
    "ó": "ㅗ",
    "ú": "ㅜ",
    "à": "ㅏ",
    "è": "ㅔ",
    "ì": "ㅣ",
    "ò": "ㅗ",
    "ù": "ㅜ",
    "â": "ㅏ",
    "ê": "ㅔ",
    "î": "ㅣ",
    "ô": "ㅗ",
    "û": "ㅜ",
    "ã": "ㅏ",
    "õ": "ㅗ",
    "ë": "ㅔ",
    "ï": "ㅣ",
    "ÿ": "ㅣ",
    "å": "ㅗ",
    "ø": "ㅓ",
    "æ": "ㅐ",
}

FINAL_SPELLINGS = {
    "b": "ㅂ",
    "c": "ㄱ",
    "d": "ㄷ",
    "f": "ㅂ",
    "g": "ㄱ",
    "k": "ㄱ",
    "l": "ㄹ",
    "m": "ㅁ",
    "n": "ㄴ",
    "p": "ㅂ",
    "r": "ㄹ",
    "s": "ㅅ",
    "t": "ㅅ",
    "v": "ㅂ",
    "x": "ㄱ",
    "z": "ㅅ",
    "ck": "ㄱ",
    "ng": "ㅇ",
    "sh": "ㅅ",
    "ch": "ㅅ",
    "th": "ㅅ",
}

# Latin letters outside the spelling tables that do not decompose under NFD.
# Letters that only carry a combining mark (š, č, ž) are folded by NFD instead.
LETTER_FOLDING = {
    "ß": "ss",
    "ł": "l",
    "đ": "d",
    "ð": "d",
    "þ": "th",
    "œ": "oe",
    "ħ": "h",
    "ı": "i",
    "ŋ": "ng",
}

# ═════════════════════════════════════════════════════════════════════════════════
# REVISED ROMANIZATION
# ═════════════════════════════════════════════════════════════════════════════════

INITIAL_ROMANIZATION = (
    "g", "kk", "n", "d", "tt", "r", "m", "b", "pp", "s",
    "ss", "", "j", "jj", "ch", "k", "t", "p", "h",
)  # fmt: skip

VOWEL_ROMANIZATION = (
    "a", "ae", "ya", "yae", "eo", "e", "yeo", "ye", "o", "wa", "wae",
    "oe", "yo", "u", "wo", "we", "wi", "yu", "eu", "ui", "i",
)  # fmt: skip

# Written spelling of each final before neutralization
FINAL_ROMANIZATION = (
    "", "g", "kk", "gs", "n", "nj", "nh", "d", "l", "lg",
    "lm", "lb", "ls", "lt", "lp", "lh", "m", "b", "bs", "s",
    "ss", "ng", "j", "ch", "k", "t", "p", "h",
)  # fmt: skip

# Finals that share one pronunciation in coda position
CODA_NEUTRALIZATION_GROUPS = {
    "k": ("ㄱ", "ㄲ", "ㄳ", "ㄺ", "ㅋ"),
    "n": ("ㄴ", "ㄵ", "ㄶ"),
    "t": ("ㄷ", "ㅅ", "ㅆ", "ㅈ", "ㅊ", "ㅌ", "ㅎ"),
    "p": ("ㅂ", "ㅄ", "ㅍ", "ㄿ"),
    "l": ("ㄹ", "ㄼ", "ㄽ", "ㄾ", "ㅀ"),
    "m": ("ㅁ", "ㄻ"),
}

CODA_NEUTRALIZATION = {jamo: sound for sound, group in CODA_NEUTRALIZATION_GROUPS.items() for jamo in group}

# ═════════════════════════════════════════════════════════════════════════════════
# SURNAME TABLE
# ═════════════════════════════════════════════════════════════════════════════════

SURNAME_TABLE = {
    # English
    "johnson": "존슨",
    "smith": "스미스",
    "brown": "브라운",
    "jones": "존스",
    "miller": "밀러",
    "davis": "데이비스",
    "wilson": "윌슨",
    "anderson": "앤더슨",
    "thomas": "토마스",
    "taylor": "테일러",
    "moore": "무어",
    "jackson": "잭슨",
    "martin": "마틴",
    "thompson": "톰슨",
    "white": "화이트",
    "harris": "해리스",
    "clark": "클라크",
    "lewis": "루이스",
    "robinson": "로빈슨",
    "walker": "워커",
    "young": "영",
    "allen": "앨런",
    "king": "킹",
    "wright": "라이트",
    "scott": "스콧",
    "hill": "힐",
    "green": "그린",
    "adams": "아담스",
    "nelson": "넬슨",
    "baker": "베이커",
    "hall": "홀",
    "campbell": "캠벨",
    "mitchell": "미첼",
    "carter": "카터",
    "roberts": "로버츠",
    # Spanish and Portuguese
    "garcia": "가르시아",
    "rodriguez": "로드리게스",
    "martinez": "마르티네스",
    "hernandez": "에르난데스",
    "lopez": "로페스",
    "gonzalez": "곤살레스",
    "perez": "페레스",
    "sanchez": "산체스",
    "ramirez": "라미레스",
    "torres": "토레스",
    "flores": "플로레스",
    "rivera": "리베라",
    "silva": "실바",
    "santos": "산토스",
    # French, German, Italian
    "bernard": "베르나르",
    "dubois": "뒤부아",
    "dupont": "뒤퐁",
    "müller": "뮐러",
    "schmidt": "슈미트",
    "schneider": "슈나이더",
    "fischer": "피셔",
    "weber": "베버",
    "rossi": "로시",
    "russo": "루소",
    "ferrari": "페라리",
    # Russian
    "ivanov": "이바노프",
    "petrov": "페트로프",
    "smirnov": "스미르노프",
    # Vietnamese
    "nguyen": "응우옌",
    # Korean
    "kim": "김",
    "lee": "리",
    "park": "박",
    "choi": "최",
    "jung": "정",
    "kang": "강",
    "cho": "조",
    "yoon": "윤",
    "jang": "장",
    "lim": "임",
    "han": "한",
    "shin": "신",
    "kwon": "권",
    "hwang": "황",
    "song": "송",
    "ahn": "안",
    # Chinese (pinyin)
    "wang": "왕",
    "li": "리",
    "zhang": "장",
    "liu": "류",
    "chen": "천",
    "yang": "양",
    "zhao": "자오",
    "huang": "황",
    "zhou": "저우",
    "wu": "우",
    # Japanese
    "tanaka": "다나카",
    "suzuki": "스즈키",
    "sato": "사토",
    "takahashi": "다카하시",
    "watanabe": "와타나베",
    "yamamoto": "야마모토",
    "nakamura": "나카무라",
}

# ═════════════════════════════════════════════════════════════════════════════════
# PHONETIC PRE-PASS RULES
# ═════════════════════════════════════════════════════════════════════════════════
#
# Applied in order to a single lowercase word before tokenization. A Hangul
# replacement is copied to the output as-is; a Latin replacement is a
# respelling that the tokenizer will read.

_VOWEL_LETTERS = "aeiouyàáâãäåæèéêëìíîïòóôõöøùúûüÿ"

PHONETIC_RULES = (
    # Name prefixes
    (r"^mc", "맥"),
    (r"^mac", "맥"),
    # Name endings
    (r"tion$", "션"),
    (r"sion$", "션"),
    (r"son$", "슨"),
    (r"sen$", "센"),
    (r"ton$", "톤"),
    (r"ck$", "크"),
    # Silent h after a vowel (John, Sarah)
    (rf"(?<=[{_VOWEL_LETTERS}])h(?![{_VOWEL_LETTERS}])", ""),
    # Respellings
    (r"ck", "k"),
    (r"gh", "g"),
    (r"ph", "f"),
    (r"nk", "ngk"),
    # Doubled consonants are pronounced once
    (r"ll", "l"),
    (r"rr", "r"),
    (r"ss", "s"),
    (r"tt", "t"),
    (r"ff", "f"),
    (r"pp", "p"),
    (r"bb", "b"),
    (r"dd", "d"),
    (r"gg", "g"),
    (r"kk", "k"),
    (r"mm", "m"),
    (r"nn", "n"),
)

# ═════════════════════════════════════════════════════════════════════════════════
# LANGUAGE AND SCRIPT DETECTION
# ═════════════════════════════════════════════════════════════════════════════════

# Checked in order; the first marker found decides the language
LANGUAGE_MARKERS = (
    ("ko", r"[가-힣]"),
    ("ru", r"[а-яё]"),
    ("el", r"[α-ω]"),
    ("ja", r"[\u3040-\u30ff]"),
    ("zh", r"[\u4e00-\u9fff]"),
    ("es", r"[ñáéíóúü]"),
    ("fr", r"[çàèùâêîôûë]"),
    ("de", r"[äöüß]"),
    ("it", r"[àèìòùâêîôû]"),
    ("pt", r"[ãõçáéíóú]"),
)

DEFAULT_LANGUAGE = "en"

# Languages that write the family name before the given name
FAMILY_NAME_FIRST_LANGUAGES = frozenset({"ko", "zh", "ja", "vi", "hu"})

# (script, inclusive code point ranges), checked in order before Latin
SCRIPT_RANGES = (
    ("hangul", ((0xAC00, 0xD7A3), (0x3131, 0x318E))),
    ("cyrillic", ((0x0400, 0x04FF),)),
    ("greek", ((0x0370, 0x03FF),)),
    ("kana", ((0x3040, 0x30FF),)),
    ("han", ((0x4E00, 0x9FFF), (0x3400, 0x4DBF))),
)

# ═════════════════════════════════════════════════════════════════════════════════
# VALIDATION AND IMMUTABLE CREATION
# ═════════════════════════════════════════════════════════════════════════════════


def _assert_valid_spelling_table(table_name, table, allowed_jamo):
    """Validate key lengths, key casing and that every value belongs to the role."""
    for key, jamo in table.items():
        if not 1 <= len(key) <= 4:
            raise ValueError(f"{table_name}: key '{key}' must be 1-4 characters long")
        if key != key.lower():
            raise ValueError(f"{table_name}: key '{key}' must be lowercase")
        if jamo not in allowed_jamo:
            raise ValueError(f"{table_name}: '{jamo}' for key '{key}' is not a valid jamo for this role")


def _assert_hangul_values(table_name, table):
    """Validate that every value is a run of precomposed Hangul syllables."""
    for key, value in table.items():
        if not value or not all(HANGUL_BASE <= ord(c) <= HANGUL_LAST for c in value):
            raise ValueError(f"{table_name}: value for '{key}' is not precomposed Hangul: {value!r}")
        if key != key.lower():
            raise ValueError(f"{table_name}: key '{key}' must be lowercase")


def _assert_romanization_arrays():
    """The romanization arrays must line up with the jamo ordering."""
    for name, spellings, jamo in (
        ("INITIAL_ROMANIZATION", INITIAL_ROMANIZATION, INITIAL_JAMO),
        ("VOWEL_ROMANIZATION", VOWEL_ROMANIZATION, VOWEL_JAMO),
        ("FINAL_ROMANIZATION", FINAL_ROMANIZATION, FINAL_JAMO),
    ):
        if len(spellings) != len(jamo):
            raise ValueError(f"{name} has {len(spellings)} entries, expected {len(jamo)}")
    unknown = set(CODA_NEUTRALIZATION) - set(FINAL_INDEX)
    if unknown:
        raise ValueError(f"CODA_NEUTRALIZATION contains non-final jamo: {unknown}")


_assert_valid_spelling_table("INITIAL_SPELLINGS", INITIAL_SPELLINGS, frozenset(INITIAL_JAMO))
_assert_valid_spelling_table("VOWEL_SPELLINGS", VOWEL_SPELLINGS, frozenset(VOWEL_JAMO))
_assert_valid_spelling_table("FINAL_SPELLINGS", FINAL_SPELLINGS, frozenset(FINAL_INDEX))
_assert_hangul_values("SURNAME_TABLE", SURNAME_TABLE)
_assert_romanization_arrays()

if len(INITIAL_JAMO) != 19 or len(VOWEL_JAMO) != 21 or len(FINAL_JAMO) != 28:
    raise ValueError("Jamo ordering tables must hold 19 initials, 21 vowels and 28 finals")

# Every single letter the spelling tables know about
KNOWN_LETTERS = frozenset(
    key for table in (INITIAL_SPELLINGS, VOWEL_SPELLINGS, FINAL_SPELLINGS) for key in table if len(key) == 1
)

INITIAL_SPELLINGS = MappingProxyType(INITIAL_SPELLINGS)
VOWEL_SPELLINGS = MappingProxyType(VOWEL_SPELLINGS)
FINAL_SPELLINGS = MappingProxyType(FINAL_SPELLINGS)
LETTER_FOLDING = MappingProxyType(LETTER_FOLDING)
CODA_NEUTRALIZATION = MappingProxyType(CODA_NEUTRALIZATION)
SURNAME_TABLE = MappingProxyType(SURNAME_TABLE)
