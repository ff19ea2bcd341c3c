"""Immutable lookup tables for Pinyin syllable structure.

The tables are plain module constants wrapped in ``frozenset`` and
``MappingProxyType`` so they can be shared freely once imported.
"""

from __future__ import annotations

from types import MappingProxyType

TONE_MARKS = MappingProxyType(
    {
        "ā": ("a", 1),
        "á": ("a", 2),
        "ǎ": ("a", 3),
        "à": ("a", 4),
        "ē": ("e", 1),
        "é": ("e", 2),
        "ě": ("e", 3),
        "è": ("e", 4),
        "ī": ("i", 1),
        "í": ("i", 2),
        "ǐ": ("i", 3),
        "ì": ("i", 4),
        "ō": ("o", 1),
        "ó": ("o", 2),
        "ǒ": ("o", 3),
        "ò": ("o", 4),
        "ū": ("u", 1),
        "ú": ("u", 2),
        "ǔ": ("u", 3),
        "ù": ("u", 4),
        "ǖ": ("ü", 1),
        "ǘ": ("ü", 2),
        "ǚ": ("ü", 3),
        "ǜ": ("ü", 4),
    }
)

TONED_VOWELS = MappingProxyType({value: key for key, value in TONE_MARKS.items()})

VOWELS = frozenset("aeiouü")
VOWEL_CHARS = "aeiouü" + "".join(TONE_MARKS)

# Toneless vowel multigraph -> index of the vowel that carries the diacritic.
MULTIGRAPHS = MappingProxyType(
    {
        "a": 0,
        "e": 0,
        "i": 0,
        "o": 0,
        "u": 0,
        "ü": 0,
        "ai": 0,
        "ao": 0,
        "ei": 0,
        "ia": 1,
        "iao": 1,
        "ie": 1,
        "io": 1,
        "iu": 1,
        "ou": 0,
        "ua": 1,
        "uai": 1,
        "ue": 1,
        "üe": 1,
        "ui": 1,
        "uo": 1,
    }
)

MAX_MULTIGRAPH = 3

DIGRAPH_ONSETS = ("zh", "ch", "sh")
SINGLE_ONSETS = frozenset("bpmfdtnlgkhjqxzcsrwy")
SEMIVOWELS = frozenset("wy")
PALATALS = frozenset("jqx")

# Nucleus -> permitted contexts. A context is the nucleus plus coda, prefixed
# with the onset only when that onset is ``w`` or ``y``.
LEGAL_CONTEXTS = MappingProxyType(
    {
        "a": frozenset({"a", "an", "ang", "ya", "yan", "yang", "wa", "wan", "wang"}),
        "e": frozenset({"e", "en", "eng", "er", "ye", "wen", "weng"}),
        "i": frozenset({"i", "in", "ing", "yi", "yin", "ying"}),
        "o": frozenset({"o", "ong", "yo", "yong", "wo"}),
        "u": frozenset({"u", "un", "wu", "yu", "yun"}),
        "ü": frozenset({"ü"}),
        "ai": frozenset({"ai", "wai"}),
        "ao": frozenset({"ao", "yao"}),
        "ei": frozenset({"ei", "wei"}),
        "ia": frozenset({"ia", "ian", "iang"}),
        "iao": frozenset({"iao"}),
        "ie": frozenset({"ie"}),
        "io": frozenset({"iong"}),
        "iu": frozenset({"iu"}),
        "ou": frozenset({"ou", "you"}),
        "ua": frozenset({"ua", "uan", "uang", "yuan"}),
        "uai": frozenset({"uai"}),
        "ue": frozenset({"ue", "yue"}),
        "üe": frozenset({"üe"}),
        "ui": frozenset({"ui"}),
        "uo": frozenset({"uo"}),
    }
)

# A syllable without an onset never starts with a high vowel; those are
# written with ``y``/``w`` instead.
ZERO_INITIAL_FORBIDDEN = frozenset("iuü")

ALLOWED_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzü'" + "".join(TONE_MARKS))

MAX_SEGMENT_ITERATIONS = 1000
