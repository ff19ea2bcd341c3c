"""Patterns and helpers shared by the gloss annotation scanners."""

from __future__ import annotations

from dataclasses import dataclass
import re
import unicodedata
from typing import Iterator, Sequence

from sinolex.errors import InvalidPinyin
from sinolex.pinyin.cedict import cedict_pinyin
from sinolex.pinyin.segmenter import canonical
from sinolex.pinyin.tables import TONE_MARKS

HAN = r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]"
HAN_LINK_RE = re.compile(rf"({HAN}+)(?:\|({HAN}+))?(\s*\[([^\[\]]*)\])?")
DIGIT_RE = re.compile(r"[0-9]")


@dataclass(frozen=True)
class RewriteRule:
    """One named regex rewrite applied to a whole gloss.

    Attributes:
        name: Short label used in tests and debug logs.
        pattern: Compiled pattern, usually anchored at both ends.
        replacement: ``re.sub`` replacement template.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def apply_rules(rules: Sequence[RewriteRule], text: str) -> str:
    """Apply rewrite rules left to right, each to the previous output."""

    for rule in rules:
        text = rule.apply(text)
    return text


def gloss_pinyin(raw: str) -> str | None:
    """Normalize Pinyin found inside gloss brackets.

    Tone-number text goes through the dictionary normalizer. Text without
    digits is accepted only if it carries a tone mark or ``ü`` and is already
    valid Pinyin, so English words such as ``an`` stay unnormalized.

    Args:
        raw: Bracket content without the brackets, e.g. ``ge4``.

    Returns:
        Canonical Pinyin, or ``None`` when the text does not normalize.
    """

    text = raw.strip()
    if not text:
        return None
    if DIGIT_RE.search(text):
        return cedict_pinyin(text)
    text = unicodedata.normalize("NFC", text)
    if not any(ch in TONE_MARKS or ch == "ü" for ch in text):
        return None
    try:
        return canonical(text)
    except InvalidPinyin:
        return None


def join_residual(prefix: str, suffix: str) -> str:
    """Join the prose around a removed span with a single space."""

    prefix = prefix.strip()
    suffix = suffix.strip()
    if prefix and suffix:
        return f"{prefix} {suffix}"
    return prefix + suffix


def iter_parentheticals(text: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` spans of outermost balanced parentheticals.

    ``end`` is exclusive and includes the closing parenthesis. Unbalanced
    parentheses are skipped.
    """

    depth = 0
    start = -1
    for idx, ch in enumerate(text):
        if ch == "(":
            if depth == 0:
                start = idx
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
            if depth == 0:
                yield start, idx + 1
