"""Extract alternate-pronunciation annotations such as ``also pr. [ge4]``."""

from __future__ import annotations

import re

from sinolex.gloss.common import RewriteRule, apply_rules, gloss_pinyin, join_residual
from sinolex.models import AlternatePronunciation

CONTEXT = r"(also|Beijing|Taiwan|colloquial|old|commonly)"
PINYIN_KEYS = r"(\[[^\[\]]*\](?:\s*or\s*\[[^\[\]]*\])?)"
CONDITION_WORDS = r"(?:for|when|etc|in|before)"

PRONUNCIATION_REWRITES = (
    RewriteRule(
        name="coll-also",
        pattern=re.compile(r"^\s*\(coll\.\)\s*also\s+pr\.", re.IGNORECASE),
        replacement="colloquial pr.",
    ),
    RewriteRule(
        name="taiwan-this-sense",
        pattern=re.compile(
            r"Taiwan\s+pr\.\s+for\s+this\s+sense\s+is\s*\[([^\[\]]*)\]", re.IGNORECASE
        ),
        replacement=r"Taiwan pr. [\1] for this sense",
    ),
)

WHOLE_GLOSS_RE = re.compile(
    rf"\s*(?:\(\s*)?{CONTEXT}\s+pr\.\s*{PINYIN_KEYS}"
    rf"(\s*(?:{CONDITION_WORDS}(?:\s+[^()]*)?)?)"
    r"(?:\s*\))?\s*",
    re.IGNORECASE,
)
PARENTHETICAL_RE = re.compile(
    rf"(.*)\(\s*{CONTEXT}\s+pr\.\s*{PINYIN_KEYS}"
    rf"(\s*(?:{CONDITION_WORDS}\s+[^()]+)?)"
    r"\s*\)(.*)",
    re.IGNORECASE,
)
KEY_OPEN_RE = re.compile(r"^\s*\[\s*")
KEY_CLOSE_RE = re.compile(r"\s*\]\s*$")
KEY_JOIN_RE = re.compile(r"\s*\]\s*or\s*\[\s*", re.IGNORECASE)


def _normalize_context(context: str) -> str:
    context = context.lower()
    if context == "beijing":
        return "Beijing"
    if context == "taiwan":
        return "Taiwan"
    return context


def _parse_keys(keys: str) -> tuple[str, ...] | None:
    """Normalize ``[a] or [b]`` bracket keys to canonical Pinyin."""

    if "|" in keys:
        return None
    keys = KEY_OPEN_RE.sub("", keys)
    keys = KEY_CLOSE_RE.sub("", keys)
    keys = KEY_JOIN_RE.sub("|", keys)

    pinyins: list[str] = []
    for raw in keys.split("|"):
        pinyin = gloss_pinyin(raw)
        if pinyin is None:
            return None
        pinyins.append(pinyin)
    return tuple(pinyins)


def extract_pronunciation(gloss: str) -> AlternatePronunciation | None:
    """Find an alternate-pronunciation annotation in a gloss.

    Args:
        gloss: One gloss, e.g. ``also pr. [bo2]`` or
            ``thin (Taiwan pr. [bao2] for this sense)``.

    Returns:
        The annotation with its residual prose, or ``None`` when the gloss
        has no annotation or the bracketed Pinyin does not normalize.
    """

    text = apply_rules(PRONUNCIATION_REWRITES, gloss)

    match = WHOLE_GLOSS_RE.fullmatch(text)
    if match:
        context, keys, condition = match.groups()
        residual = ""
    else:
        match = PARENTHETICAL_RE.fullmatch(text)
        if not match:
            return None
        prefix, context, keys, condition, suffix = match.groups()
        residual = join_residual(prefix, suffix)

    pinyins = _parse_keys(keys)
    if pinyins is None:
        return None
    return AlternatePronunciation(
        context=_normalize_context(context),
        pinyins=pinyins,
        condition=condition.strip() or None,
        residual=residual,
    )
