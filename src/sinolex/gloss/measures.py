"""Extract measure-word (classifier) annotations such as ``CL:個|个[ge4]``."""

from __future__ import annotations

import re

from sinolex.gloss.common import HAN, HAN_LINK_RE, gloss_pinyin, iter_parentheticals, join_residual
from sinolex.models import MeasureAnnotation, MeasureWord

MEASURE_GROUP = rf"{HAN}+(?:\|{HAN}+)?(?:\s*\[[^\[\],]*\])?"
MEASURES_RE = re.compile(
    rf"\s*CL\s*:\s*({MEASURE_GROUP}(?:\s*,\s*{MEASURE_GROUP})*)\s*",
    re.IGNORECASE,
)


def _parse_measure_list(text: str) -> tuple[MeasureWord, ...] | None:
    match = MEASURES_RE.fullmatch(text)
    if not match:
        return None

    measures: list[MeasureWord] = []
    for group in match.group(1).split(","):
        parts = HAN_LINK_RE.fullmatch(group.strip())
        if not parts:
            return None
        trad, simp, bracket, raw_pinyin = parts.groups()
        pinyin = None
        if bracket is not None:
            pinyin = gloss_pinyin(raw_pinyin)
            if pinyin is None:
                return None
        measures.append(MeasureWord(trad=trad, simp=simp or trad, pinyin=pinyin))
    return tuple(measures)


def extract_measures(gloss: str) -> MeasureAnnotation | None:
    """Find a measure-word annotation in a gloss.

    The annotation may be the whole gloss or sit inside any balanced
    parenthetical; parentheticals are searched recursively, and prose left
    inside a nested parenthetical stays wrapped in its parentheses.

    Args:
        gloss: One gloss, e.g. ``(CL:個|个[ge4])``.

    Returns:
        The measure words and the residual gloss, or ``None`` when there is
        no annotation or its Pinyin does not normalize.
    """

    measures = _parse_measure_list(gloss)
    if measures is not None:
        return MeasureAnnotation(measures=measures, residual="")

    for start, end in iter_parentheticals(gloss):
        inner = extract_measures(gloss[start + 1 : end - 1])
        if inner is None:
            continue
        prefix, suffix = gloss[:start], gloss[end:]
        if inner.residual:
            residual = f"{prefix}({inner.residual}){suffix}".strip()
        else:
            residual = join_residual(prefix, suffix)
        return MeasureAnnotation(measures=inner.measures, residual=residual)
    return None
