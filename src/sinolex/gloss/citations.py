"""Find Han citations embedded in gloss prose."""

from __future__ import annotations

from sinolex.gloss.common import HAN_LINK_RE, gloss_pinyin
from sinolex.models import Citation, CitationScan, CitationSegment


def scan_citations(gloss: str) -> CitationScan:
    """Split a gloss into literal text and Han citations.

    Every ``Han``, ``trad|simp`` or ``Han[pinyin]`` occurrence becomes a
    ``Citation``. When the bracketed Pinyin does not normalize, the citation
    covers only the Han part and the bracket stays in the literal text.
    Joining the segments always reproduces ``gloss``.

    Args:
        gloss: Gloss text to scan.

    Returns:
        ``CitationScan`` with non-empty literal strings and citations in
        source order.
    """

    segments: list[CitationSegment] = []
    cursor = 0
    for match in HAN_LINK_RE.finditer(gloss):
        trad, simp, bracket, raw_pinyin = match.groups()
        pinyin = gloss_pinyin(raw_pinyin) if bracket is not None else None
        end = match.end() if pinyin is not None else match.end(2 if simp else 1)

        if match.start() > cursor:
            segments.append(gloss[cursor : match.start()])
        segments.append(
            Citation(
                offset=match.start(),
                length=end - match.start(),
                trad=trad,
                simp=simp or trad,
                pinyin=pinyin,
                span=gloss[match.start() : end],
            )
        )
        cursor = end

    if cursor < len(gloss):
        segments.append(gloss[cursor:])
    return CitationScan(segments=tuple(segments))
