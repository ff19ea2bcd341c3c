"""Data models shared by the normalizers, matcher, scanners and readers.

Every record is an immutable dataclass so values can be hashed, compared and
passed between stages without defensive copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from sinolex.pinyin.tables import MULTIGRAPHS, TONED_VOWELS


@dataclass(frozen=True)
class Syllable:
    """One Pinyin syllable decomposed into onset, vowel nucleus and coda.

    ``nucleus`` is stored without tone marks; the diacritic position is derived
    from the vowel multigraph table when the syllable is rendered. The
    standalone erhua token ``r`` has an empty nucleus and ``erhua=True``.
    """

    initial: str
    nucleus: str
    coda: str
    tone: int
    erhua: bool = False

    @property
    def text(self) -> str:
        """Return the syllable with its tone diacritic in canonical position."""

        if self.erhua:
            return "r"
        letters = list(self.nucleus)
        if self.tone != 5:
            idx = MULTIGRAPHS[self.nucleus]
            letters[idx] = TONED_VOWELS[(letters[idx], self.tone)]
        return f"{self.initial}{''.join(letters)}{self.coda}"

    @property
    def is_rhotic(self) -> bool:
        """Return whether the syllable ends in the rhotic coda of ``er``."""

        return self.coda == "r" and not self.erhua


@dataclass(frozen=True)
class HeadwordReading:
    """A headword paired with the pronunciations assigned to it."""

    headword: str
    pinyins: tuple[str, ...]


@dataclass(frozen=True)
class Assignment:
    """Result of pairing headwords with pronunciations.

    Attributes:
        pairs: One entry per headword, in headword order.
        tier: Matcher tier that produced the pairing: ``positional``,
            ``exception`` or ``general``.
    """

    pairs: tuple[HeadwordReading, ...]
    tier: str

    def as_dict(self) -> dict[str, tuple[str, ...]]:
        return {pair.headword: pair.pinyins for pair in self.pairs}


@dataclass(frozen=True)
class MeasureWord:
    trad: str
    simp: str
    pinyin: str | None


@dataclass(frozen=True)
class MeasureAnnotation:
    """Measure words declared by a ``CL:`` gloss or parenthetical."""

    measures: tuple[MeasureWord, ...]
    residual: str


@dataclass(frozen=True)
class AlternatePronunciation:
    """An alternate reading such as ``also pr. [..]`` or ``Taiwan pr. [..]``.

    ``context`` is lowercased except for the place names ``Beijing`` and
    ``Taiwan``.
    """

    context: str
    pinyins: tuple[str, ...]
    condition: str | None
    residual: str


@dataclass(frozen=True)
class XrefTarget:
    trad: str
    simp: str
    pinyin: str | None


@dataclass(frozen=True)
class CrossReference:
    """A typed link from a gloss to one or two other headwords.

    ``relation`` holds the relation word and its optional connective, for
    example ``variant of`` or ``see``.
    """

    descriptor: str | None
    relation: str
    targets: tuple[XrefTarget, ...]
    suffix: str | None
    residual: str


@dataclass(frozen=True)
class Citation:
    """A Han reference embedded in gloss prose.

    ``offset`` and ``length`` are codepoint positions of ``span`` within the
    scanned text.
    """

    offset: int
    length: int
    trad: str
    simp: str
    pinyin: str | None
    span: str


CitationSegment = Union[str, Citation]


@dataclass(frozen=True)
class CitationScan:
    """Gloss text split into literal pieces and citations, in order."""

    segments: tuple[CitationSegment, ...]

    @property
    def citations(self) -> tuple[Citation, ...]:
        return tuple(seg for seg in self.segments if isinstance(seg, Citation))

    @property
    def text(self) -> str:
        """Reassemble the scanned text from its segments."""

        return "".join(seg if isinstance(seg, str) else seg.span for seg in self.segments)


@dataclass(frozen=True)
class GlossAnalysis:
    """Outcome of running every gloss scanner over one gloss.

    At most one of ``measures``, ``pronunciation`` and ``xref`` is set.
    ``residual`` is the prose left after that annotation was removed and
    ``citations`` is the citation scan of that residual.
    """

    gloss: str
    residual: str
    citations: CitationScan
    measures: MeasureAnnotation | None = None
    pronunciation: AlternatePronunciation | None = None
    xref: CrossReference | None = None


@dataclass(frozen=True)
class SourceLine:
    """One line read from a multi-file source, with 1-based positions."""

    file_index: int
    line_number: int
    text: str


@dataclass(frozen=True)
class TocflRecord:
    """A validated graded-vocabulary entry with its headword pairing."""

    level: int
    line_number: int
    headwords: tuple[str, ...]
    pinyins: tuple[str, ...]
    word_classes: tuple[str, ...]
    assignment: Assignment


@dataclass(frozen=True)
class CoctRecord:
    level: int
    line_number: int
    headwords: tuple[str, ...]


@dataclass(frozen=True)
class GlossEntry:
    """A gloss that keeps prose after annotation extraction.

    Attributes:
        sense: 1-based sense number within the record.
        text: Residual gloss text.
        citations: Citation scan of ``text``.
        measures: Measure words extracted from this gloss.
        pronunciations: Alternate readings extracted from this gloss.
        xrefs: Cross-references extracted from this gloss.
    """

    sense: int
    text: str
    citations: CitationScan
    measures: tuple[MeasureWord, ...] = field(default_factory=tuple)
    pronunciations: tuple[AlternatePronunciation, ...] = field(default_factory=tuple)
    xrefs: tuple[CrossReference, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CedictRecord:
    """A dictionary line with its pronunciation normalized and glosses analyzed.

    ``pinyin`` is ``None`` when the bracketed pronunciation could not be
    represented. Annotations from glosses that were consumed completely are
    attached at record level.
    """

    line_number: int
    trad: str
    simp: str
    raw_pinyin: str
    pinyin: str | None
    entries: tuple[GlossEntry, ...]
    measures: tuple[MeasureWord, ...] = field(default_factory=tuple)
    pronunciations: tuple[AlternatePronunciation, ...] = field(default_factory=tuple)
    xrefs: tuple[CrossReference, ...] = field(default_factory=tuple)
